"""Collecting types and producing schemata and CRDs from them."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, NamedTuple, Optional, Protocol

from crdgen.description import truncate_description
from crdgen.flatten import Flattener, flatten_embedded
from crdgen.ident import Package, TypeIdent, TypeInfo
from crdgen.resources import (
    SCHEME_GROUP_VERSION,
    CustomResourceDefinition,
    CustomResourceDefinitionNames,
    CustomResourceDefinitionSpec,
    CustomResourceDefinitionVersion,
    CustomResourceValidation,
    GroupKind,
)
from crdgen.schema import JSONSchemaProps, apply_markers
from crdgen.spec import merge_identical_version_info, pluralize

_COLLECTOR_ERRORS = (ValueError, LookupError, OSError)

MarkerValues = Mapping[str, list[Any]]
SchemaBuilder = Callable[[TypeInfo, Package, MarkerValues], JSONSchemaProps]
PackageOverride = Callable[["Parser", Package], None]


class _Collector(Protocol):
    def package_markers(self, package: Package) -> MarkerValues: ...

    def each_type(self, package: Package) -> Iterable[TypeInfo]: ...


class _GroupVersion(NamedTuple):
    group: str
    version: str


def _non_vendor_path(path: str) -> str:
    return path.split("/vendor/")[-1]


def _first_marker(markers: Optional[MarkerValues], name: str) -> Any:
    values = markers.get(name) if markers else None
    return values[0] if values else None


def _default_schema_builder(
    info: TypeInfo, package: Package, package_markers: MarkerValues
) -> JSONSchemaProps:
    """Use the type's schema expression, then add its docs and markers."""
    expr = info.type_expr
    if expr is None:
        props = JSONSchemaProps()
    elif isinstance(expr, JSONSchemaProps):
        props = expr.deep_copy()
    else:
        raise TypeError(f"unsupported type expression {expr!r} for type {info.name}")
    props.description = info.doc
    apply_markers(info.markers, props, package)
    return props


class Parser:
    """Collects type information and generates schemata and CRDs on demand.

    Every ``need_*`` method caches its result, so it may be called any number
    of times.  Errors are recorded on the package they concern.
    """

    def __init__(
        self, collector: _Collector, schema_builder: Optional[SchemaBuilder] = None
    ) -> None:
        self.collector = collector
        self.schema_builder = schema_builder or _default_schema_builder
        self.types: dict[TypeIdent, TypeInfo] = {}
        self.schemata: dict[TypeIdent, JSONSchemaProps] = {}
        self.group_versions: dict[Package, _GroupVersion] = {}
        self.custom_resource_definitions: dict[GroupKind, CustomResourceDefinition] = {}
        self.package_overrides: dict[str, PackageOverride] = {}
        self._packages: set[Package] = set()
        self._flattener = Flattener(self)

    def _package_markers(self, package: Package) -> Optional[MarkerValues]:
        try:
            return self.collector.package_markers(package)
        except _COLLECTOR_ERRORS as err:
            package.add_error(err)
            return None

    def _index_types(self, package: Package) -> None:
        markers = self._package_markers(package)
        group = _first_marker(markers, "groupName")
        if group is not None:
            version = _first_marker(markers, "versionName")
            self.group_versions[package] = _GroupVersion(
                group=group, version=version if version is not None else package.name
            )
        try:
            for info in self.collector.each_type(package):
                self.types[TypeIdent(package=package, name=info.name)] = info
        except _COLLECTOR_ERRORS as err:
            package.add_error(err)

    def lookup_type(self, package: Package, name: str) -> Optional[TypeInfo]:
        """Return the known information about a type, if any."""
        return self.types.get(TypeIdent(package=package, name=name))

    def need_schema_for(self, typ: TypeIdent) -> None:
        """Make sure a schema for the given type is present in ``schemata``."""
        self.need_package(typ.package)
        if typ in self.schemata:
            return
        info = self.types.get(typ)
        if info is None:
            typ.package.add_error(LookupError(f"unknown type {typ}"))
            return

        # a placeholder stops recursive types from looping
        self.schemata[typ] = JSONSchemaProps()
        package_markers = self._package_markers(typ.package) or {}
        try:
            schema = self.schema_builder(info, typ.package, package_markers)
        except (TypeError, ValueError) as err:
            typ.package.add_error(err)
            schema = JSONSchemaProps()
        self.schemata[typ] = schema

    def add_package(self, package: Package) -> None:
        """Index the package's types, ignoring any override for it."""
        if package in self._packages:
            return
        self._index_types(package)
        self._packages.add(package)

    def need_package(self, package: Package) -> None:
        """Load the package, through its override if one is registered."""
        if package in self._packages:
            return
        override = self.package_overrides.get(_non_vendor_path(package.pkg_path))
        if override is not None:
            override(self, package)
            self._packages.add(package)
            return
        self.add_package(package)

    def need_crd_for(self, group_kind: GroupKind, max_desc_len: Optional[int] = None) -> None:
        """Build the CRD for the group-kind from the already loaded packages."""
        if group_kind in self.custom_resource_definitions:
            return

        packages = [
            pkg for pkg, gv in self.group_versions.items() if gv.group == group_kind.group
        ]
        default_plural = pluralize(group_kind.kind.lower())
        crd = CustomResourceDefinition(
            api_version=SCHEME_GROUP_VERSION,
            kind="CustomResourceDefinition",
            name=f"{default_plural}.{group_kind.group}",
            spec=CustomResourceDefinitionSpec(
                group=group_kind.group,
                names=CustomResourceDefinitionNames(
                    kind=group_kind.kind, plural=default_plural
                ),
            ),
        )

        with_types = [
            (pkg, info)
            for pkg in packages
            if (info := self.types.get(TypeIdent(package=pkg, name=group_kind.kind)))
            is not None
        ]

        for pkg, _ in with_types:
            flat = self._flattener.flatten_type(TypeIdent(package=pkg, name=group_kind.kind))
            if flat is None:
                continue
            full_schema = flatten_embedded(flat, pkg)
            if max_desc_len is not None:
                truncate_description(full_schema, max_desc_len)
            crd.spec.versions.append(
                CustomResourceDefinitionVersion(
                    name=self.group_versions[pkg].version,
                    served=True,
                    schema=CustomResourceValidation(open_api_v3_schema=full_schema),
                )
            )

        # markers apply after the rest of the definition is populated
        for pkg, info in with_types:
            version = self.group_versions[pkg].version
            for values in info.markers.values():
                for value in values:
                    apply = getattr(value, "apply_to_crd", None)
                    if not callable(apply):
                        continue
                    try:
                        apply(crd.spec, version)
                    except ValueError as err:
                        pkg.add_error(err)

        crd.name = f"{crd.spec.names.plural}.{group_kind.group}"

        if not crd.spec.versions:
            return

        crd.spec.versions.sort(key=lambda v: v.name)
        crd.spec.version = crd.spec.versions[0].name
        if len(crd.spec.versions) == 1:
            crd.spec.versions[0].storage = True
        if not any(v.storage for v in crd.spec.versions):
            packages[0].add_error(
                ValueError(f"CRD for {group_kind} has no storage version")
            )

        crd.status.conditions = []
        crd.status.stored_versions = []

        merge_identical_version_info(crd)
        self.custom_resource_definitions[group_kind] = crd