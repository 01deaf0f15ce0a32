"""Schema overrides for core Kubernetes types that carry no validation markers."""

from __future__ import annotations

from typing import Any, Callable

from crdgen.ident import Package, TypeIdent
from crdgen.schema import JSONSchemaProps, JSONSchemaPropsOrBool

PackageOverride = Callable[[Any, Package], None]


def _meta_v1(parser: Any, package: Package) -> None:
    schemata = parser.schemata
    # ObjectMeta is managed by the API server, so it gets no validation.
    schemata[TypeIdent(package=package, name="ObjectMeta")] = JSONSchemaProps(
        type="object"
    )
    schemata[TypeIdent(package=package, name="Time")] = JSONSchemaProps(
        type="string", format="date-time"
    )
    schemata[TypeIdent(package=package, name="MicroTime")] = JSONSchemaProps(
        type="string", format="date-time"
    )
    schemata[TypeIdent(package=package, name="Duration")] = JSONSchemaProps(
        type="string"
    )
    # Fields is recursive and cannot be flattened, so treat it as an arbitrary map.
    schemata[TypeIdent(package=package, name="Fields")] = JSONSchemaProps(
        type="object",
        additional_properties=JSONSchemaPropsOrBool(allows=True),
    )
    parser.add_package(package)


def _resource(parser: Any, package: Package) -> None:
    parser.schemata[TypeIdent(package=package, name="Quantity")] = JSONSchemaProps(
        type="string"
    )


def _runtime(parser: Any, package: Package) -> None:
    parser.schemata[TypeIdent(package=package, name="RawExtension")] = JSONSchemaProps(
        type="object"
    )
    parser.add_package(package)


def _intstr(parser: Any, package: Package) -> None:
    parser.schemata[TypeIdent(package=package, name="IntOrString")] = JSONSchemaProps(
        any_of=[JSONSchemaProps(type="string"), JSONSchemaProps(type="integer")]
    )


KNOWN_PACKAGES: dict[str, PackageOverride] = {
    "k8s.io/apimachinery/pkg/apis/meta/v1": _meta_v1,
    "k8s.io/apimachinery/pkg/api/resource": _resource,
    "k8s.io/apimachinery/pkg/runtime": _runtime,
    "k8s.io/apimachinery/pkg/util/intstr": _intstr,
}


def add_known_types(parser: Any) -> None:
    """Register the overrides in KNOWN_PACKAGES with the parser."""
    parser.package_overrides.update(KNOWN_PACKAGES)