"""Flattening of schema references and of embedded (allOf) branches."""

from __future__ import annotations

import copy
from dataclasses import fields, is_dataclass
from typing import Any, Callable, Optional, Protocol

from crdgen.ident import Package, TypeIdent
from crdgen.schema import DEF_PREFIX, JSONSchemaProps
from crdgen.visitor import SchemaVisitor, edit_schema


class _ErrorRecorder(Protocol):
    def add_error(self, err: Exception) -> None: ...


_ALL_FIELDS = fields(JSONSchemaProps)
_DOC_FIELDS = frozenset({"title", "description", "example", "external_docs"})
_MERGEABLE = tuple(
    f for f in _ALL_FIELDS if f.name != "all_of" and f.name not in _DOC_FIELDS
)


def _assign(dst: JSONSchemaProps, src: JSONSchemaProps) -> None:
    """Overwrite every field of dst with the (shallow) value from src."""
    for f in _ALL_FIELDS:
        setattr(dst, f.name, getattr(src, f.name))


def _is_unset(value: Any, zero: Any) -> bool:
    if zero is None:
        return value is None
    return value == zero


def _same(a: Any, b: Any, zero: Any) -> bool:
    # Plain values compare by value; optional parts count as the same only
    # when they are literally the same object.
    if zero is not None:
        return a == b
    return is_dataclass(a) and a is b


def _flatten_all_of_into(
    dst: JSONSchemaProps, src: JSONSchemaProps, errors: _ErrorRecorder
) -> None:
    """Merge src (and its allOf branches) into dst, hoisting conflicts into allOf."""
    for embedded in src.all_of or []:
        _flatten_all_of_into(dst, embedded, errors)

    src_rest = JSONSchemaProps()
    dst_rest = JSONSchemaProps()
    hoisted = False

    for f in _MERGEABLE:
        name, zero = f.name, f.default
        src_val = getattr(src, name)
        if _is_unset(src_val, zero):
            continue
        dst_val = getattr(dst, name)
        if _is_unset(dst_val, zero):
            setattr(dst, name, src_val)
            continue
        if _same(src_val, dst_val, zero):
            continue

        if name == "properties":
            for key, prop in src_val.items():
                existing = dst_val.get(key)
                if existing is None:
                    dst_val[key] = prop
                else:
                    _flatten_all_of_into(existing, prop, errors)
        elif name == "required":
            setattr(dst, name, dst_val + src_val)
        elif name == "type":
            errors.add_error(
                ValueError(
                    "conflicting types in allOf branches in schema: "
                    f"{dst_val} vs {src_val}"
                )
            )
        elif name == "additional_properties":
            if src_val.schema is None:
                continue
            if dst_val.schema is None:
                dst_val.schema = JSONSchemaProps()
            _flatten_all_of_into(dst_val.schema, src_val.schema, errors)
        else:
            hoisted = True
            setattr(src_rest, name, src_val)
            setattr(dst_rest, name, dst_val)
            setattr(dst, name, zero)

    if hoisted:
        dst.all_of = (dst.all_of or []) + [dst_rest, src_rest]

    if dst.required:
        dst.required = sorted(set(dst.required))


class _AllOfVisitor(SchemaVisitor):
    def __init__(self, errors: _ErrorRecorder) -> None:
        self.errors = errors

    def visit(self, schema: Optional[JSONSchemaProps]) -> Optional[SchemaVisitor]:
        if schema is None:
            return self
        branches = schema.all_of
        schema.all_of = None
        for embedded in branches or []:
            _flatten_all_of_into(schema, embedded, self.errors)
        return self


def flatten_embedded(
    schema: JSONSchemaProps, error_recorder: _ErrorRecorder
) -> JSONSchemaProps:
    """Return a copy of schema with resolved allOf branches merged into their parents.

    Conflicting values that cannot be merged stay in a minimal allOf; the
    input schema is not modified.
    """
    out = schema.deep_copy()
    edit_schema(out, _AllOfVisitor(error_recorder))
    return out


def ref_parts(ref: str) -> tuple[str, str]:
    """Split a definitions link into (type name, package path).

    The package path is empty for a reference local to the current package.
    """
    if not ref.startswith(DEF_PREFIX):
        raise ValueError(f'non-standard reference link "{ref}"')
    ref = ref[len(DEF_PREFIX):].replace("~1", "/").replace("~0", "~")
    pkg_name, sep, type_name = ref.partition("~")
    if not sep:
        return pkg_name, ""
    return type_name, pkg_name


def _ident_from_ref(ref: str, context_pkg: Package) -> TypeIdent:
    type_name, pkg_name = ref_parts(ref)
    if not pkg_name:
        return TypeIdent(package=context_pkg, name=type_name)
    package = context_pkg.imports.get(pkg_name)
    if package is None:
        raise LookupError(f'unknown package "{pkg_name}" in reference {ref}')
    return TypeIdent(package=package, name=type_name)


def _preserve_fields(dst: JSONSchemaProps, src: JSONSchemaProps) -> None:
    """Wrap dst so that the field-level docs and validation of src survive."""
    src = copy.copy(src)
    src_desc, src_title = src.description, src.title
    src_ex_doc, src_ex = src.external_docs, src.example
    src.description, src.title, src.external_docs, src.example = "", "", None, None
    src.ref = None

    wrapped = JSONSchemaProps(
        all_of=[copy.copy(dst), src],
        description=dst.description,
        title=dst.title,
        external_docs=dst.external_docs,
        example=dst.example,
    )
    if src_desc:
        wrapped.description = src_desc
    if src_title:
        wrapped.title = src_title
    if src_ex_doc is not None:
        wrapped.external_docs = src_ex_doc
    if src_ex is not None:
        wrapped.example = src_ex
    _assign(dst, wrapped)


class Flattener:
    """Resolves all references in a type's schema into one flat schema.

    Flattened types are cached, so repeated requests for the same type are
    cheap.  The parser must offer ``need_schema_for(typ)`` and a ``schemata``
    mapping from type identifiers to schemata.
    """

    def __init__(
        self,
        parser: Any,
        lookup_reference: Optional[Callable[[str, Package], TypeIdent]] = None,
    ) -> None:
        self.parser = parser
        self.lookup_reference = lookup_reference or _ident_from_ref
        self._flattened_types: dict[TypeIdent, JSONSchemaProps] = {}

    def _cache_type(self, typ: TypeIdent, schema: JSONSchemaProps) -> None:
        self._flattened_types[typ] = schema

    def _load_unflattened_schema(self, typ: TypeIdent) -> JSONSchemaProps:
        self.parser.need_schema_for(typ)
        schema = self.parser.schemata.get(typ)
        if schema is None:
            raise LookupError(f"unable to locate schema for type {typ}")
        return schema

    def flatten_type(self, typ: TypeIdent) -> Optional[JSONSchemaProps]:
        """Return the flattened schema of a type, or None after recording an error."""
        cached = self._flattened_types.get(typ)
        if cached is not None:
            return copy.copy(cached)
        try:
            base = self._load_unflattened_schema(typ)
        except LookupError as err:
            typ.package.add_error(err)
            return None
        result = self.flatten_schema(base, typ.package)
        self._cache_type(typ, copy.copy(result))
        return result

    def flatten_schema(
        self, base_schema: JSONSchemaProps, current_package: Package
    ) -> JSONSchemaProps:
        """Return a copy of base_schema with every reference resolved."""
        result = base_schema.deep_copy()
        edit_schema(result, _FlattenVisitor(self, current_package))
        return result


class _FlattenVisitor(SchemaVisitor):
    def __init__(
        self,
        flattener: Flattener,
        current_package: Package,
        current_type: Optional[TypeIdent] = None,
        current_schema: Optional[JSONSchemaProps] = None,
        original_field: Optional[JSONSchemaProps] = None,
    ) -> None:
        self.flattener = flattener
        self.current_package = current_package
        self.current_type = current_type
        self.current_schema = current_schema
        self.original_field = original_field

    def visit(self, schema: Optional[JSONSchemaProps]) -> Optional[SchemaVisitor]:
        fl = self.flattener
        if schema is None:
            if self.current_type is not None:
                # cache before preserving field data, so the cache holds the
                # type's own schema rather than this particular use of it
                fl._cache_type(self.current_type, copy.copy(self.current_schema))
                _preserve_fields(self.current_schema, self.original_field)
            return self

        if schema.ref:
            try:
                ref_ident = fl.lookup_reference(schema.ref, self.current_package)
            except (ValueError, LookupError) as err:
                self.current_package.add_error(err)
                return None

            cached = fl._flattened_types.get(ref_ident)
            if cached is not None:
                resolved = copy.copy(cached)
                _preserve_fields(resolved, schema)
                _assign(schema, resolved)
                return None

            try:
                ref_schema = fl._load_unflattened_schema(ref_ident)
            except LookupError as err:
                self.current_package.add_error(err)
                return None

            original = copy.copy(schema)
            _assign(schema, ref_schema.deep_copy())
            # guard against reference loops while recursing
            fl._cache_type(ref_ident, JSONSchemaProps())
            return _FlattenVisitor(
                fl,
                ref_ident.package,
                current_type=ref_ident,
                current_schema=schema,
                original_field=original,
            )

        if self.current_type is not None:
            return _FlattenVisitor(fl, self.current_package)
        return self