"""OpenAPI v3 schema model and helpers for building CRD validation schemata."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Protocol, runtime_checkable

DEF_PREFIX = "#/definitions/"

_BOOLEAN_KINDS = frozenset({"bool", "untyped bool"})
_STRING_KINDS = frozenset({"string", "untyped string"})
_INTEGER_KINDS = frozenset(
    {
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "byte",
        "rune",
        "untyped int",
        "untyped rune",
    }
)
_INT32_KINDS = frozenset({"int32", "uint32", "rune"})
_INT64_KINDS = frozenset({"int64", "uint64"})


@dataclass(frozen=True)
class JSON:
    """A raw, already-serialized JSON value."""

    raw: bytes = b""


@dataclass
class ExternalDocumentation:
    """A pointer to documentation that lives outside the schema."""

    description: str = ""
    url: str = ""


@dataclass
class JSONSchemaPropsOrBool:
    """Either a boolean permission or a schema (used for additionalProperties)."""

    allows: bool = False
    schema: Optional[JSONSchemaProps] = None


@dataclass
class JSONSchemaPropsOrArray:
    """Either a single schema or a list of schemata (used for items)."""

    schema: Optional[JSONSchemaProps] = None
    json_schemas: Optional[list[JSONSchemaProps]] = None


@dataclass
class JSONSchemaPropsOrStringArray:
    """Either a schema or a list of property names (used for dependencies)."""

    schema: Optional[JSONSchemaProps] = None
    property: Optional[list[str]] = None


@dataclass
class JSONSchemaProps:
    """A JSON schema node, following the OpenAPI v3 subset used by CRDs."""

    id: str = ""
    schema: str = ""
    ref: Optional[str] = None
    description: str = ""
    type: str = ""
    format: str = ""
    title: str = ""
    default: Optional[JSON] = None
    maximum: Optional[float] = None
    exclusive_maximum: bool = False
    minimum: Optional[float] = None
    exclusive_minimum: bool = False
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: str = ""
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: bool = False
    multiple_of: Optional[float] = None
    enum: Optional[list[JSON]] = None
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    required: Optional[list[str]] = None
    items: Optional[JSONSchemaPropsOrArray] = None
    all_of: Optional[list[JSONSchemaProps]] = None
    one_of: Optional[list[JSONSchemaProps]] = None
    any_of: Optional[list[JSONSchemaProps]] = None
    not_: Optional[JSONSchemaProps] = None
    properties: Optional[dict[str, JSONSchemaProps]] = None
    additional_properties: Optional[JSONSchemaPropsOrBool] = None
    pattern_properties: Optional[dict[str, JSONSchemaProps]] = None
    dependencies: Optional[dict[str, JSONSchemaPropsOrStringArray]] = None
    additional_items: Optional[JSONSchemaPropsOrBool] = None
    definitions: Optional[dict[str, JSONSchemaProps]] = None
    external_docs: Optional[ExternalDocumentation] = None
    example: Optional[JSON] = None
    nullable: bool = False

    def deep_copy(self) -> JSONSchemaProps:
        """Return a fully independent copy of this schema."""
        return copy.deepcopy(self)


@runtime_checkable
class SchemaMarker(Protocol):
    """A marker that modifies the schema of the type or field it annotates."""

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        """Modify the schema; raise ValueError if the marker does not fit it."""


def qualified_name(pkg_name: str, type_name: str) -> str:
    """Build a JSON-pointer-safe name: `<type>` or `<escaped pkg>~0<type>`."""
    if pkg_name:
        return pkg_name.replace("/", "~1") + "~0" + type_name
    return type_name


def type_ref_link(pkg_name: str, type_name: str) -> str:
    """Build a definitions reference link for the given type and package."""
    return DEF_PREFIX + qualified_name(pkg_name, type_name)


def builtin_to_type(kind: str) -> tuple[str, str]:
    """Map a builtin basic type name to its JSON schema (type, format) pair.

    Only types allowed by Kubernetes API conventions are accepted; floats
    and anything else raise ValueError.
    """
    if kind in _BOOLEAN_KINDS:
        typ = "boolean"
    elif kind in _STRING_KINDS:
        typ = "string"
    elif kind in _INTEGER_KINDS:
        typ = "integer"
    else:
        raise ValueError(f'unsupported type "{kind}"')

    if kind in _INT32_KINDS:
        fmt = "int32"
    elif kind in _INT64_KINDS:
        fmt = "int64"
    else:
        fmt = ""
    return typ, fmt


def _is_apply_first(marker: Any) -> bool:
    return callable(getattr(marker, "apply_first", None))


def apply_markers(
    marker_values: Mapping[str, Iterable[Any]],
    props: JSONSchemaProps,
    error_recorder: Any,
) -> None:
    """Apply every schema marker to props, "apply first" markers before the rest.

    Failures raised by a marker are recorded on error_recorder rather than
    propagated, so the remaining markers still run.
    """
    values = [value for group in marker_values.values() for value in group]
    ordered = [v for v in values if _is_apply_first(v)]
    ordered += [v for v in values if not _is_apply_first(v)]

    for marker in ordered:
        apply = getattr(marker, "apply_to_schema", None)
        if not callable(apply):
            continue
        try:
            apply(props)
        except (ValueError, TypeError) as err:
            error_recorder.add_error(err)