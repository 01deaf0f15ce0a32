"""Markers that add validation constraints to a generated schema."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from crdgen.schema import JSON, JSONSchemaProps

VALIDATION_PREFIX = "kubebuilder:validation"

_GO_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _require_type(schema: JSONSchemaProps, expected: str, message: str) -> None:
    if schema.type != expected:
        raise ValueError(message)


def _marshal(value: Any) -> bytes:
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    for char, escape in _GO_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


@dataclass(frozen=True)
class Maximum:
    """The maximum numeric value this field can have."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "integer", "must apply maximum to an integer")
        schema.maximum = float(self.value)


@dataclass(frozen=True)
class Minimum:
    """The minimum numeric value this field can have."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "integer", "must apply minimum to an integer")
        schema.minimum = float(self.value)


@dataclass(frozen=True)
class ExclusiveMaximum:
    """Whether the maximum itself is excluded."""

    value: bool = False

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "integer", "must apply exclusivemaximum to an integer")
        schema.exclusive_maximum = bool(self.value)


@dataclass(frozen=True)
class ExclusiveMinimum:
    """Whether the minimum itself is excluded."""

    value: bool = False

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "integer", "must apply exclusiveminimum to an integer")
        schema.exclusive_minimum = bool(self.value)


@dataclass(frozen=True)
class MultipleOf:
    """The field's value must be a multiple of this one."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "integer", "must apply multipleof to an integer")
        schema.multiple_of = float(self.value)


@dataclass(frozen=True)
class MaxLength:
    """The maximum length of this string."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "string", "must apply maxlength to a string")
        schema.max_length = int(self.value)


@dataclass(frozen=True)
class MinLength:
    """The minimum length of this string."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "string", "must apply minlength to a string")
        schema.min_length = int(self.value)


@dataclass(frozen=True)
class Pattern:
    """A regular expression this string must match."""

    value: str = ""

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "string", "must apply pattern to a string")
        schema.pattern = str(self.value)


@dataclass(frozen=True)
class MaxItems:
    """The maximum length of this list."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "array", "must apply maxitem to an array")
        schema.max_items = int(self.value)


@dataclass(frozen=True)
class MinItems:
    """The minimum length of this list."""

    value: int = 0

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "array", "must apply minitems to an array")
        schema.min_items = int(self.value)


@dataclass(frozen=True)
class UniqueItems:
    """Whether all items in this list must be unique."""

    value: bool = False

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        _require_type(schema, "array", "must apply uniqueitems to an array")
        schema.unique_items = bool(self.value)


@dataclass(frozen=True)
class Enum:
    """Restricts this scalar field to exactly the given values."""

    values: tuple[Any, ...] = ()

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        schema.enum = [JSON(raw=_marshal(value)) for value in self.values]


@dataclass(frozen=True)
class Format:
    """An additional "complex" format for this field, such as date-time."""

    value: str = ""

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        schema.format = str(self.value)


@dataclass(frozen=True)
class Type:
    """Overrides the schema type of this field; applied before other markers."""

    value: str = ""

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        schema.type = str(self.value)

    def apply_first(self) -> None:
        """Signal that this marker must run before all others."""


@dataclass(frozen=True)
class Nullable:
    """Allows the field to hold the "null" value."""

    def apply_to_schema(self, schema: JSONSchemaProps) -> None:
        schema.nullable = True


VALIDATION_MARKERS = {
    f"{VALIDATION_PREFIX}:{cls.__name__}": cls
    for cls in (
        Maximum,
        Minimum,
        ExclusiveMaximum,
        ExclusiveMinimum,
        MultipleOf,
        MaxLength,
        MinLength,
        Pattern,
        MaxItems,
        MinItems,
        UniqueItems,
        Enum,
        Format,
        Type,
    )
}

FIELD_ONLY_MARKERS = {
    f"{VALIDATION_PREFIX}:Required": None,
    f"{VALIDATION_PREFIX}:Optional": None,
    "optional": None,
    "nullable": Nullable,
}