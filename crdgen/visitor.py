"""Walking and editing schema trees with visitors."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from crdgen.schema import JSONSchemaProps


class SchemaVisitor:
    """Visits schema nodes.

    ``visit`` is called for each node.  If it returns a visitor, that visitor
    is called on each direct child and then once more with ``None`` to signal
    that all children were visited.  Returning ``None`` skips the children.
    The base visitor walks the whole tree without changing anything.
    """

    def visit(self, schema: Optional[JSONSchemaProps]) -> Optional[SchemaVisitor]:
        return self


def edit_schema(schema: JSONSchemaProps, visitor: SchemaVisitor) -> None:
    """Walk the schema with the visitor; edits to nodes are made in place."""
    _walk(schema, visitor)


def _walk(schema: JSONSchemaProps, visitor: SchemaVisitor) -> None:
    sub = visitor.visit(schema)
    if sub is None:
        return

    for child in _children(schema):
        _walk(child, sub)
    sub.visit(None)


def _values(mapping: Optional[Mapping[str, JSONSchemaProps]]) -> Iterable[JSONSchemaProps]:
    return list(mapping.values()) if mapping else []


def _children(schema: JSONSchemaProps) -> Iterable[JSONSchemaProps]:
    if schema.items is not None:
        if schema.items.schema is not None:
            yield schema.items.schema
        yield from schema.items.json_schemas or []
    yield from schema.all_of or []
    yield from schema.one_of or []
    yield from schema.any_of or []
    if schema.not_ is not None:
        yield schema.not_
    yield from _values(schema.properties)
    if schema.additional_properties is not None and schema.additional_properties.schema is not None:
        yield schema.additional_properties.schema
    yield from _values(schema.pattern_properties)
    for dep in list((schema.dependencies or {}).values()):
        if dep.schema is not None:
            yield dep.schema
    if schema.additional_items is not None and schema.additional_items.schema is not None:
        yield schema.additional_items.schema
    yield from _values(schema.definitions)