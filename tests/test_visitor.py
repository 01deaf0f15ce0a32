from crdgen.schema import (
    JSONSchemaProps,
    JSONSchemaPropsOrArray,
    JSONSchemaPropsOrBool,
    JSONSchemaPropsOrStringArray,
)
from crdgen.visitor import SchemaVisitor, edit_schema


class Recorder(SchemaVisitor):
    def __init__(self, log):
        self.log = log

    def visit(self, schema):
        self.log.append(None if schema is None else schema.description)
        return self


class StopAt(SchemaVisitor):
    def __init__(self, log, stop):
        self.log = log
        self.stop = stop

    def visit(self, schema):
        if schema is None:
            return self
        self.log.append(schema.description)
        if schema.description == self.stop:
            return None
        return self


class Upper(SchemaVisitor):
    def visit(self, schema):
        if schema is not None:
            schema.description = schema.description.upper()
        return self


def _tree():
    return JSONSchemaProps(
        description="root",
        items=JSONSchemaPropsOrArray(schema=JSONSchemaProps(description="items")),
        all_of=[JSONSchemaProps(description="a0")],
        properties={
            "p": JSONSchemaProps(
                description="p",
                properties={"inner": JSONSchemaProps(description="inner")},
            )
        },
        additional_properties=JSONSchemaPropsOrBool(
            schema=JSONSchemaProps(description="ap")
        ),
        dependencies={
            "dep": JSONSchemaPropsOrStringArray(schema=JSONSchemaProps(description="dep"))
        },
        definitions={"d": JSONSchemaProps(description="d")},
    )


def test_walk_order_with_end_markers():
    log = []
    edit_schema(_tree(), Recorder(log))
    assert log == [
        "root",
        "items", None,
        "a0", None,
        "p", "inner", None, None,
        "ap", None,
        "dep", None,
        "d", None,
        None,
    ]


def test_returning_none_skips_children():
    log = []
    edit_schema(_tree(), StopAt(log, "p"))
    assert "p" in log
    assert "inner" not in log
    assert "d" in log


def test_edits_persist_in_maps_and_lists():
    schema = _tree()
    edit_schema(schema, Upper())
    assert schema.description == "ROOT"
    assert schema.properties["p"].properties["inner"].description == "INNER"
    assert schema.all_of[0].description == "A0"
    assert schema.dependencies["dep"].schema.description == "DEP"


def test_base_visitor_changes_nothing():
    schema = _tree()
    before = schema.deep_copy()
    edit_schema(schema, SchemaVisitor())
    assert schema == before