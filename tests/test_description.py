from crdgen.description import truncate_description, truncate_string
from crdgen.schema import JSONSchemaProps


def test_zero_max_len_drops_all_descriptions():
    schema = JSONSchemaProps(
        description="top level description",
        properties={"Spec": JSONSchemaProps(description="specification for the API type")},
    )
    truncate_description(schema, 0)
    assert schema == JSONSchemaProps(properties={"Spec": JSONSchemaProps()})


def test_only_truncates_when_exceeding_max_len():
    schema = JSONSchemaProps(
        description="top level description of the root object.",
        properties={"Spec": JSONSchemaProps(description="specification of a field")},
    )
    original = schema.deep_copy()
    truncate_description(schema, len(schema.description))
    assert schema == original


def test_truncates_at_closest_sentence_boundary():
    desc = "This is top level description. There is an empty schema. More to come"
    schema = JSONSchemaProps(description=desc)
    truncate_description(schema, len(desc) - 5)
    assert schema == JSONSchemaProps(
        description="This is top level description. There is an empty schema."
    )


def test_truncates_at_max_len_without_sentence_boundary():
    desc = "This is top level description of the root object"
    schema = JSONSchemaProps(description=desc)
    truncate_description(schema, len(desc) - 2)
    assert schema == JSONSchemaProps(
        description="This is top level description of the root obje"
    )


def test_negative_max_len_leaves_schema_alone():
    schema = JSONSchemaProps(
        description="a long description. with sentences.",
        properties={"Spec": JSONSchemaProps(description="nested. text")},
    )
    original = schema.deep_copy()
    truncate_description(schema, -1)
    assert schema == original


def test_truncate_string_never_exceeds_max_len():
    desc = "One. Two! Three? Four"
    for max_len in range(1, len(desc) + 1):
        assert len(truncate_string(desc, max_len)) <= max_len
        assert desc.startswith(truncate_string(desc, max_len))


def test_truncate_string_ignores_terminal_at_start():
    assert truncate_string(".abcdef", 4) == ".abc"