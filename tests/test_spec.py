import pytest

from crdgen.resources import (
    CustomResourceColumnDefinition,
    CustomResourceDefinition,
    CustomResourceDefinitionSpec,
    CustomResourceDefinitionVersion,
    CustomResourceSubresources,
    CustomResourceSubresourceStatus,
    CustomResourceValidation,
)
from crdgen.schema import JSONSchemaProps
from crdgen.spec import merge_identical_version_info, pluralize, to_trivial_versions


def _foo_schema(required=True):
    return CustomResourceValidation(
        open_api_v3_schema=JSONSchemaProps(
            required=["foo"] if required else None,
            type="object",
            properties={"foo": JSONSchemaProps(type="string")},
        )
    )


def _crd(*versions):
    return CustomResourceDefinition(spec=CustomResourceDefinitionSpec(versions=list(versions)))


def _columns():
    return [
        CustomResourceColumnDefinition(name="Cheddar", json_path=".spec.cheddar"),
        CustomResourceColumnDefinition(name="Parmesan", json_path=".status.parmesan"),
    ]


PLAIN_VERSIONS = [
    CustomResourceDefinitionVersion(name="v1"),
    CustomResourceDefinitionVersion(name="v2", storage=True),
]


def test_merges_identical_schemata():
    crd = _crd(
        CustomResourceDefinitionVersion(name="v1", schema=_foo_schema()),
        CustomResourceDefinitionVersion(name="v2", storage=True, schema=_foo_schema()),
    )
    merge_identical_version_info(crd)
    assert crd.spec.validation == _foo_schema()
    assert crd.spec.versions == PLAIN_VERSIONS


def test_does_not_merge_different_schemata():
    crd = _crd(
        CustomResourceDefinitionVersion(name="v1", schema=_foo_schema(required=False)),
        CustomResourceDefinitionVersion(name="v2", storage=True, schema=_foo_schema()),
    )
    orig = crd.deep_copy()
    merge_identical_version_info(crd)
    assert crd == orig


def test_merges_identical_subresources():
    def subres():
        return CustomResourceSubresources(status=CustomResourceSubresourceStatus())

    crd = _crd(
        CustomResourceDefinitionVersion(name="v1", subresources=subres()),
        CustomResourceDefinitionVersion(name="v2", storage=True, subresources=subres()),
    )
    merge_identical_version_info(crd)
    assert crd.spec.subresources == subres()
    assert crd.spec.versions == PLAIN_VERSIONS


def test_does_not_merge_different_subresources():
    crd = _crd(
        CustomResourceDefinitionVersion(
            name="v1",
            subresources=CustomResourceSubresources(status=CustomResourceSubresourceStatus()),
        ),
        CustomResourceDefinitionVersion(name="v2", storage=True),
    )
    orig = crd.deep_copy()
    merge_identical_version_info(crd)
    assert crd == orig


def test_merges_identical_printer_columns():
    crd = _crd(
        CustomResourceDefinitionVersion(name="v1", additional_printer_columns=_columns()),
        CustomResourceDefinitionVersion(
            name="v2", storage=True, additional_printer_columns=_columns()
        ),
    )
    merge_identical_version_info(crd)
    assert crd.spec.additional_printer_columns == _columns()
    assert crd.spec.versions == PLAIN_VERSIONS


def test_does_not_merge_different_printer_columns():
    crd = _crd(
        CustomResourceDefinitionVersion(name="v1", additional_printer_columns=_columns()),
        CustomResourceDefinitionVersion(name="v2", storage=True),
    )
    orig = crd.deep_copy()
    merge_identical_version_info(crd)
    assert crd == orig


def test_single_version_is_left_alone():
    crd = _crd(CustomResourceDefinitionVersion(name="v1", schema=_foo_schema()))
    orig = crd.deep_copy()
    merge_identical_version_info(crd)
    assert crd == orig


def test_to_trivial_versions_moves_storage_version_up():
    subres = CustomResourceSubresources(status=CustomResourceSubresourceStatus())
    crd = _crd(
        CustomResourceDefinitionVersion(
            name="v1",
            storage=True,
            schema=_foo_schema(),
            subresources=subres,
            additional_printer_columns=_columns(),
        ),
        CustomResourceDefinitionVersion(name="v2", schema=_foo_schema(required=False)),
    )
    to_trivial_versions(crd)
    assert crd.spec.validation == _foo_schema()
    assert crd.spec.subresources == subres
    assert crd.spec.additional_printer_columns == _columns()
    assert crd.spec.versions == [
        CustomResourceDefinitionVersion(name="v1", storage=True),
        CustomResourceDefinitionVersion(name="v2"),
    ]


def test_to_trivial_versions_without_storage_schema_only_clears():
    crd = _crd(CustomResourceDefinitionVersion(name="v1", schema=_foo_schema()))
    to_trivial_versions(crd)
    assert crd.spec.validation is None
    assert crd.spec.versions == [CustomResourceDefinitionVersion(name="v1")]


@pytest.mark.parametrize(
    "word,plural",
    [
        ("cronjob", "cronjobs"),
        ("policy", "policies"),
        ("ingress", "ingresses"),
        ("person", "people"),
        ("sheep", "sheep"),
        ("", ""),
    ],
)
def test_pluralize(word, plural):
    assert pluralize(word) == plural


def test_pluralize_keeps_plural_irregulars():
    assert pluralize(pluralize("child")) == pluralize("child")