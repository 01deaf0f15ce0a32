from crdgen.resources import (
    CustomResourceColumnDefinition,
    CustomResourceDefinition,
    CustomResourceDefinitionSpec,
    CustomResourceDefinitionVersion,
    CustomResourceSubresourceStatus,
    CustomResourceSubresources,
    CustomResourceValidation,
    GroupKind,
)
from crdgen.schema import JSONSchemaProps


def _sample_crd():
    return CustomResourceDefinition(
        name="cronjobs.testdata.kubebuilder.io",
        spec=CustomResourceDefinitionSpec(
            group="testdata.kubebuilder.io",
            versions=[
                CustomResourceDefinitionVersion(
                    name="v1",
                    storage=True,
                    schema=CustomResourceValidation(
                        open_api_v3_schema=JSONSchemaProps(
                            type="object",
                            required=["foo"],
                            properties={"foo": JSONSchemaProps(type="string")},
                        )
                    ),
                    subresources=CustomResourceSubresources(
                        status=CustomResourceSubresourceStatus()
                    ),
                    additional_printer_columns=[
                        CustomResourceColumnDefinition(
                            name="Cheddar", json_path=".spec.cheddar"
                        )
                    ],
                )
            ],
        ),
    )


def test_deep_copy_equal():
    crd = _sample_crd()
    assert crd.deep_copy() == crd


def test_deep_copy_independent():
    crd = _sample_crd()
    clone = crd.deep_copy()
    clone.spec.versions[0].schema.open_api_v3_schema.properties["foo"].type = "int"
    clone.spec.versions[0].additional_printer_columns.clear()
    original_schema = crd.spec.versions[0].schema.open_api_v3_schema
    assert original_schema.properties["foo"].type == "string"
    assert len(crd.spec.versions[0].additional_printer_columns) == 1


def test_group_kind_str():
    assert str(GroupKind(group="testdata.kubebuilder.io", kind="CronJob")) == (
        "CronJob.testdata.kubebuilder.io"
    )
    assert str(GroupKind(kind="CronJob")) == "CronJob"


def test_group_kind_hashable():
    kinds = {GroupKind("g", "K"), GroupKind("g", "K")}
    assert len(kinds) == 1


def test_version_defaults_differ_from_populated():
    assert CustomResourceDefinitionVersion(name="v1") == CustomResourceDefinitionVersion(
        name="v1"
    )
    assert CustomResourceDefinitionVersion(name="v1") != CustomResourceDefinitionVersion(
        name="v1", storage=True
    )