"""Data model of a CustomResourceDefinition (apiextensions v1beta1)."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from crdgen.schema import JSONSchemaProps

SCHEME_GROUP_VERSION = "apiextensions.k8s.io/v1beta1"
NAMESPACE_SCOPED = "Namespaced"
CLUSTER_SCOPED = "Cluster"


@dataclass(frozen=True)
class GroupKind:
    """An API group together with a kind."""

    group: str = ""
    kind: str = ""

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass
class CustomResourceSubresourceStatus:
    """Enables the /status subresource."""


@dataclass
class CustomResourceSubresourceScale:
    """Enables the /scale subresource."""

    spec_replicas_path: str = ""
    status_replicas_path: str = ""
    label_selector_path: Optional[str] = None


@dataclass
class CustomResourceSubresources:
    """The subresources served for a custom resource."""

    status: Optional[CustomResourceSubresourceStatus] = None
    scale: Optional[CustomResourceSubresourceScale] = None


@dataclass
class CustomResourceColumnDefinition:
    """A column shown by "kubectl get"."""

    name: str = ""
    type: str = ""
    format: str = ""
    description: str = ""
    priority: int = 0
    json_path: str = ""


@dataclass
class CustomResourceValidation:
    """The validation schema of a custom resource."""

    open_api_v3_schema: Optional[JSONSchemaProps] = None


@dataclass
class CustomResourceDefinitionVersion:
    """One served version of a custom resource."""

    name: str = ""
    served: bool = False
    storage: bool = False
    schema: Optional[CustomResourceValidation] = None
    subresources: Optional[CustomResourceSubresources] = None
    additional_printer_columns: list[CustomResourceColumnDefinition] = field(
        default_factory=list
    )


@dataclass
class CustomResourceDefinitionNames:
    """The names under which a custom resource is served."""

    plural: str = ""
    singular: str = ""
    short_names: Optional[list[str]] = None
    kind: str = ""
    list_kind: str = ""
    categories: Optional[list[str]] = None


@dataclass
class CustomResourceDefinitionSpec:
    """The desired state of a CustomResourceDefinition."""

    group: str = ""
    version: str = ""
    names: CustomResourceDefinitionNames = field(
        default_factory=CustomResourceDefinitionNames
    )
    scope: str = ""
    validation: Optional[CustomResourceValidation] = None
    subresources: Optional[CustomResourceSubresources] = None
    versions: list[CustomResourceDefinitionVersion] = field(default_factory=list)
    additional_printer_columns: list[CustomResourceColumnDefinition] = field(
        default_factory=list
    )


@dataclass
class CustomResourceDefinitionStatus:
    """The observed state of a CustomResourceDefinition."""

    conditions: list[dict] = field(default_factory=list)
    accepted_names: CustomResourceDefinitionNames = field(
        default_factory=CustomResourceDefinitionNames
    )
    stored_versions: list[str] = field(default_factory=list)


@dataclass
class CustomResourceDefinition:
    """A complete CustomResourceDefinition object."""

    api_version: str = ""
    kind: str = ""
    name: str = ""
    spec: CustomResourceDefinitionSpec = field(
        default_factory=CustomResourceDefinitionSpec
    )
    status: CustomResourceDefinitionStatus = field(
        default_factory=CustomResourceDefinitionStatus
    )

    def deep_copy(self) -> CustomResourceDefinition:
        """Return a fully independent copy of this definition."""
        return copy.deepcopy(self)