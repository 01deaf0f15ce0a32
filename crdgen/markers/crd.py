"""Markers that change the CustomResourceDefinition itself rather than its schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from crdgen.resources import (
    NAMESPACE_SCOPED,
    CustomResourceColumnDefinition,
    CustomResourceDefinitionSpec,
    CustomResourceDefinitionVersion,
    CustomResourceSubresources,
    CustomResourceSubresourceScale,
    CustomResourceSubresourceStatus,
)


def _find_version(
    spec: CustomResourceDefinitionSpec, version: str
) -> Optional[CustomResourceDefinitionVersion]:
    return next((v for v in spec.versions if v.name == version), None)


def _subresources_for(
    spec: CustomResourceDefinitionSpec, version: str
) -> Optional[CustomResourceSubresources]:
    """Return the subresources of the given version (or the spec, for ""),
    creating them if needed; None if the version is not in the spec."""
    if not version:
        if spec.subresources is None:
            spec.subresources = CustomResourceSubresources()
        return spec.subresources
    ver = _find_version(spec, version)
    if ver is None:
        return None
    if ver.subresources is None:
        ver.subresources = CustomResourceSubresources()
    return ver.subresources


@dataclass(frozen=True)
class SubresourceStatus:
    """Enables the "/status" subresource on a CRD."""

    def apply_to_crd(self, spec: CustomResourceDefinitionSpec, version: str) -> None:
        subresources = _subresources_for(spec, version)
        if subresources is None:
            raise ValueError(
                f'status subresource applied to version "{version}" not in CRD'
            )
        subresources.status = CustomResourceSubresourceStatus()


@dataclass(frozen=True)
class SubresourceScale:
    """Enables the "/scale" subresource on a CRD."""

    spec_path: str = ""
    status_path: str = ""
    selector_path: Optional[str] = None

    def apply_to_crd(self, spec: CustomResourceDefinitionSpec, version: str) -> None:
        subresources = _subresources_for(spec, version)
        if subresources is None:
            raise ValueError(
                f'scale subresource applied to version "{version}" not in CRD'
            )
        subresources.scale = CustomResourceSubresourceScale(
            spec_replicas_path=self.spec_path,
            status_replicas_path=self.status_path,
            label_selector_path=self.selector_path,
        )


@dataclass(frozen=True)
class StorageVersion:
    """Marks this version as the storage version of the CRD."""

    def apply_to_crd(self, spec: CustomResourceDefinitionSpec, version: str) -> None:
        if not version:
            return
        ver = _find_version(spec, version)
        if ver is not None:
            ver.storage = True


@dataclass(frozen=True)
class SkipVersion:
    """Removes this version from the CRD's list of versions."""

    def apply_to_crd(self, spec: CustomResourceDefinitionSpec, version: str) -> None:
        if not version:
            raise ValueError("cannot skip a version if there is only a single version")
        spec.versions = [v for v in spec.versions if v.name != version]


@dataclass(frozen=True)
class PrintColumn:
    """Adds a column to "kubectl get" output for this CRD."""

    name: str
    type: str
    json_path: str
    description: str = ""
    format: str = ""
    priority: int = 0

    def apply_to_crd(self, spec: CustomResourceDefinitionSpec, version: str) -> None:
        if not version:
            columns = spec.additional_printer_columns
        else:
            ver = _find_version(spec, version)
            if ver is None:
                raise ValueError(
                    f'printer columns applied to version "{version}" not in CRD'
                )
            if ver.subresources is None:
                ver.subresources = CustomResourceSubresources()
            columns = ver.additional_printer_columns
        columns.append(
            CustomResourceColumnDefinition(
                name=self.name,
                type=self.type,
                json_path=self.json_path,
                description=self.description,
                format=self.format,
                priority=self.priority,
            )
        )


@dataclass(frozen=True)
class Resource:
    """Configures naming and scope for a CRD."""

    path: str = ""
    short_name: Optional[list[str]] = field(default=None, hash=False)
    categories: Optional[list[str]] = field(default=None, hash=False)
    singular: str = ""
    scope: str = ""

    def apply_to_crd(self, spec: CustomResourceDefinitionSpec, version: str) -> None:
        if self.path:
            spec.names.plural = self.path
        spec.names.short_names = list(self.short_name) if self.short_name is not None else None
        spec.names.categories = list(self.categories) if self.categories is not None else None
        spec.scope = self.scope or NAMESPACE_SCOPED


CRD_MARKERS = {
    "kubebuilder:subresource:status": SubresourceStatus,
    "kubebuilder:subresource:scale": SubresourceScale,
    "kubebuilder:printcolumn": PrintColumn,
    "kubebuilder:resource": Resource,
    "kubebuilder:storageversion": StorageVersion,
    "kubebuilder:skipversion": SkipVersion,
}