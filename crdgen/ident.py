"""Identifiers for loaded packages and the types declared in them."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(eq=False)
class Package:
    """A loaded package: its import path, its imports and the errors found in it.

    Packages compare and hash by identity, so they can key dictionaries the
    same way a loaded package object would.
    """

    pkg_path: str
    name: str = ""
    id: str = ""
    imports: dict[str, Package] = field(default_factory=dict, repr=False)
    errors: list[Exception] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.id:
            self.id = self.pkg_path

    def add_error(self, err: Exception) -> None:
        """Record that the given error occurred while processing this package."""
        self.errors.append(err)


@dataclass(frozen=True)
class TypeIdent:
    """A named type within a particular package."""

    package: Package
    name: str

    def __str__(self) -> str:
        return f"{json.dumps(self.package.id)}.{self.name}"


@dataclass
class TypeInfo:
    """What is known about a declared type: its docs, markers and fields."""

    name: str
    doc: str = ""
    markers: dict[str, list[Any]] = field(default_factory=dict)
    fields: list[Any] = field(default_factory=list)
    type_expr: Any = None