"""Whole-CRD transformations: merging per-version data, trivial versions, plurals."""

from __future__ import annotations

from crdgen.resources import CustomResourceDefinition

_UNCOUNTABLE = frozenset(
    {
        "deer",
        "equipment",
        "fish",
        "information",
        "jeans",
        "metadata",
        "money",
        "news",
        "police",
        "rice",
        "series",
        "sheep",
        "species",
    }
)

_IRREGULAR = {
    "analysis": "analyses",
    "basis": "bases",
    "child": "children",
    "crisis": "crises",
    "criterion": "criteria",
    "datum": "data",
    "echo": "echoes",
    "foot": "feet",
    "goose": "geese",
    "half": "halves",
    "hero": "heroes",
    "index": "indices",
    "knife": "knives",
    "leaf": "leaves",
    "life": "lives",
    "man": "men",
    "matrix": "matrices",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "potato": "potatoes",
    "quiz": "quizzes",
    "shelf": "shelves",
    "thesis": "theses",
    "tomato": "tomatoes",
    "tooth": "teeth",
    "vertex": "vertices",
    "wife": "wives",
    "wolf": "wolves",
    "woman": "women",
}
_IRREGULAR_PLURALS = frozenset(_IRREGULAR.values())
_VOWELS = frozenset("aeiou")


def pluralize(word: str) -> str:
    """Return the English plural of a (lower-case) word."""
    if not word:
        return word
    lower = word.lower()
    if lower in _UNCOUNTABLE or lower in _IRREGULAR_PLURALS:
        return word
    if lower in _IRREGULAR:
        plural = _IRREGULAR[lower]
        return plural.capitalize() if word[0].isupper() else plural
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in _VOWELS:
        return word[:-1] + "ies"
    return word + "s"


def _merge_identical_subresources(crd: CustomResourceDefinition) -> None:
    versions = crd.spec.versions
    subresources = versions[0].subresources
    if any(v.subresources is None or v.subresources != subresources for v in versions):
        return
    crd.spec.subresources = subresources
    for version in versions:
        version.subresources = None


def _merge_identical_schemata(crd: CustomResourceDefinition) -> None:
    versions = crd.spec.versions
    schema = versions[0].schema
    if any(v.schema is None or v.schema != schema for v in versions):
        return
    crd.spec.validation = schema
    for version in versions:
        version.schema = None


def _merge_identical_printer_columns(crd: CustomResourceDefinition) -> None:
    versions = crd.spec.versions
    columns = versions[0].additional_printer_columns
    if any(
        not v.additional_printer_columns or v.additional_printer_columns != columns
        for v in versions
    ):
        return
    crd.spec.additional_printer_columns = columns
    for version in versions:
        version.additional_printer_columns = []


def merge_identical_version_info(crd: CustomResourceDefinition) -> None:
    """Move subresources, schemata and printer columns that every version shares
    up to the top level of the spec, as API server validation requires."""
    if len(crd.spec.versions) > 1:
        _merge_identical_subresources(crd)
        _merge_identical_schemata(crd)
        _merge_identical_printer_columns(crd)


def to_trivial_versions(crd: CustomResourceDefinition) -> None:
    """Keep only the storage version's schema, subresources and columns, at the top level.

    This makes the definition usable by API servers that predate
    per-version schemata.
    """
    canonical_schema = None
    canonical_subresources = None
    canonical_columns: list = []
    for version in crd.spec.versions:
        if version.storage:
            canonical_schema = version.schema
            canonical_subresources = version.subresources
            canonical_columns = version.additional_printer_columns
        version.schema = None
        version.subresources = None
        version.additional_printer_columns = []
    if canonical_schema is None:
        return

    crd.spec.validation = canonical_schema
    crd.spec.subresources = canonical_subresources
    crd.spec.additional_printer_columns = canonical_columns