"""Truncation of schema descriptions to a maximum length."""

from __future__ import annotations

from typing import Optional

from crdgen.schema import JSONSchemaProps
from crdgen.visitor import SchemaVisitor, edit_schema

# Characters with the Unicode Sentence_Terminal property (BMP).
_STERM_RANGES = (
    (0x0021, 0x0021), (0x002E, 0x002E), (0x003F, 0x003F),
    (0x0589, 0x0589), (0x061D, 0x061F), (0x06D4, 0x06D4),
    (0x0700, 0x0702), (0x07F9, 0x07F9), (0x0837, 0x0837),
    (0x0839, 0x0839), (0x083D, 0x083E), (0x0964, 0x0965),
    (0x104A, 0x104B), (0x1362, 0x1362), (0x1367, 0x1368),
    (0x166E, 0x166E), (0x1735, 0x1736), (0x1803, 0x1803),
    (0x1809, 0x1809), (0x1944, 0x1945), (0x1AA8, 0x1AAB),
    (0x1B5A, 0x1B5B), (0x1B5E, 0x1B5F), (0x1C3B, 0x1C3C),
    (0x1C7E, 0x1C7F), (0x203C, 0x203D), (0x2047, 0x2049),
    (0x2E2E, 0x2E2E), (0x2E3C, 0x2E3C), (0x3002, 0x3002),
    (0xA4FF, 0xA4FF), (0xA60E, 0xA60F), (0xA6F3, 0xA6F3),
    (0xA6F7, 0xA6F7), (0xA876, 0xA877), (0xA8CE, 0xA8CF),
    (0xA92F, 0xA92F), (0xA9C8, 0xA9C9), (0xAA5D, 0xAA5F),
    (0xAAF0, 0xAAF1), (0xABEB, 0xABEB), (0xFE52, 0xFE52),
    (0xFE56, 0xFE57), (0xFF01, 0xFF01), (0xFF0E, 0xFF0E),
    (0xFF1F, 0xFF1F), (0xFF61, 0xFF61),
)


def _is_sentence_terminal(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in _STERM_RANGES)


def truncate_string(desc: str, max_len: int) -> str:
    """Cut desc to max_len, backing off to the last sentence end if there is one."""
    desc = desc[:max_len]
    last = max(
        (i for i, char in enumerate(desc) if _is_sentence_terminal(char)),
        default=-1,
    )
    if last > 0:
        return desc[: last + 1]
    return desc


class _DescriptionVisitor(SchemaVisitor):
    def __init__(self, max_len: int) -> None:
        self.max_len = max_len

    def visit(self, schema: Optional[JSONSchemaProps]) -> Optional[SchemaVisitor]:
        if schema is None:
            return self
        if self.max_len < 0:
            return None
        if self.max_len == 0:
            schema.description = ""
        elif len(schema.description) > self.max_len:
            schema.description = truncate_string(schema.description, self.max_len)
        return self


def truncate_description(schema: JSONSchemaProps, max_len: int) -> None:
    """Truncate every description in the schema tree to at most max_len characters.

    A max_len of zero drops all descriptions; a negative one leaves them alone.
    """
    edit_schema(schema, _DescriptionVisitor(max_len))