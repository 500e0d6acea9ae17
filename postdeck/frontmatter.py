"""Front-matter parsing for blog documents.

A document may start with a block fenced by ``---`` lines holding one
``key: value`` pair per line. Everything after the closing fence is the body
and is returned untouched.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

BOM = "\ufeff"
TAGS_KEY = "tags"

# Same character set as JavaScript String.prototype.trim().
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)

_FRONT_MATTER_PATTERN = re.compile(r"\A---\r?\n(.*?)\r?\n---\r?\n(.*)\Z", re.DOTALL)
_LINE_BREAK_PATTERN = re.compile(r"\r?\n")
_EDGE_QUOTE_PATTERN = re.compile(r"^['\"]|['\"]$")
_QUOTES = ('"', "'")

ParsedValue = str | list[str]
MetadataValue = str | tuple[str, ...]


def _freeze_metadata(metadata: Mapping[str, object]) -> Mapping[str, MetadataValue]:
    frozen = {
        key: tuple(value) if isinstance(value, (list, tuple)) else value
        for key, value in metadata.items()
    }
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class Document:
    """Parsed document: front-matter metadata plus the raw body.

    Metadata is stored as a read-only mapping and list values as tuples, so a
    Document cannot change after construction and can be hashed.
    """

    metadata: Mapping[str, MetadataValue] = field(default_factory=dict)
    body: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _freeze_metadata(self.metadata))

    def __hash__(self) -> int:
        return hash((frozenset(self.metadata.items()), self.body))

    @property
    def has_front_matter(self) -> bool:
        return bool(self.metadata)

    @property
    def title(self) -> str | None:
        value = self.metadata.get("title")
        return value if isinstance(value, str) else None

    @property
    def tags(self) -> list[str]:
        """Tags as a list; a string-valued ``tags`` entry yields no tags."""
        value = self.metadata.get(TAGS_KEY)
        return list(value) if isinstance(value, tuple) else []

    def metadata_dict(self) -> dict[str, str | list[str]]:
        """Plain, JSON-serializable copy of the metadata."""
        return {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in self.metadata.items()
        }


def _trim(value: str) -> str:
    return value.strip(TRIM_CHARS)


def _strip_quotes(value: str) -> str:
    # Matches the original: a lone quote character counts as a pair.
    if value and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def _decode_json_array(value: str) -> list[str] | None:
    try:
        decoded = json.loads(value)
    except (ValueError, RecursionError):
        return None
    if not isinstance(decoded, list) or not all(isinstance(item, str) for item in decoded):
        return None
    return decoded


def _split_list(value: str) -> list[str]:
    return [_EDGE_QUOTE_PATTERN.sub("", _trim(piece)) for piece in value[1:-1].split(",")]


def parse_tags(value: str) -> ParsedValue:
    """Turn a bracketed ``tags`` value into a list, leaving other values alone.

    Valid JSON arrays of strings are decoded as-is. Anything else in brackets
    is split on commas with each piece trimmed and unquoted.
    """
    if not (value.startswith("[") and value.endswith("]")):
        return value
    decoded = _decode_json_array(value)
    if decoded is not None:
        return decoded
    return _split_list(value)


def parse_metadata_block(block: str) -> dict[str, ParsedValue]:
    metadata: dict[str, ParsedValue] = {}
    for line in _LINE_BREAK_PATTERN.split(block):
        colon_index = line.find(":")
        if colon_index <= 0:
            continue
        key = _trim(line[:colon_index])
        value: ParsedValue = _strip_quotes(_trim(line[colon_index + 1 :]))
        if key == TAGS_KEY:
            value = parse_tags(value)
        metadata[key] = value
    return metadata


def parse_front_matter(text: str) -> Document:
    """Split ``text`` into front-matter metadata and body.

    Never fails: text without a front-matter block comes back as the body
    with empty metadata, and malformed tag arrays fall back to a comma split.

    Args:
        text: Raw document, optionally starting with a byte-order mark.

    Returns:
        Document with the parsed metadata and the unmodified remainder.
    """
    if text.startswith(BOM):
        text = text[1:]

    match = _FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return Document(metadata={}, body=text)

    block, body = match.groups()
    return Document(metadata=parse_metadata_block(block), body=body)
