"""Post index model: validation of ``posts.json`` and building it from pages."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from postdeck.errors import IndexFormatError
from postdeck.frontmatter import Document, parse_front_matter

LOGGER = structlog.get_logger(__name__)

EXCERPT_LENGTH = 200

_DATE_PREFIX_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}")


class PostSummary(BaseModel):
    """One entry of the post index."""

    model_config = ConfigDict(extra="ignore")

    file: str
    title: str
    date: str
    excerpt: str | None = None
    category: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _missing_tags_are_empty(cls, value: Any) -> Any:
        return [] if value is None else value


def parse_index(payload: Any) -> list[PostSummary]:
    """Validate a decoded index payload.

    Invalid entries are logged and skipped so one broken post does not hide
    the rest of the list.
    """
    if not isinstance(payload, list):
        raise IndexFormatError(f"post index must be a list, got {type(payload).__name__}")

    posts: list[PostSummary] = []
    for position, entry in enumerate(payload):
        try:
            posts.append(PostSummary.model_validate(entry))
        except ValidationError as exc:
            LOGGER.warning(
                "index.entry_invalid",
                position=position,
                errors=exc.error_count(),
            )
    return posts


def _metadata_str(document: Document, key: str) -> str | None:
    value = document.metadata.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _first_paragraph(body: str) -> str | None:
    for line in body.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if len(stripped) > EXCERPT_LENGTH:
            return stripped[:EXCERPT_LENGTH] + "..."
        return stripped
    return None


def summarize_document(file: str, document: Document) -> PostSummary:
    """Build an index entry from a parsed document, deriving missing fields."""
    stem = Path(file).stem
    title = _metadata_str(document, "title") or stem.replace("-", " ")
    date = _metadata_str(document, "date")
    if date is None:
        match = _DATE_PREFIX_PATTERN.match(stem)
        date = match.group(0) if match else ""

    return PostSummary(
        file=file,
        title=title,
        date=date,
        excerpt=_metadata_str(document, "excerpt") or _first_paragraph(document.body),
        category=_metadata_str(document, "category"),
        description=_metadata_str(document, "description"),
        tags=document.tags,
    )


def build_index(pages_dir: Path, *, pattern: str = "*.md") -> list[PostSummary]:
    """Parse every page under ``pages_dir`` and return summaries, newest first."""
    posts: list[PostSummary] = []
    for path in sorted(pages_dir.rglob(pattern)):
        if not path.is_file():
            continue
        file = path.relative_to(pages_dir).as_posix()
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("index.page_skipped", file=file, error=str(exc))
            continue
        document = parse_front_matter(text)
        posts.append(summarize_document(file, document))
        LOGGER.debug("index.page_added", file=file, front_matter=document.has_front_matter)

    posts.sort(key=lambda post: post.file)
    posts.sort(key=lambda post: post.date, reverse=True)
    return posts


def dump_index(posts: Iterable[PostSummary]) -> str:
    payload = [post.model_dump(exclude_none=True) for post in posts]
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
