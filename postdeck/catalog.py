"""List queries over the post index: tags, tag filter, search, dates."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from postdeck.index import PostSummary

DEFAULT_DATE_FORMAT = "%Y. %m. %d"


def extract_all_tags(posts: Iterable[PostSummary]) -> list[str]:
    tags: set[str] = set()
    for post in posts:
        tags.update(post.tags)
    return sorted(tags)


def filter_by_tag(posts: Sequence[PostSummary], tag: str | None) -> list[PostSummary]:
    """Posts carrying ``tag`` exactly; an empty tag selects everything."""
    if not tag:
        return list(posts)
    return [post for post in posts if tag in post.tags]


def _matches(post: PostSummary, needle: str) -> bool:
    for field_value in (post.title, post.description, post.excerpt):
        if field_value and needle in field_value.lower():
            return True
    if any(needle in tag.lower() for tag in post.tags):
        return True
    return bool(post.category and needle in post.category.lower())


def search_posts(posts: Sequence[PostSummary], query: str | None) -> list[PostSummary]:
    """Case-insensitive substring search over title, description, excerpt, tags and category.

    A blank query returns every post.
    """
    if not query or not query.strip():
        return list(posts)
    needle = query.strip().lower()
    return [post for post in posts if _matches(post, needle)]


def _parse_date(value: str) -> datetime | None:
    candidate = value.strip()
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def format_post_date(value: str | None, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format an ISO date for display; unparseable input is returned as given."""
    if not value:
        return ""
    parsed = _parse_date(value)
    if parsed is None:
        return value
    return parsed.strftime(fmt)
