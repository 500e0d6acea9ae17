"""Loading posts through a content source."""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter

import structlog

from postdeck import catalog, metrics
from postdeck.errors import IndexFormatError, SourceError
from postdeck.frontmatter import Document, parse_front_matter
from postdeck.index import PostSummary, parse_index
from postdeck.sources import PostSource

LOGGER = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class LoadedPost:
    file: str
    document: Document

    def asdict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "title": self.document.title,
            "tags": self.document.tags,
            "metadata": self.document.metadata_dict(),
            "body": self.document.body,
        }


def load_posts(source: PostSource) -> list[PostSummary]:
    """Fetch and validate the post index. Failures are logged and give an empty list."""

    start = perf_counter()
    try:
        payload = source.fetch_index()
        posts = parse_index(payload)
    except (SourceError, IndexFormatError) as exc:
        metrics.observe_source_error(operation="index", error=exc)
        LOGGER.error("index.load_failed", error=str(exc), kind=type(exc).__name__)
        return []

    latency_ms = (perf_counter() - start) * 1000
    metrics.observe_fetch(operation="index", latency_ms=latency_ms)
    LOGGER.info("index.loaded", posts=len(posts), latency_ms=latency_ms)
    return posts


def load_post(source: PostSource, file: str) -> LoadedPost:
    """Fetch one document and parse its front matter.

    Source errors propagate; parsing itself cannot fail.
    """

    start = perf_counter()
    LOGGER.info("pipeline.post_requested", file=file)
    try:
        raw = source.fetch_document(file)
    except SourceError as exc:
        metrics.observe_source_error(operation="document", error=exc)
        LOGGER.warning("pipeline.post_failed", file=file, error=str(exc), kind=type(exc).__name__)
        raise

    latency_ms = (perf_counter() - start) * 1000
    metrics.observe_fetch(operation="document", latency_ms=latency_ms)

    document = parse_front_matter(raw)
    metrics.observe_document(document)
    LOGGER.info(
        "pipeline.post_loaded",
        file=file,
        title=document.title,
        front_matter=document.has_front_matter,
        latency_ms=latency_ms,
    )
    return LoadedPost(file=file, document=document)


def query_posts(
    posts: list[PostSummary], *, tag: str | None = None, query: str | None = None
) -> list[PostSummary]:
    return catalog.search_posts(catalog.filter_by_tag(posts, tag), query)
