"""Prometheus metrics helpers."""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from postdeck.frontmatter import TAGS_KEY, Document

REGISTRY = CollectorRegistry()

DOCUMENTS_PARSED = Counter(
    "postdeck_documents_parsed_total",
    "Number of documents run through the front-matter parser",
    labelnames=("front_matter",),
    registry=REGISTRY,
)

STRING_TAGS = Counter(
    "postdeck_string_tags_total",
    "Documents whose tags entry stayed a plain string",
    registry=REGISTRY,
)

SOURCE_LATENCY = Histogram(
    "postdeck_source_latency_seconds",
    "Latency of content source fetches",
    labelnames=("operation",),
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=REGISTRY,
)

SOURCE_ERRORS = Counter(
    "postdeck_source_errors_total",
    "Content source failures grouped by error class",
    labelnames=("operation", "kind"),
    registry=REGISTRY,
)


def observe_document(document: Document) -> None:
    DOCUMENTS_PARSED.labels(front_matter=str(document.has_front_matter).lower()).inc()
    if isinstance(document.metadata.get(TAGS_KEY), str):
        STRING_TAGS.inc()


def observe_fetch(*, operation: str, latency_ms: float) -> None:
    SOURCE_LATENCY.labels(operation=operation).observe(latency_ms / 1000.0)


def observe_source_error(*, operation: str, error: Exception) -> None:
    SOURCE_ERRORS.labels(operation=operation, kind=type(error).__name__).inc()


def render_metrics() -> tuple[bytes, str]:
    payload = generate_latest(REGISTRY)
    return payload, CONTENT_TYPE_LATEST
