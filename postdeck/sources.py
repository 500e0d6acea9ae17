"""Content sources: where the post index and raw documents come from.

``LocalSource`` reads a site directory on disk, ``HttpSource`` fetches the
same layout from a static host. Both make a single attempt per call.
"""

from __future__ import annotations

import json
import urllib.parse
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

import httpx
import structlog

from postdeck.errors import DocumentNotFoundError, InvalidFileNameError, SourceError
from postdeck.settings import Settings

LOGGER = structlog.get_logger(__name__)

DEFAULT_INDEX_NAME = "posts.json"
DEFAULT_PAGES_DIR = "pages"


class PostSource(Protocol):
    def fetch_index(self) -> Any: ...

    def fetch_document(self, file: str) -> str: ...


def validate_file_name(file: str) -> PurePosixPath:
    """Reject names that are empty, absolute or climb out of the pages directory."""
    if not file or "\\" in file or "\x00" in file:
        raise InvalidFileNameError(file)
    path = PurePosixPath(file)
    if path.is_absolute() or ".." in path.parts:
        raise InvalidFileNameError(file)
    return path


class LocalSource:
    """Site directory on disk holding the index file and a pages directory."""

    def __init__(
        self,
        root: Path,
        *,
        index_name: str = DEFAULT_INDEX_NAME,
        pages_dir: str = DEFAULT_PAGES_DIR,
    ) -> None:
        self.root = Path(root)
        self.index_path = self.root / index_name
        self.pages_path = self.root / pages_dir

    def fetch_index(self) -> Any:
        try:
            raw = self.index_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceError(f"post index not found: {self.index_path}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceError(f"cannot read post index {self.index_path}: {exc}") from exc
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SourceError(f"post index is not valid JSON: {exc}") from exc

    def fetch_document(self, file: str) -> str:
        relative = validate_file_name(file)
        path = self.pages_path.joinpath(*relative.parts)
        try:
            return path.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise DocumentNotFoundError(file) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceError(f"cannot read document {file}: {exc}") from exc


class HttpSource:
    """Static host serving ``<base_url>/<index_name>`` and ``<base_url>/<pages_dir>/<file>``."""

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
        index_name: str = DEFAULT_INDEX_NAME,
        pages_dir: str = DEFAULT_PAGES_DIR,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.index_name = index_name
        self.pages_dir = pages_dir.strip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout))

    def __enter__(self) -> HttpSource:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get(self, url: str) -> httpx.Response:
        try:
            return self._client.get(url)
        except httpx.HTTPError as exc:
            LOGGER.warning("source.http_error", url=url, error=str(exc))
            raise SourceError(f"request to {url} failed: {exc}") from exc

    def fetch_index(self) -> Any:
        url = f"{self.base_url}/{self.index_name}"
        response = self._get(url)
        if response.status_code >= 400:
            raise SourceError(f"HTTP error! status: {response.status_code} for {url}")
        try:
            return response.json()
        except ValueError as exc:
            raise SourceError(f"post index is not valid JSON: {exc}") from exc

    def fetch_document(self, file: str) -> str:
        relative = validate_file_name(file)
        quoted = urllib.parse.quote(relative.as_posix())
        url = f"{self.base_url}/{self.pages_dir}/{quoted}"
        response = self._get(url)
        if response.status_code == 404:
            raise DocumentNotFoundError(file)
        if response.status_code >= 400:
            raise SourceError(f"HTTP error! status: {response.status_code} for {url}")
        return response.text


def create_source(settings: Settings) -> PostSource:
    if settings.uses_http:
        return HttpSource(
            settings.content_base_url,
            timeout=settings.http_timeout_seconds,
            index_name=settings.index_name,
            pages_dir=settings.pages_dir,
        )
    return LocalSource(
        settings.content_root,
        index_name=settings.index_name,
        pages_dir=settings.pages_dir,
    )
