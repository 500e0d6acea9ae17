"""FastAPI application exposing posts and parsed documents as JSON."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Annotated, Any

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query, Response, status
from pydantic import BaseModel

from postdeck import catalog, metrics
from postdeck.errors import DocumentNotFoundError, InvalidFileNameError, SourceError
from postdeck.index import PostSummary
from postdeck.logging_config import configure_logging
from postdeck.pipeline import load_post, load_posts, query_posts
from postdeck.settings import Settings, get_settings
from postdeck.sources import PostSource, create_source

SettingsDep = Annotated[Settings, Depends(get_settings)]

LOGGER = structlog.get_logger(__name__)


class PostModel(PostSummary):
    display_date: str


class DocumentModel(BaseModel):
    file: str
    title: str | None
    tags: list[str]
    metadata: dict[str, Any]
    body: str


def create_app(settings: Settings | None = None, source: PostSource | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    owns_source = source is None
    post_source = source or create_source(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        close = getattr(post_source, "close", None)
        if owns_source and close is not None:
            close()

    app = FastAPI(title="postdeck", version=settings.version, lifespan=lifespan)
    app.dependency_overrides[get_settings] = lambda: settings

    @app.get("/healthz", response_class=Response)
    async def healthz() -> Response:
        return Response(content="ok\n", media_type="text/plain")

    @app.get("/posts", response_model=list[PostModel])
    async def list_posts(
        settings: SettingsDep,
        tag: str | None = None,
        q: Annotated[str | None, Query(max_length=200)] = None,
    ) -> list[PostModel]:
        posts = await asyncio.to_thread(load_posts, post_source)
        selected = query_posts(posts, tag=tag, query=q)
        return [
            PostModel(
                **post.model_dump(),
                display_date=catalog.format_post_date(post.date, settings.date_format),
            )
            for post in selected
        ]

    @app.get("/tags", response_model=list[str])
    async def list_tags() -> list[str]:
        posts = await asyncio.to_thread(load_posts, post_source)
        return catalog.extract_all_tags(posts)

    @app.get("/posts/{file:path}", response_model=DocumentModel)
    async def get_post(file: str) -> DocumentModel:
        try:
            loaded = await asyncio.to_thread(load_post, post_source, file)
        except InvalidFileNameError as exc:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from None
        except DocumentNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from None
        except SourceError as exc:
            LOGGER.error("api.source_error", file=file, error=str(exc))
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail="content source unavailable",
            ) from None
        return DocumentModel(**loaded.asdict())

    @app.get("/metrics")
    async def metrics_endpoint(settings: SettingsDep) -> Response:
        if not settings.metrics_enabled:
            raise HTTPException(status_code=404, detail="metrics disabled")
        payload, content_type = metrics.render_metrics()
        return Response(content=payload, media_type=content_type)

    return app
