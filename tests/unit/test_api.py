from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient
from postdeck.errors import InvalidFileNameError, SourceError
from postdeck.main import create_app
from postdeck.settings import Settings


class FailingSource:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def fetch_index(self) -> object:
        raise self.error

    def fetch_document(self, file: str) -> str:
        raise self.error


def get_client(site: Path, **overrides: object) -> TestClient:
    settings = Settings(content_root=site, **overrides)
    return TestClient(create_app(settings))


def test_healthz(site: Path) -> None:
    resp = get_client(site).get("/healthz")
    assert resp.status_code == 200
    assert resp.text == "ok\n"


def test_list_posts(site: Path) -> None:
    resp = get_client(site).get("/posts")
    body = resp.json()

    assert resp.status_code == 200
    assert [post["file"] for post in body] == ["hello-world.md", "python-tips.md", "untagged.md"]
    assert body[0]["display_date"] == "2024. 01. 15"
    assert body[0]["tags"] == ["intro", "getting started"]


def test_list_posts_custom_date_format(site: Path) -> None:
    resp = get_client(site, date_format="%d.%m.%Y").get("/posts")
    assert resp.json()[1]["display_date"] == "02.03.2024"


def test_list_posts_filters(site: Path) -> None:
    client = get_client(site)
    by_tag = client.get("/posts", params={"tag": "python"}).json()
    by_query = client.get("/posts", params={"q": "HELLO"}).json()

    assert [post["file"] for post in by_tag] == ["python-tips.md"]
    assert [post["file"] for post in by_query] == ["hello-world.md"]


def test_list_posts_with_broken_index_is_empty(tmp_path: Path) -> None:
    resp = get_client(tmp_path).get("/posts")
    assert resp.status_code == 200
    assert resp.json() == []


def test_tags(site: Path) -> None:
    resp = get_client(site).get("/tags")
    assert resp.json() == ["getting started", "intro", "python", "tips"]


def test_get_post(site: Path) -> None:
    resp = get_client(site).get("/posts/hello-world.md")
    body = resp.json()

    assert resp.status_code == 200
    assert body["file"] == "hello-world.md"
    assert body["title"] == "Hello World"
    assert body["tags"] == ["intro", "getting started"]
    assert body["metadata"]["date"] == "2024-01-15"
    assert body["body"] == "# Body text\n"


def test_get_nested_post(site: Path) -> None:
    nested = site / "pages" / "2024"
    nested.mkdir()
    (nested / "deep.md").write_text("---\ntitle: Deep\n---\ntext", encoding="utf-8")
    resp = get_client(site).get("/posts/2024/deep.md")
    assert resp.json()["title"] == "Deep"


def test_get_missing_post(site: Path) -> None:
    resp = get_client(site).get("/posts/missing.md")
    assert resp.status_code == 404


def test_get_post_invalid_name(tmp_path: Path) -> None:
    app = create_app(Settings(content_root=tmp_path), FailingSource(InvalidFileNameError("..")))
    resp = TestClient(app).get("/posts/anything.md")
    assert resp.status_code == 400


def test_get_post_source_unavailable(tmp_path: Path) -> None:
    app = create_app(Settings(content_root=tmp_path), FailingSource(SourceError("down")))
    resp = TestClient(app).get("/posts/anything.md")
    assert resp.status_code == 502
    assert resp.json()["detail"] == "content source unavailable"


def test_metrics_endpoint(site: Path) -> None:
    client = get_client(site)
    client.get("/posts/hello-world.md")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "postdeck_documents_parsed_total" in resp.text


def test_metrics_disabled(site: Path) -> None:
    resp = get_client(site, metrics_enabled=False).get("/metrics")
    assert resp.status_code == 404
