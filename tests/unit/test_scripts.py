from __future__ import annotations

import json
from pathlib import Path

import pytest
from postdeck.index import parse_index
from scripts import build_index, parse_post


def test_parse_post_prints_json(site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = parse_post.main([str(site / "pages" / "hello-world.md")])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["metadata"]["tags"] == ["intro", "getting started"]
    assert payload["body"] == "# Body text\n"


def test_parse_post_metadata_only(site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    parse_post.main([str(site / "pages" / "python-tips.md"), "--no-body"])
    payload = json.loads(capsys.readouterr().out)
    assert "body" not in payload
    assert payload["metadata"]["title"] == "Python Tips"


def test_parse_post_missing_file(tmp_path: Path) -> None:
    assert parse_post.main([str(tmp_path / "nope.md")]) == 1


def test_build_index_writes_posts_json(site: Path) -> None:
    output = site / "out" / "posts.json"
    exit_code = build_index.main(["--pages", str(site / "pages"), "--output", str(output)])

    assert exit_code == 0
    posts = parse_index(json.loads(output.read_text(encoding="utf-8")))
    assert [post.file for post in posts] == ["python-tips.md", "hello-world.md", "untagged.md"]


def test_build_index_missing_pages(tmp_path: Path) -> None:
    exit_code = build_index.main(
        ["--pages", str(tmp_path / "missing"), "--output", str(tmp_path / "posts.json")]
    )
    assert exit_code == 1
    assert not (tmp_path / "posts.json").exists()
