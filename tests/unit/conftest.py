from __future__ import annotations

import json
from pathlib import Path

import pytest

HELLO_WORLD = """---
title: "Hello World"
date: 2024-01-15
category: notes
tags: [intro, "getting started"]
---
# Body text
"""

PYTHON_TIPS = """---
title: Python Tips
date: 2024-03-02
description: Small tricks for everyday scripts
tags: ["python", "tips"]
---
Use pathlib.
"""

INDEX = [
    {
        "file": "hello-world.md",
        "title": "Hello World",
        "date": "2024-01-15",
        "category": "notes",
        "excerpt": "First post on the blog",
        "tags": ["intro", "getting started"],
    },
    {
        "file": "python-tips.md",
        "title": "Python Tips",
        "date": "2024-03-02",
        "description": "Small tricks for everyday scripts",
        "tags": ["python", "tips"],
    },
    {
        "file": "untagged.md",
        "title": "Untagged",
        "date": "2023-12-31",
    },
]


@pytest.fixture()
def site(tmp_path: Path) -> Path:
    """A site directory with posts.json and a pages folder."""
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "hello-world.md").write_text(HELLO_WORLD, encoding="utf-8")
    (pages / "python-tips.md").write_text(PYTHON_TIPS, encoding="utf-8")
    (pages / "untagged.md").write_text("No front matter here.\n", encoding="utf-8")
    (tmp_path / "posts.json").write_text(json.dumps(INDEX), encoding="utf-8")
    return tmp_path


@pytest.fixture()
def index_payload() -> list[dict]:
    return json.loads(json.dumps(INDEX))
