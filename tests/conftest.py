"""Root test configuration: environment isolation and curated-tree fixtures"""

import json
import logging
import os
from pathlib import Path

import pytest

from cdnpub.config import Settings


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run every test in its own cwd with no CDNPUB_* variables leaking in."""
    for name in list(os.environ):
        if name.startswith("CDNPUB_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_logging():
    """The build command may configure the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write_json(path: Path, data) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


LESSON_1 = {
    "title": "Lesson 1",
    "blocks": [
        {"type": "heading", "level": 1, "text": "Hi"},
        {"type": "paragraph", "text": "Hello"},
    ],
}


@pytest.fixture(name="curated")
def curated_fixture(tmp_path) -> Path:
    """Minimal curated tree: one chapter M01 with one explicitly pathed section."""
    root = tmp_path / "curated"
    _write_json(root / "textbook" / "index.json", {
        "chapters": [{
            "id": "M01",
            "title": "Intro",
            "sections": [{"id": "M01L01", "file": "articles/M01/M01L01.json"}],
        }],
    })
    _write_json(root / "textbook" / "articles" / "M01" / "M01L01.json", LESSON_1)
    return root


@pytest.fixture(name="settings")
def settings_fixture(curated, tmp_path) -> Settings:
    return Settings(input_dir=str(curated), output_dir=str(tmp_path / "cdn"), version="20250822")
