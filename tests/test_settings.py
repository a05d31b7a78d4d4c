from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from fzfsteam.settings import (
    DEFAULT_EXCLUDE_KEYWORDS,
    default_settings,
    load_settings,
    save_settings,
)
from fzfsteam.utils import is_game


def _write(path: Path, data) -> Path:
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "none.json") == default_settings()


def test_saved_settings_are_loaded(tmp_path: Path) -> None:
    path = tmp_path / "cfg" / "settings.json"
    save_settings(path, {"exclude_keywords": ["dlc"], "launcher": "xdg-open", "fallback_icon": "/i.png"})
    assert load_settings(path) == {
        "exclude_keywords": ["dlc"], "launcher": "xdg-open", "fallback_icon": "/i.png"}


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    s = load_settings(_write(tmp_path / "s.json", {"launcher": "xdg-open", "theme": "dark"}))
    assert "theme" not in s
    assert s["launcher"] == "xdg-open"
    assert s["exclude_keywords"] == DEFAULT_EXCLUDE_KEYWORDS


@pytest.mark.parametrize("content", ["{not json", "[]", '"text"', "42", "null"])
def test_unusable_file_gives_defaults(tmp_path: Path, caplog, content: str) -> None:
    with caplog.at_level(logging.WARNING, logger="fzfsteam"):
        s = load_settings(_write(tmp_path / "s.json", content))
    assert s == default_settings()
    assert "Ignoring unreadable settings file" in caplog.text


@pytest.mark.parametrize("keywords", ["soundtrack", [1], ["demo", None], {"a": 1}])
def test_bad_keywords_fall_back(tmp_path: Path, caplog, keywords) -> None:
    with caplog.at_level(logging.WARNING, logger="fzfsteam"):
        s = load_settings(_write(tmp_path / "s.json", {"exclude_keywords": keywords}))
    assert s["exclude_keywords"] == DEFAULT_EXCLUDE_KEYWORDS
    assert "exclude_keywords" in caplog.text
    # generation can use the result without crashing
    assert is_game("Portal 2", s["exclude_keywords"])


def test_bad_launcher_and_icon_fall_back(tmp_path: Path) -> None:
    s = load_settings(_write(tmp_path / "s.json", {"launcher": 5, "fallback_icon": ["x"]}))
    assert s["launcher"] == "steam-runtime"
    assert s["fallback_icon"] == ""


def test_unreadable_path_gives_defaults(tmp_path: Path) -> None:
    folder = tmp_path / "settings.json"
    folder.mkdir()
    assert load_settings(folder) == default_settings()
