from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from fzfsteam import create_config
from fzfsteam.settings import default_settings

MANIFEST = """"AppState"
{{
\t"appid"\t\t"{appid}"
\t"Universe"\t\t"1"
\t"name"\t\t"{name}"
\t"StateFlags"\t\t"4"
\t"installdir"\t\t"{name}"
}}
"""


def write_manifest(library: Path, appid: str, name: str) -> Path:
    library.mkdir(parents=True, exist_ok=True)
    p = library / f"appmanifest_{appid}.acf"
    p.write_text(MANIFEST.format(appid=appid, name=name), encoding="utf-8")
    return p


def image_bytes(w: int, h: int, fmt: str = "JPEG") -> bytes:
    from PIL import Image
    buf = io.BytesIO()
    Image.new("RGB", (w, h), (12, 34, 56)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def steam_home(tmp_path: Path) -> Path:
    """A Steam install dir with an empty ``steamapps`` and artwork cache."""
    home = tmp_path / "Steam"
    (home / "steamapps").mkdir(parents=True)
    (home / "appcache" / "librarycache").mkdir(parents=True)
    return home


@pytest.fixture
def cfg(tmp_path: Path, steam_home: Path) -> dict:
    return create_config(
        steam_root=str(steam_home / "steamapps"),
        app_path=str(tmp_path / "applications" / "steam"),
        cache_dir=str(tmp_path / "cache"),
        settings_file=str(tmp_path / "settings.json"),
    )


@pytest.fixture
def settings() -> dict:
    return default_settings()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("fzfsteam")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
