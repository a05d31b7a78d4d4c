import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

from .models import Descriptor, Manifest
from .utils import (
    digits_only,
    dump_env,
    entry_stem,
    first_value,
    is_game,
    kv_pairs,
    parse_env,
    pick_best_image,
    strip_trademarks,
)

log = logging.getLogger(__name__)


def library_paths_from(text: str) -> List[str]:
    """Paths recorded in a libraryfolders file.

    Older files list ``"1" "/path"`` directly; newer ones nest a ``"path"`` key
    under each numbered block, next to an ``"apps"`` block of integer keys whose
    values are sizes, not paths.
    """
    paths: List[str] = []
    for key, value in kv_pairs(text):
        if key == "path" and value:
            paths.append(value)
        elif key.isdigit() and os.path.isabs(value):
            paths.append(value)
    return paths


def resolve_library(path: Path) -> Path:
    steamapps = path / "steamapps"
    return steamapps if steamapps.is_dir() else path


def steam_libraries(steam_root: Path, library_file: str = "libraryfolders.vdf") -> Iterator[Path]:
    steam_root = Path(steam_root)
    yield steam_root

    folders = steam_root / library_file
    if not folders.exists():
        log.info("No %s in %s; scanning the main library only", library_file, steam_root)
        return
    try:
        text = folders.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning("Could not read %s: %s; scanning the main library only", folders, e)
        return
    for p in library_paths_from(text):
        yield resolve_library(Path(p))


def read_manifest(path: Path) -> Optional[Manifest]:
    path = Path(path)
    appid = digits_only(path.name)
    if not appid:
        log.warning("Skipping %s: no app id in file name", path)
        return None
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        log.warning("Skipping %s: %s", path, e)
        return None
    name = first_value(text, "name")
    title = strip_trademarks(name) if name else ""
    if not title:
        log.warning("Skipping %s: no name entry", path)
        return None
    return Manifest(appid=appid, title=title, path=path)


def scan_library(library: Path, pattern: str = "appmanifest_*.acf") -> Iterator[Manifest]:
    found = False
    for manifest_path in Path(library).glob(pattern):
        found = True
        m = read_manifest(manifest_path)
        if m is not None:
            yield m
    if not found:
        log.info("No manifests matching %s in %s", pattern, library)


def icon_cache_dir(steam_root: Path) -> Path:
    return Path(steam_root) / ".." / "appcache" / "librarycache"


def resolve_icon(steam_root: Path, manifest: Manifest, cfg: dict, fallback_icon: str = "") -> str:
    cache = icon_cache_dir(steam_root)
    boxart = cache / cfg["ICON_NAME"].format(appid=manifest.appid)
    if boxart.is_file():
        return str(boxart)

    log.warning("Warning: No boxart found for %s (%s)", manifest.title, manifest.appid)

    # newer clients keep per-app artwork in librarycache/<appid>/
    app_dir = cache / manifest.appid
    if app_dir.is_dir():
        images = sorted(p.name for p in app_dir.iterdir()
                        if p.is_file() and p.suffix.lower() in cfg["ICON_EXTS"])
        chosen = pick_best_image(app_dir, images, cfg["ICON_TARGET_AR"])
        if chosen:
            log.info("Using %s for %s", chosen, manifest.title)
            return str(app_dir / chosen)

    if fallback_icon and Path(fallback_icon).is_file():
        return fallback_icon
    return str(boxart)


def descriptor_path(app_path: Path, title: str, ext: str = ".env") -> Path:
    return Path(app_path) / f"{entry_stem(title)}{ext}"


def save_descriptor(path: Path, desc: Descriptor) -> None:
    Path(path).write_text(dump_env(desc.as_env()), encoding="utf-8")


def load_descriptor(path: Path) -> Descriptor:
    env = parse_env(Path(path).read_text(encoding="utf-8"))
    return Descriptor(
        game_id=env.get("GAME_ID", ""),
        game_name=env.get("GAME_NAME", ""),
        game_icon=env.get("GAME_ICON", ""),
    )


def list_descriptors(app_path: Path, ext: str = ".env") -> List[str]:
    return sorted(p.name[: -len(ext)] for p in Path(app_path).glob(f"*{ext}") if p.is_file())


def clean_descriptors(app_path: Path, ext: str = ".env") -> int:
    removed = 0
    for p in Path(app_path).glob(f"*{ext}"):
        if p.is_file():
            p.unlink()
            removed += 1
    log.info("Removed %d existing entries", removed)
    return removed


def generate_game_entries(cfg: dict, settings: dict, *, clean: bool = False) -> List[Descriptor]:
    steam_root = Path(cfg["STEAM_ROOT"])
    app_path = Path(cfg["APP_PATH"])
    ext = cfg["DESCRIPTOR_EXT"]

    if not steam_root.is_dir():
        raise SystemExit(f"Error: Could not access {steam_root}")
    app_path.mkdir(parents=True, exist_ok=True)

    log.info("Starting game entry generation")
    if clean:
        clean_descriptors(app_path, ext)

    keywords = settings.get("exclude_keywords", [])
    fallback = settings.get("fallback_icon", "")
    written: List[Descriptor] = []

    for library in steam_libraries(steam_root, cfg["LIBRARY_FILE"]):
        log.info("Scanning library: %s", library)
        for m in scan_library(library, cfg["MANIFEST_GLOB"]):
            if not is_game(m.title, keywords):
                continue
            desc = Descriptor(
                game_id=m.appid,
                game_name=m.title,
                game_icon=resolve_icon(steam_root, m, cfg, fallback),
            )
            save_descriptor(descriptor_path(app_path, m.title, ext), desc)
            written.append(desc)
            log.info("Generated entry for: %s (%s)", m.title, m.appid)

    log.info("Completed generation of %d game entries", len(written))
    return written
