import os
import logging
from pathlib import Path

# Defaults mirror a stock native Steam install; override through the environment
STEAM_ROOT = os.environ.get("STEAM_ROOT", os.path.expanduser("~/.local/share/Steam/steamapps"))
APP_PATH = os.environ.get("APP_PATH", os.path.expanduser("~/.local/share/applications/steam"))
CACHE_DIR = os.environ.get("CACHE_DIR", os.path.expanduser("~/.cache/steam-launcher"))
SETTINGS_FILE = os.environ.get(
    "FZF_STEAM_SETTINGS",
    os.path.join(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")),
                 "fzf-steam", "settings.json"),
)

LOG_FORMAT = "[%(asctime)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def ensure_root(steam_root: str) -> None:
    if not os.path.isdir(steam_root):
        raise SystemExit(f"Error: Steam library root does not exist: {steam_root}")


def create_config(steam_root: str = None, app_path: str = None, cache_dir: str = None,
                  settings_file: str = None) -> dict:
    cache = Path(cache_dir or CACHE_DIR)
    config = {}
    config["STEAM_ROOT"] = Path(steam_root or STEAM_ROOT)
    config["APP_PATH"] = Path(app_path or APP_PATH)
    config["CACHE_DIR"] = cache
    config["LOG_FILE"] = cache / "launcher.log"
    config["SETTINGS_FILE"] = Path(settings_file or SETTINGS_FILE)
    config["LIBRARY_FILE"] = "libraryfolders.vdf"
    config["MANIFEST_GLOB"] = "appmanifest_*.acf"
    config["ICON_NAME"] = "{appid}_library_600x900.jpg"
    config["ICON_EXTS"] = {".jpg", ".jpeg", ".png", ".webp"}
    config["ICON_TARGET_AR"] = 600 / 900
    config["DESCRIPTOR_EXT"] = ".env"
    return config


def setup_logging(log_file: Path) -> logging.Logger:
    """Send everything from the package logger to ``log_file`` (append)."""
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger(__name__)
    target = str(log_file.resolve())
    for h in list(logger.handlers):
        if isinstance(h, logging.FileHandler):
            if h.baseFilename == target:
                return logger
            logger.removeHandler(h)
            h.close()
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger
