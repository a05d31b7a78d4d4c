import json
import logging
from typing import Dict
from pathlib import Path

log = logging.getLogger(__name__)

DEFAULT_EXCLUDE_KEYWORDS = [
    "soundtrack", "proton", "runtime", "server", "dedicated", "sdk", "tool", "demo", "beta",
]


def default_settings() -> Dict:
    return {
        "exclude_keywords": list(DEFAULT_EXCLUDE_KEYWORDS),
        "launcher": "steam-runtime",
        "fallback_icon": "",
    }


def load_settings(settings_file: Path) -> Dict:
    default = default_settings()
    settings_file = Path(settings_file)
    try:
        if settings_file.exists():
            data = json.loads(settings_file.read_text("utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top level is not an object")
            default.update({k: data.get(k, default[k]) for k in default})
    except (OSError, ValueError) as e:
        log.warning("Ignoring unreadable settings file %s: %s", settings_file, e)
        return default_settings()
    keywords = default["exclude_keywords"]
    if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
        log.warning("exclude_keywords in %s is not a list of strings; using defaults", settings_file)
        default["exclude_keywords"] = list(DEFAULT_EXCLUDE_KEYWORDS)
    if not isinstance(default["launcher"], (str, list)) or not default["launcher"]:
        log.warning("launcher in %s is not a command; using steam-runtime", settings_file)
        default["launcher"] = "steam-runtime"
    if not isinstance(default["fallback_icon"], str):
        log.warning("fallback_icon in %s is not a path; ignoring it", settings_file)
        default["fallback_icon"] = ""
    return default


def save_settings(settings_file: Path, settings: dict) -> None:
    settings_file = Path(settings_file)
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings_file.write_text(json.dumps(settings, indent=2), encoding="utf-8")
