# fzfsteam/launch.py
from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .scanning import list_descriptors, load_descriptor

log = logging.getLogger(__name__)

URI_TEMPLATE = "steam://rungameid/{game_id}"

# fzf exits 1 on "no match" and 130 when the user hits Esc / Ctrl-C
FZF_NO_SELECTION = {1, 130}

# ──────────────────────────────────────────────────────────────────────────────
# Selector
# ──────────────────────────────────────────────────────────────────────────────

def fzf_argv(ext: str = ".env") -> List[str]:
    preview = f"cat {{}}{ext} | sed 's/^/  /'"
    return ["fzf", "--border", f"--preview={preview}", "--preview-window=up:3:wrap"]


def select_game(names: List[str], cwd: Path, ext: str = ".env") -> Optional[str]:
    """Run fzf over ``names``; ``None`` when the user picks nothing."""
    try:
        proc = subprocess.run(
            fzf_argv(ext),
            input="\n".join(names) + "\n",
            stdout=subprocess.PIPE,
            cwd=str(cwd),
            text=True,
        )
    except FileNotFoundError:
        raise SystemExit("Error: fzf is not installed or not on PATH")

    if proc.returncode in FZF_NO_SELECTION:
        return None
    if proc.returncode != 0:
        raise SystemExit(f"Error: fzf exited with status {proc.returncode}")
    choice = (proc.stdout or "").strip()
    return choice or None

# ──────────────────────────────────────────────────────────────────────────────
# Launcher
# ──────────────────────────────────────────────────────────────────────────────

def launch_argv(launcher: Union[str, List[str]], game_id: str) -> List[str]:
    tokens = shlex.split(launcher) if isinstance(launcher, str) else list(launcher)
    return tokens + [URI_TEMPLATE.format(game_id=game_id)]


def spawn_detached(argv: List[str]) -> None:
    """Start ``argv`` in its own session, streams on /dev/null, and don't wait."""
    try:
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        raise SystemExit(f"Error: Could not start {argv[0]}: {e}")

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def launch_game(cfg: dict, settings: dict) -> int:
    app_path = Path(cfg["APP_PATH"])
    ext = cfg["DESCRIPTOR_EXT"]

    if not app_path.is_dir():
        raise SystemExit(f"Error: Could not access {app_path}")

    names = list_descriptors(app_path, ext)
    if not names:
        raise SystemExit("No games found. Run the script with --generate first.")

    selected = select_game(names, app_path, ext)
    if selected is None:
        return 0

    entry = app_path / f"{selected}{ext}"
    if not entry.is_file():
        raise SystemExit(f"Error: Could not find game data for {selected}")

    desc = load_descriptor(entry)
    if not desc.game_id:
        raise SystemExit(f"Error: Could not find game data for {selected}")
    print(f"Launching: {desc.game_name}")
    log.info("Launching game: %s (%s)", desc.game_name, desc.game_id)
    spawn_detached(launch_argv(settings.get("launcher") or "steam-runtime", desc.game_id))
    return 0
