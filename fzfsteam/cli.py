import argparse
from typing import List, Optional

from . import create_config, ensure_root, setup_logging
from .launch import launch_game
from .scanning import generate_game_entries
from .settings import load_settings

DESCRIPTION = """Steam Game Launcher

Generates an entry for every installed Steam game (with box art for the icon)
and picks one to launch with fzf."""

EPILOG = "Without options, both generate and launch actions will be performed."


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fzf-steam",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("-g", "--generate", action="store_true", help="Generate game entries")
    mode.add_argument("-l", "--launch", action="store_true", help="Launch game selector")
    p.add_argument("--steam-root", metavar="DIR", help="steamapps directory of the main library")
    p.add_argument("--app-path", metavar="DIR", help="where game entries are written")
    p.add_argument("--clean", action="store_true",
                   help="remove existing entries before generating")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = create_config(steam_root=args.steam_root, app_path=args.app_path)
    try:
        cfg["APP_PATH"].mkdir(parents=True, exist_ok=True)
    except OSError:
        raise SystemExit(f"Error: Could not access {cfg['APP_PATH']}")
    setup_logging(cfg["LOG_FILE"])
    settings = load_settings(cfg["SETTINGS_FILE"])

    generate = args.generate or not args.launch
    launch = args.launch or not args.generate

    if generate:
        ensure_root(str(cfg["STEAM_ROOT"]))
        generate_game_entries(cfg, settings, clean=args.clean)
    if launch:
        return launch_game(cfg, settings)
    return 0
