#!/usr/bin/env python3
"""
Character Browser - Main entry point
"""
import argparse
import sys
from typing import Any, Dict, List, Optional

from simple_logger import Slogger
from character_browser.config import apply_overrides, load_config, validate_config, MODES
from character_browser.errors import ConfigError
from character_browser.models.pagination import PAGE_SIZES
from character_browser.ui.app import CharacterBrowserApp


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse Rick and Morty characters in the terminal.")
    parser.add_argument("--mode", choices=MODES, help="server-side filtering or fetch everything up front")
    parser.add_argument("--page-size", type=int, choices=PAGE_SIZES, help="characters per page")
    parser.add_argument("--base-url", help="API base URL")
    parser.add_argument("--config", help="path to a JSON config file")
    parser.add_argument(
        "--no-stitch",
        action="store_true",
        help="fetch a single upstream page per logical page (exact only for 5, 10 and 20)",
    )
    return parser.parse_args(argv)


def overrides_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if args.mode:
        overrides.setdefault("ui", {})["mode"] = args.mode
    if args.page_size:
        overrides.setdefault("ui", {})["per_page"] = args.page_size
    if args.base_url:
        overrides.setdefault("api", {})["base_url"] = args.base_url
    if args.no_stitch:
        overrides.setdefault("pagination", {})["stitch_pages"] = False
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = validate_config(apply_overrides(load_config(args.config), overrides_from_args(args)))
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    Slogger.configure(config["logging"]["path"], config["logging"].get("level"))
    Slogger.log("Starting Character Browser...", context={"mode": config["ui"]["mode"]})

    app = CharacterBrowserApp(config)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
