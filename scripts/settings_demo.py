#!/usr/bin/env python3
"""Drive a :class:`statecast.settings.Settings` store from the command line.

Usage
-----
    python scripts/settings_demo.py --theme light
    python scripts/settings_demo.py --theme light --font monospaced --trace -v
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from statecast import StatecastConfig  # noqa: E402
from statecast.settings import Font, Settings, SettingsMessage, SettingsState, Theme  # noqa: E402

_LOG = logging.getLogger("settings_demo")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Apply settings changes and print the resulting state.")
    parser.add_argument("--theme", choices=[t.name.lower() for t in Theme], help="Theme to switch to")
    parser.add_argument("--font", choices=[f.name.lower() for f in Font], help="Font to switch to")
    parser.add_argument("--trace", action="store_true", help="Log every fan-out (implies -v)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def _on_theme_changed(state: SettingsState, message: SettingsMessage | None = None) -> None:
    _LOG.info("Theme is now %s", state.theme)


def _on_any_change(state: SettingsState, message: SettingsMessage | None = None) -> None:
    _LOG.info("%s -> %s", message, state.model_dump(mode="json"))


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or args.trace) else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = StatecastConfig.from_env(trace_enabled=True) if args.trace else StatecastConfig.from_env()
    settings = Settings(config=config)

    theme_sub = settings.subscribe(SettingsMessage.SET_THEME, _on_theme_changed)
    any_sub = settings.subscribe(None, _on_any_change)

    if args.theme:
        settings.set_theme(Theme[args.theme.upper()])
    if args.font:
        settings.set_font(Font[args.font.upper()])

    for sub_id in (theme_sub, any_sub):
        result = settings.unsubscribe(sub_id)
        if result.is_err():
            _LOG.warning("%s", result.unwrap_err())

    print(json.dumps(settings.current.model_dump(mode="json"), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
