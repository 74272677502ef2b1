"""Read-only JSON config providing default menu options.

Stores matching, layout and prompt defaults that command-line flags
override. All access is defensive: malformed or missing config falls back
to built-in defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazymenu"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
BAR_POSITIONS = ("inline", "top", "bottom")


@dataclass(frozen=True)
class MenuOptions:
    """Options that shape one menu session."""

    case_insensitive: bool = False
    lines: int = 0
    bar_position: str = "inline"
    prompt: str | None = None

    def with_overrides(self, **overrides: object) -> MenuOptions:
        """Return a copy with every non-``None`` override applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_nonnegative_int(value: object) -> int | None:
    """Booleans and non-integers are invalid; negatives clamp to ``0``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return max(0, value)


def load_menu_defaults() -> MenuOptions:
    """Build ``MenuOptions`` from validated config keys, ignoring bad values."""
    data = load_config()
    options = MenuOptions()

    case_insensitive = data.get("case_insensitive")
    if isinstance(case_insensitive, bool):
        options = replace(options, case_insensitive=case_insensitive)

    lines = _coerce_nonnegative_int(data.get("lines"))
    if lines is not None:
        options = replace(options, lines=lines)

    bar_position = data.get("bar_position")
    if isinstance(bar_position, str) and bar_position.strip() in BAR_POSITIONS:
        options = replace(options, bar_position=bar_position.strip())

    prompt = data.get("prompt")
    if isinstance(prompt, str) and prompt:
        options = replace(options, prompt=prompt)

    return options
