"""Variable interpolation of ``{{.name}}`` placeholders in step templates."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_PLACEHOLDER = re.compile(r"\{\{\s*\.([A-Za-z0-9_][A-Za-z0-9_.\-]*)\s*\}\}")


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def _check_actions_closed(text: str) -> None:
    position = 0
    while (start := text.find("{{", position)) != -1:
        end = text.find("}}", start + 2)
        if end == -1:
            raise ValueError(f"unclosed action at offset {start}")
        position = end + 2


def interpolate(text: str, variables: Mapping[str, Any]) -> str:
    """Replace ``{{.name}}`` with the matching variable; unknown names stay as written."""
    _check_actions_closed(text)

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in variables:
            return _as_text(variables[name])
        return match.group(0)

    return _PLACEHOLDER.sub(substitute, text)


def escape_quotes(variables: Mapping[str, Any]) -> dict[str, str]:
    """Return the variables as strings with double quotes backslash-escaped."""
    return {key: _as_text(value).replace('"', '\\"') for key, value in variables.items()}