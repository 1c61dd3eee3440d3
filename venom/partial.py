"""Extract single top-level sections from YAML test files before full parsing."""

from __future__ import annotations

from typing import Any

import yaml

_ASCII_SPACE = " \t\n\v\f\r"


def _as_text(content: str | bytes) -> str:
    if isinstance(content, (bytes, bytearray)):
        return bytes(content).decode("utf-8", errors="replace")
    return content


def _split_lines(text: str) -> list[str]:
    """Split like a line scanner: no trailing empty line, CR stripped."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_partial_yml(content: str | bytes, attribute: str) -> str:
    """Return the lines of the top-level block ``attribute:`` from a YAML document."""
    prefix = attribute + ":"
    recorded: list[str] = []
    record = False
    for line in _split_lines(_as_text(content)):
        if line.startswith(prefix):
            record = True
        elif line and line[0] not in _ASCII_SPACE and not line.startswith("-"):
            record = False
        if record:
            recorded.append(line)
    return "\n".join(recorded)


def _load(text: str) -> dict[str, Any]:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"error while unmarshal: {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(f"error while unmarshal: expected a mapping, got {type(document).__name__}")
    return document


def get_var_from_partial_yml(content: str | bytes) -> dict[str, Any]:
    """Return the ``vars`` mapping declared at the top of a test suite file."""
    document = _load(read_partial_yml(content, "vars"))
    variables = document.get("vars")
    if variables is None:
        return {}
    if not isinstance(variables, dict):
        raise ValueError("error while unmarshal: 'vars' must be a mapping")
    return dict(variables)


def get_user_executor_input_yml(content: str | bytes) -> dict[str, Any]:
    """Return the ``input`` section of a user executor file as a mapping."""
    return dict(_load(read_partial_yml(content, "input")))