"""A minimal executor that greets its argument."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

NAME = "hello"

log = logging.getLogger(__name__)


@dataclass
class HelloResult:
    """Result of a hello step."""

    body: str = ""


def _argument(step: Mapping[str, Any]) -> str:
    if not isinstance(step, Mapping):
        raise TypeError(f"step must be a mapping, got {type(step).__name__}")
    arg = ""
    for key, value in step.items():
        if isinstance(key, str) and key.lower() == "arg":
            arg = value
    if arg is None:
        return ""
    if not isinstance(arg, str):
        raise TypeError(f"'arg' expected a string, got {type(arg).__name__}")
    return arg


def run(step: Mapping[str, Any]) -> HelloResult:
    """Return a greeting built from the step's ``arg`` field."""
    arg = _argument(step)
    log.debug("running plugin Hello with arg %s", arg)
    return HelloResult(body=f"Hello {arg}")