"""Run Redis commands written as shell-like command lines."""

from __future__ import annotations

import logging
import os
import shlex
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import redis

NAME = "redis"

log = logging.getLogger(__name__)


class RedisExecError(RuntimeError):
    """Raised when a Redis command cannot be executed."""


@dataclass
class RedisCommand:
    """A command that was run and the reply it received."""

    name: str
    args: list[str] = field(default_factory=list)
    response: Any = None


def get_command_details(command: str) -> tuple[str, list[str]]:
    """Split a command line into the command name and its arguments."""
    words = shlex.split(command)
    if not words:
        raise ValueError(f"empty redis command: {command!r}")
    return words[0], words[1:]


def handle_redis_response(response: Any) -> Any:
    """Turn a raw reply into strings; nested arrays are kept, other kinds become ``""``."""
    if isinstance(response, (list, tuple)):
        return [handle_redis_response(item) for item in response]
    if isinstance(response, (bytes, bytearray)):
        return bytes(response).decode("utf-8", errors="replace")
    if isinstance(response, str):
        return response
    return ""


def file_to_lines(file_path: str) -> list[str]:
    """Return the lines of a file without their line endings."""
    with open(file_path, "rb") as handle:
        data = handle.read()
    if not data:
        return []
    lines = data.split(b"\n")
    if data.endswith(b"\n"):
        lines.pop()
    return [
        (line[:-1] if line.endswith(b"\r") else line).decode("utf-8", errors="replace")
        for line in lines
    ]


def run(
    dial_url: str,
    commands: Iterable[str] | None = None,
    file_path: str = "",
    workdir: str = "",
) -> list[RedisCommand]:
    """Execute the commands (or those of ``file_path``) against the server at ``dial_url``."""
    if not dial_url:
        raise ValueError("missing dialURL")

    if file_path:
        try:
            lines = file_to_lines(os.path.join(workdir, file_path))
        except OSError as exc:
            raise RedisExecError(f"Failed to load file: {exc}") from exc
    else:
        lines = list(commands or [])

    client = redis.Redis.from_url(dial_url)
    client.response_callbacks.clear()
    executed: list[RedisCommand] = []
    try:
        for line in lines:
            if not line:
                continue
            name, args = get_command_details(line)
            try:
                reply = client.execute_command(name, *args)
            except redis.RedisError as exc:
                raise RedisExecError(
                    f"redis executor failed to execute command {name} {args} : {exc}"
                ) from exc
            log.debug("redis %s %s -> %r", name, args, reply)
            executed.append(
                RedisCommand(name=name, args=args, response=handle_redis_response(reply))
            )
    finally:
        client.close()
    return executed