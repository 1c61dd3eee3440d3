"""Read files matched by a path or glob and report their content and metadata."""

from __future__ import annotations

import glob
import hashlib
import json
import os
import stat
import time
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


class ReadFileError(Exception):
    """Raised when the requested files cannot be found or read."""


@dataclass
class ReadFileResult:
    """Content of the files read, with per-file checksums, sizes and modes."""

    content: str = ""
    content_json: Any = None
    err: str = ""
    time_seconds: float = 0.0
    md5sum: dict[str, str] = field(default_factory=dict)
    size: dict[str, int] = field(default_factory=dict)
    mod_time: dict[str, int] = field(default_factory=dict)
    mod: dict[str, str] = field(default_factory=dict)


def _decode_json(content: str) -> Any:
    decoder = json.JSONDecoder(parse_float=Decimal)
    try:
        value, _ = decoder.raw_decode(content.lstrip(" \t\n\r"))
    except ValueError:
        return None
    return value


def read_files(path: str, workdir: str) -> ReadFileResult:
    """Read every file matching ``path`` (relative to ``workdir`` unless absolute)."""
    abs_path = path if os.path.isabs(path) else os.path.join(workdir, path)
    if os.path.isdir(abs_path):
        abs_path = os.path.dirname(abs_path)

    files = sorted(glob.glob(abs_path, recursive=True))
    if not files:
        raise ReadFileError(f"Invalid path '{abs_path}' or file not found")

    result = ReadFileResult()
    chunks: list[bytes] = []
    for name in files:
        try:
            handle = open(name, "rb")
        except OSError as exc:
            raise ReadFileError(f"Error while opening file: {exc}") from exc
        with handle:
            try:
                relative_name = os.path.relpath(name, workdir)
            except ValueError as exc:
                raise ReadFileError(
                    f"Error cannot evaluate relative path to file at {name}: {exc}"
                ) from exc
            try:
                data = handle.read()
            except OSError as exc:
                raise ReadFileError(f"Error while reading file: {exc}") from exc
            try:
                info = os.fstat(handle.fileno())
            except OSError as exc:
                raise ReadFileError(f"Error while compute file size: {exc}") from exc

        chunks.append(data)
        result.md5sum[relative_name] = hashlib.md5(data).hexdigest()
        result.size[relative_name] = info.st_size
        result.mod_time[relative_name] = int(info.st_mtime)
        result.mod[relative_name] = stat.filemode(info.st_mode)

    result.content = b"".join(chunks).decode("utf-8", errors="replace")
    result.content_json = _decode_json(result.content)
    return result


def run(path: str, workdir: str) -> ReadFileResult:
    """Run the readfile step; read errors are reported in ``err``, not raised."""
    if not path:
        raise ValueError("Invalid path")
    start = time.monotonic()
    try:
        result = read_files(path, workdir)
    except ReadFileError as exc:
        result = ReadFileResult(err=str(exc))
    result.time_seconds = time.monotonic() - start
    return result