"""A byte buffer safe to share between threads."""

from __future__ import annotations

import threading


class SyncBuffer:
    """FIFO byte buffer whose operations are serialised by a lock."""

    def __init__(self, initial: bytes = b"") -> None:
        self._data = bytearray(initial)
        self._lock = threading.Lock()

    def read(self, size: int = -1) -> bytes:
        """Remove and return up to ``size`` bytes; all of them when ``size`` is negative."""
        with self._lock:
            if size < 0:
                size = len(self._data)
            chunk = bytes(self._data[:size])
            del self._data[:size]
            return chunk

    def write(self, data: bytes | str) -> int:
        """Append ``data`` and return the number of bytes written."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        with self._lock:
            self._data.extend(data)
        return len(data)

    def getvalue(self) -> bytes:
        """Return the unread bytes without consuming them."""
        with self._lock:
            return bytes(self._data)

    def truncate(self, size: int) -> None:
        """Keep only the first ``size`` unread bytes."""
        with self._lock:
            if size < 0 or size > len(self._data):
                raise ValueError("truncation out of range")
            del self._data[size:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __str__(self) -> str:
        return self.getvalue().decode("utf-8", errors="replace")