import threading

import pytest

from venom.executors.syncbuffer import SyncBuffer


def test_write_then_read_round_trip():
    buffer = SyncBuffer()
    assert buffer.write(b"hello") == 5
    assert buffer.read() == b"hello"
    assert len(buffer) == 0


def test_partial_read_consumes_front():
    buffer = SyncBuffer()
    buffer.write(b"abcdef")
    assert buffer.read(2) == b"ab"
    assert buffer.getvalue() == b"cdef"
    assert len(buffer) == 4


def test_text_write_and_str():
    buffer = SyncBuffer()
    buffer.write("sudo_venom")
    assert str(buffer) == "sudo_venom"


def test_truncate_keeps_prefix():
    buffer = SyncBuffer(b"abcdef")
    buffer.truncate(3)
    assert buffer.getvalue() == b"abc"
    buffer.truncate(0)
    assert len(buffer) == 0


def test_truncate_out_of_range_raises():
    buffer = SyncBuffer(b"abc")
    with pytest.raises(ValueError, match="truncation out of range"):
        buffer.truncate(4)
    with pytest.raises(ValueError):
        buffer.truncate(-1)


def test_read_from_empty_buffer():
    assert SyncBuffer().read(10) == b""


def test_concurrent_writes_are_all_kept():
    buffer = SyncBuffer()
    chunk = b"x" * 100

    def writer():
        for _ in range(50):
            buffer.write(chunk)

    threads = [threading.Thread(target=writer) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert len(buffer) == 8 * 50 * len(chunk)
    assert set(buffer.getvalue()) == {ord("x")}