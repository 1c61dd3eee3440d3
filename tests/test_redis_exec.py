from unittest import mock

import pytest
import redis

from venom.executors.redis_exec import (
    RedisCommand,
    RedisExecError,
    file_to_lines,
    get_command_details,
    handle_redis_response,
    run,
)


def test_command_details_split_quoted_arguments():
    assert get_command_details('SET foo "bar baz"') == ("SET", ["foo", "bar baz"])


def test_command_details_without_arguments():
    assert get_command_details("FLUSHALL") == ("FLUSHALL", [])


def test_command_details_empty_command():
    with pytest.raises(ValueError):
        get_command_details("   ")


def test_command_details_unbalanced_quote():
    with pytest.raises(ValueError):
        get_command_details('SET foo "bar')


def test_response_bytes_and_strings():
    assert handle_redis_response(b"OK") == "OK"
    assert handle_redis_response("value") == "value"


def test_response_nested_arrays():
    assert handle_redis_response([b"a", [b"b", b"c"]]) == ["a", ["b", "c"]]


def test_response_other_kinds_become_empty():
    assert handle_redis_response(None) == ""
    assert handle_redis_response(42) == ""


def test_file_to_lines_round_trip(tmp_path):
    lines = ["SET foo bar", "GET foo", "", "KEYS *"]
    path = tmp_path / "cmds.txt"
    path.write_bytes(("\n".join(lines) + "\n").encode())
    assert file_to_lines(str(path)) == lines


def test_file_to_lines_crlf_and_no_trailing_newline(tmp_path):
    path = tmp_path / "cmds.txt"
    path.write_bytes(b"GET a\r\nGET b")
    assert file_to_lines(str(path)) == ["GET a", "GET b"]


def test_file_to_lines_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert file_to_lines(str(path)) == []


def test_run_requires_dial_url():
    with pytest.raises(ValueError, match="missing dialURL"):
        run("", ["GET foo"])


def test_run_executes_non_empty_commands():
    with mock.patch("redis.Redis.from_url") as from_url:
        client = from_url.return_value
        client.execute_command.side_effect = [b"OK", [b"foo"]]
        result = run("redis://localhost:6379/0", ["SET foo bar", "", "KEYS *"])
    assert result == [
        RedisCommand(name="SET", args=["foo", "bar"], response="OK"),
        RedisCommand(name="KEYS", args=["*"], response=["foo"]),
    ]
    assert client.execute_command.call_args_list == [
        mock.call("SET", "foo", "bar"),
        mock.call("KEYS", "*"),
    ]


def test_run_reads_commands_from_file(tmp_path):
    (tmp_path / "cmds.txt").write_text("GET foo\n", encoding="utf-8")
    with mock.patch("redis.Redis.from_url") as from_url:
        from_url.return_value.execute_command.return_value = b"bar"
        result = run("redis://localhost:6379/0", None, "cmds.txt", str(tmp_path))
    assert result == [RedisCommand(name="GET", args=["foo"], response="bar")]


def test_run_missing_file(tmp_path):
    with pytest.raises(RedisExecError, match="Failed to load file"):
        run("redis://localhost:6379/0", None, "absent.txt", str(tmp_path))


def test_run_wraps_redis_errors():
    with mock.patch("redis.Redis.from_url") as from_url:
        from_url.return_value.execute_command.side_effect = redis.ResponseError("ERR")
        with pytest.raises(RedisExecError, match="failed to execute command GET"):
            run("redis://localhost:6379/0", ["GET foo"])