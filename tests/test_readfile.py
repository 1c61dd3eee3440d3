import hashlib

import pytest

from venom.executors.readfile import ReadFileError, read_files, run


def test_read_single_file(tmp_path):
    data = b"hello world"
    (tmp_path / "a.txt").write_bytes(data)
    result = read_files("a.txt", str(tmp_path))
    assert result.content == "hello world"
    assert result.md5sum == {"a.txt": hashlib.md5(data).hexdigest()}
    assert result.size == {"a.txt": len(data)}
    assert result.content_json is None


def test_mode_and_mod_time_recorded(tmp_path):
    target = tmp_path / "a.txt"
    target.write_text("x")
    result = read_files(str(target), str(tmp_path))
    assert result.mod["a.txt"].startswith("-")
    assert result.mod_time["a.txt"] == int(target.stat().st_mtime)


def test_json_content_is_decoded(tmp_path):
    (tmp_path / "data.json").write_text('{"name": "venom", "items": [1, 2]}')
    result = read_files("data.json", str(tmp_path))
    assert result.content_json == {"name": "venom", "items": [1, 2]}


def test_glob_concatenates_in_sorted_order(tmp_path):
    (tmp_path / "b.txt").write_text("second")
    (tmp_path / "a.txt").write_text("first")
    result = read_files("*.txt", str(tmp_path))
    assert result.content == "firstsecond"
    assert sorted(result.md5sum) == ["a.txt", "b.txt"]


def test_recursive_glob(tmp_path):
    nested = tmp_path / "sub" / "deeper"
    nested.mkdir(parents=True)
    (nested / "c.txt").write_text("deep")
    result = read_files("**/*.txt", str(tmp_path))
    assert result.content == "deep"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ReadFileError, match="or file not found"):
        read_files("missing.txt", str(tmp_path))


def test_run_reports_error_in_result(tmp_path):
    result = run("missing.txt", str(tmp_path))
    assert "Invalid path" in result.err
    assert result.content == ""
    assert result.time_seconds >= 0


def test_run_success_has_no_error(tmp_path):
    (tmp_path / "a.txt").write_text("content")
    result = run("a.txt", str(tmp_path))
    assert result.err == ""
    assert result.content == "content"


def test_run_requires_path(tmp_path):
    with pytest.raises(ValueError, match="Invalid path"):
        run("", str(tmp_path))