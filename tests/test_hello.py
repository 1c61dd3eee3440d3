import pytest

from venom.executors.hello import HelloResult, run


def test_run_greets_argument():
    assert run({"type": "hello", "arg": "venom"}) == HelloResult(body="Hello venom")


def test_run_argument_key_is_case_insensitive():
    assert run({"Arg": "world"}).body == "Hello world"


def test_run_without_argument():
    assert run({"type": "hello"}).body == "Hello "


def test_run_body_ends_with_argument():
    result = run({"arg": "abc def"})
    assert result.body.startswith("Hello ")
    assert result.body.endswith("abc def")


def test_run_rejects_non_string_argument():
    with pytest.raises(TypeError):
        run({"arg": [1, 2]})


def test_run_rejects_non_mapping_step():
    with pytest.raises(TypeError):
        run(["arg"])