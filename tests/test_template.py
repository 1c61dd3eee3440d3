import json

import pytest

from venom.template import escape_quotes, interpolate


def test_known_variable_is_replaced():
    assert interpolate("name={{.name}}", {"name": "suite"}) == "name=" + "suite"


def test_unknown_variable_is_kept():
    text = "a {{.missing}} b"
    assert interpolate(text, {"other": "x"}) == text


def test_spaces_inside_action():
    assert interpolate("{{ .name }}", {"name": "value"}) == "value"


def test_dotted_variable_names():
    variables = {"venom.testsuite": "suite", "venom": "root"}
    assert interpolate("{{.venom.testsuite}}", variables) == "suite"


def test_replacement_is_not_rescanned():
    assert interpolate("{{.a}}", {"a": "{{.b}}", "b": "z"}) == "{{.b}}"


def test_text_without_actions_unchanged():
    text = "plain text: no actions"
    assert interpolate(text, {"plain": "x"}) == text


def test_boolean_rendering():
    assert interpolate("{{.flag}}", {"flag": True}) == "true"


def test_unclosed_action_raises():
    with pytest.raises(ValueError):
        interpolate("broken {{.name", {"name": "x"})


def test_escape_quotes_round_trip():
    original = 'say "hi" twice "now"'
    escaped = escape_quotes({"k": original})["k"]
    assert escaped.count('\\"') == original.count('"')
    assert escaped.replace('\\"', '"') == original


def test_escape_quotes_does_not_mutate_input():
    variables = {"k": 'a"b'}
    escape_quotes(variables)
    assert variables == {"k": 'a"b'}


def test_escape_quotes_converts_values_to_strings():
    assert escape_quotes({"n": 3}) == {"n": "3"}


def test_escaped_values_keep_json_valid():
    value = 'a "quoted" value'
    content = interpolate('{"v": "{{.v}}"}', escape_quotes({"v": value}))
    assert json.loads(content)["v"] == value