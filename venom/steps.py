"""Variable assignments and ``range`` iteration for test steps."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import yaml

from venom.template import escape_quotes, interpolate

log = logging.getLogger(__name__)


class AssignmentError(ValueError):
    """Raised when the ``vars`` assignments of a step cannot be processed."""


class RangeError(ValueError):
    """Raised when the ``range`` attribute of a step cannot be used."""


@dataclass(frozen=True)
class Assignment:
    """Copy of a variable, optionally narrowed by a regular expression."""

    source: str
    regex: str = ""

    @classmethod
    def from_mapping(cls, data: Any) -> Assignment:
        if not isinstance(data, Mapping):
            raise AssignmentError(f"assignment must be a mapping, got {data!r}")
        source = data.get("from") or ""
        regex = data.get("regex") or ""
        if not isinstance(source, str) or not isinstance(regex, str):
            raise AssignmentError(f"assignment fields must be strings: {dict(data)!r}")
        return cls(source=source, regex=regex)

    def to_mapping(self) -> dict[str, str]:
        mapping = {"from": self.source}
        if self.regex:
            mapping["regex"] = self.regex
        return mapping


@dataclass
class RangeData:
    """One iteration of a ranged step."""

    key: str = ""
    value: Any = None


@dataclass
class Range:
    """Iterations of a step; ``enabled`` is false when the step has no ``range``."""

    enabled: bool = False
    items: list[RangeData] = field(default_factory=list)


def _as_text(raw: str | bytes) -> str:
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8", errors="replace")
    return raw


def _load_step(raw_step: str | bytes) -> dict[str, Any]:
    text = _as_text(raw_step)
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        log.error("unable to parse assignments (%s): %s", text, exc)
        raise AssignmentError(f"unable to parse assignments: {exc}") from exc
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise AssignmentError("unable to parse assignments: step is not a mapping")
    return document


def process_variable_assignments(
    tc_name: str, tc_vars: Mapping[str, Any], raw_step: str | bytes
) -> dict[str, Any] | None:
    """Compute the variables a step assigns; ``None`` when it declares no assignment."""
    raw_assignments = _load_step(raw_step).get("vars")
    if not raw_assignments:
        return None
    if not isinstance(raw_assignments, Mapping):
        raise AssignmentError("unable to parse assignments: 'vars' must be a mapping")

    assignments = {
        str(name): Assignment.from_mapping(spec) for name, spec in raw_assignments.items()
    }
    result: dict[str, Any] = {}
    for name, assignment in assignments.items():
        log.debug("Processing %s assignment", name)
        if assignment.source in tc_vars:
            value = tc_vars[assignment.source]
        elif f"{tc_name}.{assignment.source}" in tc_vars:
            value = tc_vars[f"{tc_name}.{assignment.source}"]
        else:
            raise AssignmentError(
                f"{assignment.source} reference not found in " + "\n".join(tc_vars)
            )

        if not assignment.regex:
            log.info("Assign %r value %r", name, value)
            result[name] = value
            continue

        try:
            pattern = re.compile(assignment.regex)
        except re.error as exc:
            log.warning("unable to compile regexp %r", assignment.regex)
            raise AssignmentError(
                f"unable to compile regexp {assignment.regex!r}: {exc}"
            ) from exc
        if not isinstance(value, str):
            log.warning("%r is not a string value", name)
            result[name] = ""
            continue
        match = pattern.search(value)
        if match is None:
            log.warning("%s: %r doesn't match anything in %r", name, assignment.regex, value)
            result[name] = ""
            continue
        groups = match.groups()
        result[name] = (groups[-1] or "") if groups else match.group(0)
        log.info("Assign %r from regexp %r, value %r", name, assignment.regex, result[name])
    return result


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _strict_json(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _type_name(value: Any) -> str:
    names = {str: "string", bool: "bool", type(None): "<nil>"}
    return names.get(type(value), type(value).__name__)


def _resolve_string_range(text: str, content: str, step_vars: Mapping[str, Any]) -> Any:
    if not content:
        raise RangeError("range expression has been specified without any data")
    try:
        return _strict_json(content)
    except ValueError:
        pass

    log.debug("attempting to template range expression and parse it again")
    try:
        templated = interpolate(text, escape_quotes(step_vars))
    except ValueError as exc:
        log.warning("failed to parse range expression when templating variables: %s", exc)
        return content
    try:
        step = _strict_json(templated)
    except ValueError as exc:
        log.warning("failed to parse range expression when parsing data into raw string: %s", exc)
        return content
    if not isinstance(step, dict):
        log.warning("failed to parse range expression: templated step is not an object")
        return content

    resolved = step.get("range", content)
    if isinstance(resolved, str):
        try:
            return _strict_json(resolved)
        except ValueError as exc:
            raise RangeError(
                "unable to parse range expression: unable to transform string data "
                "into a supported range expression type"
            ) from exc
    return resolved


def _range_items(content: Any) -> Iterator[RangeData]:
    if isinstance(content, list):
        log.debug('"range" data is array-like')
        for index, value in enumerate(content):
            yield RangeData(str(index), value)
    elif isinstance(content, (int, float)) and not isinstance(content, bool):
        log.debug('"range" data is number-like')
        for index in range(int(content)):
            yield RangeData(str(index), index)
    elif isinstance(content, dict):
        log.debug('"range" data is map-like')
        for key, value in content.items():
            yield RangeData(str(key), value)
    else:
        raise RangeError(f'"range" was provided an unsupported type {_type_name(content)}')


def parse_ranged(raw_step: str | bytes, step_vars: Mapping[str, Any]) -> Range:
    """Read the ``range`` attribute of a JSON step into the iterations to run."""
    text = _as_text(raw_step)
    try:
        step = _strict_json(text)
    except ValueError as exc:
        raise RangeError(f"unable to parse range expression: {exc}") from exc
    if step is None:
        step = {}
    if not isinstance(step, dict):
        raise RangeError("unable to parse range expression: step is not an object")

    content = step.get("range")
    if content is None:
        return Range(enabled=False, items=[RangeData()])
    if isinstance(content, str):
        log.debug("attempting to parse range expression")
        content = _resolve_string_range(text, content, step_vars)
    return Range(enabled=True, items=list(_range_items(content)))