"""Configuration of a Kafka step: decoding, validation and message loading."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from venom.executors.kafka_message import Message

NAME = "kafka"
DEFAULT_EXECUTOR_TIMEOUT_SECONDS = 5
DEFAULT_PRODUCER_MAX_RETRIES = 10
DEFAULT_DIAL_TIMEOUT_SECONDS = 10
CLIENT_TYPES = ("producer", "consumer")


class KafkaConfigError(ValueError):
    """Raised when a Kafka step is configured in a way that cannot run."""


_STRING_FIELDS = {
    "schemaregistryaddr": "schema_registry_addr",
    "user": "user",
    "password": "password",
    "clienttype": "client_type",
    "groupid": "group_id",
    "initialoffset": "initial_offset",
    "keyfilter": "key_filter",
    "consumerencoding": "consumer_encoding",
    "messagesfile": "messages_file",
    "kafkaversion": "kafka_version",
}
_BOOL_FIELDS = {
    "withavro": "with_avro",
    "withtls": "with_tls",
    "withsasl": "with_sasl",
    "withsaslhandshaked": "with_sasl_handshaked",
    "markoffset": "mark_offset",
}
_INT_FIELDS = {
    "timeout": "timeout",
    "waitfor": "wait_for",
    "messagelimit": "message_limit",
}
_STRING_LIST_FIELDS = {
    "addrs": "addrs",
    "topics": "topics",
}


@dataclass
class KafkaExecutorConfig:
    """Everything a Kafka step declares, for a producer or for a consumer."""

    addrs: list[str] = field(default_factory=list)
    schema_registry_addr: str = ""
    with_avro: bool = False
    with_tls: bool = False
    with_sasl: bool = False
    with_sasl_handshaked: bool = False
    user: str = ""
    password: str = ""
    client_type: str = ""
    group_id: str = ""
    topics: list[str] = field(default_factory=list)
    timeout: int = 0
    wait_for: int = 0
    message_limit: int = 0
    initial_offset: str = ""
    mark_offset: bool = False
    key_filter: str = ""
    consumer_encoding: str = ""
    messages: list[Message] = field(default_factory=list)
    messages_file: str = ""
    kafka_version: str = ""

    def validate(self) -> None:
        """Apply the default timeout and raise ``KafkaConfigError`` on unusable settings."""
        if self.timeout == 0:
            self.timeout = DEFAULT_EXECUTOR_TIMEOUT_SECONDS
        if self.wait_for > 0 and self.timeout < self.wait_for:
            raise KafkaConfigError(
                f"can't wait for messages {self.wait_for}s longer than the timeout {self.timeout}s"
            )
        if self.client_type not in CLIENT_TYPES:
            raise KafkaConfigError("type must be a consumer or a producer")
        if self.client_type == "producer" and not self.messages and not self.messages_file:
            raise KafkaConfigError(
                "Either one of `messages` or `messagesFile` field must be set"
            )
        if self.client_type == "consumer" and not self.topics:
            raise KafkaConfigError("You must provide topics")


def _normalise(key: Any) -> str:
    return str(key).replace("_", "").lower()


def _string(key: Any, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(f"{key!r} expected a string, got {type(value).__name__}")
    return value


def _boolean(key: Any, value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"{key!r} expected a bool, got {type(value).__name__}")
    return value


def _integer(key: Any, value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key!r} expected an int, got {type(value).__name__}")
    return value


def _string_list(key: Any, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key!r} expected a list, got {type(value).__name__}")
    return [_string(key, item) for item in value]


def _messages(key: Any, value: Any) -> list[Message]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key!r} expected a list, got {type(value).__name__}")
    return [Message.from_mapping(item) for item in value]


def parse_kafka_step(step: Mapping[str, Any]) -> KafkaExecutorConfig:
    """Decode a step mapping into a configuration; keys match case and underscores loosely."""
    if not isinstance(step, Mapping):
        raise TypeError(f"step must be a mapping, got {type(step).__name__}")
    values: dict[str, Any] = {}
    for key, value in step.items():
        name = _normalise(key)
        if name in _STRING_FIELDS:
            values[_STRING_FIELDS[name]] = _string(key, value)
        elif name in _BOOL_FIELDS:
            values[_BOOL_FIELDS[name]] = _boolean(key, value)
        elif name in _INT_FIELDS:
            values[_INT_FIELDS[name]] = _integer(key, value)
        elif name in _STRING_LIST_FIELDS:
            values[_STRING_LIST_FIELDS[name]] = _string_list(key, value)
        elif name == "messages":
            values["messages"] = _messages(key, value)
    return KafkaExecutorConfig(**values)


def load_messages_file(messages_file: str, workdir: str) -> list[Message]:
    """Read the JSON list of messages stored in ``messages_file`` under ``workdir``."""
    path = os.path.join(workdir, messages_file)
    with open(path, encoding="utf-8") as handle:
        document = json.load(handle)
    if not isinstance(document, list):
        raise ValueError(f"{path}: expected a JSON array of messages")
    return [Message.from_mapping(item) for item in document]


def get_raw_message_value(message: Message, workdir: str) -> bytes:
    """Return the message value, read from its value file when no inline value is set."""
    if message.value:
        return message.value.encode("utf-8")
    path = os.path.join(workdir, message.value_file)
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        raise OSError(f"can't read from {path}: {exc}") from exc