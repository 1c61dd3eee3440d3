"""Kafka message framing for schema-registry encoded values and JSON decoding of messages."""

from __future__ import annotations

import json
import struct
from dataclasses import dataclass
from typing import Any

MAGIC_BYTE = 0x00
SCHEMA_ID_SIZE = 4

_FIELDS = {"topic": "topic", "key": "key", "value": "value"}


@dataclass
class Message:
    """A message produced to or consumed from Kafka."""

    topic: str = ""
    key: str = ""
    value: str = ""
    value_file: str = ""
    avro_schema_file: str = ""

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> Message:
        """Build a message from its step description (``valueFile``, ``avroSchemaFile``...)."""
        if not isinstance(data, dict):
            raise TypeError(f"message must be a mapping, got {type(data).__name__}")
        names = {
            "topic": "topic",
            "key": "key",
            "value": "value",
            "valuefile": "value_file",
            "avroschemafile": "avro_schema_file",
        }
        fields: dict[str, str] = {}
        for raw_key, raw_value in data.items():
            name = names.get(str(raw_key).replace("_", "").lower())
            if name is None:
                continue
            if raw_value is None:
                raw_value = ""
            if not isinstance(raw_value, str):
                raise TypeError(f"message field {raw_key!r} must be a string")
            fields[name] = raw_value
        return cls(**fields)


@dataclass
class MessageJSON:
    """A message whose key and value were decoded from JSON where possible."""

    topic: str = ""
    key: Any = None
    value: Any = None


def create_message(message: bytes, schema_id: int) -> bytes:
    """Frame an encoded message with the magic byte and a big-endian schema id."""
    return bytes([MAGIC_BYTE]) + struct.pack(">I", schema_id & 0xFFFFFFFF) + bytes(message)


def get_message_avro_id(message_value: bytes) -> tuple[bytes, int]:
    """Split a framed message into its payload and schema id."""
    value = bytes(message_value)
    if value[:1] == bytes([MAGIC_BYTE]):
        value = value[1:]
    if len(value) < SCHEMA_ID_SIZE:
        raise ValueError("message too short to hold a schema id")
    (schema_id,) = struct.unpack(">I", value[:SCHEMA_ID_SIZE])
    return value[SCHEMA_ID_SIZE:], schema_id


class _NotDecodable(ValueError):
    pass


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise _NotDecodable(str(exc)) from exc


def _message_json_from_object(item: Any) -> MessageJSON:
    if not isinstance(item, dict):
        raise _NotDecodable("array element is not an object")
    decoded = MessageJSON()
    for raw_key, raw_value in item.items():
        name = _FIELDS.get(raw_key.lower())
        if name is None:
            continue
        if name == "topic":
            if raw_value is None:
                continue
            if not isinstance(raw_value, str):
                raise _NotDecodable("topic is not a string")
        setattr(decoded, name, raw_value)
    return decoded


def _decode(text: str) -> Any:
    try:
        document = _loads(text)
    except _NotDecodable:
        return text
    if document is None:
        return None
    if isinstance(document, list):
        try:
            return [_message_json_from_object(item) for item in document]
        except _NotDecodable:
            return text
    if isinstance(document, dict):
        return document
    return text


def convert_message_to_json(message: Message) -> MessageJSON:
    """Decode key and value as a list of messages, an object, or keep them as strings."""
    return MessageJSON(
        topic=message.topic,
        key=_decode(message.key),
        value=_decode(message.value),
    )