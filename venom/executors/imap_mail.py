"""Decoding of fetched mails and the criteria used to find a searched mail."""

from __future__ import annotations

import base64
import binascii
import logging
import quopri
import re
from dataclasses import dataclass
from email.errors import HeaderParseError
from email.header import decode_header, make_header
from email.message import Message
from email.parser import BytesParser
from email.policy import compat32
from email.utils import collapse_rfc2231_value

NAME = "imap"
DEFAULT_PORT = ":993"
DEFAULT_MAILBOX = "INBOX"
_MULTIPART_TYPES = ("multipart/mixed", "multipart/alternative")
_FOLDED = re.compile(r"\r?\n[ \t]+")

log = logging.getLogger(__name__)


@dataclass
class Mail:
    """A mail reduced to the fields a step can search and assert on."""

    sender: str = ""
    to: str = ""
    subject: str = ""
    uid: int = 0
    body: str = ""


@dataclass
class MailSearch:
    """Regular expressions a mail must match; empty criteria are ignored."""

    search_from: str = ""
    search_to: str = ""
    search_subject: str = ""
    search_body: str = ""

    def __post_init__(self) -> None:
        if not (self.search_from or self.search_subject or self.search_body or self.search_to):
            raise ValueError(
                "you have to use one of searchfrom, searchto, searchsubject "
                "or subjectbody parameters"
            )

    def matches(self, mail: Mail) -> bool:
        """Tell whether every non-empty criterion is found in the matching field."""
        criteria = (
            (self.search_from, mail.sender),
            (self.search_to, mail.to),
            (self.search_subject, mail.subject),
            (self.search_body, mail.body),
        )
        return all(re.search(pattern, value) for pattern, value in criteria if pattern)


def _as_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _decode_header(message: Message, name: str) -> str:
    raw = _FOLDED.sub(" ", str(message.get(name, "")))
    try:
        return str(make_header(decode_header(raw)))
    except (LookupError, UnicodeDecodeError, HeaderParseError, binascii.Error) as exc:
        raise ValueError(f"Cannot decode {name} header: {exc}") from exc


def _decode_transfer(body: bytes, encoding: str) -> bytes:
    if encoding == "quoted-printable":
        return quopri.decodestring(body)
    if encoding == "base64":
        try:
            return base64.b64decode(body)
        except binascii.Error as exc:
            raise ValueError(f"unable to decode base64 body: {exc}") from exc
    return body


def _media_type(message: Message) -> tuple[str, str | None]:
    raw = str(message.get("Content-Type", "") or "")
    media = raw.split(";", 1)[0].strip().lower()
    if not media:
        raise ValueError("Error while reading Content-Type:mime: no media type")
    boundary = message.get_param("boundary", header="content-type")
    if boundary is None:
        return media, None
    return media, collapse_rfc2231_value(boundary)


def _first_part(data: bytes, boundary: str) -> str:
    wrapper = (
        f'Content-Type: multipart/mixed; boundary="{boundary}"\r\n\r\n'.encode("utf-8") + data
    )
    message = BytesParser(policy=compat32).parsebytes(wrapper)
    parts = message.get_payload()
    if not isinstance(parts, list) or not parts:
        log.debug("no part found in multipart body")
        return ""
    part = parts[0]
    encoding = str(part.get("Content-Transfer-Encoding", "")).strip().lower()
    if encoding == "quoted-printable":
        payload = part.get_payload(decode=True) or b""
    else:
        text = part.get_payload(decode=False)
        if not isinstance(text, str):
            return ""
        payload = text.encode("ascii", "surrogateescape")
    return payload.decode("utf-8", errors="replace")


def extract_mail(header: bytes | str, body: bytes | str, uid: int = 0) -> Mail:
    """Build a ``Mail`` from the raw RFC 822 header and text of a fetched message."""
    header_bytes = _as_bytes(header)
    body_bytes = _as_bytes(body)
    message = BytesParser(policy=compat32).parsebytes(header_bytes, headersonly=True)

    mail = Mail(
        sender=_decode_header(message, "From"),
        to=_decode_header(message, "To"),
        subject=_decode_header(message, "Subject"),
        uid=uid,
    )
    mail.subject = _decode_header(message, "Subject")

    encoding = str(message.get("Content-Transfer-Encoding", "")).strip()
    log.debug("Mail Content-Transfer-Encoding is %s", encoding)
    decoded = _decode_transfer(body_bytes, encoding)

    content_type, boundary = _media_type(message)
    if content_type in _MULTIPART_TYPES:
        if boundary is not None:
            mail.body = _first_part(decoded, boundary)
    else:
        body_bytes = decoded
    if not mail.body:
        mail.body = body_bytes.decode("utf-8", errors="replace")
    return mail


def imap_address(host: str, port: str) -> str:
    """Return the ``host:port`` to dial, defaulting to the IMAPS port."""
    if ":" not in host:
        if not port:
            port = DEFAULT_PORT
        elif not port.startswith(":"):
            port = ":" + port
    return host + port