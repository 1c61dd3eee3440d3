"""Send a mail through an SMTP server."""

from __future__ import annotations

import logging
import smtplib
import ssl

NAME = "smtp"

log = logging.getLogger(__name__)


class SmtpExecError(RuntimeError):
    """Raised when a mail cannot be delivered to the server."""


def build_message(sender: str, to: str, subject: str, body: str) -> str:
    """Return the raw message: From, To and Subject headers, a blank line, then the body."""
    headers = {"From": sender, "To": to, "Subject": subject}
    lines = "".join(f"{name}: {value}\r\n" for name, value in headers.items())
    return lines + "\r\n" + body


def _open(host: str, port: int, with_tls: bool) -> smtplib.SMTP:
    if with_tls:
        context = ssl.create_default_context()
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return smtplib.SMTP_SSL(host, port, context=context)
    return smtplib.SMTP(host, port)


def send_email(
    host: str,
    port: str | int,
    sender: str,
    to: str,
    subject: str = "",
    body: str = "",
    user: str = "",
    password: str = "",
    with_tls: bool = False,
) -> None:
    """Deliver one mail to every comma-separated address of ``to``."""
    if not to:
        raise ValueError("Invalid To")
    if not sender:
        raise ValueError("Invalid From")

    message = build_message(sender, to, subject, body)
    try:
        port_number = int(port)
    except (TypeError, ValueError) as exc:
        raise SmtpExecError(f"invalid port {port!r}") from exc

    log.info("connecting to %s:%s", host, port)
    try:
        client = _open(host, port_number, with_tls)
    except (OSError, smtplib.SMTPException) as exc:
        raise SmtpExecError(f"tls dial error: {exc}") from exc

    try:
        if user and password:
            client.login(user, password)
        code, reply = client.mail(sender)
        if code != 250:
            raise SmtpExecError(f"{code} {reply!r}")
        for address in to.split(","):
            code, reply = client.rcpt(address)
            if code not in (250, 251):
                raise SmtpExecError(f"{address}: {code} {reply!r}")
        client.data(message)
        log.info("mail sent to %s", to)
        client.quit()
    except smtplib.SMTPException as exc:
        raise SmtpExecError(str(exc)) from exc
    finally:
        client.close()