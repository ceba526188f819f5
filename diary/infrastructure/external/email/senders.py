"""Email senders (implement IEmailSender).

All senders return once the provider has accepted the message; delivery
itself is asynchronous on the provider side.
"""

from __future__ import annotations

import asyncio
import base64
import hashlib
import hmac
import json
import logging
import smtplib
from email.header import Header
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate
from urllib.parse import urlsplit

import httpx

from diary.domain.exceptions import EmailDeliveryException
from diary.shared.telemetry.logging import get_logger
from diary.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


def parse_acs_connection_string(conn: str) -> tuple[str, str]:
    """Return (endpoint, access_key) from `endpoint=...;accesskey=...`.

    Raises:
        ValueError: If either part is missing.
    """
    parts: dict[str, str] = {}
    for segment in conn.split(";"):
        if "=" in segment:
            key, _, value = segment.partition("=")
            parts[key.strip().lower()] = value.strip()
    endpoint = parts.get("endpoint", "")
    access_key = parts.get("accesskey", "")
    if not endpoint or not access_key:
        raise ValueError("ACS connection string must contain endpoint and accesskey")
    return endpoint.rstrip("/"), access_key


class AcsEmailSender:
    """Azure Communication Services Email over REST with HMAC-SHA256 request signing."""

    def __init__(
        self,
        connection_string: str,
        sender_address: str,
        *,
        api_version: str = "2023-03-31",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._endpoint, access_key = parse_acs_connection_string(connection_string)
        self._key = base64.b64decode(access_key)
        self._sender = sender_address
        self._api_version = api_version
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    def _sign(self, path_and_query: str, host: str, body: bytes) -> dict[str, str]:
        date = formatdate(usegmt=True)
        content_hash = base64.b64encode(hashlib.sha256(body).digest()).decode()
        to_sign = f"POST\n{path_and_query}\n{date};{host};{content_hash}"
        signature = base64.b64encode(
            hmac.new(self._key, to_sign.encode("utf-8"), hashlib.sha256).digest()
        ).decode()
        return {
            "x-ms-date": date,
            "x-ms-content-sha256": content_hash,
            "Authorization": (
                "HMAC-SHA256 SignedHeaders=x-ms-date;host;x-ms-content-sha256"
                f"&Signature={signature}"
            ),
        }

    async def send(self, to: str, subject: str, html_body: str, plain_text_body: str) -> str:
        url = f"{self._endpoint}/emails:send?api-version={self._api_version}"
        split = urlsplit(url)
        body = json.dumps(
            {
                "senderAddress": self._sender,
                "content": {"subject": subject, "plainText": plain_text_body, "html": html_body},
                "recipients": {"to": [{"address": to}]},
            }
        ).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        headers.update(self._sign(f"{split.path}?{split.query}", split.netloc, body))
        try:
            resp = await self._http.post(url, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise EmailDeliveryException(to, str(e)) from e
        if resp.status_code != 202:
            raise EmailDeliveryException(to, f"ACS returned {resp.status_code}: {resp.text[:200]}")
        try:
            operation_id = resp.json().get("id")
        except ValueError:
            operation_id = None
        return operation_id or resp.headers.get("x-ms-request-id", "")


class SmtpEmailSender:
    """SMTP over implicit TLS; the blocking client runs in a worker thread."""

    def __init__(
        self,
        host: str,
        port: int,
        sender_address: str,
        *,
        username: str = "",
        password: str = "",
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender_address
        self._username = username
        self._password = password

    def _build_message(
        self, to: str, subject: str, html_body: str, plain_text_body: str, message_id: str
    ) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = Header(subject, "utf-8")
        message["From"] = self._sender
        message["To"] = to
        message["Message-ID"] = f"<{message_id}@{self._host}>"
        message.attach(MIMEText(plain_text_body, "plain", "utf-8"))
        message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def _send_sync(self, to: str, message: MIMEMultipart) -> None:
        with smtplib.SMTP_SSL(self._host, self._port) as mail:
            if self._username:
                mail.login(self._username, self._password)
            mail.sendmail(self._sender, [to], message.as_string())

    async def send(self, to: str, subject: str, html_body: str, plain_text_body: str) -> str:
        message_id = generate_cuid()
        message = self._build_message(to, subject, html_body, plain_text_body, message_id)
        try:
            await asyncio.to_thread(self._send_sync, to, message)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryException(to, str(e)) from e
        return message_id


class LogOnlyEmailSender:
    """IEmailSender that logs instead of sending email.

    Use when no email backend is configured (development, tests).
    """

    async def send(self, to: str, subject: str, html_body: str, plain_text_body: str) -> str:
        operation_id = generate_cuid()
        logger.info(
            "Email (log only): would send to %s (subject=%r, operation=%s)",
            to,
            (subject or "")[:80],
            operation_id,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Email body (first 500 chars): %s", (plain_text_body or "")[:500])
        return operation_id
