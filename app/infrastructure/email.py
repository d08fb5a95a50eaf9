"""Email transports used to deliver notification messages."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import From, Mail

from app.config import Settings

logger = logging.getLogger(__name__)

EMAIL_NOT_CONFIGURED_ERROR = "Serviço de e-mail não configurado"


@dataclass(frozen=True)
class TransportResult:
    """Outcome reported by a transport for one message."""

    message_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class EmailTransport(Protocol):
    """Anything able to hand a message over to an email provider."""

    configured: bool

    def send(self, to: str, subject: str, html_content: str) -> TransportResult:
        ...


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, details: str | None) -> str:
    if status_code and details:
        return f"SendGrid status {status_code}: {details}"
    if status_code:
        return f"SendGrid status {status_code}"
    return details or "Falha desconhecida ao enviar e-mail"


class UnconfiguredTransport:
    """Transport used when no provider credentials are available."""

    configured = False

    def send(self, to: str, subject: str, html_content: str) -> TransportResult:
        logger.info("SendGrid configuration incomplete; skipping email to %s", to)
        return TransportResult(error=EMAIL_NOT_CONFIGURED_ERROR)


class SendGridTransport:
    """Deliver messages through the SendGrid REST API."""

    configured = True

    def __init__(
        self,
        api_key: str,
        sender: str,
        *,
        sender_name: str | None = None,
        timeout: float | None = None,
        client: SendGridAPIClient | None = None,
    ) -> None:
        self._sender = sender
        self._sender_name = sender_name
        if client is None:
            client = SendGridAPIClient(api_key)
            # python_http_client passes this on to every urlopen call
            client.client.timeout = timeout
        self._client = client

    def send(self, to: str, subject: str, html_content: str) -> TransportResult:
        message = Mail(
            from_email=From(self._sender, self._sender_name),
            to_emails=to,
            subject=subject,
            html_content=html_content,
        )

        try:
            response = self._client.send(message)
        except Exception as exc:  # network and HTTP errors both surface here
            status_code = getattr(exc, "status_code", None)
            details = _extract_sendgrid_error_details(getattr(exc, "body", None))
            description = _describe_failure(status_code, details or str(exc) or None)
            logger.error("SendGrid API request failed: %s", description)
            return TransportResult(error=description)

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            description = _describe_failure(status_code, details)
            logger.error("SendGrid API responded with an error: %s", description)
            return TransportResult(error=description)

        headers = getattr(response, "headers", None) or {}
        message_id = headers.get("X-Message-Id") if hasattr(headers, "get") else None
        return TransportResult(message_id=message_id)


def build_email_transport(settings: Settings) -> EmailTransport:
    """Return the transport matching the configured credentials."""

    if settings.sendgrid_api_key and settings.sendgrid_sender:
        return SendGridTransport(
            settings.sendgrid_api_key,
            settings.sendgrid_sender,
            sender_name=settings.email_from_name,
            timeout=settings.email_timeout_seconds,
        )
    return UnconfiguredTransport()


__all__ = [
    "EMAIL_NOT_CONFIGURED_ERROR",
    "EmailTransport",
    "SendGridTransport",
    "TransportResult",
    "UnconfiguredTransport",
    "build_email_transport",
]
