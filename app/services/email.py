"""Transactional email delivery through the Resend HTTP API."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import get_settings

logger = logging.getLogger("session_auth")

DEV_SENDER = "Session Auth <onboarding@resend.dev>"
DEV_RECIPIENT = "delivered@resend.dev"


@dataclass
class SendResult:
    """Outcome of a send attempt. Exactly one of ``data`` / ``error`` is set."""

    data: dict[str, Any] | None = None
    error: str | None = None


class EmailService:
    """Sends email and reports failures in-band instead of raising."""

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        settings = get_settings()
        self.api_key = settings.RESEND_API_KEY
        self.api_url = settings.RESEND_API_URL
        self.sender = settings.EMAIL_SENDER
        self.development = settings.is_development
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return bool(self.api_key)

    def _from_address(self) -> str:
        return DEV_SENDER if self.development or not self.sender else self.sender

    def _to_addresses(self, to: str | list[str]) -> list[str]:
        # Resend's sandbox only delivers to its own test inbox.
        if self.development:
            return [DEV_RECIPIENT]
        return [to] if isinstance(to, str) else list(to)

    def send(self, to: str | list[str], subject: str, text: str, html: str) -> SendResult:
        """Send one message. Never raises."""
        if not self.is_configured:
            return SendResult(error="RESEND_API_KEY is not configured")

        payload = {
            "from": self._from_address(),
            "to": self._to_addresses(to),
            "subject": subject,
            "text": text,
            "html": html,
        }
        try:
            with httpx.Client(transport=self.transport, timeout=15.0) as client:
                response = client.post(
                    self.api_url,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=payload,
                )
        except httpx.HTTPError as exc:
            return SendResult(error=f"{type(exc).__name__}: {exc}")

        if not response.is_success:
            return SendResult(error=f"{response.status_code}: {response.text}")

        try:
            data = response.json()
        except ValueError:
            data = {}
        return SendResult(data=data)


_email_service: EmailService | None = None


def get_email_service() -> EmailService:
    """Get singleton email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service
