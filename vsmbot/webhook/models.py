"""Data models for inbound webhook handling."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IncomingMessage:
    """First message of a WhatsApp webhook callback."""

    sender: str
    text: str | None = None
    button_id: str | None = None
    message_id: str | None = None

    @property
    def summary(self) -> str | None:
        return self.text if self.text is not None else self.button_id


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of the Meta webhook handshake."""

    status_code: int
    content: str = ""

    @property
    def ok(self) -> bool:
        return self.status_code == 200
