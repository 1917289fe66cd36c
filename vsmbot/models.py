"""Shared Pydantic data models for the WhatsApp metrics bot."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class AuditEventType(str, Enum):
    WEBHOOK_VERIFICATION = "webhook_verification"
    MESSAGE_REPLY = "message_reply"
    METRIC_FETCH = "metric_fetch"
    SEND_FAILURE = "send_failure"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


# --- Audit Models ---


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class AuditEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(default_factory=_now_iso)
    event_type: AuditEventType
    sender: str | None = None
    action: str
    result: str  # "success" | "failure" | "unavailable"
    risk_level: RiskLevel
    details: dict[str, object] | None = None
