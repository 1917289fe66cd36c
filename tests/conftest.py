"""Shared test fixtures for the WhatsApp metrics bot."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from vsmbot.audit.logger import AuditLogger
from vsmbot.config import Settings
from vsmbot.monitoring.client import MonitoringClient
from vsmbot.webhook.whatsapp import WhatsAppClient

SETTINGS_ENV = {
    "VERIFY_TOKEN": "test_verify",
    "WHATSAPP_TOKEN": "test_access_token",
    "PHONE_NUMBER_ID": "123456",
    "VSM_LOGIN_URL": "https://vsm.local/api/login",
    "VSM_CPU_URL": "https://vsm.local/api/cpu",
    "VSM_USERNAME": "admin",
    "VSM_PASSWORD": "secret",
}


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def mock_responder() -> AsyncMock:
    return AsyncMock(spec=WhatsAppClient)


@pytest.fixture
def mock_monitor() -> AsyncMock:
    return AsyncMock(spec=MonitoringClient)


@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    for key, value in SETTINGS_ENV.items():
        monkeypatch.setenv(key, value)
    return SETTINGS_ENV


# --- Factory functions for test data ---


def make_settings(**kwargs: Any) -> Settings:
    """Factory for Settings with sensible defaults."""
    defaults: dict[str, Any] = dict(SETTINGS_ENV)
    defaults.update(kwargs)
    return Settings(_env_file=None, **defaults)  # type: ignore[call-arg]


def make_whatsapp_payload(
    text: str | None = "hello",
    button_id: str | None = None,
    phone: str = "15551234567",
) -> dict[str, Any]:
    """Build a WhatsApp Cloud API callback carrying one message."""
    message: dict[str, Any] = {
        "from": phone,
        "id": "wamid.test",
        "timestamp": "1700000000",
    }
    if text is not None:
        message["type"] = "text"
        message["text"] = {"body": text}
    if button_id is not None:
        message["type"] = "interactive"
        message["interactive"] = {
            "type": "button_reply",
            "button_reply": {"id": button_id, "title": button_id.upper()},
        }
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "BUSINESS_ID",
                "changes": [
                    {
                        "value": {
                            "messaging_product": "whatsapp",
                            "metadata": {"phone_number_id": "PHONE_ID"},
                            "messages": [message],
                        },
                        "field": "messages",
                    }
                ],
            }
        ],
    }


def make_status_payload() -> dict[str, Any]:
    """Build a delivery-receipt callback with no messages."""
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "BID",
                "changes": [
                    {
                        "value": {
                            "messaging_product": "whatsapp",
                            "metadata": {"phone_number_id": "PID"},
                            "statuses": [{"id": "msg1", "status": "delivered"}],
                        },
                        "field": "messages",
                    }
                ],
            }
        ],
    }


def mock_async_client(mock_client_cls: MagicMock) -> AsyncMock:
    """Wire a patched httpx.AsyncClient class to return an async context manager."""
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_client
    return mock_client
