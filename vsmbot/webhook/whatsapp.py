"""WhatsApp Cloud API responder.

Sends plain-text and interactive-button replies to chat users. Sends are
single-shot: errors are logged and raised to the caller, never retried.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

_WHATSAPP_API_BASE = "https://graph.facebook.com"

MENU_PROMPT = "👋 Hi! Please choose an option:"
MENU_BUTTONS: tuple[tuple[str, str], ...] = (
    ("cpu", "CPU Usage"),
    ("mem", "Memory"),
    ("disk", "Disk"),
)


class WhatsAppClient:
    """Thin wrapper around the messages endpoint of the Cloud API."""

    def __init__(
        self,
        access_token: str,
        phone_number_id: str,
        api_version: str = "v17.0",
        timeout: float | None = 30.0,
    ) -> None:
        self._access_token = access_token
        self._timeout = timeout
        self.url = f"{_WHATSAPP_API_BASE}/{api_version}/{phone_number_id}/messages"

    async def _post(self, payload: dict[str, Any]) -> None:
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.post(self.url, json=payload, headers=headers)
            if resp.is_error:
                logger.error(
                    "WhatsApp send failed - %s %s", resp.status_code, resp.text,
                )
                resp.raise_for_status()

    async def send_text(self, to: str, body: str) -> None:
        await self._post({
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": body},
        })

    async def send_menu(self, to: str) -> None:
        """Send the metric menu as three reply buttons."""
        buttons = [
            {"type": "reply", "reply": {"id": button_id, "title": title}}
            for button_id, title in MENU_BUTTONS
        ]
        await self._post({
            "messaging_product": "whatsapp",
            "to": to,
            "type": "interactive",
            "interactive": {
                "type": "button",
                "body": {"text": MENU_PROMPT},
                "action": {"buttons": buttons},
            },
        })
