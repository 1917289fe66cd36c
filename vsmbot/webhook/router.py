"""Inbound message routing.

Pulls the first message out of a WhatsApp callback and picks the reply:

1. "hi" (any case) -> metric menu
2. "cpu" button -> CPU utilization for the last hour
3. "mem" / "disk" buttons -> placeholder notice
4. any other text -> echo

Replies are best-effort: a failed send is logged and audited, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any

import httpx

from vsmbot.models import AuditEvent, AuditEventType, RiskLevel
from vsmbot.webhook.models import IncomingMessage

if TYPE_CHECKING:
    from vsmbot.audit.logger import AuditLogger
    from vsmbot.monitoring.client import MonitoringClient
    from vsmbot.webhook.whatsapp import WhatsAppClient

logger = logging.getLogger(__name__)

CPU_WINDOW = "1h"

CPU_UNAVAILABLE = "⚠️ Could not fetch CPU data from VuSmartMaps."
MEMORY_PLACEHOLDER = "ℹ️ Memory monitoring coming soon."
DISK_PLACEHOLDER = "ℹ️ Disk metrics coming soon."
ECHO_PREFIX = "You said: "


def format_cpu(value: float, window: str = CPU_WINDOW) -> str:
    return f"🔥 *CPU Utilization ({window})*: {value:.2f}%"


def _first(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def extract_message(payload: Any) -> IncomingMessage | None:
    """Return ``entry[0].changes[0].value.messages[0]`` as an IncomingMessage.

    Status callbacks (delivered, read, ...) carry no messages and yield None.
    """
    if not isinstance(payload, dict):
        return None
    entry = _first(payload.get("entry"))
    change = _first(entry.get("changes")) if isinstance(entry, dict) else None
    value = change.get("value") if isinstance(change, dict) else None
    msg = _first(value.get("messages")) if isinstance(value, dict) else None
    if not isinstance(msg, dict):
        return None

    text = msg.get("text")
    interactive = msg.get("interactive")
    button = interactive.get("button_reply") if isinstance(interactive, dict) else None
    return IncomingMessage(
        sender=str(msg.get("from", "")),
        text=text.get("body") if isinstance(text, dict) else None,
        button_id=button.get("id") if isinstance(button, dict) else None,
        message_id=msg.get("id"),
    )


class MessageRouter:
    """Dispatches one inbound message to exactly one reply."""

    def __init__(
        self,
        responder: WhatsAppClient,
        monitor: MonitoringClient,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._responder = responder
        self._monitor = monitor
        self._audit = audit_logger

    async def handle(self, payload: Any) -> None:
        """Route a raw webhook body; non-message callbacks are ignored."""
        message = extract_message(payload)
        if message is None:
            return
        await self.dispatch(message)

    async def dispatch(self, message: IncomingMessage) -> None:
        logger.info("Incoming message: %s", message.summary)
        text = message.text
        button_id = message.button_id

        if text is not None and text.lower() == "hi":
            await self._send(message, "menu", self._responder.send_menu(message.sender))
            return

        if button_id == "cpu":
            await self._reply(message, "cpu", await self._cpu_reply(message))
            return

        if button_id == "mem":
            await self._reply(message, "mem", MEMORY_PLACEHOLDER)
            return

        if button_id == "disk":
            await self._reply(message, "disk", DISK_PLACEHOLDER)
            return

        if text is None:
            logger.info("Ignoring unsupported message from %s", message.sender)
            return

        await self._reply(message, "echo", f"{ECHO_PREFIX}{text}")

    async def _cpu_reply(self, message: IncomingMessage) -> str:
        cpu = await self._monitor.fetch_metric(CPU_WINDOW)
        if cpu is not None:
            return format_cpu(cpu)

        if self._audit:
            await self._audit.alog(AuditEvent(
                event_type=AuditEventType.METRIC_FETCH,
                sender=message.sender,
                action="cpu",
                result="unavailable",
                risk_level=RiskLevel.LOW,
                details={"window": CPU_WINDOW},
            ))
        return CPU_UNAVAILABLE

    async def _reply(self, message: IncomingMessage, action: str, body: str) -> None:
        await self._send(message, action, self._responder.send_text(message.sender, body))

    async def _send(
        self, message: IncomingMessage, action: str, send: Awaitable[None],
    ) -> None:
        try:
            await send
        except httpx.HTTPError as exc:
            logger.error("Reply to %s failed (%s): %s", message.sender, action, exc)
            if self._audit:
                await self._audit.alog(AuditEvent(
                    event_type=AuditEventType.SEND_FAILURE,
                    sender=message.sender,
                    action=action,
                    result="failure",
                    risk_level=RiskLevel.MEDIUM,
                    details={"error": str(exc)},
                ))
            return

        if self._audit:
            await self._audit.alog(AuditEvent(
                event_type=AuditEventType.MESSAGE_REPLY,
                sender=message.sender,
                action=action,
                result="success",
                risk_level=RiskLevel.INFO,
            ))
