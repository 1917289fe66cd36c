"""Meta webhook verification handshake."""

from __future__ import annotations

import hmac
import logging
from collections.abc import Mapping

from vsmbot.audit.logger import AuditLogger
from vsmbot.models import AuditEvent, AuditEventType, RiskLevel
from vsmbot.webhook.models import VerificationResult

logger = logging.getLogger(__name__)

SUBSCRIBE_MODE = "subscribe"


class WebhookVerifier:
    """Answers the GET challenge Meta sends when registering the callback URL."""

    def __init__(
        self, verify_token: str, audit_logger: AuditLogger | None = None,
    ) -> None:
        self._verify_token = verify_token
        self._audit = audit_logger

    def verify(self, params: Mapping[str, str]) -> VerificationResult:
        """Return the challenge on a valid subscribe request, 403 otherwise.

        The token is compared in constant time via hmac.compare_digest.
        """
        mode = params.get("hub.mode")
        token = params.get("hub.verify_token", "")

        if mode == SUBSCRIBE_MODE and hmac.compare_digest(
            token.encode(), self._verify_token.encode(),
        ):
            logger.info("Webhook verified")
            return VerificationResult(
                status_code=200, content=params.get("hub.challenge", ""),
            )

        logger.warning("Webhook verification rejected (mode=%s)", mode)
        if self._audit:
            self._audit.log(AuditEvent(
                event_type=AuditEventType.WEBHOOK_VERIFICATION,
                action="verify",
                result="failure",
                risk_level=RiskLevel.MEDIUM,
                details={"mode": mode},
            ))
        return VerificationResult(status_code=403)
