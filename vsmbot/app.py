"""FastAPI application exposing the WhatsApp webhook."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from vsmbot.audit.logger import AuditLogger
from vsmbot.config import Settings
from vsmbot.monitoring.client import MonitoringClient, TransportConfig
from vsmbot.webhook.router import MessageRouter
from vsmbot.webhook.verifier import WebhookVerifier
from vsmbot.webhook.whatsapp import WhatsAppClient

logger = logging.getLogger(__name__)


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    return create_app(Settings())  # type: ignore[call-arg]


def create_app(
    settings: Settings,
    responder: WhatsAppClient | None = None,
    monitor: MonitoringClient | None = None,
    audit_logger: AuditLogger | None = None,
) -> FastAPI:
    """Create the webhook app, building any collaborator not supplied."""
    if audit_logger is None and settings.audit_log_path:
        audit_logger = AuditLogger(settings.audit_log_path)
    if responder is None:
        responder = WhatsAppClient(
            access_token=settings.whatsapp_token,
            phone_number_id=settings.phone_number_id,
            api_version=settings.whatsapp_api_version,
            timeout=settings.http_timeout,
        )
    if monitor is None:
        monitor = MonitoringClient(
            login_url=settings.vsm_login_url,
            cpu_url=settings.vsm_cpu_url,
            username=settings.vsm_username,
            password=settings.vsm_password,
            transport=TransportConfig(
                verify=settings.vsm_verify_tls, timeout=settings.http_timeout,
            ),
        )

    verifier = WebhookVerifier(settings.verify_token, audit_logger=audit_logger)
    router = MessageRouter(responder, monitor, audit_logger=audit_logger)

    app = FastAPI(docs_url=None, redoc_url=None)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/webhook")
    def verify_webhook(request: Request) -> Response:
        # Sync: runs in the threadpool, the rejection audit write is blocking I/O
        result = verifier.verify(request.query_params)
        if result.ok:
            return PlainTextResponse(result.content)
        return Response(status_code=403)

    @app.post("/webhook")
    async def receive_webhook(request: Request) -> Response:
        try:
            payload = await request.json()
        except ValueError:
            return JSONResponse({"error": "Invalid JSON body"}, status_code=400)
        await router.handle(payload)
        return Response(status_code=200)

    return app
