"""Click CLI for running the bot and querying VuSmartMaps."""

from __future__ import annotations

import asyncio
import logging

import click
import uvicorn

from vsmbot.config import Settings
from vsmbot.monitoring.client import MonitoringClient, TransportConfig
from vsmbot.webhook.router import CPU_UNAVAILABLE, CPU_WINDOW, format_cpu

logger = logging.getLogger(__name__)


def _load_settings(log_level: str | None = None) -> Settings:
    settings = Settings()  # type: ignore[call-arg]
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level})
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return settings


@click.group()
def cli() -> None:
    """WhatsApp bot relaying VuSmartMaps metrics."""


@cli.command()
@click.option("--host", default=None, help="Bind address (defaults to APP_HOST).")
@click.option("--port", type=int, default=None, help="Listen port (defaults to APP_PORT).")
@click.option(
    "--log-level",
    type=click.Choice(["critical", "error", "warning", "info", "debug"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to LOG_LEVEL).",
)
def serve(host: str | None, port: int | None, log_level: str | None) -> None:
    """Run the webhook server."""
    settings = _load_settings(log_level)
    host = host or settings.app_host
    port = port or settings.app_port
    logger.info("WhatsApp bot running on %s:%s", host, port)
    uvicorn.run(
        "vsmbot.app:create_app_from_env",
        factory=True,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


@cli.command()
@click.option("--window", default=CPU_WINDOW, show_default=True, help="Relative time window.")
@click.pass_context
def cpu(ctx: click.Context, window: str) -> None:
    """Fetch CPU utilization once and print it."""
    settings = _load_settings()
    client = MonitoringClient(
        login_url=settings.vsm_login_url,
        cpu_url=settings.vsm_cpu_url,
        username=settings.vsm_username,
        password=settings.vsm_password,
        transport=TransportConfig(
            verify=settings.vsm_verify_tls, timeout=settings.http_timeout,
        ),
    )
    value = asyncio.run(client.fetch_metric(window))
    if value is None:
        click.echo(CPU_UNAVAILABLE, err=True)
        ctx.exit(1)
    click.echo(format_cpu(value, window))
