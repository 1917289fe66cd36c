"""VuSmartMaps monitoring client.

Logs in with username/password and reads the CPU gauge for a relative time
window. Every failure is logged and reported to the caller as ``None``.

A fresh access token is requested for every metric fetch; tokens are not
reused between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportConfig:
    """Outbound HTTP settings for the monitoring API.

    ``verify`` defaults to False: the monitoring appliance serves a
    self-signed certificate.
    """

    verify: bool = False
    timeout: float | None = 30.0

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(verify=self.verify, timeout=self.timeout)


def extract_avg_cpu(data: Any) -> float | None:
    """Pull ``metricData[0].data[0].avg_cpu`` out of a metric response."""
    try:
        value = data["metricData"][0]["data"][0]["avg_cpu"]
    except (KeyError, IndexError, TypeError):
        return None
    # A reading of 0 is a real value, not "unavailable"
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class MonitoringClient:
    """Fetches metrics from the VuSmartMaps REST API."""

    def __init__(
        self,
        login_url: str,
        cpu_url: str,
        username: str,
        password: str,
        transport: TransportConfig | None = None,
    ) -> None:
        self._login_url = login_url
        self._cpu_url = cpu_url
        self._username = username
        self._password = password
        self._transport = transport or TransportConfig()

    async def authenticate(self) -> str | None:
        """Log in and return an access token, or None on any failure."""
        try:
            async with self._transport.client() as client:
                resp = await client.post(
                    self._login_url,
                    json={"username": self._username, "password": self._password},
                )
                resp.raise_for_status()
                token = resp.json().get("access_token")
        except httpx.HTTPStatusError as exc:
            logger.error(
                "VuSmartMaps login failed - %s %s",
                exc.response.status_code, exc.response.text,
            )
            return None
        except (httpx.HTTPError, ValueError, AttributeError) as exc:
            logger.error("VuSmartMaps login failed: %s", exc)
            return None

        if not token or not isinstance(token, str):
            logger.error("VuSmartMaps login response carried no access_token")
            return None
        return token

    async def fetch_metric(self, window: str) -> float | None:
        """Return average CPU utilization over ``window`` (e.g. "1h")."""
        token = await self.authenticate()
        if not token:
            return None

        try:
            async with self._transport.client() as client:
                resp = await client.get(
                    self._cpu_url,
                    params={"relative_time": window},
                    headers={"Authorization": f"Bearer {token}"},
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "CPU fetch failed - %s %s",
                exc.response.status_code, exc.response.text,
            )
            return None
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("CPU fetch failed: %s", exc)
            return None

        value = extract_avg_cpu(data)
        if value is None:
            logger.error("CPU fetch returned no avg_cpu for window %s", window)
        return value
