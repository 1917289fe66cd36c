"""Runtime configuration for the WhatsApp metrics bot."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings, built once at startup and passed to the app."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    # WhatsApp Cloud API
    verify_token: str = Field(..., alias="VERIFY_TOKEN")
    whatsapp_token: str = Field(..., alias="WHATSAPP_TOKEN")
    phone_number_id: str = Field(..., alias="PHONE_NUMBER_ID")
    whatsapp_api_version: str = Field(default="v17.0", alias="WHATSAPP_API_VERSION")

    # VuSmartMaps
    vsm_login_url: str = Field(..., alias="VSM_LOGIN_URL")
    vsm_cpu_url: str = Field(..., alias="VSM_CPU_URL")
    vsm_username: str = Field(..., alias="VSM_USERNAME")
    vsm_password: str = Field(..., alias="VSM_PASSWORD")
    # The VuSmartMaps appliance ships a self-signed certificate
    vsm_verify_tls: bool = Field(default=False, alias="VSM_VERIFY_TLS")

    http_timeout: float = Field(default=30.0, gt=0, alias="HTTP_TIMEOUT")

    # Server
    app_host: str = Field(default="0.0.0.0", alias="APP_HOST")
    app_port: int = Field(default=3030, alias="APP_PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    audit_log_path: str | None = Field(default=None, alias="AUDIT_LOG_PATH")
