"""
Service API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Passed explicitly to create_app(); the factory hands the relevant
       values to the header selector, the CRUD client and the health payload.
When:  Loaded once at process start. There is no runtime reconfiguration.

Environment variables (case-insensitive):
    ADDITIONAL_HEADERS_TO_PROXY   extra header names to forward downstream
    USERID_HEADER_KEY             defaults to "miauserid"
    GROUPS_HEADER_KEY             defaults to "miausergroups"
    CLIENTTYPE_HEADER_KEY         defaults to "client-type"
    BACKOFFICE_HEADER_KEY         defaults to "isbackoffice"
    USER_PROPERTIES_HEADER_KEY    defaults to "miauserproperties"
    CRUD_SERVICE_URL              base URL of the downstream books service
    HTTP_LOG_LEVEL                NONE | BASIC | HEADERS | BODY
    HTTP_TIMEOUT                  downstream connect/read/overall timeout (s)
    LOG_LEVEL                     DEBUG | INFO | WARNING | ERROR | CRITICAL
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

REQUEST_ID_HEADER = "x-request-id"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults that work inside the platform, where the CRUD
    service is reachable at http://crud-service/.
    """

    # ── Service identity ──────────────────────────────────────────────────
    service_name: str = Field(default="service-api")

    # ── Header forwarding ─────────────────────────────────────────────────
    # Comma- or whitespace-separated list, e.g. "x-forwarded-for, x-tenant"
    additional_headers_to_proxy: str = Field(default="")

    userid_header_key: str = Field(default="miauserid")
    groups_header_key: str = Field(default="miausergroups")
    clienttype_header_key: str = Field(default="client-type")
    backoffice_header_key: str = Field(default="isbackoffice")
    user_properties_header_key: str = Field(default="miauserproperties")

    @property
    def platform_headers(self) -> List[str]:
        """Header names forwarded on every downstream call, request id first."""
        return [
            REQUEST_ID_HEADER,
            self.userid_header_key,
            self.groups_header_key,
            self.clienttype_header_key,
            self.backoffice_header_key,
            self.user_properties_header_key,
        ]

    # ── Downstream CRUD service ───────────────────────────────────────────
    crud_service_url: str = Field(default="http://crud-service/")

    # Applied to connect, read, write and pool acquisition
    http_timeout: float = Field(default=60.0, gt=0, le=600)

    http_log_level: str = Field(default="NONE")

    @field_validator("http_log_level")
    @classmethod
    def validate_http_log_level(cls, v: str) -> str:
        """Unknown verbosities fall back to NONE, like the platform templates do."""
        upper = v.strip().upper()
        if upper not in {"NONE", "BASIC", "HEADERS", "BODY"}:
            return "NONE"
        return upper

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=3000, ge=1024, le=65535)

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance used by the module-level app in main.py
settings = Settings()
