"""Configuration management for the Lending Ledger.

Settings are loaded from ``LENDING_LEDGER_*`` environment variables or a
``.env`` file and validated with pydantic-settings:
1. Server metadata for the MCP handshake
2. Ledger behaviour (admin principal, identifier scheme, lock scope)
3. Event journal persistence
4. Logging and logfire tracing
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerConfig(BaseSettings):
    """Lending ledger configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LENDING_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="lending-ledger",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        description="Primary transport mechanism",
        pattern=r"^(stdio|streamable_http)$",
    )

    http_host: str = Field(
        default="127.0.0.1",
        description="HTTP server host for the streamable HTTP transport",
    )

    http_port: int = Field(
        default=8080,
        description="HTTP server port for the streamable HTTP transport",
        ge=1024,
        le=65535,
    )

    # === Ledger Behaviour ===

    admin_principal: str = Field(
        default="admin",
        description="Principal holding administrative authority at startup",
        min_length=1,
    )

    identifier_scheme: str = Field(
        default="hashed",
        description="Item identifier derivation (hashed or legacy concat)",
        pattern=r"^(hashed|concat)$",
    )

    lock_scope: str = Field(
        default="item",
        description="Mutual exclusion granularity for ledger transitions",
        pattern=r"^(item|global)$",
    )

    # === Event Journal ===

    journal_enabled: bool = Field(
        default=False,
        description="Persist ledger notifications to the SQL event journal",
    )

    database_path: Path = Field(
        default=Path("data/ledger_events.db"),
        description="SQLite database file for the event journal",
    )

    # === Logging & Tracing ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    logfire_enabled: bool = Field(
        default=False,
        description="Configure logfire tracing at startup",
    )

    logfire_token: str | None = Field(
        default=None,
        description="Logfire write token",
        repr=False,
    )

    logfire_send: bool = Field(
        default=False,
        description="Ship spans to the logfire backend",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment reported to logfire",
    )

    # === Validation Methods ===

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: Path) -> Path:
        """Resolve the journal path; the directory is created on first use."""
        return v.absolute()

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Server names are URL-safe and readable."""
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @field_validator("admin_principal")
    @classmethod
    def validate_admin_principal(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Admin principal must not be blank")
        return v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.log_level == "DEBUG"

    @property
    def server_info(self) -> dict[str, str]:
        """Server information for the MCP handshake."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }

    def get_database_url(self) -> str:
        """Get SQLAlchemy database URL for the event journal."""
        return f"sqlite:///{self.database_path}"


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LedgerConfig | None = None


def get_config() -> LedgerConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LedgerConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
