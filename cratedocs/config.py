"""Runtime settings for cratedocs, read from the environment (and .env)."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel, Field

load_dotenv(find_dotenv())

DEFAULT_USER_AGENT = "CrateDocs/0.1.0 (https://github.com/d6e/cratedocs-mcp)"


class Settings(BaseModel):
    """Hosts, client identity and logging options."""

    docs_host: str = Field("https://docs.rs", description="Documentation host base URL")
    registry_host: str = Field("https://crates.io", description="Package registry base URL")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent sent on every request")
    timeout: Optional[float] = Field(
        None,
        description="Request timeout in seconds (None keeps the HTTP client's default)"
    )
    default_version: Optional[str] = Field(
        "latest",
        description="Version segment used in item URLs when a lookup names no version"
    )
    log_level: str = Field("INFO", description="Logging level name")
    log_file: str = Field("/tmp/cratedocs_mcp_server.log", description="Server log file")

    def docs_base(self) -> str:
        return self.docs_host.rstrip("/")

    def registry_base(self) -> str:
        return self.registry_host.rstrip("/")


def load_settings() -> Settings:
    """Build settings from ``CRATEDOCS_*`` environment variables."""
    values = {}
    for field_name in Settings.model_fields:
        raw = os.getenv(f"CRATEDOCS_{field_name.upper()}")
        if raw:
            values[field_name] = raw
    return Settings(**values)
