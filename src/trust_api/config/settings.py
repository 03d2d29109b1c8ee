from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the TRUST_API_ prefix.
    For example:
        - TRUST_API_GUAC_URL=http://localhost:8080
        - TRUST_API_SNYK_ORG_ID=00000000-0000-0000-0000-000000000000
        - TRUST_API_SNYK_TOKEN=xxxx
        - TRUST_API_SBOM_DIR=/path/to/sboms

    Alternatively, settings can be provided programmatically:
        container = Container()
        container.config.from_pydantic(AppConfig(snyk_token="xxxx"))
    """

    model_config = SettingsConfigDict(
        env_prefix="TRUST_API_",
        case_sensitive=False,
        extra="forbid",
    )

    guac_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the Guac GraphQL server (queries are POSTed to <guac_url>/query)",
    )

    snyk_url: str = Field(
        default="https://api.snyk.io",
        description="Base URL of the Snyk REST API",
    )

    snyk_org_id: Optional[str] = Field(
        default=None,
        description="Snyk organization id used for package issue lookups",
    )

    snyk_token: Optional[str] = Field(
        default=None,
        description="Snyk API token. Without it every Snyk lookup fails and package lookups return 500",
    )

    snyk_api_version: str = Field(
        default="2023-08-31~beta",
        description="Value of the Snyk REST 'version' query parameter",
    )

    sbom_dir: Optional[Path] = Field(
        default=None,
        description="Directory of SBOM JSON documents ingested into the local registry on startup",
    )

    cache_dir: Optional[Path] = Field(
        default=None,
        description="Directory backing the local SBOM registry. If None, uses platformdirs.user_cache_dir('trust_api')",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout applied to every Guac and Snyk HTTP call",
    )

    bind: str = Field(default="localhost", description="Address the HTTP server binds to")

    port: int = Field(default=8081, ge=1, le=65535, description="Port the HTTP server listens on")
