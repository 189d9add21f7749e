"""
Environment-driven configuration for the MCE MCP server.

Variables:
- MCE_SUBDOMAIN, MCE_CLIENT_ID, MCE_CLIENT_SECRET: installed package credentials
- MCE_DEFAULT_MID: Business Unit used when a tool call does not name one
- MCE_HTTP_TIMEOUT: HTTP timeout in seconds (default 30)
- MCE_DOCS_DIR: directory holding the documentation JSON files
- MCE_LOG_LEVEL: logging level (default INFO)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import AuthConfigError

DEFAULT_DOCS_DIR = Path(__file__).parent / "docs"

REQUIRED_CREDENTIALS = ("MCE_SUBDOMAIN", "MCE_CLIENT_ID", "MCE_CLIENT_SECRET")


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the server configuration."""

    subdomain: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    default_mid: Optional[str] = None
    http_timeout: float = 30.0
    docs_dir: Path = DEFAULT_DOCS_DIR
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from ``os.environ`` (or the given mapping)."""
        env = os.environ if environ is None else environ

        timeout_raw = env.get("MCE_HTTP_TIMEOUT", "30")
        try:
            http_timeout = float(timeout_raw)
        except ValueError:
            http_timeout = 30.0

        docs_dir = env.get("MCE_DOCS_DIR")

        return cls(
            subdomain=env.get("MCE_SUBDOMAIN") or None,
            client_id=env.get("MCE_CLIENT_ID") or None,
            client_secret=env.get("MCE_CLIENT_SECRET") or None,
            default_mid=env.get("MCE_DEFAULT_MID") or None,
            http_timeout=http_timeout,
            docs_dir=Path(docs_dir) if docs_dir else DEFAULT_DOCS_DIR,
            log_level=env.get("MCE_LOG_LEVEL", "INFO").upper(),
        )

    def require_credentials(self) -> None:
        """Raise AuthConfigError unless subdomain, client id and secret are all set."""
        if not self.subdomain or not self.client_id or not self.client_secret:
            raise AuthConfigError(
                "Missing required environment variables: "
                + ", ".join(REQUIRED_CREDENTIALS)
            )

    @property
    def token_url(self) -> str:
        return f"https://{self.subdomain}.auth.marketingcloudapis.com/v2/token"

    @property
    def soap_endpoint(self) -> str:
        """Address placed in the envelope's WS-Addressing ``To`` header."""
        return f"https://{self.subdomain}.soap.marketingcloudapis.com/Service.asmx"
