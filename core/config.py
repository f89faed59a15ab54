# =============================================================================
# core/config.py  -  Process configuration
# =============================================================================
#
# Configuration is read ONCE at startup from environment variables (main.py
# loads a .env file first via python-dotenv) and then passed explicitly to
# the client, the backends and the MCP server.  Nothing else in the package
# reads os.environ.
#
# VARIABLES:
#   KB_BACKEND          "generic" (default) or "zendesk"
#   KB_API_URL          Base API URL (Zendesk default derives from subdomain)
#   KB_SITE_NAME        Display name used in tool output
#   KB_LOCALE           Help Center locale (ZENDESK_LOCALE also accepted)
#   ZENDESK_SUBDOMAIN   e.g. "acme" for https://acme.zendesk.com
#   ZENDESK_EMAIL       Agent e-mail used for API token auth
#   ZENDESK_API_TOKEN   API token
#   KB_HTTP_TIMEOUT     Per-request timeout in seconds (default 30)
#   KB_LOG_LEVEL        Logging level name (default INFO)
# =============================================================================

import base64
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from core.errors import ConfigError

GENERIC = "generic"
ZENDESK = "zendesk"
BACKENDS = (GENERIC, ZENDESK)

DEFAULT_API_URL = "https://ev-kb.doghouse.cloud"
DEFAULT_SITE_NAME = "Engage Victoria Knowledge"
DEFAULT_ZENDESK_SITE_NAME = "Help Center"
DEFAULT_LOCALE = "en-us"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Config:
    """Immutable settings for one server process."""

    backend: str = GENERIC
    api_base: str = DEFAULT_API_URL
    site_name: str = DEFAULT_SITE_NAME
    locale: str = DEFAULT_LOCALE
    email: Optional[str] = None
    api_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @property
    def is_zendesk(self) -> bool:
        return self.backend == ZENDESK

    @property
    def auth_header(self) -> Optional[str]:
        """Basic credential for Zendesk API token auth, or None."""
        if not (self.email and self.api_token):
            return None
        raw = f"{self.email}/token:{self.api_token}".encode("utf-8")
        return "Basic " + base64.b64encode(raw).decode("ascii")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from environment variables.

        Raises:
            ConfigError: unknown backend, bad timeout or log level, or
                missing Zendesk credentials.
        """
        env = os.environ if environ is None else environ

        backend = env.get("KB_BACKEND", GENERIC).strip().lower() or GENERIC
        if backend not in BACKENDS:
            raise ConfigError(
                f"KB_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}"
            )

        raw_timeout = env.get("KB_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"KB_HTTP_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError(f"KB_HTTP_TIMEOUT must be positive, got {raw_timeout!r}")

        log_level = env.get("KB_LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"KB_LOG_LEVEL is not a logging level: {log_level!r}")

        locale = env.get("KB_LOCALE") or env.get("ZENDESK_LOCALE") or DEFAULT_LOCALE
        api_base = env.get("KB_API_URL", "").strip()

        if backend == GENERIC:
            return cls(
                backend=GENERIC,
                api_base=(api_base or DEFAULT_API_URL).rstrip("/"),
                site_name=env.get("KB_SITE_NAME") or DEFAULT_SITE_NAME,
                locale=locale,
                timeout=timeout,
                log_level=log_level,
            )

        # --- Zendesk: credentials are mandatory ---
        email = env.get("ZENDESK_EMAIL", "").strip()
        token = env.get("ZENDESK_API_TOKEN", "").strip()
        missing = [
            name
            for name, value in (("ZENDESK_EMAIL", email), ("ZENDESK_API_TOKEN", token))
            if not value
        ]
        if not api_base:
            subdomain = env.get("ZENDESK_SUBDOMAIN", "").strip()
            if not subdomain:
                missing.insert(0, "ZENDESK_SUBDOMAIN")
            api_base = f"https://{subdomain}.zendesk.com/api/v2"
        if missing:
            raise ConfigError(
                "Missing required environment variable(s): " + ", ".join(missing)
            )

        return cls(
            backend=ZENDESK,
            api_base=api_base.rstrip("/"),
            site_name=env.get("KB_SITE_NAME") or DEFAULT_ZENDESK_SITE_NAME,
            locale=locale,
            email=email,
            api_token=token,
            timeout=timeout,
            log_level=log_level,
        )
