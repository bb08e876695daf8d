"""
FormPilot Gateway Configuration

Built once at startup from FP_* environment variables and passed
explicitly to the gateway and the API; nothing reads the environment
after that.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..exceptions import ConfigurationError

DEFAULT_CORE_API_URL = "http://localhost:3000/api/v1"
DEFAULT_TIMEOUT_MS = 10000


@dataclass(frozen=True)
class GatewayConfig:
    """
    Connection settings for the comparison backend.

    Environment:
        FP_CORE_API_URL: Base URL of the core API
        FP_API_TIMEOUT_MS: Request timeout in milliseconds
        FP_API_TOKEN: Bearer token sent with submissions, if any
        FP_FORMS_DIR: Directory of form definition documents
        FP_LOG_LEVEL: Log level of the API process
    """
    core_api_url: str = DEFAULT_CORE_API_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    api_token: Optional[str] = None
    forms_dir: Optional[str] = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.core_api_url:
            raise ConfigurationError(message="core_api_url must not be empty")
        if self.timeout_ms <= 0:
            raise ConfigurationError(
                message=f"timeout_ms must be positive, got {self.timeout_ms}",
                details={"timeout_ms": self.timeout_ms},
            )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def base_url(self) -> str:
        return self.core_api_url.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewayConfig":
        env = os.environ if environ is None else environ
        raw_timeout = env.get("FP_API_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS))
        try:
            timeout_ms = int(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                message=f"FP_API_TIMEOUT_MS must be an integer, got {raw_timeout!r}",
                details={"FP_API_TIMEOUT_MS": raw_timeout},
            ) from None
        return cls(
            core_api_url=env.get("FP_CORE_API_URL", DEFAULT_CORE_API_URL),
            timeout_ms=timeout_ms,
            api_token=env.get("FP_API_TOKEN") or None,
            forms_dir=env.get("FP_FORMS_DIR") or None,
            log_level=env.get("FP_LOG_LEVEL", "INFO").upper(),
        )
