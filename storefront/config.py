"""Cart client configuration from environment."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from storefront.errors import ERROR_API_URL_MISSING

DEFAULT_HTTP_TIMEOUT = 10.0


@dataclass(frozen=True)
class CartClientConfig:
    """Settings for the HTTP cart service adapter."""
    api_url: str
    api_token: Optional[str] = None
    timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CartClientConfig":
        """
        Build config from environment variables.

        - STOREFRONT_API_URL (required)
        - STOREFRONT_API_TOKEN (optional bearer token)
        - STOREFRONT_HTTP_TIMEOUT (seconds, default 10)
        """
        env = os.environ if environ is None else environ

        api_url = env.get("STOREFRONT_API_URL", "").strip()
        if not api_url:
            raise ValueError(ERROR_API_URL_MISSING)

        raw_timeout = env.get("STOREFRONT_HTTP_TIMEOUT", "")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ValueError(f"STOREFRONT_HTTP_TIMEOUT must be a number, got {raw_timeout!r}")
            if timeout <= 0:
                raise ValueError("STOREFRONT_HTTP_TIMEOUT must be positive")
        else:
            timeout = DEFAULT_HTTP_TIMEOUT

        return cls(
            api_url=api_url.rstrip("/"),
            api_token=env.get("STOREFRONT_API_TOKEN") or None,
            timeout=timeout,
        )
