"""Error classes for the Shopify REST core."""
from __future__ import annotations

from typing import Any, Optional


class ShopifyRestError(Exception):
    """Base class for everything raised by this package."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        snippet = message if len(message) <= 300 else message[:300]
        if status_code is not None:
            msg = f"HTTP {status_code}: {snippet}"
        else:
            msg = snippet
        super().__init__(msg)
        self.status_code = status_code


class ShopifyConfigurationError(ShopifyRestError):
    """Raised when a client is requested but no session can be built."""


class ShopifyApiError(ShopifyRestError):
    """Raised for HTTP errors and ``errors`` payloads returned by Shopify."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message, status_code)
        self.detail = detail


class ShopifyRateLimitError(ShopifyApiError):
    """Raised once a request is still throttled after the retry ceiling."""

    def __init__(
        self,
        message: str,
        retry_after: int = 1,
        detail: Any = None,
    ) -> None:
        super().__init__(message, 429, detail)
        self.retry_after = retry_after
