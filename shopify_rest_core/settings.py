"""Configuration surface."""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

_ENV_REF = re.compile(r"^\$(\w+)$|^\$\{(\w+)\}$")


def parse_env(value: Optional[str]) -> Optional[str]:
    """Resolve a ``$NAME`` / ``${NAME}`` reference against the environment.

    Anything that is not a bare reference is returned unchanged. Unset
    references resolve to ``None`` and so do empty strings.
    """
    if value is None:
        return None
    value = value.strip()
    match = _ENV_REF.match(value)
    if match:
        value = os.getenv(match.group(1) or match.group(2), "")
    return value or None


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Values consumed by :class:`~shopify_rest_core.api.ShopifyApi`.

    Attributes:
        api_key: App API key, or an env reference such as ``$SHOPIFY_API_KEY``
        api_secret_key: App API secret, or an env reference
        host_name: The ``*.myshopify.com`` hostname of the target shop
        access_token: Pre-issued offline Admin API access token
        sync_product_metafields: Whether product metafields are fetched at all
        sync_variant_metafields: Whether variant metafields are fetched at all
        storage_path: Writable directory used for session bookkeeping
        request_host: Host name of the environment initiating the connection;
            ``None`` for background/console use
    """

    api_key: Optional[str] = None
    api_secret_key: Optional[str] = None
    host_name: Optional[str] = None
    access_token: Optional[str] = None
    sync_product_metafields: bool = True
    sync_variant_metafields: bool = True
    storage_path: str = "storage"
    request_host: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings that resolve lazily from ``SHOPIFY_*`` env vars."""
        return cls(
            api_key="$SHOPIFY_API_KEY",
            api_secret_key="$SHOPIFY_API_SECRET_KEY",
            host_name="$SHOPIFY_HOST_NAME",
            access_token="$SHOPIFY_ACCESS_TOKEN",
            sync_product_metafields=_env_flag("SHOPIFY_SYNC_PRODUCT_METAFIELDS", True),
            sync_variant_metafields=_env_flag("SHOPIFY_SYNC_VARIANT_METAFIELDS", True),
            storage_path=os.getenv("SHOPIFY_STORAGE_PATH", "storage"),
            request_host=os.getenv("SHOPIFY_REQUEST_HOST") or None,
        )
