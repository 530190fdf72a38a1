"""Public API exports."""
import logging

from .api import ShopifyApi
from .client import RestClient, RestResponse
from .errors import (
    ShopifyApiError,
    ShopifyConfigurationError,
    ShopifyRateLimitError,
    ShopifyRestError,
)
from .executor import RequestExecutor
from .paginate import fetch_all, iter_resources
from .resources import Metafield, Product, Resource, Variant
from .session import ShopifySession
from .settings import Settings

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ShopifyApi",
    "RestClient",
    "RestResponse",
    "RequestExecutor",
    "ShopifySession",
    "Settings",
    "Resource",
    "Product",
    "Variant",
    "Metafield",
    "fetch_all",
    "iter_resources",
    "ShopifyRestError",
    "ShopifyApiError",
    "ShopifyRateLimitError",
    "ShopifyConfigurationError",
]
