"""Shopify API service: cached session/client plus resource accessors."""
from __future__ import annotations

import logging
import os
import threading
from typing import Any, Callable, Mapping, Optional, TypeVar

from .client import RestClient
from .errors import ShopifyConfigurationError
from .executor import MAX_RETRIES, REQUEST_PAUSE, RequestExecutor
from .paginate import fetch_all
from .resources import Metafield, Product, Resource, Variant
from .session import (
    SHOPIFY_API_VERSION,
    ApiContext,
    FileSessionStorage,
    ShopifySession,
)
from .settings import Settings, parse_env
from .transport import Transport

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)

SESSION_STORAGE_DIR = "shopify_api_sessions"
FALLBACK_HOST_NAME = "localhost"


class ShopifyApi:
    """Read-only access to one shop's Admin REST API.

    The session and client are built on first use and reused for the life
    of the instance. Two instances share nothing.

    Args:
        settings: Configuration; defaults to :meth:`Settings.from_env`
        transport: Transport handed to the client (defaults to RequestsTransport)
        sleep: Sleep function for the executor, mostly for tests
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: Transport | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings.from_env()
        self._transport = transport
        self._sleep = sleep
        self._lock = threading.Lock()
        self._context: Optional[ApiContext] = None
        self._session: Optional[ShopifySession] = None
        self._client: Optional[RestClient] = None
        self._executor: Optional[RequestExecutor] = None

    @property
    def context(self) -> Optional[ApiContext]:
        return self._context

    def get_session(self) -> Optional[ShopifySession]:
        """Return the session, creating it on first call.

        Returns ``None`` while the API key or secret is not configured.
        """
        if self._session is not None:
            return self._session
        with self._lock:
            if self._session is None:
                self._session = self._build_session()
        return self._session

    def _build_session(self) -> Optional[ShopifySession]:
        settings = self.settings
        api_key = parse_env(settings.api_key)
        api_secret_key = parse_env(settings.api_secret_key)
        if not api_key or not api_secret_key:
            logger.debug("Shopify API key or secret not configured")
            return None

        storage_path = os.path.join(settings.storage_path, SESSION_STORAGE_DIR)
        self._context = ApiContext(
            api_key=api_key,
            api_secret_key=api_secret_key,
            host_name=settings.request_host or FALLBACK_HOST_NAME,
            session_storage=FileSessionStorage(storage_path),
            api_version=SHOPIFY_API_VERSION,
            logger=logger,
        )

        shop = parse_env(settings.host_name) or ""
        access_token = parse_env(settings.access_token) or ""
        logger.info("Created offline Shopify session for %s", shop)
        return ShopifySession(shop=shop, access_token=access_token)

    def get_client(self) -> RestClient:
        """Return the REST client, building it from the session on first call.

        Raises:
            ShopifyConfigurationError: If no session can be built
        """
        if self._client is not None:
            return self._client
        session = self.get_session()
        if session is None:
            raise ShopifyConfigurationError("Shopify API credentials are not configured")
        with self._lock:
            if self._client is None:
                kwargs: dict[str, Any] = {}
                if self._transport is not None:
                    kwargs["transport"] = self._transport
                client = RestClient(
                    session.shop,
                    session.access_token,
                    api_version=SHOPIFY_API_VERSION,
                    **kwargs,
                )
                self._executor = RequestExecutor(
                    client,
                    max_retries=MAX_RETRIES,
                    pause=REQUEST_PAUSE,
                    sleep=self._sleep,
                )
                self._client = client
        return self._client

    @property
    def executor(self) -> RequestExecutor:
        """Executor bound to the client, built alongside it."""
        self.get_client()
        assert self._executor is not None
        return self._executor

    def get(self, path: str, query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Fetch an arbitrary resource path and return the decoded body.

        Unpacking the body is left to the caller.
        """
        return self.executor.get(path, query)

    def get_all(self, resource_type: type[R], params: Mapping[str, Any] | None = None) -> list[R]:
        """Fetch every page of a collection."""
        return fetch_all(self.executor, resource_type, params, self.get_session())

    def get_all_products(self) -> list[Product]:
        return self.get_all(Product)

    def get_product_by_shopify_id(self, id: int) -> Product:
        body = self.get(f"products/{id}")
        return Product(self.get_session(), body.get("product") or {})

    def get_product_id_by_inventory_item_id(self, id: int) -> Optional[int]:
        """Look up the product owning the variant with this inventory item."""
        body = self.get("variants", {"inventory_item_id": id})
        variants = body.get("variants")
        if variants:
            return Variant(self.get_session(), variants[0]).product_id
        return None

    def get_metafields_by_product_id(self, id: int) -> list[Metafield]:
        if not self.settings.sync_product_metafields:
            return []
        return self.get_metafields_by_id_and_owner_resource(id, "products")

    def get_metafields_by_variant_id(self, id: int) -> list[Metafield]:
        if not self.settings.sync_variant_metafields:
            return []
        return self.get_metafields_by_id_and_owner_resource(id, "variants")

    def get_metafields_by_id_and_owner_resource(
        self, id: int, owner_resource: str
    ) -> list[Metafield]:
        body = self.get(
            f"{owner_resource}/{id}/metafields",
            {"metafield": {"owner_id": id, "owner_resource": owner_resource}},
        )
        session = self.get_session()
        return [Metafield(session, item) for item in body.get("metafields") or []]

    def get_variants_by_product_id(self, id: int) -> list[Variant]:
        body = self.get(f"products/{id}/variants")
        session = self.get_session()
        return [Variant(session, item) for item in body.get("variants") or []]
