"""Session and authentication context for the Shopify Admin REST API."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

SHOPIFY_API_VERSION = "2023-10"
DEFAULT_SCOPES = ("write_products", "read_products", "read_inventory")


@dataclass(frozen=True)
class ShopifySession:
    """Binds a shop to the offline access token used for every request.

    Attributes:
        shop: The ``*.myshopify.com`` hostname of the store
        access_token: Admin API access token
        id: Session identifier; fixed placeholder for offline sessions
        is_online: Always False, sessions are offline/background sessions
        state: OAuth state token; fixed placeholder since no handshake runs
    """

    shop: str
    access_token: str = field(repr=False)
    id: str = "NA"
    is_online: bool = False
    state: str = "NA"


class FileSessionStorage:
    """Directory-backed session store, one JSON file per session id."""

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(path, exist_ok=True)

    def _file(self, session_id: str) -> str:
        return os.path.join(self.path, f"{session_id}.json")

    def store_session(self, session: ShopifySession) -> bool:
        with open(self._file(session.id), "w", encoding="utf-8") as fh:
            json.dump(asdict(session), fh)
        return True

    def load_session(self, session_id: str) -> Optional[ShopifySession]:
        try:
            with open(self._file(session_id), encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return None
        return ShopifySession(**data)

    def delete_session(self, session_id: str) -> bool:
        try:
            os.remove(self._file(session_id))
        except FileNotFoundError:
            pass
        return True


@dataclass(frozen=True)
class ApiContext:
    """App-level credentials and environment for one service instance.

    ``host_name`` names the environment initiating the connection. It is not
    the shop hostname held by :class:`ShopifySession`.
    """

    api_key: str
    api_secret_key: str = field(repr=False)
    host_name: str
    session_storage: FileSessionStorage
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    api_version: str = SHOPIFY_API_VERSION
    is_embedded_app: bool = False
    logger: logging.Logger = field(default=logger, repr=False, compare=False)
