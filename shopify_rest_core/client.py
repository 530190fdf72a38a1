"""REST client bound to a single shop session."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, urlsplit

from requests.structures import CaseInsensitiveDict
from requests.utils import parse_header_links

from .errors import ShopifyApiError
from .session import SHOPIFY_API_VERSION
from .transport import RequestsTransport, Transport


def flatten_query(query: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into Shopify's ``key[sub]=value`` form.

    Lists are comma-joined, as Shopify expects for ``ids`` and ``fields``.

    >>> flatten_query({"metafield": {"owner_id": 1}, "ids": [1, 2]})
    {'metafield[owner_id]': 1, 'ids': '1,2'}
    """
    flat: dict[str, Any] = {}
    for key, value in query.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_query(value, name))
        elif isinstance(value, (list, tuple)):
            flat[name] = ",".join(str(item) for item in value)
        elif value is not None:
            flat[name] = value
    return flat


def _page_queries(link_header: Optional[str]) -> dict[str, dict[str, str]]:
    queries: dict[str, dict[str, str]] = {}
    if not link_header:
        return queries
    for link in parse_header_links(link_header):
        rel = link.get("rel")
        url = link.get("url")
        if rel and url:
            queries[rel] = dict(parse_qsl(urlsplit(url).query))
    return queries


@dataclass
class RestResponse:
    """A decoded response plus the cursors Shopify sent in its ``Link`` header.

    ``body`` is ``None`` when the payload was not valid JSON.
    """

    status_code: int
    body: Optional[dict[str, Any]]
    headers: CaseInsensitiveDict
    text: str = ""
    next_page_query: Optional[dict[str, str]] = None


@dataclass
class RestClient:
    """Transport handle for the Admin REST API of one shop.

    Attributes:
        shop: The shop hostname (scheme optional)
        access_token: Admin API access token sent as ``X-Shopify-Access-Token``
        api_version: REST API version segment of the URL
        transport: Transport implementation (defaults to RequestsTransport)
        timeout: Per-request timeout in seconds
    """

    shop: str
    access_token: str = field(repr=False)
    api_version: str = SHOPIFY_API_VERSION
    transport: Transport = field(default_factory=RequestsTransport)
    timeout: float = 30
    base_url: str = field(init=False)

    def __post_init__(self) -> None:
        shop = self.shop.strip().rstrip("/")
        if "://" not in shop:
            shop = f"https://{shop}"
        self.base_url = f"{shop}/admin/api/{self.api_version}"

    def url_for(self, path: str) -> str:
        """Resolve `path` against the shop's versioned REST endpoint.

        Absolute URLs are accepted only when they point at the bound shop.

        Raises:
            ShopifyApiError: If an absolute URL names another host
        """
        if path.startswith(("http://", "https://")):
            if urlsplit(path).netloc.lower() != urlsplit(self.base_url).netloc.lower():
                raise ShopifyApiError(f"Refusing to send credentials to {urlsplit(path).netloc}")
            return path
        path = path.strip("/")
        if not path.endswith(".json"):
            path = f"{path}.json"
        return f"{self.base_url}/{path}"

    def get(self, path: str, query: Mapping[str, Any] | None = None) -> RestResponse:
        """Issue one GET and decode the result without interpreting its status.

        Raises:
            ShopifyApiError: If the transport itself fails, or `path` is an
                absolute URL on another host
        """
        headers = {
            "X-Shopify-Access-Token": self.access_token,
            "Accept": "application/json",
        }
        url = self.url_for(path)
        try:
            resp = self.transport.get(
                url,
                headers=headers,
                params=flatten_query(query or {}),
                timeout=self.timeout,
            )
        except Exception as exc:  # pragma: no cover - transport errors
            raise ShopifyApiError(str(exc)) from exc

        status = getattr(resp, "status_code", None)
        if status is None:
            raise ShopifyApiError("Transport response missing status_code")
        resp_headers = CaseInsensitiveDict(getattr(resp, "headers", None) or {})
        try:
            body = resp.json()
        except ValueError:
            body = None
        if body is not None and not isinstance(body, dict):
            body = None
        links = _page_queries(resp_headers.get("Link"))
        return RestResponse(
            status_code=status,
            body=body,
            headers=resp_headers,
            text=getattr(resp, "text", "") or "",
            next_page_query=links.get("next"),
        )
