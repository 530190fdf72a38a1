"""Pagination helpers."""
from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, TypeVar

from .executor import RequestExecutor
from .resources import Resource
from .session import ShopifySession

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)


def iter_resources(
    executor: RequestExecutor,
    resource_type: type[R],
    params: Mapping[str, Any] | None = None,
    session: Optional[ShopifySession] = None,
) -> Iterable[R]:
    """
    Yield every resource of `resource_type`, following the `Link` header
    cursor until Shopify stops sending a `rel="next"` page.

    The page size is forced to `resource_type.max_page_size` on every request.
    Once a cursor exists it replaces the query entirely, since Shopify embeds the
    original filters in `page_info` and rejects them alongside it.

    There is no cap on the number of pages: a server that keeps returning a
    next cursor keeps this generator running.

    Args:
        executor: Executor used for every page, so a 429 mid-way is retried
            without restarting the collection.
        resource_type: A :class:`Resource` subclass naming its endpoint.
        params: Filters for the first page. May be None.
        session: Session attached to each yielded resource.

    Yields:
        Resource: Each item, pages in fetch order, items in server order.

    Example:
        >>> for product in iter_resources(executor, Product, {"status": "active"}):
        ...     print(product["title"])
    """
    query: dict[str, Any] = dict(params or {})
    cursor: Optional[dict[str, str]] = None
    page = 0
    while True:
        page += 1
        query["limit"] = resource_type.max_page_size
        response = executor.execute(resource_type.collection_path, query)
        items = resource_type.from_page(session, response)
        logger.debug(
            "Fetched page %d of %s (%d items)", page, resource_type.collection_path, len(items)
        )
        for item in items:
            yield item  # type: ignore[misc]
        cursor = resource_type.next_page_query(response)
        if not cursor:
            break
        query = dict(cursor)


def fetch_all(
    executor: RequestExecutor,
    resource_type: type[R],
    params: Mapping[str, Any] | None = None,
    session: Optional[ShopifySession] = None,
) -> list[R]:
    """Collect :func:`iter_resources` into a list."""
    return list(iter_resources(executor, resource_type, params, session))
