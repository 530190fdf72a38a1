"""Transport abstractions."""
from __future__ import annotations

from abc import ABC, abstractmethod
import os
from typing import Any, Mapping, TYPE_CHECKING

if TYPE_CHECKING:
    import requests


class Transport(ABC):
    """Abstract transport interface."""

    @abstractmethod
    def get(
        self,
        url: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any],
        timeout: float,
    ) -> "requests.Response":  # noqa: D401
        """Send a GET request."""
        raise NotImplementedError


class RequestsTransport(Transport):
    """Transport using the requests library.

    Connection and read failures are retried at the socket level. HTTP
    statuses are never retried here, so 429 handling stays with
    :class:`~shopify_rest_core.executor.RequestExecutor`.

    Args:
        retries: Total retry attempts for connection/read failures. Defaults
            to the ``SHOPIFY_REST_RETRIES`` env var or ``3``.
        backoff: Exponential backoff factor between retries. Defaults to the
            ``SHOPIFY_REST_BACKOFF`` env var or ``0.5`` seconds.
        jitter: Random jitter added to retry backoff. Defaults to the
            ``SHOPIFY_REST_JITTER`` env var or ``0.1`` seconds.
    """

    def __init__(
        self,
        *,
        retries: int | None = None,
        backoff: float | None = None,
        jitter: float | None = None,
    ) -> None:
        import requests
        from requests.adapters import HTTPAdapter
        from urllib3.util import Retry

        retry_total = retries if retries is not None else int(
            os.getenv("SHOPIFY_REST_RETRIES", "3")
        )
        backoff_factor = backoff if backoff is not None else float(
            os.getenv("SHOPIFY_REST_BACKOFF", "0.5")
        )
        backoff_jitter = jitter if jitter is not None else float(
            os.getenv("SHOPIFY_REST_JITTER", "0.1")
        )
        retry = Retry(
            total=retry_total,
            connect=retry_total,
            read=retry_total,
            status=0,
            backoff_factor=backoff_factor,
            backoff_jitter=backoff_jitter,
            allowed_methods=["GET"],
            raise_on_status=False,
            respect_retry_after_header=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session = requests.Session()
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        session.headers.setdefault("Accept", "application/json")
        self._session = session

    def get(
        self,
        url: str,
        headers: Mapping[str, str],
        params: Mapping[str, Any],
        timeout: float,
    ) -> "requests.Response":
        return self._session.get(url, headers=headers, params=params, timeout=timeout)
