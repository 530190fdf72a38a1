"""Rate-limit aware request execution."""
from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Union

from .client import RestClient, RestResponse
from .errors import ShopifyApiError, ShopifyRateLimitError

logger = logging.getLogger(__name__)

MAX_RETRIES = 5
REQUEST_PAUSE = 0.5
DEFAULT_RETRY_AFTER = 1


@dataclass(frozen=True)
class Success:
    response: RestResponse


@dataclass(frozen=True)
class RateLimited:
    retry_after: int
    error: ShopifyRateLimitError


@dataclass(frozen=True)
class Fatal:
    error: ShopifyApiError


Outcome = Union[Success, RateLimited, Fatal]


def _retry_after(response: RestResponse) -> int:
    raw = response.headers.get("Retry-After")
    try:
        seconds = float(raw)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER
    if not math.isfinite(seconds) or seconds < 0:
        return DEFAULT_RETRY_AFTER
    return int(seconds)


def classify(response: RestResponse) -> Outcome:
    """Map a raw response onto the outcome the retry loop acts on."""
    if response.status_code == 429:
        retry_after = _retry_after(response)
        error = ShopifyRateLimitError(
            response.text or "Too Many Requests",
            retry_after=retry_after,
            detail=response.body,
        )
        return RateLimited(retry_after, error)
    if response.status_code >= 400:
        detail = response.body if response.body is not None else response.text
        return Fatal(ShopifyApiError(response.text, response.status_code, detail))
    if response.body is None:
        return Fatal(ShopifyApiError(response.text, response.status_code))
    if "errors" in response.body:
        errors = response.body["errors"]
        return Fatal(ShopifyApiError("API Error: " + json.dumps(errors), detail=errors))
    return Success(response)


class RequestExecutor:
    """Runs GETs against a :class:`RestClient`, absorbing 429 throttling.

    Every successful call sleeps :data:`REQUEST_PAUSE` seconds before
    returning. A 429 is retried after the server's ``Retry-After`` delay, at
    most :data:`MAX_RETRIES` times. Any other failure is raised at once.

    This blocks the calling thread and is meant for sequential use.
    """

    def __init__(
        self,
        client: RestClient,
        *,
        max_retries: int = MAX_RETRIES,
        pause: float = REQUEST_PAUSE,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.client = client
        self.max_retries = max_retries
        self.pause = pause
        self._sleep = sleep

    def sleep(self, seconds: float) -> None:
        (self._sleep or time.sleep)(seconds)

    def attempt(self, path: str, query: Mapping[str, Any] | None = None) -> Outcome:
        """Issue a single GET and classify the result."""
        try:
            response = self.client.get(path, query)
        except ShopifyApiError as exc:
            return Fatal(exc)
        return classify(response)

    def execute(self, path: str, query: Mapping[str, Any] | None = None) -> RestResponse:
        """Perform one logical GET, retrying while throttled.

        Raises:
            ShopifyRateLimitError: If still throttled after the retry ceiling
            ShopifyApiError: For any other HTTP error or ``errors`` payload
        """
        retries = 0
        while True:
            outcome = self.attempt(path, query)
            if isinstance(outcome, Success):
                self.sleep(self.pause)
                return outcome.response
            if isinstance(outcome, Fatal):
                raise outcome.error
            if retries >= self.max_retries:
                logger.error("Giving up on %s after %d retries", path, retries)
                raise outcome.error
            logger.warning(
                "Rate limited on %s, retrying in %ds (retry %d/%d)",
                path,
                outcome.retry_after,
                retries + 1,
                self.max_retries,
            )
            self.sleep(outcome.retry_after)
            retries += 1

    def get(self, path: str, query: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return the decoded body of one logical GET."""
        return self.execute(path, query).body  # type: ignore[return-value]
