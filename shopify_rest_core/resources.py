"""Typed wrappers for Admin REST resources."""
from __future__ import annotations

from typing import Any, ClassVar, Iterator, Mapping, Optional

from .client import RestResponse
from .session import ShopifySession


class Resource(Mapping[str, Any]):
    """A decoded JSON object tied to the session it was fetched with.

    Subclasses describe their own collection: the endpoint to page through,
    the key holding one page of items, and the page size ceiling. The
    paginator only talks to resource kinds through these class members.
    """

    collection_path: ClassVar[str] = ""
    collection_key: ClassVar[str] = ""
    max_page_size: ClassVar[int] = 250

    def __init__(self, session: Optional[ShopifySession], data: Mapping[str, Any]) -> None:
        self.session = session
        self.data = dict(data)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Resource):
            return type(self) is type(other) and self.data == other.data
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    @property
    def id(self) -> Any:
        return self.data.get("id")

    @classmethod
    def from_page(
        cls, session: Optional[ShopifySession], response: RestResponse
    ) -> list["Resource"]:
        """Decode one page of this resource kind."""
        body = response.body or {}
        return [cls(session, item) for item in body.get(cls.collection_key) or []]

    @classmethod
    def next_page_query(cls, response: RestResponse) -> Optional[dict[str, str]]:
        """Query for the following page, or ``None`` on the last page."""
        return response.next_page_query or None


class Product(Resource):
    collection_path = "products"
    collection_key = "products"

    @property
    def variants(self) -> list[dict[str, Any]]:
        return self.data.get("variants") or []


class Variant(Resource):
    collection_path = "variants"
    collection_key = "variants"

    @property
    def product_id(self) -> Optional[int]:
        return self.data.get("product_id")


class Metafield(Resource):
    collection_path = "metafields"
    collection_key = "metafields"
