import pytest

from conftest import DummyResponse, ListTransport
from shopify_rest_core.client import RestClient, flatten_query
from shopify_rest_core.errors import ShopifyApiError


def test_flatten_nested_query():
    flat = flatten_query({
        "metafield": {"owner_id": 5, "owner_resource": "products"},
        "ids": [1, 2],
        "skip": None,
    })
    assert flat == {
        "metafield[owner_id]": 5,
        "metafield[owner_resource]": "products",
        "ids": "1,2",
    }


def test_url_building_normalizes_shop_and_path():
    client = RestClient(" https://test.myshopify.com/ ", "token", transport=ListTransport([]))
    assert client.base_url == "https://test.myshopify.com/admin/api/2023-10"
    assert client.url_for("/variants") == client.base_url + "/variants.json"
    assert client.url_for("products/1.json") == client.base_url + "/products/1.json"
    assert client.url_for(client.base_url + "/shop.json") == client.base_url + "/shop.json"


def test_absolute_url_on_another_host_is_refused():
    transport = ListTransport([DummyResponse(200, {})])
    client = RestClient("test.myshopify.com", "token", transport=transport)
    with pytest.raises(ShopifyApiError):
        client.get("https://evil.example/x.json")
    assert transport.calls == []


def test_response_exposes_cursors_and_headers():
    link = (
        '<https://test.myshopify.com/admin/api/2023-10/products.json?limit=250&page_info=p>; rel="previous", '
        '<https://test.myshopify.com/admin/api/2023-10/products.json?limit=250&page_info=n>; rel="next"'
    )
    transport = ListTransport([DummyResponse(200, {"products": []}, headers={"link": link, "retry-after": "2"})])
    client = RestClient("test.myshopify.com", "token", transport=transport)
    resp = client.get("products")
    assert resp.next_page_query == {"limit": "250", "page_info": "n"}
    assert resp.headers["Retry-After"] == "2"
    assert resp.body == {"products": []}
