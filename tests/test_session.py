import dataclasses

import pytest

from shopify_rest_core.session import FileSessionStorage, ShopifySession
from shopify_rest_core.settings import Settings, parse_env


def test_session_is_immutable():
    session = ShopifySession("test.myshopify.com", "token")
    with pytest.raises(dataclasses.FrozenInstanceError):
        session.access_token = "other"


def test_session_repr_hides_token():
    assert "token" not in repr(ShopifySession("test.myshopify.com", "secret-token"))


def test_file_session_storage_round_trip(tmp_path):
    storage = FileSessionStorage(str(tmp_path / "sessions"))
    session = ShopifySession("test.myshopify.com", "token")
    assert storage.load_session("NA") is None
    assert storage.store_session(session)
    assert storage.load_session("NA") == session
    assert storage.delete_session("NA")
    assert storage.load_session("NA") is None


def test_parse_env(monkeypatch):
    monkeypatch.setenv("SHOP_TOKEN", "abc")
    assert parse_env("$SHOP_TOKEN") == "abc"
    assert parse_env("${SHOP_TOKEN}") == "abc"
    assert parse_env("literal") == "literal"
    assert parse_env("") is None
    assert parse_env(None) is None
    monkeypatch.delenv("SHOP_TOKEN")
    assert parse_env("$SHOP_TOKEN") is None


def test_settings_from_env_flags(monkeypatch):
    monkeypatch.setenv("SHOPIFY_SYNC_PRODUCT_METAFIELDS", "false")
    monkeypatch.delenv("SHOPIFY_SYNC_VARIANT_METAFIELDS", raising=False)
    monkeypatch.setenv("SHOPIFY_STORAGE_PATH", "/tmp/shopify")
    settings = Settings.from_env()
    assert settings.sync_product_metafields is False
    assert settings.sync_variant_metafields is True
    assert settings.storage_path == "/tmp/shopify"
    assert settings.access_token == "$SHOPIFY_ACCESS_TOKEN"
