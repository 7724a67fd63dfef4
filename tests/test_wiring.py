"""Tests for storefront assembly"""
import httpx
import pytest

from storefront.cart import MemoryStorage, RedisStorage
from storefront.config import Settings
from storefront.wiring import build_storefront, default_storage


class _Redirect:
    def __init__(self, publishable_key):
        self.publishable_key = publishable_key
        self.session_ids = []

    async def redirect_to_checkout(self, session_id):
        self.session_ids.append(session_id)
        return None


class _Buttons:
    def __init__(self):
        self.renders = 0

    def render(self, mount, callbacks):
        self.renders += 1
        return self

    def close(self):
        pass


def _settings(**overrides):
    values = {
        "stripe_publishable_key": "pk_test_1",
        "backend_url": "https://api.shop.test/",
        "cart_storage_key": "shop-cart",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.mark.asyncio
async def test_card_checkout_end_to_end(storage, notifier):
    calls = []

    def _handle(request):
        calls.append(request)
        return httpx.Response(200, json={"id": "cs_wired"})

    buttons = _Buttons()
    storefront = build_storefront(
        _settings(),
        storage=storage,
        notifier=notifier,
        redirect_factory=_Redirect,
        wallet_buttons=buttons,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(_handle)),
    )

    assert storefront.card.control.disabled is True
    storefront.store.add_item("custom-shirt")

    assert storefront.card.control.disabled is False
    assert storefront.wallet.is_rendered
    assert buttons.renders == 1
    assert storefront.card.redirect.publishable_key == "pk_test_1"

    assert await storefront.card.start() is True
    assert storefront.card.redirect.session_ids == ["cs_wired"]
    assert str(calls[0].url) == "https://api.shop.test/create-checkout-session"
    assert notifier.messages == ["Custom Shirt added to cart!"]

    await storefront.aclose()
    storefront.store.add_item("custom-tote")
    assert buttons.renders == 1


@pytest.mark.parametrize("key", ["", "YOUR_STRIPE_PUBLISHABLE_KEY"])
def test_placeholder_key_leaves_card_unavailable(storage, notifier, key):
    factory_calls = []

    def _factory(publishable_key):
        factory_calls.append(publishable_key)
        return _Redirect(publishable_key)

    storefront = build_storefront(
        _settings(stripe_publishable_key=key),
        storage=storage,
        notifier=notifier,
        redirect_factory=_factory,
    )
    storefront.store.add_item("custom-shirt")

    assert factory_calls == []
    assert storefront.card.redirect is None
    assert storefront.card.control.disabled is True
    assert storefront.card.control.label == "Card checkout unavailable"
    assert storefront.wallet.status_message == "PayPal checkout is unavailable right now."


def test_requester_uses_backend_url(storage):
    storefront = build_storefront(_settings(), storage=storage)

    assert storefront.requester.backend_url == "https://api.shop.test"


def test_default_storage_falls_back_to_memory(monkeypatch):
    monkeypatch.setattr("storefront.cart.storage.UPSTASH_REDIS_REST_URL", "")
    monkeypatch.setattr("storefront.cart.storage.UPSTASH_REDIS_REST_TOKEN", "")

    assert isinstance(default_storage(_settings()), MemoryStorage)


def test_default_storage_uses_redis_key(monkeypatch):
    monkeypatch.setattr("storefront.cart.storage.UPSTASH_REDIS_REST_URL", "https://redis.test")
    monkeypatch.setattr("storefront.cart.storage.UPSTASH_REDIS_REST_TOKEN", "token")

    storage = default_storage(_settings())

    assert isinstance(storage, RedisStorage)
    assert storage.key == "shop-cart"
