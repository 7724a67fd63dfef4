"""Pytest configuration and fixtures"""
import json
import os
from typing import List

import pytest

# Set test environment variables
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_PUBLISHABLE_KEY", "pk_test_dummy")
os.environ.setdefault("FRONTEND_URL", "https://shop.test")
os.environ.setdefault("BACKEND_URL", "https://api.shop.test")

from storefront.cart import CartStore, MemoryStorage  # noqa: E402
from storefront.catalog import Catalog  # noqa: E402


class RecordingNotifier:
    """Collects user-facing messages instead of showing them."""

    def __init__(self):
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


def stored_items(storage: MemoryStorage) -> list:
    """Decode what the store actually persisted."""
    return json.loads(storage.data) if storage.data else []


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def store(storage, catalog, notifier):
    return CartStore(storage, catalog, notifier)


@pytest.fixture
def sample_cart():
    """Cart blob as the shop page persists it"""
    return [
        {"id": "custom-shirt", "name": "Custom Shirt", "price": 20, "quantity": 2},
        {"id": "custom-tote", "name": "Custom Tote Bag", "price": 15, "quantity": 1},
    ]


@pytest.fixture
def seeded_store(storage, store, sample_cart):
    storage.set(json.dumps(sample_cart).encode("utf-8"))
    return store
