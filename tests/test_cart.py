"""
Tests for the cart line item model, normalizer and view projection
"""
from decimal import Decimal

import pytest

from storefront.cart import (
    CartLineItem,
    IdentityStrategy,
    identity_key,
    normalize_item,
    slugify,
    summarize_cart,
)


class TestSlugify:
    def test_collapses_runs_and_trims(self):
        assert slugify("  Custom  Shirt!! ") == "custom-shirt"
        assert slugify("--Vinyl/Sticker__Pack--") == "vinyl-sticker-pack"

    def test_empty_for_symbols_only(self):
        assert slugify("!!!") == ""
        assert slugify(None) == ""


class TestNormalizeItem:
    """Tests for record normalization."""

    @pytest.mark.parametrize("raw", [None, "shirt", 42, ["custom-shirt"], {}, {"price": 10}])
    def test_rejects_unusable_records(self, raw):
        assert normalize_item(raw) is None

    def test_rejects_record_without_name_or_id_in_composite_mode(self):
        assert normalize_item({"price": 5, "quantity": 2}, IdentityStrategy.COMPOSITE) is None

    def test_derives_id_from_name(self):
        item = normalize_item({"name": " Custom Hoodie ", "price": "35", "quantity": "2"})

        assert item.id == "custom-hoodie"
        assert item.name == "Custom Hoodie"
        assert item.price == Decimal("35")
        assert item.quantity == 2

    def test_rejects_when_derived_id_is_empty(self):
        assert normalize_item({"name": "???", "price": 1}) is None

    def test_id_only_record_needs_name_in_id_mode(self):
        assert normalize_item({"id": "custom-shirt", "price": 20}) is None

    def test_composite_mode_defaults_name(self):
        item = normalize_item({"id": "custom-shirt", "price": 20}, IdentityStrategy.COMPOSITE)

        assert item.name == "Item"
        assert item.id == "custom-shirt"

    def test_composite_mode_does_not_derive_id(self):
        item = normalize_item({"name": "Mug", "price": 9.5}, IdentityStrategy.COMPOSITE)

        assert item.id is None
        assert identity_key(item) == "Mug::9.5"

    @pytest.mark.parametrize("price", ["abc", None, "NaN", float("inf"), -3, {"amount": 1}])
    def test_bad_price_becomes_zero(self, price):
        item = normalize_item({"name": "Mug", "price": price})

        assert item is not None
        assert item.price == 0

    @pytest.mark.parametrize("quantity,expected", [
        (None, 1), ("x", 1), (0, 1), (-4, 1), (float("nan"), 1), (2.9, 2), ("3", 3),
    ])
    def test_quantity_coercion(self, quantity, expected):
        assert normalize_item({"name": "Mug", "quantity": quantity}).quantity == expected

    def test_normalization_is_a_fixed_point(self):
        raws = [
            {"name": "  Custom Shirt ", "price": "20.50", "quantity": 2.7},
            {"id": "tote", "name": "Tote", "price": 0.1, "quantity": 1},
            {"name": "Apron", "price": "bad", "quantity": -1},
        ]
        for raw in raws:
            once = normalize_item(raw)
            assert normalize_item(once) == once
            assert normalize_item(once.to_dict()) == once


class TestCartLineItem:
    def test_to_dict_omits_missing_id(self):
        item = CartLineItem(name="Mug", price=Decimal("9.5"), quantity=2)

        assert item.to_dict() == {"name": "Mug", "price": 9.5, "quantity": 2}

    def test_identity_key_prefers_id(self):
        item = CartLineItem(id="mug", name="Mug", price=Decimal("9.50"), quantity=1)

        assert item.key == "mug"

    def test_composite_key_ignores_trailing_zeros(self):
        a = CartLineItem(name="Mug", price=Decimal("20"), quantity=1)
        b = CartLineItem(name="Mug", price=Decimal("20.00"), quantity=1)

        assert a.key == b.key == "Mug::20"


class TestCartSummary:
    """Tests for the view projection."""

    def test_empty_cart(self):
        summary = summarize_cart([])

        assert summary.is_empty
        assert summary.item_count == 0
        assert summary.total_amount == 0
        assert summary.formatted_total == "0.00"
        assert summary.count_label == "0 items in cart"

    def test_counts_and_totals(self):
        items = [
            CartLineItem(id="a", name="A", price=Decimal("20"), quantity=2),
            CartLineItem(id="b", name="B", price=Decimal("15.25"), quantity=1),
        ]

        summary = summarize_cart(items)

        assert summary.item_count == 3
        assert summary.total_amount == Decimal("55.25")
        assert summary.formatted_total == "55.25"

    def test_single_item_label(self):
        summary = summarize_cart([CartLineItem(id="a", name="A", price=Decimal("1"), quantity=1)])

        assert summary.count_label == "1 item in cart"

    def test_projection_is_idempotent(self):
        items = [CartLineItem(id="a", name="A", price=Decimal("3.10"), quantity=3)]

        assert summarize_cart(items) == summarize_cart(items)
        assert summarize_cart(items).to_dict() == summarize_cart(items).to_dict()
        assert items[0].quantity == 3

    def test_to_dict_display_values(self):
        items = [CartLineItem(id="a", name="A", price=Decimal("1200"), quantity=2)]

        data = summarize_cart(items).to_dict()

        assert data["items"][0]["unit_price_display"] == "$1,200.00"
        assert data["items"][0]["line_total"] == 2400.0
        assert data["total_display"] == "2400.00"
