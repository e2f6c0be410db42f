"""Tests for order line matching."""

from decimal import Decimal

import pytest

from shiprecon.core.matcher import match_line_items, round_quantity
from shiprecon.core.sku import generate_sku_variants
from shiprecon.errors import InvalidQuantityError, MatchError, NoMatchingSkuError
from shiprecon.models.store import OrderLineItem


class TestRoundQuantity:
    @pytest.mark.parametrize(
        "quantity,expected",
        [
            ("2.0000", 2),
            (Decimal("2.4"), 2),
            (2.5, 3),
            ("0.5", 1),
            (0, 0),
            (7, 7),
        ],
    )
    def test_rounds_half_up(self, quantity, expected):
        assert round_quantity(quantity) == expected

    @pytest.mark.parametrize("quantity", ["1e30", "NaN", "Infinity", "two"])
    def test_unusable_quantity_raises_input_error(self, quantity):
        with pytest.raises(InvalidQuantityError) as exc_info:
            round_quantity(quantity)

        assert exc_info.value.message == f"Invalid item_qty: {quantity}"


class TestMatchLineItems:
    def test_single_matching_line_item(self):
        variants = generate_sku_variants("TS1042 BLK")
        items = [
            OrderLineItem(id=501, final_sku="TS1042-BLK"),
            OrderLineItem(id=502, final_sku="TS2200-RED"),
        ]

        matched = match_line_items(variants, items, Decimal("2.0000"))

        assert len(matched) == 1
        assert matched[0].id == 501
        assert matched[0].quantity == 2

    def test_all_matching_items_get_shipment_quantity(self):
        variants = generate_sku_variants("TS1042 BLK")
        items = [
            OrderLineItem(id=1, final_sku="TS1042BLK"),
            OrderLineItem(id=2, final_sku="TS9999"),
            OrderLineItem(id=3, final_sku="TS1042 BLK"),
        ]

        matched = match_line_items(variants, items, "3")

        assert [line.id for line in matched] == [1, 3]
        assert all(line.quantity == 3 for line in matched)

    def test_duplicate_line_item_ids_submitted_once(self):
        variants = generate_sku_variants("TS1042")
        items = [
            OrderLineItem(id=7, final_sku="TS1042"),
            OrderLineItem(id=7, final_sku="TS1042"),
        ]

        matched = match_line_items(variants, items, 1)

        assert len(matched) == 1

    def test_matching_is_case_sensitive(self):
        variants = generate_sku_variants("TS1042 blk")
        items = [OrderLineItem(id=1, final_sku="TS1042-BLK")]

        with pytest.raises(NoMatchingSkuError):
            match_line_items(variants, items, 1)

    def test_no_match_lists_all_variants(self):
        variants = generate_sku_variants("TS1042 BLK")
        items = [OrderLineItem(id=1, final_sku="TS2200")]

        with pytest.raises(MatchError) as exc_info:
            match_line_items(variants, items, 1)

        message = exc_info.value.message
        assert message.startswith("No matching SKU found")
        assert "TS1042 BLK | TS1042-BLK | TS1042BLK" in message

    def test_empty_order(self):
        with pytest.raises(NoMatchingSkuError):
            match_line_items({"TS1"}, [], 1)
