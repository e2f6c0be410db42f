"""Order line matching for shipment records."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from shiprecon.core.sku import generate_sku_variants
from shiprecon.errors import InvalidQuantityError, NoMatchingSkuError
from shiprecon.models.shipment import MatchedLine
from shiprecon.models.store import OrderLineItem


def round_quantity(quantity: Decimal | float | int | str) -> int:
    """
    Round a shipped quantity half-up to a whole number of units.

    Raises:
        InvalidQuantityError: If the quantity is not a finite number that
            fits the decimal context
    """
    try:
        value = Decimal(str(quantity))
        rounded = value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise InvalidQuantityError(quantity) from e
    if not rounded.is_finite():
        raise InvalidQuantityError(quantity)
    return int(rounded)


def match_line_items(
    shipment_variants: set[str],
    line_items: Iterable[OrderLineItem],
    item_qty: Decimal | float | int | str,
    max_parts: int = 8,
) -> list[MatchedLine]:
    """
    Find the order line items fulfilled by a shipment.

    A line item matches when the variant set of its final SKU shares at
    least one rendering with the shipment's variant set. Every matched
    line item gets the same shipped quantity.

    Args:
        shipment_variants: Variants of the store-prefixed shipped SKU
        line_items: Line items of the store order
        item_qty: Shipped quantity from the shipment record
        max_parts: Part count cap passed to the variant generator

    Returns:
        Matched lines in order, at most one per line item ID

    Raises:
        NoMatchingSkuError: If no line item matches
    """
    quantity = round_quantity(item_qty)
    matched: list[MatchedLine] = []
    seen_ids: set[str] = set()

    for item in line_items:
        if str(item.id) in seen_ids:
            continue
        item_variants = generate_sku_variants(item.final_sku, max_parts=max_parts)
        if shipment_variants & item_variants:
            matched.append(MatchedLine(id=item.id, quantity=quantity))
            seen_ids.add(str(item.id))

    if not matched:
        raise NoMatchingSkuError(sorted(shipment_variants))

    return matched
