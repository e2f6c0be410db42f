"""
Customer purchase order decoding.

Supplier shipment rows carry the store order reference as a composite
customer PO, e.g. "8636-104233", "TSA-8636-104233" or "TSA-8636-104233-S2".
"""

import re
from dataclasses import dataclass
from typing import Iterable

from shiprecon.errors import InvalidPOFormatError, InvalidStoreIdError

# Multi-shipment sequence marker: "-S1", "-S12" or "-S#"
SEQUENCE_SUFFIX_RE = re.compile(r"-S(\d+|#)$")
STORE_ID_RE = re.compile(r"^\d+$")


@dataclass(frozen=True)
class DecodedPO:
    """Store and order identified by a customer PO."""

    store_id: str
    order_id: str
    cleaned_po: str


@dataclass(frozen=True)
class SkipOrder:
    """Customer PO intentionally not processed (B2B order)."""

    cleaned_po: str
    reason: str


def strip_sequence_suffix(customer_po: str) -> str:
    """Remove a trailing multi-shipment marker ("-S<digits>" or "-S#")."""
    return SEQUENCE_SUFFIX_RE.sub("", customer_po)


def decode_customer_po(
    customer_po: str, reserved_order_numbers: Iterable[str] = ()
) -> DecodedPO | SkipOrder:
    """
    Decode a composite customer PO into store and order IDs.

    A PO with two segments is "<store>-<order>"; with three or more the
    leading store abbreviation is discarded: "<abbr>-<store>-<order>".
    Any PO containing a reserved order number is a B2B order and is
    returned as SkipOrder rather than raising.

    Args:
        customer_po: Raw customer PO from the shipment record
        reserved_order_numbers: PO fragments identifying B2B orders

    Returns:
        DecodedPO, or SkipOrder for B2B orders

    Raises:
        InvalidPOFormatError: If the PO has fewer than two segments
        InvalidStoreIdError: If the store segment is not all digits

    Examples:
        >>> decode_customer_po("ABC-7400-12345-S2")
        DecodedPO(store_id='7400', order_id='12345', cleaned_po='ABC-7400-12345')
    """
    cleaned = strip_sequence_suffix(customer_po)

    for number in reserved_order_numbers:
        if number and number in cleaned:
            return SkipOrder(cleaned_po=cleaned, reason=f"B2B Order: {cleaned}")

    segments = cleaned.split("-")
    if len(segments) == 2:
        store_id, order_id = segments
    elif len(segments) >= 3:
        store_id, order_id = segments[1], segments[2]
    else:
        raise InvalidPOFormatError(cleaned)

    if not STORE_ID_RE.match(store_id):
        raise InvalidStoreIdError(store_id)

    return DecodedPO(store_id=store_id, order_id=order_id, cleaned_po=cleaned)
