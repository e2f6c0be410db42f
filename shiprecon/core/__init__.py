"""
Shipment reconciliation pipeline.

Pure decoding, SKU matching and payload building, plus the batch
processor that drives them against a store order service.
"""

from shiprecon.core.matcher import match_line_items, round_quantity
from shiprecon.core.payload import (
    build_shipment_note,
    build_update_payload,
    resolve_shipping_method,
)
from shiprecon.core.po_decoder import (
    DecodedPO,
    SkipOrder,
    decode_customer_po,
    strip_sequence_suffix,
)
from shiprecon.core.processor import DistinctMessages, ShipmentProcessor
from shiprecon.core.sku import generate_sku_variants

__all__ = [
    "DecodedPO",
    "DistinctMessages",
    "ShipmentProcessor",
    "SkipOrder",
    "build_shipment_note",
    "build_update_payload",
    "decode_customer_po",
    "generate_sku_variants",
    "match_line_items",
    "resolve_shipping_method",
    "round_quantity",
    "strip_sequence_suffix",
]
