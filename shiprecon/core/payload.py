"""Shipment update payload building."""

from datetime import date, datetime, timezone
from typing import Mapping, Optional

from shiprecon.models.shipment import MatchedLine, ShipmentRecord, ShipmentUpdatePayload


def resolve_shipping_method(
    description: Optional[str], shipping_methods: Mapping[str, str]
) -> Optional[str]:
    """
    Map a carrier service description to the store's shipping method name.

    Unmapped descriptions are passed through unchanged.
    """
    if description is None:
        return None
    return shipping_methods.get(description) or description


def build_shipment_note(template: str, today: Optional[date] = None) -> str:
    """Render the shipment audit note for the given (default: current UTC) date."""
    today = today or datetime.now(timezone.utc).date()
    return template.format(date=today.isoformat())


def build_update_payload(
    shipment: ShipmentRecord,
    matched_lines: list[MatchedLine],
    shipping_methods: Mapping[str, str],
    note_template: str,
    today: Optional[date] = None,
) -> ShipmentUpdatePayload:
    """
    Build the bundled shipment update for one shipment record.

    All matched line items go into a single payload so the store receives
    exactly one update call per shipment record.
    """
    return ShipmentUpdatePayload(
        tracking_number=shipment.tracking_number,
        send_shipping_confirmation=True,
        ship_date=shipment.shipment_date,
        note=build_shipment_note(note_template, today),
        shipping_method=resolve_shipping_method(
            shipment.ship_via_description, shipping_methods
        ),
        line_items=matched_lines,
    )
