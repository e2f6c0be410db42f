"""
Shipment batch processing.

Runs each shipment record through the reconciliation pipeline:

    decode PO -> store lookup -> order lookup -> SKU matching
        -> bundled payload -> order update

Records are processed strictly one after another. A failure in one
record is recorded in its result and never stops the batch.
"""

import logging
from datetime import date
from typing import Any, Callable, Iterable, Iterator, Optional

from shiprecon.clients.order_service import OrderService
from shiprecon.config import ReconcilerSettings, StoreRegistry
from shiprecon.core.matcher import match_line_items
from shiprecon.core.payload import build_update_payload
from shiprecon.core.po_decoder import SkipOrder, decode_customer_po
from shiprecon.core.sku import generate_sku_variants
from shiprecon.errors import InvalidShipmentRecordError, ReconciliationError
from shiprecon.models.shipment import (
    BatchResult,
    ProcessingResult,
    ProcessingStatus,
    ShipmentRecord,
)

logger = logging.getLogger(__name__)

DUPLICATE_RECORD_DETAIL = "Duplicate shipment record"


class DistinctMessages:
    """Insertion-ordered set of error message texts (compared by exact text)."""

    def __init__(self):
        self._messages: dict[str, None] = {}

    def add(self, message: str) -> None:
        self._messages.setdefault(message, None)

    def __contains__(self, message: str) -> bool:
        return message in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def joined(self, separator: str = "\n") -> str:
        return separator.join(self._messages)


class ShipmentProcessor:
    """Reconciles shipment records against store orders."""

    def __init__(
        self,
        registry: StoreRegistry,
        order_service: OrderService,
        settings: Optional[ReconcilerSettings] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.registry = registry
        self.order_service = order_service
        self.settings = settings or ReconcilerSettings()
        self._today = today

    async def process_shipment(self, shipment: ShipmentRecord) -> ProcessingResult:
        """
        Reconcile one shipment record and submit its bundled update.

        Returns:
            A success result, or a skipped result for B2B orders

        Raises:
            ReconciliationError: If any pipeline stage fails
        """
        logger.info(
            "Processing shipment %s (PO %s, SKU %s)",
            shipment.shipment_id,
            shipment.customer_po,
            shipment.stock_item,
        )

        decoded = decode_customer_po(
            shipment.customer_po, self.settings.reserved_order_numbers
        )
        if isinstance(decoded, SkipOrder):
            logger.info(decoded.reason)
            return ProcessingResult(
                shipment=shipment.shipment_id,
                status=ProcessingStatus.SKIPPED,
                tracking_number=shipment.tracking_number,
                detail=decoded.reason,
            )

        store = self.registry.get(decoded.store_id)
        order = await self.order_service.lookup_order(
            decoded.order_id, store.base_url, store.api_key
        )

        shipment_variants = generate_sku_variants(
            f"{store.sku_prefix}{shipment.stock_item}",
            max_parts=self.settings.max_sku_parts,
        )
        matched_lines = match_line_items(
            shipment_variants,
            order.line_items,
            shipment.item_qty,
            max_parts=self.settings.max_sku_parts,
        )

        payload = build_update_payload(
            shipment,
            matched_lines,
            self.settings.shipping_methods,
            self.settings.note_template,
            today=self._today() if self._today else None,
        )
        await self.order_service.update_order(
            decoded.order_id, store.base_url, store.api_key, payload
        )

        return ProcessingResult(
            shipment=shipment.shipment_id,
            status=ProcessingStatus.SUCCESS,
            tracking_number=shipment.tracking_number,
            store_id=decoded.store_id,
            order_id=decoded.order_id,
            line_items=matched_lines,
        )

    async def process_batch(
        self, shipments: Iterable[ShipmentRecord | dict[str, Any]]
    ) -> BatchResult:
        """
        Process every shipment record, isolating per-record failures.

        Raw mail parser rows are validated one at a time inside the same
        boundary, so a malformed row becomes an error result like any
        other stage failure. Each failure message is collected once into
        the batch's distinct error set. The batch is reported failed
        (errors non-empty) after all records were attempted; results
        always hold one entry per input record.
        """
        results: list[ProcessingResult] = []
        errors = DistinctMessages()
        seen: set[tuple[str, str, str]] = set()

        for index, row in enumerate(shipments):
            try:
                shipment = ShipmentRecord.from_row(row)
            except InvalidShipmentRecordError as e:
                label = ShipmentRecord.row_label(row, index)
                logger.error(
                    "Invalid shipment record %s: %s",
                    label,
                    e.message,
                    extra={"json_fields": {"shipment": label, "status": "error"}},
                )
                errors.add(e.message)
                results.append(
                    ProcessingResult(
                        shipment=label,
                        status=ProcessingStatus.ERROR,
                        tracking_number=_row_tracking_number(row),
                        error=e.message,
                    )
                )
                continue

            if shipment.dedup_key in seen:
                logger.info(
                    "Skipping duplicate shipment record %s", shipment.shipment_id
                )
                results.append(
                    ProcessingResult(
                        shipment=shipment.shipment_id,
                        status=ProcessingStatus.SKIPPED,
                        tracking_number=shipment.tracking_number,
                        detail=DUPLICATE_RECORD_DETAIL,
                    )
                )
                continue
            seen.add(shipment.dedup_key)

            try:
                result = await self.process_shipment(shipment)
            except ReconciliationError as e:
                logger.error(
                    "Error processing shipment %s: %s",
                    shipment.shipment_id,
                    e.message,
                    extra={"json_fields": _record_fields(shipment, "error")},
                )
                result = self._error_result(shipment, e.message)
            except Exception as e:
                logger.exception(
                    "Unexpected error processing shipment %s",
                    shipment.shipment_id,
                    extra={"json_fields": _record_fields(shipment, "error")},
                )
                result = self._error_result(shipment, str(e) or type(e).__name__)

            if result.status == ProcessingStatus.ERROR and result.error:
                errors.add(result.error)
            results.append(result)

        if errors:
            logger.error("Accumulated Errors:\n%s", errors.joined())

        return BatchResult(results=results, errors=list(errors))

    @staticmethod
    def _error_result(shipment: ShipmentRecord, message: str) -> ProcessingResult:
        return ProcessingResult(
            shipment=shipment.shipment_id,
            status=ProcessingStatus.ERROR,
            tracking_number=shipment.tracking_number,
            error=message,
        )


def _record_fields(shipment: ShipmentRecord, status: str) -> dict[str, Any]:
    return {
        "shipment": shipment.shipment_id,
        "tracking_number": shipment.tracking_number,
        "customer_po": shipment.customer_po,
        "stock_item": shipment.stock_item,
        "status": status,
    }


def _row_tracking_number(row: Any) -> Optional[str]:
    if isinstance(row, dict) and isinstance(row.get("tracking_number"), str):
        return row["tracking_number"] or None
    return None
