from decimal import Decimal
from enum import StrEnum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from shiprecon.errors import InvalidShipmentRecordError, ShipmentBatchError


class ProcessingStatus(StrEnum):
    """Outcome of reconciling one shipment record"""

    SUCCESS = "success"  # Store accepted the shipment update
    SKIPPED = "skipped"  # B2B order or duplicate record, intentionally not processed
    ERROR = "error"  # Failed at some pipeline stage


class ShipmentRecord(BaseModel):
    """
    One carrier shipment notification row, as produced by the mail parser.

    Each record is consumed exactly once by the reconciliation pipeline.
    """

    tracking_number: str = Field(min_length=1, description="Carrier tracking number")
    customer_po: str = Field(
        description="Composite purchase order (e.g. 'TSA-8636-12345-S1')"
    )
    ship_via_description: Optional[str] = Field(
        default=None, description="Carrier service description (e.g. 'UPS GRND')"
    )
    stock_item: str = Field(description="Shipped SKU without the store prefix")
    item_qty: Decimal = Field(ge=0, description="Shipped quantity")
    shipment_date: Optional[str] = Field(
        default=None, description="Ship date, passed through to the store"
    )
    supplier_order_number: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("supplier_order_number", "edwards_order_number"),
        description="Supplier-side order number, used to label results",
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "tracking_number": "1Z999AA10123456784",
                "customer_po": "TSA-8636-104233-S1",
                "ship_via_description": "UPS GRND",
                "stock_item": "1042 BLK",
                "item_qty": "2.0000",
                "shipment_date": "2026-10-15",
                "edwards_order_number": "E-558120",
            }
        },
    )

    @classmethod
    def from_row(cls, row: Any) -> "ShipmentRecord":
        """
        Validate one raw mail parser row.

        Raises:
            InvalidShipmentRecordError: If the row is not a usable record
        """
        if isinstance(row, cls):
            return row
        try:
            return cls.model_validate(row)
        except ValidationError as e:
            problems = [
                f"{'.'.join(str(part) for part in error['loc']) or 'row'}: {error['msg']}"
                for error in e.errors(include_url=False)
            ]
            raise InvalidShipmentRecordError(problems) from e

    @staticmethod
    def row_label(row: Any, index: int) -> str:
        """Best-effort label for a row that failed validation."""
        if isinstance(row, dict):
            for key in ("edwards_order_number", "supplier_order_number", "tracking_number"):
                if row.get(key):
                    return str(row[key])
        return f"row {index + 1}"

    @property
    def shipment_id(self) -> str:
        """Identifier used to label this record in batch results."""
        return self.supplier_order_number or self.tracking_number

    @property
    def dedup_key(self) -> tuple[str, str, str]:
        return (self.tracking_number, self.customer_po, self.stock_item)


class MatchedLine(BaseModel):
    """Order line item fulfilled by a shipment"""

    id: int | str = Field(description="Store line item identifier")
    quantity: int = Field(ge=0, description="Shipped quantity, rounded")


class ShipmentUpdatePayload(BaseModel):
    """Bundled shipment update for one shipment record"""

    tracking_number: str = Field(description="Carrier tracking number")
    send_shipping_confirmation: bool = Field(
        default=True, description="Ask the store to email a shipping confirmation"
    )
    ship_date: Optional[str] = Field(default=None, description="Ship date")
    note: str = Field(description="Audit note stamped with the processing date")
    shipping_method: Optional[str] = Field(
        default=None, description="Resolved shipping method name"
    )
    line_items: list[MatchedLine] = Field(
        default_factory=list, description="All matched line items"
    )

    def to_request_body(self) -> dict[str, Any]:
        """Store API request body: the payload wrapped under 'shipment'."""
        return {"shipment": self.model_dump(mode="json")}


class UpdateAck(BaseModel):
    """Store acknowledgement of a shipment update"""

    order_id: str = Field(description="Store order identifier")
    tracking_number: str = Field(description="Carrier tracking number")
    response: Any = Field(
        default=None, description="Store response body (JSON or raw text)"
    )


class ProcessingResult(BaseModel):
    """Per-record outcome collected into a batch result"""

    shipment: str = Field(description="Shipment identifier (supplier order number)")
    status: ProcessingStatus = Field(description="Processing outcome")
    tracking_number: Optional[str] = Field(default=None, description="Tracking number")
    store_id: Optional[str] = Field(default=None, description="Decoded store ID")
    order_id: Optional[str] = Field(default=None, description="Decoded order ID")
    line_items: list[MatchedLine] = Field(
        default_factory=list, description="Line items submitted to the store"
    )
    detail: Optional[str] = Field(default=None, description="Skip reason or note")
    error: Optional[str] = Field(default=None, description="Failure message")


class BatchResult(BaseModel):
    """Aggregate outcome of one batch of shipment records"""

    results: list[ProcessingResult] = Field(
        default_factory=list, description="One result per input record, in order"
    )
    errors: list[str] = Field(
        default_factory=list, description="Distinct failure messages, first-seen order"
    )

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def error(self) -> Optional[str]:
        """Distinct failure messages joined by newline, or None."""
        if not self.errors:
            return None
        return "\n".join(self.errors)

    def count(self, status: ProcessingStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    def raise_for_errors(self) -> None:
        """Raise ShipmentBatchError if any record failed."""
        if self.errors:
            raise ShipmentBatchError(self)


class BatchResponse(BaseModel):
    """API response for a processed batch."""

    success: bool = Field(description="False when at least one record failed")
    total: int = Field(description="Number of input records")
    succeeded: int = Field(description="Records confirmed with the store")
    skipped: int = Field(description="Records intentionally not processed")
    failed: int = Field(description="Records that failed")
    results: list[ProcessingResult] = Field(description="Per-record results")
    error: Optional[str] = Field(
        default=None, description="Newline-joined distinct failure messages"
    )

    @classmethod
    def from_batch(cls, batch: BatchResult) -> "BatchResponse":
        return cls(
            success=batch.success,
            total=len(batch.results),
            succeeded=batch.count(ProcessingStatus.SUCCESS),
            skipped=batch.count(ProcessingStatus.SKIPPED),
            failed=batch.count(ProcessingStatus.ERROR),
            results=batch.results,
            error=batch.error,
        )
