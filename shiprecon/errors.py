"""
Reconciliation error hierarchy.

Stage-level errors raised while reconciling a single shipment record.
The batch processor catches every ReconciliationError at the record
boundary and turns it into an error result; only ShipmentBatchError
is meant to reach callers, and only after every record was attempted.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from shiprecon.models.shipment import BatchResult


class ReconciliationError(Exception):
    """Base class for failures while reconciling one shipment record."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Input errors


class InputError(ReconciliationError):
    """Customer PO or store reference cannot be used."""


class InvalidPOFormatError(InputError):
    def __init__(self, customer_po: str):
        super().__init__(f"Invalid customer_po format: {customer_po}")
        self.customer_po = customer_po


class InvalidStoreIdError(InputError):
    def __init__(self, store_id: str):
        super().__init__(
            f"storeId is not valid (non-digit characters found): {store_id}"
        )
        self.store_id = store_id


class UnknownStoreError(InputError):
    def __init__(self, store_id: str):
        super().__init__(f"storeId {store_id} does not match any stores.")
        self.store_id = store_id


class StoreNotConfiguredError(InputError):
    def __init__(self, store_id: str):
        super().__init__(f"storeId {store_id} has no API key configured.")
        self.store_id = store_id


class InvalidShipmentRecordError(InputError):
    """Mail parser row that cannot be read as a shipment record."""

    def __init__(self, problems: list[str]):
        super().__init__("Invalid shipment record: " + "; ".join(problems))
        self.problems = problems


class InvalidQuantityError(InputError):
    def __init__(self, quantity: Any):
        super().__init__(f"Invalid item_qty: {quantity}")
        self.quantity = quantity


# Order lookup errors


class OrderLookupError(ReconciliationError):
    """Store rejected the order lookup or returned unusable data."""


class OrderLookupFailedError(OrderLookupError):
    def __init__(self, order_id: str, status: int | None, body: Any = None):
        if status is None:
            message = f"Order lookup failed for orderId {order_id}: store unreachable"
        else:
            message = f"Order lookup failed for orderId {order_id}, status: {status}"
        super().__init__(message)
        self.order_id = order_id
        self.status = status
        self.body = body


class InvalidOrderDataError(OrderLookupError):
    def __init__(self, order_id: str):
        super().__init__(f"Invalid order data received for orderId {order_id}")
        self.order_id = order_id


# Matching errors


class MatchError(ReconciliationError):
    """No order line item corresponds to the shipped SKU."""


class NoMatchingSkuError(MatchError):
    """
    Lists the shipment's SKU variants in sorted order, not generation
    order, so the same failure always yields the same message text.
    """

    def __init__(self, variants: list[str]):
        super().__init__(
            "No matching SKU found for shipment with SKU variations: "
            + " | ".join(variants)
        )
        self.variants = variants


# Update errors


class UpdateError(ReconciliationError):
    """Store rejected the shipment update."""


class OrderUpdateFailedError(UpdateError):
    def __init__(
        self,
        order_id: str,
        tracking_number: str,
        status: int | None,
        body: Any = None,
    ):
        if status is None:
            message = (
                f"Order update failed for orderId {order_id}, "
                f"tracking: {tracking_number}: store unreachable"
            )
        else:
            message = (
                f"Order update failed for orderId {order_id}, "
                f"tracking: {tracking_number}, status: {status}"
            )
        super().__init__(message)
        self.order_id = order_id
        self.tracking_number = tracking_number
        self.status = status
        self.body = body


# Batch aggregate


class ShipmentBatchError(Exception):
    """Raised after a batch finished with at least one failed record."""

    def __init__(self, result: "BatchResult"):
        super().__init__(
            f"Shipment batch encountered errors:\n{result.error or ''}"
        )
        self.result = result
