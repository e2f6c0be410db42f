"""
Shiprecon data models.

This package contains all Pydantic models for the shipment reconciliation service.
"""

# Ingest models
from shiprecon.models.ingest import MailparserEnvelope, ProcessShipmentsRequest

# Shipment models
from shiprecon.models.shipment import (
    BatchResponse,
    BatchResult,
    MatchedLine,
    ProcessingResult,
    ProcessingStatus,
    ShipmentRecord,
    ShipmentUpdatePayload,
    UpdateAck,
)

# Store models
from shiprecon.models.store import OrderLineItem, StoreConfig, StoreOrder

__all__ = [
    # Ingest models
    "MailparserEnvelope",
    "ProcessShipmentsRequest",
    # Shipment models
    "BatchResponse",
    "BatchResult",
    "MatchedLine",
    "ProcessingResult",
    "ProcessingStatus",
    "ShipmentRecord",
    "ShipmentUpdatePayload",
    "UpdateAck",
    # Store models
    "OrderLineItem",
    "StoreConfig",
    "StoreOrder",
]
