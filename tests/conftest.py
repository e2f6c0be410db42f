"""
pytest configuration and fixtures.

Loads environment variables from .env file for all tests and provides
shared store/shipment fixtures plus an in-memory order service.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from shiprecon.config import StoreRegistry
from shiprecon.errors import OrderLookupFailedError, OrderUpdateFailedError
from shiprecon.models.shipment import ShipmentRecord, ShipmentUpdatePayload, UpdateAck
from shiprecon.models.store import OrderLineItem, StoreConfig, StoreOrder


def pytest_configure(config):
    """Load .env file before running tests"""
    project_root = Path(__file__).parent.parent
    env_file = project_root / ".env"

    if env_file.exists():
        print(f"Loading environment from {env_file}")
        load_dotenv(env_file)


class FakeOrderService:
    """In-memory OrderService recording every call."""

    def __init__(self, orders: dict[str, StoreOrder] | None = None):
        self.orders = orders or {}
        self.lookups: list[tuple[str, str, str]] = []
        self.updates: list[tuple[str, str, str, ShipmentUpdatePayload]] = []
        self.rejected_updates: set[str] = set()

    async def lookup_order(self, order_id: str, store_url: str, api_key: str):
        self.lookups.append((order_id, store_url, api_key))
        if order_id not in self.orders:
            raise OrderLookupFailedError(order_id, 404, {"error": "Not found"})
        return self.orders[order_id]

    async def update_order(
        self,
        order_id: str,
        store_url: str,
        api_key: str,
        payload: ShipmentUpdatePayload,
    ):
        self.updates.append((order_id, store_url, api_key, payload))
        if order_id in self.rejected_updates:
            raise OrderUpdateFailedError(
                order_id, payload.tracking_number, 422, "Unprocessable"
            )
        return UpdateAck(
            order_id=order_id,
            tracking_number=payload.tracking_number,
            response={"id": 1},
        )


def make_shipment(**overrides) -> ShipmentRecord:
    """Build a shipment record with sensible defaults."""
    data = {
        "tracking_number": "1Z999AA10123456784",
        "customer_po": "TSA-8636-104233-S1",
        "ship_via_description": "UPS GRND",
        "stock_item": "1042 BLK",
        "item_qty": "2.0000",
        "shipment_date": "2026-10-15",
        "edwards_order_number": "E-558120",
    }
    data.update(overrides)
    return ShipmentRecord.model_validate(data)


def make_order(*line_items: tuple[int, str]) -> StoreOrder:
    return StoreOrder(
        line_items=[OrderLineItem(id=item_id, final_sku=sku) for item_id, sku in line_items]
    )


@pytest.fixture
def tsa_store() -> StoreConfig:
    return StoreConfig(
        store_id="8636",
        base_url="https://tsastore.example.com/",
        api_key="tsa-key",
        sku_prefix="TS",
    )


@pytest.fixture
def registry(tsa_store: StoreConfig) -> StoreRegistry:
    return StoreRegistry(
        {
            "8636": tsa_store,
            "9369": StoreConfig(
                store_id="9369",
                base_url="https://fccla.example.com/",
                api_key="fc-key",
                sku_prefix="FC",
            ),
            "43379": StoreConfig(
                store_id="43379",
                base_url="https://fbla.example.com/",
                api_key="",
                sku_prefix="BL",
            ),
        }
    )


@pytest.fixture
def order_service() -> FakeOrderService:
    return FakeOrderService(
        {
            "104233": make_order((501, "TS1042-BLK"), (502, "TS2200 RED")),
            "104300": make_order((601, "FC77 A 1")),
        }
    )


@pytest.fixture
def shipment_factory():
    """Factory for shipment records; keyword arguments override defaults."""
    return make_shipment


@pytest.fixture
def order_factory():
    """Factory for store orders from (line_item_id, final_sku) pairs."""
    return make_order
