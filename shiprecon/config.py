"""
Service configuration.

Settings are read from the environment once (after load_dotenv) and
collected into a ReconcilerSettings object that callers pass to the
shipment processor explicitly.
"""

import json
import logging
import os
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from shiprecon.errors import StoreNotConfiguredError, UnknownStoreError
from shiprecon.models.store import StoreConfig

logger = logging.getLogger(__name__)

# Store backends known out of the box; API keys come from API_KEY_<store_id>
DEFAULT_STORES: dict[str, dict[str, str]] = {
    "8636": {"base_url": "https://tsastore.mybrightsites.com/", "sku_prefix": "TS"},
    "43379": {"base_url": "https://fbla.mybrightsites.com/", "sku_prefix": "BL"},
    "9369": {"base_url": "https://fccla.mybrightsites.com/", "sku_prefix": "FC"},
}

# Customer PO fragments identifying B2B orders handled outside this pipeline
DEFAULT_RESERVED_ORDER_NUMBERS = frozenset({"239457", "239558", "155255"})

# Carrier service descriptions mapped to store shipping method names
DEFAULT_SHIPPING_METHODS: dict[str, str] = {
    "UPS RES": "UPS Ground",
    "UPS GRND": "UPS Ground",
    "FedEx GRND": "FedEx Ground",
    "UPS 3DAY": "UPS 3 Day Select",
}

DEFAULT_NOTE_TEMPLATE = (
    "Updated Via Edwards Shipment Doc Through Centricity API on {date}"
)
DEFAULT_API_VERSION = "v2.3.0"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_SKU_PARTS = 8


class StoreRegistry:
    """Read-only lookup of store configuration by numeric store ID."""

    def __init__(self, stores: Mapping[str, StoreConfig]):
        self._stores = dict(stores)

    def __contains__(self, store_id: str) -> bool:
        return store_id in self._stores

    def __len__(self) -> int:
        return len(self._stores)

    def get(self, store_id: str) -> StoreConfig:
        """
        Return the configuration for a store.

        Raises:
            UnknownStoreError: If the store ID is not registered
            StoreNotConfiguredError: If the store has no API key
        """
        store = self._stores.get(store_id)
        if store is None:
            raise UnknownStoreError(store_id)
        if not store.api_key:
            raise StoreNotConfiguredError(store_id)
        return store

    @classmethod
    def from_env(cls) -> "StoreRegistry":
        """
        Build the registry from the environment.

        SHIPRECON_STORES may hold a JSON object replacing the built-in
        store table: {"<store_id>": {"base_url": ..., "sku_prefix": ...}}.
        Each store's API key is read from API_KEY_<store_id>.
        """
        table = DEFAULT_STORES
        raw_table = os.getenv("SHIPRECON_STORES")
        if raw_table:
            table = json.loads(raw_table)

        stores = {}
        for store_id, entry in table.items():
            api_key = os.getenv(f"API_KEY_{store_id}", "")
            if not api_key:
                logger.warning("No API key configured for store %s", store_id)
            stores[str(store_id)] = StoreConfig(
                store_id=str(store_id),
                base_url=entry["base_url"],
                sku_prefix=entry.get("sku_prefix", ""),
                api_key=api_key,
            )
        return cls(stores)


class ReconcilerSettings(BaseModel):
    """Configuration consumed by the reconciliation pipeline."""

    reserved_order_numbers: frozenset[str] = Field(
        default=DEFAULT_RESERVED_ORDER_NUMBERS,
        description="Customer PO fragments marking B2B orders to skip",
    )
    shipping_methods: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SHIPPING_METHODS),
        description="Carrier description to store shipping method mapping",
    )
    note_template: str = Field(
        default=DEFAULT_NOTE_TEMPLATE,
        description="Shipment note; '{date}' is replaced with the UTC date",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION, description="Store API version path segment"
    )
    http_timeout_seconds: float = Field(
        default=DEFAULT_HTTP_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout per store API request (seconds)",
    )
    max_sku_parts: int = Field(
        default=DEFAULT_MAX_SKU_PARTS,
        ge=1,
        description="SKU part count above which only uniform variants are generated",
    )

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls) -> "ReconcilerSettings":
        """Read settings from environment variables, falling back to defaults."""
        values: dict = {}

        reserved = os.getenv("RESERVED_ORDER_NUMBERS")
        if reserved is not None:
            values["reserved_order_numbers"] = frozenset(
                number.strip() for number in reserved.split(",") if number.strip()
            )

        shipping_methods = os.getenv("SHIPPING_METHODS")
        if shipping_methods:
            values["shipping_methods"] = json.loads(shipping_methods)

        note_template = os.getenv("SHIPMENT_NOTE_TEMPLATE")
        if note_template:
            values["note_template"] = note_template

        values["api_version"] = os.getenv("STORE_API_VERSION", DEFAULT_API_VERSION)
        values["http_timeout_seconds"] = float(
            os.getenv("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)
        )
        values["max_sku_parts"] = int(
            os.getenv("MAX_SKU_PARTS", DEFAULT_MAX_SKU_PARTS)
        )

        return cls(**values)
