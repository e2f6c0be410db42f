"""
FastAPI dependencies for the processing routes.

Settings and the store registry are read from the environment once and
reused; a store API client is opened per request and closed afterwards.
"""

from functools import lru_cache
from typing import AsyncIterator

from fastapi import Depends

from shiprecon.clients.order_service import StoreApiClient
from shiprecon.config import ReconcilerSettings, StoreRegistry
from shiprecon.core.processor import ShipmentProcessor


@lru_cache(maxsize=1)
def get_settings() -> ReconcilerSettings:
    return ReconcilerSettings.from_env()


@lru_cache(maxsize=1)
def get_store_registry() -> StoreRegistry:
    return StoreRegistry.from_env()


async def get_processor(
    settings: ReconcilerSettings = Depends(get_settings),
    registry: StoreRegistry = Depends(get_store_registry),
) -> AsyncIterator[ShipmentProcessor]:
    """Yield a ShipmentProcessor bound to a fresh store API client."""
    async with StoreApiClient(
        api_version=settings.api_version,
        timeout_seconds=settings.http_timeout_seconds,
    ) as client:
        yield ShipmentProcessor(registry=registry, order_service=client, settings=settings)
