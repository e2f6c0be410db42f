"""Clients for store backends."""

from shiprecon.clients.order_service import (
    OrderService,
    StoreApiClient,
    build_async_client,
)

__all__ = ["OrderService", "StoreApiClient", "build_async_client"]
