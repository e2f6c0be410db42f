"""
Store order API client.

Looks up orders and submits shipment updates against a store's REST API
(GET/POST under {base_url}api/{version}/orders/...). Each store is
addressed by its base URL and authenticated with its API token passed
as the 'token' query parameter.
"""

import json
import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from shiprecon.config import DEFAULT_API_VERSION, DEFAULT_HTTP_TIMEOUT_SECONDS
from shiprecon.errors import (
    InvalidOrderDataError,
    OrderLookupFailedError,
    OrderUpdateFailedError,
)
from shiprecon.models.shipment import ShipmentUpdatePayload, UpdateAck
from shiprecon.models.store import StoreOrder

logger = logging.getLogger(__name__)


class OrderService(Protocol):
    """Order operations the reconciliation pipeline depends on."""

    async def lookup_order(
        self, order_id: str, store_url: str, api_key: str
    ) -> StoreOrder: ...

    async def update_order(
        self,
        order_id: str,
        store_url: str,
        api_key: str,
        payload: ShipmentUpdatePayload,
    ) -> UpdateAck: ...


def build_async_client(
    timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an httpx.AsyncClient with the store API defaults."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=True,
        headers={"Accept": "application/json"},
        transport=transport,
    )


def parse_response_body(response: httpx.Response) -> Any:
    """Return the response body as JSON when possible, else as raw text."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class StoreApiClient:
    """
    httpx-based OrderService implementation.

    Usage:
        async with StoreApiClient() as client:
            order = await client.lookup_order("104233", store.base_url, store.api_key)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        api_version: str = DEFAULT_API_VERSION,
        timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
    ):
        self._owns_client = http_client is None
        self._client = http_client or build_async_client(timeout_seconds)
        self.api_version = api_version

    async def __aenter__(self) -> "StoreApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def order_url(self, store_url: str, order_id: str) -> str:
        return f"{store_url}api/{self.api_version}/orders/{order_id}"

    async def lookup_order(
        self, order_id: str, store_url: str, api_key: str
    ) -> StoreOrder:
        """
        Fetch an order with its line items.

        Raises:
            OrderLookupFailedError: On a non-success response or transport failure
            InvalidOrderDataError: If the order has no line items collection
        """
        url = self.order_url(store_url, order_id)
        try:
            response = await self._client.get(url, params={"token": api_key})
        except httpx.HTTPError as e:
            logger.error("Order lookup request failed: URL: %s, Error: %s", url, e)
            raise OrderLookupFailedError(order_id, None, str(e)) from e

        if not response.is_success:
            body = parse_response_body(response)
            logger.error(
                "API Request Rejected: URL: %s, Status: %s, Response: %s",
                url,
                response.status_code,
                response.text,
            )
            raise OrderLookupFailedError(order_id, response.status_code, body)

        data = parse_response_body(response)
        if not isinstance(data, dict) or not isinstance(data.get("line_items"), list):
            raise InvalidOrderDataError(order_id)

        try:
            return StoreOrder.model_validate(data)
        except ValidationError as e:
            raise InvalidOrderDataError(order_id) from e

    async def update_order(
        self,
        order_id: str,
        store_url: str,
        api_key: str,
        payload: ShipmentUpdatePayload,
    ) -> UpdateAck:
        """
        Submit a bundled shipment update for an order.

        Raises:
            OrderUpdateFailedError: On a non-success response or transport failure
        """
        url = f"{self.order_url(store_url, order_id)}/shipments"
        body = payload.to_request_body()
        try:
            response = await self._client.post(
                url, params={"token": api_key}, json=body
            )
        except httpx.HTTPError as e:
            logger.error("Order update request failed: URL: %s, Error: %s", url, e)
            raise OrderUpdateFailedError(
                order_id, payload.tracking_number, None, str(e)
            ) from e

        response_body = parse_response_body(response)
        if not response.is_success:
            logger.error(
                "API Request Rejected: URL: %s, Status: %s, Payload: %s, Response: %s",
                url,
                response.status_code,
                json.dumps(body),
                response.text,
            )
            raise OrderUpdateFailedError(
                order_id, payload.tracking_number, response.status_code, response_body
            )

        logger.info(
            "Shipment updated for order %s with tracking number %s (%d line items)",
            order_id,
            payload.tracking_number,
            len(payload.line_items),
        )
        return UpdateAck(
            order_id=order_id,
            tracking_number=payload.tracking_number,
            response=response_body,
        )
