from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StoreConfig(BaseModel):
    """Connection details for one store backend"""

    store_id: str = Field(pattern=r"^\d+$", description="Numeric store identifier")
    base_url: str = Field(description="Store base URL, ending with '/'")
    api_key: str = Field(default="", description="Store API token")
    sku_prefix: str = Field(default="", description="Prefix added to supplier SKUs")

    model_config = ConfigDict(frozen=True)

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"


class OrderLineItem(BaseModel):
    """Line item of a store order, as returned by the store API"""

    id: int | str = Field(description="Store line item identifier")
    final_sku: str = Field(default="", description="Final SKU including options")

    model_config = ConfigDict(extra="ignore")

    @field_validator("final_sku", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class StoreOrder(BaseModel):
    """Store order with the fields needed for matching"""

    id: Optional[int | str] = Field(default=None, description="Store order ID")
    line_items: list[OrderLineItem] = Field(description="Order line items")

    model_config = ConfigDict(extra="ignore")
