"""Request models for the store API."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from ..models.checkout import LineItemRequest


class ItemReference(BaseModel):
    """Reference to a catalog item by id."""

    id: str = Field(min_length=1)
    title: Optional[str] = None  # Informational; the catalog title wins


class LineItemIn(BaseModel):
    item: ItemReference
    quantity: StrictInt

    def to_request(self) -> LineItemRequest:
        return LineItemRequest(item_id=self.item.id, quantity=self.quantity)


class CreateCheckoutRequest(BaseModel):
    """Body of ``POST /checkout-sessions``."""

    model_config = ConfigDict(extra="ignore")

    # Empty or missing carts are rejected by the engine with EMPTY_CART
    line_items: List[LineItemIn] = Field(default_factory=list)
    metadata: Optional[Dict[str, str]] = None

    def to_requests(self) -> List[LineItemRequest]:
        return [line.to_request() for line in self.line_items]


__all__ = ["ItemReference", "LineItemIn", "CreateCheckoutRequest"]
