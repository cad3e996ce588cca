"""Catalog item model.

Prices are held as integers in the smallest currency subunit (cents for USD).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """A sellable product in the store catalog."""

    id: str
    title: str
    price: int  # Smallest currency subunit
    currency: str = "USD"  # ISO 4217
    description: Optional[str] = None
    image_url: Optional[str] = None
    in_stock: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Catalog item id must not be empty")
        if isinstance(self.price, bool) or not isinstance(self.price, int):
            raise ValueError(f"Price for {self.id} must be an integer number of minor units")
        if self.price < 0:
            raise ValueError(f"Price for {self.id} must not be negative")
        if len(self.currency) != 3 or not self.currency.isalpha() or not self.currency.isupper():
            raise ValueError(f"Currency for {self.id} must be an ISO 4217 code, got {self.currency!r}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogItem":
        """Build an item from its JSON representation."""
        return cls(
            id=data["id"],
            title=data["title"],
            price=data["price"],
            currency=data.get("currency", "USD"),
            description=data.get("description"),
            image_url=data.get("image_url"),
            in_stock=data.get("in_stock", True),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "price": self.price,
            "currency": self.currency,
            "in_stock": self.in_stock,
        }
        if self.description is not None:
            result["description"] = self.description
        if self.image_url is not None:
            result["image_url"] = self.image_url
        return result


__all__ = ["CatalogItem"]
