"""Product catalog.

The catalog is configuration: it is loaded once at process start and is
read-only afterwards. The checkout engine only ever looks items up.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .exceptions import CatalogConfigurationError
from .models.catalog import CatalogItem

logger = logging.getLogger(__name__)


DEFAULT_PRODUCTS: Tuple[CatalogItem, ...] = (
    CatalogItem(
        id="prod_coffee_latte",
        title="Caramel Latte",
        description="Smooth espresso with steamed milk and caramel",
        price=550,
        currency="USD",
        image_url="https://example.com/latte.jpg",
        in_stock=True,
    ),
    CatalogItem(
        id="prod_coffee_mocha",
        title="Chocolate Mocha",
        description="Rich chocolate and espresso blend",
        price=600,
        currency="USD",
        in_stock=True,
    ),
    CatalogItem(
        id="prod_pastry_croissant",
        title="Butter Croissant",
        description="Flaky, buttery French pastry",
        price=350,
        currency="USD",
        in_stock=True,
    ),
    CatalogItem(
        id="prod_sandwich_turkey",
        title="Turkey & Avocado Sandwich",
        description="Fresh turkey, avocado, lettuce on sourdough",
        price=895,
        currency="USD",
        in_stock=False,
    ),
)


class Catalog:
    """Ordered, read-only collection of catalog items."""

    def __init__(self, items: Iterable[CatalogItem]) -> None:
        self._items: Tuple[CatalogItem, ...] = tuple(items)
        self._by_id: Dict[str, CatalogItem] = {}
        for item in self._items:
            if item.id in self._by_id:
                raise CatalogConfigurationError(
                    f"Duplicate catalog item id: {item.id}",
                    details={"item_id": item.id},
                )
            self._by_id[item.id] = item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def lookup(self, item_id: str) -> Optional[CatalogItem]:
        """Find an item by id, or None if it is not in the catalog."""
        return self._by_id.get(item_id)

    def list_available(self) -> Tuple[CatalogItem, ...]:
        """Items currently in stock, in catalog order."""
        return tuple(item for item in self._items if item.in_stock)


def default_catalog() -> Catalog:
    """The built-in coffee shop demo catalog."""
    return Catalog(DEFAULT_PRODUCTS)


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load a catalog from a JSON file.

    The file holds either a list of products or an object with a
    ``products`` list. Without a path, the built-in demo catalog is used.

    Raises:
        CatalogConfigurationError: If the file is missing, malformed, or
            contains invalid or duplicate items.
    """
    if path is None:
        logger.info("No catalog path configured, using built-in demo catalog")
        return default_catalog()

    path = Path(path)
    try:
        raw: Any = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogConfigurationError(
            f"Catalog file not found: {path}",
            details={"path": str(path)},
        ) from e
    except json.JSONDecodeError as e:
        raise CatalogConfigurationError(
            f"Catalog file {path} is not valid JSON: {e.msg}",
            details={"path": str(path), "line": e.lineno},
        ) from e

    entries: List[Dict[str, Any]] = raw.get("products", []) if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        raise CatalogConfigurationError(
            f"Catalog file {path} must contain a list of products",
            details={"path": str(path)},
        )

    items = []
    for index, entry in enumerate(entries):
        try:
            items.append(CatalogItem.from_dict(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CatalogConfigurationError(
                f"Invalid catalog entry at index {index}: {e}",
                details={"path": str(path), "index": index},
            ) from e

    catalog = Catalog(items)
    logger.info(f"Loaded catalog: path={path}, items={len(catalog)}, available={len(catalog.list_available())}")
    return catalog


__all__ = ["Catalog", "DEFAULT_PRODUCTS", "default_catalog", "load_catalog"]
