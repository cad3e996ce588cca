"""Product listing endpoint."""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...capabilities.checkout import CheckoutEngine
from ..dependencies import get_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products")
def list_products(engine: CheckoutEngine = Depends(get_engine)) -> Dict[str, Any]:
    """List products that are currently in stock."""
    available = engine.list_available()
    logger.info(f"Agent is browsing products: available={len(available)}")
    return {
        "products": [item.to_dict() for item in available],
        "total": len(available),
    }
