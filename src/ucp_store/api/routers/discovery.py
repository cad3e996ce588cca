"""UCP discovery endpoint."""
from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ...capabilities.checkout import CheckoutEngine
from ..dependencies import get_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["discovery"])


@router.get("/.well-known/ucp")
def describe(request: Request, engine: CheckoutEngine = Depends(get_engine)) -> Dict[str, Any]:
    """Tell agents this is a UCP store, what it supports, and where to shop."""
    logger.info("Agent requested the discovery document")
    # Endpoint is a deployment setting, not engine state
    return engine.describe(request.app.state.settings.endpoint).to_dict()
