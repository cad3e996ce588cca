"""Checkout session endpoints."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from ...capabilities.checkout import CheckoutEngine
from ..dependencies import get_engine, require_supported_ucp_version
from ..schemas import CreateCheckoutRequest

router = APIRouter(
    prefix="/checkout-sessions",
    tags=["checkout"],
    dependencies=[Depends(require_supported_ucp_version)],
)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_checkout(
    request: CreateCheckoutRequest,
    engine: CheckoutEngine = Depends(get_engine),
) -> Dict[str, Any]:
    """
    Create a checkout session.

    Validates every line item against the catalog and returns the session
    with its exact total. Nothing is created if any line is invalid.
    """
    session = engine.create_checkout(request.to_requests(), metadata=request.metadata)
    return session.to_dict()


@router.get("/{session_id}")
def get_checkout(
    session_id: str,
    engine: CheckoutEngine = Depends(get_engine),
) -> Dict[str, Any]:
    """Get checkout session status."""
    return engine.get_checkout(session_id).to_dict()


@router.post("/{session_id}/complete")
def complete_checkout(
    session_id: str,
    engine: CheckoutEngine = Depends(get_engine),
) -> Dict[str, Any]:
    """Mark a session as paid. Payment capture is simulated."""
    session = engine.complete_checkout(session_id)
    return {
        "success": True,
        "session": session.to_dict(),
        "message": "Payment processed successfully!",
    }
