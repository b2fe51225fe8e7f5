from __future__ import annotations

from fastapi import APIRouter, Request

from ..api_models import StatusResponse

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
def status(request: Request):
    """Liveness probe: fixed payload with the running version."""
    return StatusResponse(status="ok", version=request.app.version)
