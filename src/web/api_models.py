from __future__ import annotations

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = Field("ok", description="Always 'ok' while the process is serving")
    version: str = Field(..., description="Application version")
