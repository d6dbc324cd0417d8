"""Response models shared by the public and admin routers."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx answer; the pages show ``detail`` verbatim."""
    detail: str = Field(
        ..., description="User-facing message", examples=["Please enter a valid email address"]
    )


class SuccessResponse(BaseModel):
    ok: bool = Field(True, description="Always true; failures use ErrorResponse")
    message: Optional[str] = Field(None, examples=["Project deleted successfully!"])


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["healthy"])


class RootResponse(BaseModel):
    status: str = Field(..., examples=["ok"])
    service: str = Field(..., examples=["portfolio-backend"])
    version: str = Field(..., examples=["0.1.0"])
