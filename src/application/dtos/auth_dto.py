from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, examples=["admin@example.com"])
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    access_token: str = Field(..., description="Send as 'Authorization: Bearer <token>' or keep the cookie")
    token_type: str = Field("bearer")
    user_id: str
    email: str | None = None
    expires_at: datetime | None = None


class LoginPageResponse(BaseModel):
    page: str = Field("login")
    fields: list[str] = Field(default_factory=lambda: ["email", "password"])
    action: str = Field("/admin/login", description="Where to POST the credentials")


class DashboardResponse(BaseModel):
    email: str | None = Field(None, description="Signed-in admin")
    projects: int = Field(..., ge=0)
    contacts: int = Field(..., ge=0)
    unread_contacts: int = Field(..., ge=0)
