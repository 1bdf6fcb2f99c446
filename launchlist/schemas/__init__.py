# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Pydantic schemas — API request/response contracts.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class SignupRequest(BaseModel):
    """Inbound signup. Email syntax and attribution length are handled by the service."""
    email: Optional[str] = Field(default=None, examples=["you@example.com"])
    source: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("source", "utm_source"),
        examples=["producthunt"],
    )
    referrer: Optional[str] = Field(default=None, examples=["https://news.ycombinator.com/"])


class SignupResponse(BaseModel):
    success: bool
    message: str
    email: str


class CountResponse(BaseModel):
    count: int


class LoginRequest(BaseModel):
    username: str = Field(..., max_length=255)
    password: str = Field(..., max_length=1024)


class LoginResponse(BaseModel):
    success: bool
    principal: str
    expires_at: datetime


class SessionResponse(BaseModel):
    principal: str
    issued_at: datetime
    expires_at: datetime


class LogoutResponse(BaseModel):
    success: bool


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    retry_after: Optional[int] = None
    login_url: Optional[str] = None
