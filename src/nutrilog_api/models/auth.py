"""Pydantic models for the access gate."""

from pydantic import BaseModel, Field

from nutrilog_api.core.access import AccessLevel


class LoginRequest(BaseModel):
    password: str = Field(..., min_length=1)


class AccessResponse(BaseModel):
    """Access level granted to the current client."""

    access_level: AccessLevel
