"""Pydantic schemas for API documentation and responses."""

from pydantic import AliasChoices, BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime


class CreateLinkBody(BaseModel):
    """Request to create a link."""

    url: str = Field(..., description="The URL to shorten")
    short_code: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("short_code", "shortCode"),
        description="Optional custom short code (3-32 chars, A-Z a-z 0-9 _ -), also accepted as shortCode",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "https://example.com/spring-sale", "short_code": "promo"},
            ]
        }
    }


class UpdateLinkBody(BaseModel):
    """Request to update a link. Omitted fields are left unchanged."""

    url: Optional[str] = Field(None, description="New destination URL")
    short_code: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("short_code", "shortCode"),
        description="New short code, also accepted as shortCode",
    )


class ActionResponse(BaseModel):
    """Uniform result of a link operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[Dict[str, Any]] = Field(None, description="Result data on success")
    error: Optional[str] = Field(None, description="Failure reason")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"success": True, "data": {"short_code": "abc123", "short_url": "https://sho.rt/r/abc123"}},
                {"success": False, "error": "Short code already exists"},
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")
