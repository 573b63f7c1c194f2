"""Pydantic models for entry point input and results."""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .common.validators import is_valid_url, is_valid_short_code

# Clients may send either spelling of the short code key
SHORT_CODE_ALIASES = AliasChoices("short_code", "shortCode")


def _check_url(value: Any) -> str:
    is_valid, error = is_valid_url(value)
    if not is_valid:
        raise ValueError(error)
    return value


def _check_short_code(value: Any) -> Optional[str]:
    # An empty short code means "not supplied"
    if value is None or value == "":
        return None
    is_valid, error = is_valid_short_code(value)
    if not is_valid:
        raise ValueError(error)
    return value


class CreateLinkInput(BaseModel):
    """Input for creating a link."""

    model_config = ConfigDict(validate_default=True, extra="ignore")

    url: Optional[str] = Field(None, description="Destination URL")
    short_code: Optional[str] = Field(
        None,
        validation_alias=SHORT_CODE_ALIASES,
        description="Optional custom short code",
    )

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: Any) -> str:
        return _check_url(v)

    @field_validator("short_code", mode="before")
    @classmethod
    def validate_short_code(cls, v: Any) -> Optional[str]:
        return _check_short_code(v)


class UpdateLinkInput(BaseModel):
    """Input for updating a link. Omitted fields keep their current value."""

    model_config = ConfigDict(extra="ignore")

    url: Optional[str] = Field(None, description="New destination URL")
    short_code: Optional[str] = Field(
        None,
        validation_alias=SHORT_CODE_ALIASES,
        description="New short code",
    )

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return _check_url(v)

    @field_validator("short_code", mode="before")
    @classmethod
    def validate_short_code(cls, v: Any) -> Optional[str]:
        return _check_short_code(v)


def first_error_message(exc: ValidationError) -> str:
    """Message of the first violated constraint in a pydantic ValidationError."""
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    first = errors[0]
    cause = first.get("ctx", {}).get("error")
    if isinstance(cause, Exception):
        return str(cause)
    return first.get("msg") or "Validation failed"


class ActionResult(BaseModel):
    """Uniform result of a mutation entry point."""

    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[Dict[str, Any]] = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
