"""Validation schema for user create and update payloads."""

from typing import Annotated, Any

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, Field

from src.app.core.validation import ValidationResult, validate_model

NAME_MESSAGE = "Name must be at least 2 characters"
EMAIL_MESSAGE = "Email must be valid"

FIELD_MESSAGES = {
    "name": NAME_MESSAGE,
    "email": EMAIL_MESSAGE,
}


def _check_email(value: str) -> str:
    """Reject invalid addresses but keep the submitted spelling."""
    # EmailNotValidError is a ValueError, so pydantic reports it on the field
    validate_email(value, check_deliverability=False)
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


class UserInput(BaseModel):
    """Fields accepted when creating or replacing a user."""

    name: str = Field(min_length=2, description="User's display name")
    email: EmailAddress = Field(description="User's email address")


def validate_user(payload: Any) -> ValidationResult[UserInput]:
    """Validate a raw request body; both fields are always required."""
    return validate_model(UserInput, payload, FIELD_MESSAGES)
