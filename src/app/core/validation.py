"""Schema validation helpers and error formatting.

Validation failures are described as an error tree keyed by field name::

    {"_errors": ["<payload-level message>"], "name": {"_errors": ["..."]}}

``format_errors`` flattens such a tree into one display string per field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

ErrorTree = dict[str, Any]

REQUIRED_MESSAGE = "Required"


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of validating a payload: either ``data`` or ``errors``."""

    data: ModelT | None = None
    errors: ErrorTree = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.data is not None


def build_error_tree(
    exc: ValidationError, field_messages: Mapping[str, str]
) -> ErrorTree:
    """Group pydantic errors by top-level field.

    A missing field reports ``REQUIRED_MESSAGE``; any other failure reports the
    message registered for that field in ``field_messages`` (falling back to
    pydantic's own message). Errors without a field location are kept under
    the top-level ``_errors`` key.
    """
    tree: ErrorTree = {"_errors": []}

    for error in exc.errors():
        loc = error.get("loc") or ()
        if not loc:
            tree["_errors"].append(error["msg"])
            continue

        name = str(loc[0])
        if error["type"] == "missing":
            message = REQUIRED_MESSAGE
        else:
            message = field_messages.get(name, error["msg"])

        messages = tree.setdefault(name, {"_errors": []})["_errors"]
        if message not in messages:
            messages.append(message)

    return tree


def validate_model(
    model: type[ModelT], payload: Any, field_messages: Mapping[str, str]
) -> ValidationResult[ModelT]:
    """Validate ``payload`` against ``model``, collecting errors for every field."""
    try:
        return ValidationResult(data=model.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult(errors=build_error_tree(exc, field_messages))


def format_errors(tree: Mapping[str, Any]) -> dict[str, str]:
    """Flatten an error tree into a field -> message mapping.

    Messages of a field are joined with ", ". A lone generic "required"
    message is rewritten as "The <field> field is required". Fields without
    messages and the top-level ``_errors`` entry are dropped.
    """
    errors: dict[str, str] = {}

    for name, node in tree.items():
        if name == "_errors":
            continue

        field_errors = node.get("_errors") if isinstance(node, Mapping) else None
        if not field_errors:
            continue

        message = ", ".join(field_errors)
        if message.strip().lower() == "required":
            message = f"The {name} field is required"
        errors[name] = message

    return errors
