"""
Field validation primitives.

Errors is a field -> [messages] bag. Records are checked with pydantic models;
every failure pydantic reports is turned into a message in the bag, so callers
always see the full set of violations for a record.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ValidationError
from pydantic_core import PydanticCustomError

BASE = "base"

BLANK = "can't be blank"
INVALID = "is invalid"
NOT_INCLUDED = "is not included in the list"
NOT_AN_INTEGER = "must be an integer"
TAKEN = "has already been taken"

# pydantic error type -> message; ctx values are substituted into the template.
TYPE_MESSAGES: dict[str, str] = {
    "string_type": INVALID,
    "string_pattern_mismatch": INVALID,
    "value_error": INVALID,
    "url_type": INVALID,
    "url_parsing": INVALID,
    "url_scheme": INVALID,
    "uuid_type": INVALID,
    "uuid_parsing": INVALID,
    "literal_error": NOT_INCLUDED,
    "enum": NOT_INCLUDED,
    "int_type": NOT_AN_INTEGER,
    "int_parsing": NOT_AN_INTEGER,
    "int_from_float": NOT_AN_INTEGER,
    "greater_than_equal": "must be greater than or equal to {ge}",
    "string_too_short": "is too short (minimum is {min_length} characters)",
    "string_too_long": "is too long (maximum is {max_length} characters)",
}


def humanize(field: str) -> str:
    """Turn an attribute path into a display label: fhir_endpoint.uri -> Fhir endpoint uri."""
    text = field.replace(".", " ").replace("_", " ").strip()
    return text[:1].upper() + text[1:]


class Errors:
    """Accumulated validation failures, keyed by field."""

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, field: str, message: str) -> None:
        self._messages.setdefault(field, []).append(message)

    def merge(self, other: Errors, prefix: str | None = None) -> None:
        for field, messages in other.items():
            key = f"{prefix}.{field}" if prefix and field != BASE else field
            for message in messages:
                self.add(key, message)

    def items(self) -> Iterator[tuple[str, list[str]]]:
        return iter(self._messages.items())

    def __getitem__(self, field: str) -> list[str]:
        return self._messages.get(field, [])

    def __contains__(self, field: object) -> bool:
        return field in self._messages

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self._messages.values())

    def full_messages(self) -> list[str]:
        out = []
        for field, messages in self._messages.items():
            for message in messages:
                out.append(message if field == BASE else f"{humanize(field)} {message}")
        return out

    def to_sentence(self) -> str:
        return ", ".join(self.full_messages())

    def to_dict(self) -> dict[str, list[str]]:
        return {field: list(messages) for field, messages in self._messages.items()}

    def __repr__(self) -> str:
        return f"<Errors {self._messages!r}>"


# ---------------------------------------------------------------------------
# pydantic bridge
# ---------------------------------------------------------------------------

def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require_present(value: Any) -> Any:
    if is_blank(value):
        raise PydanticCustomError("blank", BLANK)
    return value


Present = BeforeValidator(require_present)
RequiredStr = Annotated[str, Present]


def errors_from(exc: ValidationError) -> Errors:
    """Convert a pydantic ValidationError into an Errors bag, one message per failure."""
    errors = Errors()
    for error in exc.errors(include_url=False):
        field = ".".join(str(part) for part in error["loc"]) or BASE
        template = TYPE_MESSAGES.get(error["type"])
        if template is None:
            message = error["msg"]
        else:
            message = template.format(**error.get("ctx", {}))
        errors.add(field, message)
    return errors


def check(record: type[BaseModel], data: dict[str, Any]) -> Errors:
    """Validate data against a record model and return the resulting bag."""
    try:
        record.model_validate(data)
    except ValidationError as exc:
        return errors_from(exc)
    return Errors()
