"""Field paths and structured validation errors.

Errors are accumulated into plain lists and rendered the way the
orchestrator renders its own field errors, e.g.::

    spec.nodePools[1].name: Duplicate value: "es-data"
"""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldPath:
    """Immutable, dot/index addressable path to a field."""

    __slots__ = ("_segments",)

    def __init__(self, name: str, *more: str):
        self._segments: tuple[str, ...] = (name, *more)

    @classmethod
    def _from_segments(cls, segments: tuple[str, ...]) -> "FieldPath":
        path = cls.__new__(cls)
        path._segments = segments
        return path

    def child(self, name: str, *more: str) -> "FieldPath":
        return self._from_segments(self._segments + (name, *more))

    def index(self, i: int) -> "FieldPath":
        return self._from_segments(self._segments + (f"[{i}]",))

    def key(self, key: str) -> "FieldPath":
        return self._from_segments(self._segments + (f"[{key}]",))

    def __str__(self) -> str:
        rendered = ""
        for segment in self._segments:
            if segment.startswith("[") or not rendered:
                rendered += segment
            else:
                rendered += "." + segment
        return rendered

    def __repr__(self) -> str:
        return f"FieldPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldPath):
            return self._segments == other._segments
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)


class ErrorType(str, Enum):
    """Closed set of validation error kinds."""

    REQUIRED = "FieldValueRequired"
    INVALID = "FieldValueInvalid"
    NOT_SUPPORTED = "FieldValueNotSupported"
    DUPLICATE = "FieldValueDuplicate"
    FORBIDDEN = "FieldValueForbidden"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ErrorType.REQUIRED: "Required value",
    ErrorType.INVALID: "Invalid value",
    ErrorType.NOT_SUPPORTED: "Unsupported value",
    ErrorType.DUPLICATE: "Duplicate value",
    ErrorType.FORBIDDEN: "Forbidden",
}


def format_value(value: Any) -> str:
    """Render an offending value for an error message."""
    if isinstance(value, Enum):
        value = value.value
    if value is None or isinstance(value, (bool, str, int, float)):
        return json.dumps(value)
    return str(value)


class FieldError(BaseModel):
    """A single problem found at a field path."""

    model_config = ConfigDict(frozen=True)

    type: ErrorType
    field: str
    bad_value: Any = None
    detail: str = ""
    supported_values: list[str] | None = None

    @property
    def error_body(self) -> str:
        if self.type in (ErrorType.REQUIRED, ErrorType.FORBIDDEN):
            body = self.type.description
        else:
            body = f"{self.type.description}: {format_value(self.bad_value)}"
        if self.detail:
            body += f": {self.detail}"
        return body

    def __str__(self) -> str:
        return f"{self.field}: {self.error_body}"


ErrorList = list[FieldError]


def required(path: FieldPath, detail: str = "") -> FieldError:
    return FieldError(type=ErrorType.REQUIRED, field=str(path), detail=detail)


def invalid(path: FieldPath, value: Any, detail: str = "") -> FieldError:
    return FieldError(type=ErrorType.INVALID, field=str(path), bad_value=value, detail=detail)


def not_supported(path: FieldPath, value: Any, valid_values: list[str]) -> FieldError:
    quoted = ", ".join(json.dumps(v) for v in valid_values)
    return FieldError(
        type=ErrorType.NOT_SUPPORTED,
        field=str(path),
        bad_value=value,
        detail=f"supported values: {quoted}",
        supported_values=list(valid_values),
    )


def duplicate(path: FieldPath, value: Any) -> FieldError:
    return FieldError(type=ErrorType.DUPLICATE, field=str(path), bad_value=value)


def forbidden(path: FieldPath, detail: str) -> FieldError:
    return FieldError(type=ErrorType.FORBIDDEN, field=str(path), detail=detail)


def aggregate_message(errors: ErrorList, limit: int = 0) -> str:
    """Render every error into a single rejection message.

    Identical messages are reported once. ``limit`` caps the number of
    messages rendered (0 means no cap).
    """
    messages: list[str] = []
    for error in errors:
        message = str(error)
        if message not in messages:
            messages.append(message)

    if limit and len(messages) > limit:
        remaining = len(messages) - limit
        messages = messages[:limit] + [f"and {remaining} more"]

    if not messages:
        return ""
    if len(messages) == 1:
        return messages[0]
    return "[" + ", ".join(messages) + "]"
