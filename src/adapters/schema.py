# src/adapters/schema.py

from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple


LEVEL_ERROR = "error"
LEVEL_WARNING = "warning"


@dataclass(frozen=True)
class ValidationMessage:
    """
    One advisory finding about a payload.

    - level: "error" (blocks commit) or "warning" (informational only)
    - message: human-readable text
    """
    level: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.level == LEVEL_ERROR


def error(message: str) -> ValidationMessage:
    return ValidationMessage(level=LEVEL_ERROR, message=message)


def warning(message: str) -> ValidationMessage:
    return ValidationMessage(level=LEVEL_WARNING, message=message)


@dataclass(frozen=True)
class RecipeAdapter:
    """
    Self-contained logic for one recipe kind.

    This is a plain bundle of functions keyed by a stable identifier; there is
    no adapter class hierarchy. Every function is pure:

    - default():          fresh default payload (never shared between calls)
    - coerce(raw):        repair any stored/edited value into a valid payload;
                          falls back to default() when the "__type" tag is
                          missing or belongs to another adapter
    - validate(payload):  list of ValidationMessage, never raises
    - compile(payload):   output lines (script call or event.custom JSON)
    """
    id: str
    title: str
    family: str
    default: Callable[[], Any]
    coerce: Callable[[Any], Any]
    validate: Callable[[Any], List[ValidationMessage]]
    compile: Callable[[Any], List[str]]


@dataclass(frozen=True)
class ModPlugin:
    """A family of adapters contributed by one mod ("vanilla", "create", ...)."""
    id: str
    title: str
    adapters: Tuple[RecipeAdapter, ...] = field(default_factory=tuple)


def has_errors(messages: List[ValidationMessage]) -> bool:
    return any(m.is_error for m in messages)
