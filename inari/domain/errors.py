"""Error types for the inari domain.

Two failure classes exist: a ContractViolation is raised when a constructor
is handed input that breaks an invariant, a DecodeError when wire data is
malformed. Both are recoverable and subclass ValueError.
"""

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


class InariError(Exception):
    """Base class for all inari errors."""


class ContractViolation(InariError, ValueError):
    """An invariant was violated while constructing a value."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class DecodeError(InariError, ValueError):
    """Wire data could not be decoded into a valid value."""

    def __init__(self, field: str, message: str, value: Any = None) -> None:
        super().__init__(f"{field}: {message}" if field else message)
        self.field = field
        self.message = message
        self.value = value

    def nested(self, prefix: str) -> "DecodeError":
        """Return a copy of this error with the field path prefixed."""
        field = f"{prefix}.{self.field}" if self.field else prefix
        return DecodeError(field, self.message, self.value)


class PrecisionLossError(InariError, ValueError):
    """A decimal value would not survive the floating-point wire encoding."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(f"{field}: {value} cannot be encoded without precision loss")
        self.field = field
        self.value = value


def attempt(factory: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T | None, str | None]:
    """Build a value, reporting contract violations instead of raising.

    Args:
        factory: Constructor or factory function to call.
        *args: Positional arguments for the factory.
        **kwargs: Keyword arguments for the factory.

    Returns:
        Tuple of (value, error_message). Exactly one of them is None.
    """
    try:
        return factory(*args, **kwargs), None
    except ContractViolation as e:
        return None, e.message
