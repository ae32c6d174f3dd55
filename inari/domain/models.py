"""Domain type definitions and shared invariant checks for inari.

These NewTypes provide semantic clarity and help with type checking:
- WalletID, CategoryID, BudgetID, TransactionID: 128-bit entity identities
- OwnerID: Opaque identity string of a wallet owner

Monetary values are always decimal.Decimal; floats are rejected at
construction so no binary rounding enters the model.
"""

import dataclasses
from decimal import Decimal, InvalidOperation
from typing import Any, NewType
from uuid import UUID

from inari.dates import Clock, utc_now
from inari.domain.errors import ContractViolation

WalletID = NewType("WalletID", UUID)
CategoryID = NewType("CategoryID", UUID)
BudgetID = NewType("BudgetID", UUID)
TransactionID = NewType("TransactionID", UUID)
OwnerID = NewType("OwnerID", str)


def require_decimal(field: str, value: Any) -> Decimal:
    """Normalise a monetary input to a finite Decimal.

    Accepts Decimal, int and numeric strings. Floats and booleans are refused.
    """
    if isinstance(value, (bool, float)):
        raise ContractViolation(field, f"{field} must be a Decimal, got {type(value).__name__}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise ContractViolation(field, f"{field} is not a number: {value!r}") from None
    else:
        raise ContractViolation(field, f"{field} must be a Decimal, got {type(value).__name__}")

    if not result.is_finite():
        raise ContractViolation(field, f"{field} must be finite")
    return result


def require_ratio(field: str, value: Any) -> Decimal:
    """Normalise a burden ratio and check it lies in [0, 1]."""
    ratio = require_decimal(field, value)
    if not 0 <= ratio <= 1:
        raise ContractViolation(field, "Burden ratio must be between 0.0 and 1.0")
    return ratio


def require_int(field: str, value: Any) -> int:
    """Check a value is a plain integer (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolation(field, f"{field} must be an integer")
    return value


def require_text(field: str, value: Any, label: str) -> str:
    """Check a value is a non-empty string."""
    if not isinstance(value, str) or not value:
        raise ContractViolation(field, f"{label} cannot be empty")
    return value


def require_bool(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ContractViolation(field, f"{field} must be a boolean")
    return value


def revise(entity: Any, mutable: frozenset[str], clock: Clock | None, changes: dict[str, Any]) -> Any:
    """Produce an updated copy of a frozen entity.

    The copy goes through the entity's constructor again, so every invariant
    is re-checked, and its modified_at is refreshed from the clock.

    Args:
        entity: Frozen dataclass instance to update.
        mutable: Names of the fields that may change.
        clock: Source of the new modified_at. Defaults to utc_now.
        changes: Field values to replace.

    Returns:
        New instance of the same type.

    Raises:
        ContractViolation: If a change targets a fixed field or breaks an invariant.
    """
    for name in changes:
        if name not in mutable:
            raise ContractViolation(name, f"{name} cannot be changed after creation")

    now = (clock or utc_now)()
    return dataclasses.replace(entity, modified_at=now, **changes)
