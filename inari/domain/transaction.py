"""Transactions and burden-ratio splitting.

This module contains the functional core for transactions:
- No I/O operations
- No side effects
- Every Transaction is validated when it is built

Amounts are decimal.Decimal and never zero.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID, uuid4

from inari.dates import Clock, utc_now
from inari.domain.errors import ContractViolation
from inari.domain.kind import TransactionKind, is_transaction_kind
from inari.domain.models import require_bool, require_decimal, require_ratio, revise


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction in a wallet."""

    wallet_id: UUID
    amount: Decimal
    kind: TransactionKind
    category_id: UUID
    date: datetime = field(default_factory=utc_now)
    description: str = ""
    is_shared_expense: bool = False
    custom_burden_ratio: Decimal | None = None
    id: UUID = field(default_factory=uuid4)
    modified_at: datetime = field(default_factory=utc_now)

    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset(
        {"amount", "kind", "date", "description", "is_shared_expense", "custom_burden_ratio"}
    )

    def __post_init__(self) -> None:
        amount = require_decimal("amount", self.amount)
        if amount == 0:
            raise ContractViolation("amount", "Transaction amount cannot be zero")
        object.__setattr__(self, "amount", amount)

        if not is_transaction_kind(self.kind):
            raise ContractViolation("kind", f"Unknown transaction kind: {self.kind!r}")
        if not isinstance(self.description, str):
            raise ContractViolation("description", "Description must be a string")
        require_bool("isSharedExpense", self.is_shared_expense)

        if self.custom_burden_ratio is not None:
            object.__setattr__(
                self, "custom_burden_ratio", require_ratio("customBurdenRatio", self.custom_burden_ratio)
            )

    @property
    def is_one_time(self) -> bool:
        return self.kind.is_one_time

    @property
    def is_recurring(self) -> bool:
        return self.kind.is_recurring

    @property
    def is_spread_out(self) -> bool:
        return self.kind.is_spread_out

    @property
    def is_expectation(self) -> bool:
        return self.kind.is_expectation

    @property
    def effective_burden_ratio(self) -> Decimal | None:
        """The custom burden ratio, or None when the wallet default applies.

        The wallet's burden_ratio is deliberately not consulted here; callers
        holding the wallet resolve the fallback themselves.
        """
        return self.custom_burden_ratio

    def with_changes(self, clock: Clock | None = None, **changes: Any) -> "Transaction":
        """Return an updated copy with a refreshed modified_at."""
        return revise(self, self.MUTABLE_FIELDS, clock, changes)


def split_shared_amount(amount: Decimal, ratio: Decimal) -> tuple[Decimal, Decimal]:
    """Split a shared amount between the two owners of a wallet.

    Args:
        amount: Amount to split.
        ratio: Share carried by the first owner, between 0 and 1.

    Returns:
        Tuple of (first_owner_share, second_owner_share); the shares always
        add up to amount.

    Raises:
        ContractViolation: If the ratio is outside [0, 1].
    """
    amount = require_decimal("amount", amount)
    ratio = require_ratio("burdenRatio", ratio)
    first_share = amount * ratio
    return first_share, amount - first_share
