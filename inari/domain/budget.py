"""Monthly spending limits per category."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, ClassVar
from uuid import UUID, uuid4

from inari.dates import Clock, utc_now
from inari.domain.errors import ContractViolation
from inari.domain.models import require_decimal, revise
from inari.domain.period import BudgetPeriod


@dataclass(frozen=True)
class Budget:
    """Immutable spending limit for one category in one period.

    At most one budget should exist per (category_id, period); keeping it
    that way is up to whatever stores budgets.
    """

    category_id: UUID
    limit: Decimal
    period: BudgetPeriod
    id: UUID = field(default_factory=uuid4)
    modified_at: datetime = field(default_factory=utc_now)

    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"limit", "period"})

    def __post_init__(self) -> None:
        limit = require_decimal("limit", self.limit)
        if limit < 0:
            raise ContractViolation("limit", "Budget limit must be non-negative")
        object.__setattr__(self, "limit", limit)
        if not isinstance(self.period, BudgetPeriod):
            raise ContractViolation("period", "Budget period must be a BudgetPeriod")

    def with_changes(self, clock: Clock | None = None, **changes: Any) -> "Budget":
        """Return an updated copy with a refreshed modified_at."""
        return revise(self, self.MUTABLE_FIELDS, clock, changes)
