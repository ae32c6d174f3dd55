"""Transaction kinds and the arithmetic specific to each kind.

A TransactionKind is exactly one of four variants:
- OneTime: a single cash movement, no payload
- Recurring: repeats on a schedule (RecurringProperties)
- SpreadOut: one purchase amortized over days, weeks or months
  (SpreadOutProperties)
- Expectation: an estimate later reconciled against the actual amount
  (ExpectationProperties)

All functions here are pure; payloads validate themselves on construction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Union

from inari.dates import add_months, whole_days_between
from inari.domain.errors import ContractViolation
from inari.domain.models import require_decimal, require_int

# Average month used when amortizing day-based spreads
DAYS_PER_MONTH = Decimal(30)

# Average weeks per month used when amortizing week-based spreads
WEEKS_PER_MONTH = Decimal("4.33")


class RecurringFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "biWeekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class SpreadDuration(str, Enum):
    """Unit of a spread-out duration."""

    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"


@dataclass(frozen=True)
class RecurringProperties:
    """Schedule of a recurring transaction."""

    frequency: RecurringFrequency
    end_date: datetime | None = None
    custom_interval: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.frequency, RecurringFrequency):
            raise ContractViolation("frequency", f"Unknown frequency: {self.frequency!r}")
        if self.end_date is not None and not isinstance(self.end_date, datetime):
            raise ContractViolation("endDate", "End date must be a datetime")
        if self.frequency is RecurringFrequency.CUSTOM and self.custom_interval is None:
            raise ContractViolation("customInterval", "Custom frequency requires customInterval to be set")
        if self.custom_interval is not None:
            require_int("customInterval", self.custom_interval)
            if self.custom_interval <= 0:
                raise ContractViolation("customInterval", "Custom interval must be positive")


@dataclass(frozen=True)
class SpreadOutProperties:
    """A total amount spread evenly from start_date over a fixed duration.

    end_date is derived from start_date, duration and duration_type when the
    value is built and cannot be passed in. Stored values keep their saved
    end date through restore().
    """

    total_amount: Decimal
    duration: int
    duration_type: SpreadDuration
    start_date: datetime
    end_date: datetime = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_amount", require_decimal("totalAmount", self.total_amount))
        require_int("duration", self.duration)
        if self.duration <= 0:
            raise ContractViolation("duration", "Duration must be positive")
        if not isinstance(self.duration_type, SpreadDuration):
            raise ContractViolation("durationType", f"Unknown duration type: {self.duration_type!r}")
        if not isinstance(self.start_date, datetime):
            raise ContractViolation("startDate", "Start date must be a datetime")
        try:
            end_date = calculate_spread_end(self.start_date, self.duration, self.duration_type)
        except (OverflowError, ValueError):
            raise ContractViolation("duration", "Duration is too large") from None
        object.__setattr__(self, "end_date", end_date)

    @classmethod
    def restore(
        cls,
        total_amount: Decimal,
        duration: int,
        duration_type: SpreadDuration,
        start_date: datetime,
        end_date: datetime,
    ) -> "SpreadOutProperties":
        """Rebuild stored properties, keeping the end date they were saved with.

        The stored end date may have been computed in a local calendar (month
        lengths and DST shifts differ from UTC), so it is kept as given. It
        must not precede start_date.

        Raises:
            ContractViolation: If any field is invalid.
        """
        properties = cls(total_amount, duration, duration_type, start_date)
        if not isinstance(end_date, datetime):
            raise ContractViolation("endDate", "End date must be a datetime")
        try:
            ends_early = end_date < start_date
        except TypeError:
            raise ContractViolation("endDate", "End date and start date must agree on UTC offsets") from None
        if ends_early:
            raise ContractViolation("endDate", "End date cannot be before start date")
        object.__setattr__(properties, "end_date", end_date)
        return properties

    @property
    def daily_amount(self) -> Decimal:
        """Amount attributed to each day of the spread."""
        days = whole_days_between(self.start_date, self.end_date)
        return self.total_amount / Decimal(max(days, 1))

    @property
    def monthly_amount(self) -> Decimal:
        """Approximate amount attributed to each month of the spread.

        Day spreads assume a 30 day month and week spreads 4.33 weeks per
        month, so the monthly figures need not add up to total_amount.
        """
        if self.duration_type is SpreadDuration.DAYS:
            return self.daily_amount * DAYS_PER_MONTH
        if self.duration_type is SpreadDuration.WEEKS:
            return self.total_amount / Decimal(self.duration) * WEEKS_PER_MONTH
        return self.total_amount / Decimal(self.duration)


def calculate_spread_end(start: datetime, duration: int, unit: SpreadDuration) -> datetime:
    """Calculate the end of a spread starting at start.

    Args:
        start: First moment of the spread.
        duration: Number of units.
        unit: Unit of the duration.

    Returns:
        start advanced by duration units (months are calendar months).
    """
    if unit is SpreadDuration.DAYS:
        return start + timedelta(days=duration)
    if unit is SpreadDuration.WEEKS:
        return start + timedelta(weeks=duration)
    return add_months(start, duration)


@dataclass(frozen=True)
class ExpectationProperties:
    """Expected amount, plus the actual amount once it is known."""

    expected_amount: Decimal
    actual_amount: Decimal | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "expected_amount", require_decimal("expectedAmount", self.expected_amount))
        if self.actual_amount is not None:
            object.__setattr__(self, "actual_amount", require_decimal("actualAmount", self.actual_amount))

    @property
    def variance(self) -> Decimal | None:
        """Actual minus expected (None until reconciled)."""
        if self.actual_amount is None:
            return None
        return self.actual_amount - self.expected_amount

    @property
    def is_reconciled(self) -> bool:
        return self.actual_amount is not None

    def reconciled(self, actual_amount: Decimal) -> "ExpectationProperties":
        """Return a copy reconciled against the actual amount."""
        return ExpectationProperties(expected_amount=self.expected_amount, actual_amount=actual_amount)


class _KindChecks:
    """Variant checks shared by every transaction kind."""

    type_name: ClassVar[str]

    @property
    def is_one_time(self) -> bool:
        return isinstance(self, OneTime)

    @property
    def is_recurring(self) -> bool:
        return isinstance(self, Recurring)

    @property
    def is_spread_out(self) -> bool:
        return isinstance(self, SpreadOut)

    @property
    def is_expectation(self) -> bool:
        return isinstance(self, Expectation)


@dataclass(frozen=True)
class OneTime(_KindChecks):
    type_name: ClassVar[str] = "oneTime"


@dataclass(frozen=True)
class Recurring(_KindChecks):
    properties: RecurringProperties

    type_name: ClassVar[str] = "recurring"

    def __post_init__(self) -> None:
        if not isinstance(self.properties, RecurringProperties):
            raise ContractViolation("properties", "Recurring kind requires RecurringProperties")


@dataclass(frozen=True)
class SpreadOut(_KindChecks):
    properties: SpreadOutProperties

    type_name: ClassVar[str] = "spreadOut"

    def __post_init__(self) -> None:
        if not isinstance(self.properties, SpreadOutProperties):
            raise ContractViolation("properties", "Spread out kind requires SpreadOutProperties")


@dataclass(frozen=True)
class Expectation(_KindChecks):
    properties: ExpectationProperties

    type_name: ClassVar[str] = "expectation"

    def __post_init__(self) -> None:
        if not isinstance(self.properties, ExpectationProperties):
            raise ContractViolation("properties", "Expectation kind requires ExpectationProperties")


TransactionKind = Union[OneTime, Recurring, SpreadOut, Expectation]

KIND_TYPES: dict[str, type[TransactionKind]] = {
    OneTime.type_name: OneTime,
    Recurring.type_name: Recurring,
    SpreadOut.type_name: SpreadOut,
    Expectation.type_name: Expectation,
}


def is_transaction_kind(value: object) -> bool:
    return isinstance(value, (OneTime, Recurring, SpreadOut, Expectation))
