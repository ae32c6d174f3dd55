"""Budget periods: a calendar month identified by year and month."""

from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, datetime

from inari.dates import Clock, month_range, utc_now
from inari.domain.errors import ContractViolation
from inari.domain.models import require_int


@dataclass(frozen=True, order=True)
class BudgetPeriod:
    """Immutable (year, month) key, ordered by year then month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        require_int("year", self.year)
        require_int("month", self.month)
        if not MINYEAR <= self.year <= MAXYEAR:
            raise ContractViolation("year", f"Year must be between {MINYEAR} and {MAXYEAR}")
        if not 1 <= self.month <= 12:
            raise ContractViolation("month", "Month must be between 1 and 12")

    @classmethod
    def current(cls, clock: Clock = utc_now) -> "BudgetPeriod":
        """Budget period containing the clock's current time."""
        return cls.from_date(clock())

    @classmethod
    def from_date(cls, moment: date | datetime) -> "BudgetPeriod":
        return cls(year=moment.year, month=moment.month)

    @classmethod
    def parse(cls, text: str) -> "BudgetPeriod":
        """Parse a period in YYYY-MM format.

        Raises:
            ContractViolation: If the text is not a valid YYYY-MM month.
        """
        try:
            moment = datetime.strptime(text, "%Y-%m")
        except ValueError:
            raise ContractViolation("period", f"Invalid month '{text}', expected YYYY-MM") from None
        return cls.from_date(moment)

    def date_range(self) -> tuple[date, date]:
        """First day of this period and first day of the next one."""
        first, next_first, _ = month_range(self.year, self.month)
        return first, next_first

    @property
    def label(self) -> str:
        """Human-readable month, e.g. "January 2026"."""
        return month_range(self.year, self.month)[2]

    def next(self) -> "BudgetPeriod":
        if self.month == 12:
            return BudgetPeriod(self.year + 1, 1)
        return BudgetPeriod(self.year, self.month + 1)

    def previous(self) -> "BudgetPeriod":
        if self.month == 1:
            return BudgetPeriod(self.year - 1, 12)
        return BudgetPeriod(self.year, self.month - 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    # Defined last: the property name shadows datetime.date inside the class body
    @property
    def date(self) -> date:
        """First day of this period."""
        return month_range(self.year, self.month)[0]
