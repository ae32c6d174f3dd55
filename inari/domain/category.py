"""Categories and their colour palette."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID, uuid4

from rich.color import Color

from inari.dates import Clock, utc_now
from inari.domain.errors import ContractViolation
from inari.domain.models import require_bool, require_int, require_text, revise


class CategoryColor(str, Enum):
    """Predefined colour palette for categories."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    MINT = "mint"
    TEAL = "teal"
    CYAN = "cyan"
    BLUE = "blue"
    INDIGO = "indigo"
    PURPLE = "purple"
    PINK = "pink"

    @property
    def hex_value(self) -> str:
        return _HEX_VALUES[self]

    @property
    def color(self) -> Color:
        """Display colour for terminal rendering."""
        return Color.parse(self.hex_value)


_HEX_VALUES: dict[CategoryColor, str] = {
    CategoryColor.RED: "#FF3B30",
    CategoryColor.ORANGE: "#FF9500",
    CategoryColor.YELLOW: "#FFCC00",
    CategoryColor.GREEN: "#34C759",
    CategoryColor.MINT: "#00C7BE",
    CategoryColor.TEAL: "#30B0C7",
    CategoryColor.CYAN: "#32ADE6",
    CategoryColor.BLUE: "#007AFF",
    CategoryColor.INDIGO: "#5856D6",
    CategoryColor.PURPLE: "#AF52DE",
    CategoryColor.PINK: "#FF2D55",
}


@dataclass(frozen=True)
class Category:
    """Expense classification belonging to one wallet."""

    wallet_id: UUID
    name: str
    icon_name: str = "tag.fill"
    color: CategoryColor = CategoryColor.BLUE
    is_shared: bool = False
    sort_order: int = 0
    id: UUID = field(default_factory=uuid4)
    modified_at: datetime = field(default_factory=utc_now)

    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"name", "icon_name", "color", "is_shared", "sort_order"})

    def __post_init__(self) -> None:
        require_text("name", self.name, "Category name")
        require_text("iconName", self.icon_name, "Category icon name")
        if not isinstance(self.color, CategoryColor):
            raise ContractViolation("color", f"Unknown category color: {self.color!r}")
        require_bool("isShared", self.is_shared)
        require_int("sortOrder", self.sort_order)

    def with_changes(self, clock: Clock | None = None, **changes: Any) -> "Category":
        """Return an updated copy with a refreshed modified_at."""
        return revise(self, self.MUTABLE_FIELDS, clock, changes)
