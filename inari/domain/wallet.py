"""Wallets: budget containers owned by one or two people."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID, uuid4

from inari.dates import Clock, utc_now
from inari.domain.currency import CurrencyCode
from inari.domain.errors import ContractViolation
from inari.domain.models import OwnerID, require_bool, require_ratio, require_text, revise


class WalletType(str, Enum):
    """Type of wallet ownership."""

    SINGLE = "single"
    TWO_USER = "twoUser"

    @property
    def owner_count(self) -> int:
        return 1 if self is WalletType.SINGLE else 2


@dataclass(frozen=True)
class Wallet:
    """Immutable wallet.

    burden_ratio is the default share of a shared expense carried by the
    first owner; the second owner carries the rest.
    """

    name: str
    currency: CurrencyCode
    wallet_type: WalletType
    owner_ids: tuple[OwnerID, ...]
    burden_ratio: Decimal = Decimal("0.5")
    is_archived: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)
    modified_at: datetime = field(default_factory=utc_now)

    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({"name", "burden_ratio", "is_archived", "owner_ids"})

    def __post_init__(self) -> None:
        require_text("name", self.name, "Wallet name")
        if not isinstance(self.currency, CurrencyCode):
            raise ContractViolation("currency", "Wallet currency must be a CurrencyCode")
        if not isinstance(self.wallet_type, WalletType):
            raise ContractViolation("type", f"Unknown wallet type: {self.wallet_type!r}")
        object.__setattr__(self, "burden_ratio", require_ratio("burdenRatio", self.burden_ratio))
        require_bool("isArchived", self.is_archived)

        if isinstance(self.owner_ids, str):
            raise ContractViolation("ownerIDs", "Owner IDs must be a sequence of strings")
        owners = tuple(self.owner_ids)
        if not all(isinstance(owner, str) for owner in owners):
            raise ContractViolation("ownerIDs", "Owner IDs must be strings")
        if len(owners) != self.wallet_type.owner_count:
            raise ContractViolation("ownerIDs", "Owner count must match wallet type (single: 1, twoUser: 2)")
        object.__setattr__(self, "owner_ids", owners)

    @property
    def is_two_user(self) -> bool:
        return self.wallet_type is WalletType.TWO_USER

    @property
    def owner_count(self) -> int:
        return len(self.owner_ids)

    def with_changes(self, clock: Clock | None = None, **changes: Any) -> "Wallet":
        """Return an updated copy with a refreshed modified_at.

        Only name, burden_ratio, is_archived and owner_ids may change.
        """
        return revise(self, self.MUTABLE_FIELDS, clock, changes)
