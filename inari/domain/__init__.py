"""Domain models and types for inari.

This package contains the functional core:
- Immutable value types validated on construction
- Pure derived arithmetic (amortization, variance, burden splitting)
- No I/O operations
"""

from inari.domain.budget import Budget
from inari.domain.category import Category, CategoryColor
from inari.domain.currency import CurrencyCode
from inari.domain.errors import ContractViolation, DecodeError, InariError, PrecisionLossError, attempt
from inari.domain.kind import (
    Expectation,
    ExpectationProperties,
    OneTime,
    Recurring,
    RecurringFrequency,
    RecurringProperties,
    SpreadDuration,
    SpreadOut,
    SpreadOutProperties,
    TransactionKind,
)
from inari.domain.models import BudgetID, CategoryID, OwnerID, TransactionID, WalletID
from inari.domain.period import BudgetPeriod
from inari.domain.transaction import Transaction, split_shared_amount
from inari.domain.wallet import Wallet, WalletType

__all__ = [
    # Value types
    "BudgetPeriod",
    "CategoryColor",
    "CurrencyCode",
    # Identities
    "BudgetID",
    "CategoryID",
    "OwnerID",
    "TransactionID",
    "WalletID",
    # Transaction kinds
    "Expectation",
    "ExpectationProperties",
    "OneTime",
    "Recurring",
    "RecurringFrequency",
    "RecurringProperties",
    "SpreadDuration",
    "SpreadOut",
    "SpreadOutProperties",
    "TransactionKind",
    # Entities
    "Budget",
    "Category",
    "Transaction",
    "Wallet",
    "WalletType",
    "split_shared_amount",
    # Errors
    "ContractViolation",
    "DecodeError",
    "InariError",
    "PrecisionLossError",
    "attempt",
]
