"""inari - wallets, budgets and transactions for one or two people."""

__version__ = "0.1.0"
