"""ISO 4217 style currency codes."""

from collections.abc import Callable
from dataclasses import dataclass

from inari.domain.errors import ContractViolation

# Looks up the display symbol for a currency code, None when unknown
SymbolProvider = Callable[[str], str | None]

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF",
    "CNY": "CN¥",
    "INR": "₹",
    "BRL": "R$",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "PLN": "zł",
    "KRW": "₩",
    "MXN": "MX$",
}


def default_symbol_provider(code: str) -> str | None:
    return CURRENCY_SYMBOLS.get(code)


@dataclass(frozen=True)
class CurrencyCode:
    """Three character currency code (e.g., "USD", "EUR", "GBP")."""

    code: str

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or len(self.code) != 3:
            raise ContractViolation("currency", "Currency code must be exactly 3 characters")
        if not all(ch.isupper() or ch.isdigit() for ch in self.code):
            raise ContractViolation("currency", "Currency code must be uppercase letters or numbers")

    def symbol(self, provider: SymbolProvider | None = None) -> str:
        """Return the display symbol, or the code itself when none is known.

        Args:
            provider: Symbol lookup to consult. Defaults to the built-in table.
        """
        lookup = provider or default_symbol_provider
        return lookup(self.code) or self.code

    @property
    def display_name(self) -> str:
        """Symbol followed by the code, e.g. "€ (EUR)"."""
        return f"{self.symbol()} ({self.code})"

    def __str__(self) -> str:
        return self.code


USD = CurrencyCode("USD")
EUR = CurrencyCode("EUR")
GBP = CurrencyCode("GBP")
JPY = CurrencyCode("JPY")
CAD = CurrencyCode("CAD")
AUD = CurrencyCode("AUD")
CHF = CurrencyCode("CHF")
CNY = CurrencyCode("CNY")
INR = CurrencyCode("INR")
BRL = CurrencyCode("BRL")
