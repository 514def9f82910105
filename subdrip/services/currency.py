"""
Currency Conversion

All stored prices are in the base currency (USD). Other currencies are
display-only: amounts are converted at a fixed rate whenever they cross a
currency boundary on their way to the screen.

DESIGN DECISION: The rate table is static. There is no rate fetching,
and unknown currency codes fall back to identity instead of raising.
"""

from decimal import Decimal
from typing import Union

Amount = Union[Decimal, int, float, str]

BASE_CURRENCY = "USD"

# Units of each currency per 1 USD
EXCHANGE_RATES: dict[str, Decimal] = {
    "USD": Decimal("1.0"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "AED": Decimal("3.67"),
    "CAD": Decimal("1.36"),
    "AUD": Decimal("1.53"),
    "JPY": Decimal("149.50"),
    "INR": Decimal("83.12"),
    "CNY": Decimal("7.24"),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "AED": "AED ",
    "CAD": "CA$",
    "AUD": "A$",
    "JPY": "¥",
    "INR": "₹",
    "CNY": "¥",
}

SUPPORTED_CURRENCIES: tuple[str, ...] = tuple(EXCHANGE_RATES)


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() keeps 15.99 as 15.99 rather than its binary expansion
    return Decimal(str(amount))


class CurrencyConverter:
    """Stateless conversion and formatting over the fixed tables."""

    @staticmethod
    def is_supported(code: str) -> bool:
        return code in EXCHANGE_RATES

    @staticmethod
    def convert(amount: Amount, from_code: str, to_code: str) -> Decimal:
        """
        Convert amount from one currency to another via USD.

        If either code is unknown the amount is returned unchanged.
        """
        value = _to_decimal(amount)
        from_rate = EXCHANGE_RATES.get(from_code)
        to_rate = EXCHANGE_RATES.get(to_code)
        if from_rate is None or to_rate is None:
            return value

        amount_in_usd = value / from_rate
        return amount_in_usd * to_rate

    @staticmethod
    def symbol(code: str) -> str:
        """Display symbol for a currency, '$' for unknown codes."""
        return CURRENCY_SYMBOLS.get(code, CURRENCY_SYMBOLS[BASE_CURRENCY])

    @classmethod
    def format(
        cls,
        amount: Amount,
        code: str,
        decimal_places: int = 2,
        from_code: str = BASE_CURRENCY,
    ) -> str:
        """
        Convert an amount into `code` and render it with its symbol.

        >>> CurrencyConverter.format(100, "EUR")
        '€92.00'
        """
        converted = cls.convert(amount, from_code, code)
        return f"{cls.symbol(code)}{converted:.{decimal_places}f}"
