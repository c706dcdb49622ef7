# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Currency conversion and display formatting."""

from __future__ import annotations

from collections.abc import Mapping

from immersion_tco.data.defaults import CURRENCY_FORMATS, DEFAULT_EXCHANGE_RATES
from immersion_tco.data.models import Currency
from immersion_tco.errors import CurrencyConversionError


def _code(currency: Currency | str) -> str:
    return currency.value if isinstance(currency, Currency) else str(currency).upper()


def convert_currency(
    amount: float,
    from_currency: Currency | str,
    to_currency: Currency | str,
    rates: Mapping[str, float] = DEFAULT_EXCHANGE_RATES,
) -> float:
    """Convert *amount* using a ``{"FROM_TO": rate}`` table.

    Same-currency conversion is the identity.  When only the inverse
    ``TO_FROM`` rate is known, the amount is divided by it.

    Raises:
        CurrencyConversionError: if neither direction is in *rates*.
    """
    source, target = _code(from_currency), _code(to_currency)
    if source == target:
        return amount

    rate = rates.get(f"{source}_{target}")
    if rate:
        return amount * rate

    inverse = rates.get(f"{target}_{source}")
    if inverse:
        return amount / inverse

    raise CurrencyConversionError(source, target)


def get_currency_symbol(currency: Currency | str) -> str:
    """Display symbol for *currency*, or the code itself when unknown."""
    try:
        return str(CURRENCY_FORMATS[Currency(_code(currency))]["symbol"])
    except ValueError:
        return _code(currency)


def format_currency(amount: float, currency: Currency | str = Currency.USD) -> str:
    """Format *amount* with grouping and the currency symbol.

    >>> format_currency(-1234.5)
    '-$1,234.50'
    """
    currency = Currency(_code(currency))
    spec = CURRENCY_FORMATS[currency]
    decimals = int(spec["decimals"])
    symbol = spec["symbol"]

    sign = "-" if amount < 0 else ""
    digits = f"{abs(amount):,.{decimals}f}"
    if spec["prefix"]:
        return f"{sign}{symbol}{digits}"
    return f"{sign}{digits} {symbol}"
