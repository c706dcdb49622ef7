# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Exception types raised by the TCO calculation engine."""

from __future__ import annotations


class TcoError(Exception):
    """Base class for all errors raised by immersion_tco."""


class ConfigurationShapeError(TcoError, ValueError):
    """The configuration is structurally unusable for calculation.

    Raised for missing sections, wrong field types, negative counts or
    power, and non-finite numeric parameters.  ``errors`` holds one
    message per violation, each prefixed with the dotted field path.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid calculation configuration: " + "; ".join(self.errors))


class CurrencyConversionError(TcoError, KeyError):
    """No forward or inverse exchange rate exists for a currency pair."""

    def __init__(self, from_currency: str, to_currency: str) -> None:
        self.from_currency = from_currency
        self.to_currency = to_currency
        super().__init__(from_currency, to_currency)

    def __str__(self) -> str:
        return f"Exchange rate not found for {self.from_currency} to {self.to_currency}"
