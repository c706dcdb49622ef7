# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Immersion TCO - immersion vs air cooling total cost of ownership calculator."""

__version__ = "0.1.0"

from immersion_tco.data.models import (
    CalculationConfiguration,
    CalculationResults,
    Currency,
    Region,
    ValidationResult,
)
from immersion_tco.data.presets import PRESETS, Preset, get_preset
from immersion_tco.engine import (
    CalculationEngine,
    calculate,
    configuration_hash,
    estimate_processing_time,
)
from immersion_tco.currency import convert_currency, format_currency
from immersion_tco.errors import ConfigurationShapeError, CurrencyConversionError, TcoError
from immersion_tco.validation import validate_configuration

__all__ = [
    "CalculationConfiguration",
    "CalculationEngine",
    "CalculationResults",
    "ConfigurationShapeError",
    "Currency",
    "CurrencyConversionError",
    "PRESETS",
    "Preset",
    "Region",
    "TcoError",
    "ValidationResult",
    "calculate",
    "configuration_hash",
    "convert_currency",
    "estimate_processing_time",
    "format_currency",
    "get_preset",
    "validate_configuration",
]
