# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models, constant tables and preset configurations."""

from immersion_tco.data.models import (
    AirCoolingConfig,
    CalculationConfiguration,
    CalculationResults,
    Currency,
    FinancialConfig,
    ImmersionCoolingConfig,
    Region,
    TankConfiguration,
    ValidationResult,
)
from immersion_tco.data.presets import PRESETS, Preset, get_preset

__all__ = [
    "AirCoolingConfig",
    "CalculationConfiguration",
    "CalculationResults",
    "Currency",
    "FinancialConfig",
    "ImmersionCoolingConfig",
    "PRESETS",
    "Preset",
    "Region",
    "TankConfiguration",
    "ValidationResult",
    "get_preset",
]
