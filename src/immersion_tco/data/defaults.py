# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Read-only constant tables shared by every calculation.

Equipment defaults, base unit costs, regional energy / labor / grid-carbon
figures, advisory validation limits and currency display settings.  None
of these tables is request-scoped; they are safe to share across
concurrent calculations.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from immersion_tco.data.models import (
    Currency,
    FinancialConfig,
    FinancialParameters,
    Region,
)

HOURS_PER_YEAR = 8760

# ---------------------------------------------------------------------------
# Air cooling
# ---------------------------------------------------------------------------

AIR_RACK_CAPACITY_KW = 15.0
AIR_HVAC_COP = 2.5
AIR_HVAC_EFFICIENCY = 0.85
AIR_POWER_DISTRIBUTION_EFFICIENCY = 0.95
# Annual maintenance as a fraction of rack equipment value.
AIR_MAINTENANCE_FACTOR = 0.08
AIR_LABOR_HOURS_PER_RACK = 24

# ---------------------------------------------------------------------------
# Immersion cooling
# ---------------------------------------------------------------------------

IMMERSION_PUMP_EFFICIENCY = 0.92
IMMERSION_HEAT_EXCHANGER_EFFICIENCY = 0.95
PUMP_POWER_FRACTION = 0.015
HEAT_EXCHANGER_POWER_FRACTION = 0.005

# Auto-optimize always emits one bucket of this size.
AUTO_TANK_SIZE = "23U"
AUTO_TANK_POWER_KW = 46.0

COOLANT_LITERS_PER_U = 25.0
COOLANT_REPLACEMENT_CYCLE_MONTHS = 24
COOLANT_TOP_UP_FRACTION = 0.1

IMMERSION_MAINTENANCE_FACTOR = 0.03
IMMERSION_LABOR_HOURS_PER_TANK = 8

MAJOR_OVERHAUL_INTERVAL_YEARS = 5

# ---------------------------------------------------------------------------
# Base unit costs (nominal units of the configured currency)
# ---------------------------------------------------------------------------

UNIT_COSTS: Mapping[str, float] = MappingProxyType({
    "rack_42u": 2500.0,
    "rack_42u_installation": 1000.0,
    "hvac_unit": 25000.0,
    "hvac_unit_installation": 8000.0,
    "hvac_unit_capacity_kw": 30.0,
    "air_infrastructure_per_kw": 500.0,
    "tank_base": 35000.0,
    "tank_base_height_u": 23.0,
    "tank_installation_fraction": 0.25,
    "pump_system_per_10_tanks": 8000.0,
    "heat_exchanger_per_15_tanks": 5000.0,
    "coolant_per_liter": 25.0,
    "immersion_infrastructure_per_kw": 200.0,
})

# ---------------------------------------------------------------------------
# Financial defaults
# ---------------------------------------------------------------------------

DEFAULT_DISCOUNT_RATE = 0.08
DEFAULT_ENERGY_ESCALATION_RATE = 0.03
DEFAULT_MAINTENANCE_ESCALATION_RATE = 0.025
DEFAULT_ANALYSIS_YEARS = 5
DEFAULT_REGION = Region.US

REGIONAL_ENERGY_COSTS: Mapping[Region, float] = MappingProxyType({
    Region.US: 0.12,
    Region.EU: 0.28,
    Region.ME: 0.08,
})

REGIONAL_LABOR_COSTS: Mapping[Region, float] = MappingProxyType({
    Region.US: 75.0,
    Region.EU: 65.0,
    Region.ME: 45.0,
})

# kg CO2 per kWh of grid electricity.
REGIONAL_CARBON_FACTORS: Mapping[Region, float] = MappingProxyType({
    Region.US: 0.4,
    Region.EU: 0.3,
    Region.ME: 0.5,
})

WATER_GALLONS_PER_KWH = 0.5

# ---------------------------------------------------------------------------
# Advisory validation limits
# ---------------------------------------------------------------------------

RACK_COUNT_RANGE = (1, 1000)
POWER_PER_RACK_RANGE_KW = (0.5, 50.0)
TOTAL_POWER_RANGE_KW = (1.0, 50000.0)
ANALYSIS_YEARS_RANGE = (1, 10)
DISCOUNT_RATE_RANGE = (0.01, 0.25)
ENERGY_COST_RANGE = (0.01, 1.0)
ESCALATION_RATE_RANGE = (-0.1, 0.2)
LABOR_COST_RANGE = (10.0, 200.0)
EFFICIENCY_RANGE = (0.1, 1.0)
TANK_QUANTITY_RANGE = (1, 500)
POWER_DENSITY_RANGE_KW_PER_U = (0.5, 5.0)
MAX_TANK_GROUPS = 50

# ---------------------------------------------------------------------------
# Currency display
# ---------------------------------------------------------------------------

CURRENCY_FORMATS: Mapping[Currency, Mapping[str, object]] = MappingProxyType({
    Currency.USD: MappingProxyType({"symbol": "$", "decimals": 2, "prefix": True}),
    Currency.EUR: MappingProxyType({"symbol": "€", "decimals": 2, "prefix": False}),
    Currency.SAR: MappingProxyType({"symbol": "ر.س", "decimals": 2, "prefix": False}),
    Currency.AED: MappingProxyType({"symbol": "د.إ", "decimals": 2, "prefix": False}),
})

# Static reference rates; callers normally supply their own table.
DEFAULT_EXCHANGE_RATES: Mapping[str, float] = MappingProxyType({
    "USD_EUR": 0.85,
    "USD_SAR": 3.75,
    "USD_AED": 3.67,
    "EUR_USD": 1.18,
    "EUR_SAR": 4.41,
    "EUR_AED": 4.32,
    "SAR_USD": 0.27,
    "SAR_EUR": 0.23,
    "SAR_AED": 0.98,
    "AED_USD": 0.27,
    "AED_EUR": 0.23,
    "AED_SAR": 1.02,
})


def _first_set(*values: Optional[float]) -> Optional[float]:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_financial_parameters(financial: FinancialConfig) -> FinancialParameters:
    """Apply overrides and regional defaults to the financial section.

    Precedence for each rate is the ``custom_*`` field, then the plain
    field, then the default.  An explicit zero is honoured.
    """
    region = financial.region or DEFAULT_REGION

    discount_rate = _first_set(
        financial.custom_discount_rate, financial.discount_rate, DEFAULT_DISCOUNT_RATE
    )
    energy_cost = _first_set(
        financial.custom_energy_cost,
        financial.energy_cost_kwh,
        REGIONAL_ENERGY_COSTS[region],
    )
    labor_cost = _first_set(financial.custom_labor_cost, REGIONAL_LABOR_COSTS[region])
    energy_escalation = _first_set(
        financial.energy_escalation_rate, DEFAULT_ENERGY_ESCALATION_RATE
    )
    maintenance_escalation = _first_set(
        financial.maintenance_escalation_rate, DEFAULT_MAINTENANCE_ESCALATION_RATE
    )

    return FinancialParameters(
        analysis_years=financial.analysis_years,
        currency=financial.currency,
        region=region,
        discount_rate=discount_rate,
        energy_cost_per_kwh=energy_cost,
        labor_cost_per_hour=labor_cost,
        energy_escalation_rate=energy_escalation,
        maintenance_escalation_rate=maintenance_escalation,
        carbon_factor_kg_per_kwh=REGIONAL_CARBON_FACTORS[region],
    )
