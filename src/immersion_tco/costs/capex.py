# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Capital expenditure for both cooling methods."""

from __future__ import annotations

import math

from immersion_tco.data.defaults import UNIT_COSTS
from immersion_tco.data.models import (
    CapexComparison,
    CostBreakdown,
    ResolvedAirCooling,
    ResolvedImmersionCooling,
)


def percent_of(part: float, whole: float) -> float:
    """Return ``part / whole * 100``, or 0.0 when *whole* is zero."""
    if whole == 0:
        return 0.0
    return part / whole * 100


def air_cooling_capex(air: ResolvedAirCooling) -> CostBreakdown:
    """Racks, 30 kW CRAC units and per-kW power infrastructure."""
    hvac_units = math.ceil(air.hvac_power_kw / UNIT_COSTS["hvac_unit_capacity_kw"])

    equipment = (
        air.total_racks * UNIT_COSTS["rack_42u"]
        + hvac_units * UNIT_COSTS["hvac_unit"]
    )
    installation = (
        air.total_racks * UNIT_COSTS["rack_42u_installation"]
        + hvac_units * UNIT_COSTS["hvac_unit_installation"]
    )
    infrastructure = air.total_facility_power_kw * UNIT_COSTS["air_infrastructure_per_kw"]

    return CostBreakdown(
        equipment=equipment,
        installation=installation,
        infrastructure=infrastructure,
    )


def immersion_cooling_capex(immersion: ResolvedImmersionCooling) -> CostBreakdown:
    """Tanks scaled by height, pump / heat-exchanger systems, coolant fill
    and the lighter per-kW infrastructure immersion needs."""
    cost_per_u = UNIT_COSTS["tank_base"] / UNIT_COSTS["tank_base_height_u"]

    equipment = 0.0
    installation = 0.0
    for group in immersion.tank_groups:
        tank_cost = cost_per_u * group.height_units
        equipment += group.quantity * tank_cost
        installation += group.quantity * tank_cost * UNIT_COSTS["tank_installation_fraction"]

    tanks = immersion.total_tanks
    equipment += UNIT_COSTS["pump_system_per_10_tanks"] * tanks / 10
    equipment += UNIT_COSTS["heat_exchanger_per_15_tanks"] * tanks / 15

    coolant = immersion.total_coolant_liters * UNIT_COSTS["coolant_per_liter"]
    infrastructure = (
        immersion.total_facility_power_kw * UNIT_COSTS["immersion_infrastructure_per_kw"]
    )

    return CostBreakdown(
        equipment=equipment,
        installation=installation,
        infrastructure=infrastructure,
        coolant=coolant,
    )


def calculate_capex(
    air: ResolvedAirCooling,
    immersion: ResolvedImmersionCooling,
) -> CapexComparison:
    """Compare capital cost; positive savings favour immersion cooling."""
    air_capex = air_cooling_capex(air)
    immersion_capex = immersion_cooling_capex(immersion)
    savings = air_capex.total - immersion_capex.total

    return CapexComparison(
        air_cooling=air_capex,
        immersion_cooling=immersion_capex,
        savings=savings,
        savings_percent=percent_of(savings, air_capex.total),
    )
