# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Operating expenditure projection.

Projects energy, maintenance, coolant and labor costs for every year of
the analysis horizon, compounding the energy and maintenance escalation
rates from year 1.
"""

from __future__ import annotations

from immersion_tco.costs.capex import percent_of
from immersion_tco.data.defaults import (
    AIR_LABOR_HOURS_PER_RACK,
    AIR_MAINTENANCE_FACTOR,
    COOLANT_REPLACEMENT_CYCLE_MONTHS,
    COOLANT_TOP_UP_FRACTION,
    HOURS_PER_YEAR,
    IMMERSION_LABOR_HOURS_PER_TANK,
    IMMERSION_MAINTENANCE_FACTOR,
    MAJOR_OVERHAUL_INTERVAL_YEARS,
    UNIT_COSTS,
)
from immersion_tco.data.models import (
    AnnualCosts,
    FinancialParameters,
    MaintenanceScheduleEntry,
    OperatingCosts,
    ResolvedAirCooling,
    ResolvedImmersionCooling,
)


def escalate(base: float, rate: float, year: int) -> float:
    """Compound *base* by *rate* for ``year - 1`` years."""
    return base * (1 + rate) ** (year - 1)


def coolant_top_up_due(year: int) -> bool:
    """True in years that close a coolant replacement cycle."""
    cycle_years = max(1, COOLANT_REPLACEMENT_CYCLE_MONTHS // 12)
    return year % cycle_years == 0


def air_cooling_opex(
    air: ResolvedAirCooling,
    year: int,
    energy_cost_per_kwh: float,
    params: FinancialParameters,
) -> OperatingCosts:
    energy = air.total_facility_power_kw * HOURS_PER_YEAR * energy_cost_per_kwh

    maintenance_rate = escalate(
        AIR_MAINTENANCE_FACTOR, params.maintenance_escalation_rate, year
    )
    maintenance = air.total_racks * UNIT_COSTS["rack_42u"] * maintenance_rate

    labor = air.total_racks * AIR_LABOR_HOURS_PER_RACK * params.labor_cost_per_hour

    return OperatingCosts(energy=energy, maintenance=maintenance, labor=labor)


def immersion_cooling_opex(
    immersion: ResolvedImmersionCooling,
    year: int,
    energy_cost_per_kwh: float,
    params: FinancialParameters,
) -> OperatingCosts:
    energy = immersion.total_facility_power_kw * HOURS_PER_YEAR * energy_cost_per_kwh

    maintenance_rate = escalate(
        IMMERSION_MAINTENANCE_FACTOR, params.maintenance_escalation_rate, year
    )
    tank_value = immersion.total_tanks * UNIT_COSTS["tank_base"]
    maintenance = tank_value * maintenance_rate

    coolant = 0.0
    if coolant_top_up_due(year):
        coolant = (
            immersion.total_coolant_liters
            * UNIT_COSTS["coolant_per_liter"]
            * COOLANT_TOP_UP_FRACTION
        )

    labor = immersion.total_tanks * IMMERSION_LABOR_HOURS_PER_TANK * params.labor_cost_per_hour

    return OperatingCosts(
        energy=energy, maintenance=maintenance, labor=labor, coolant=coolant
    )


def project_opex(
    air: ResolvedAirCooling,
    immersion: ResolvedImmersionCooling,
    params: FinancialParameters,
) -> list[AnnualCosts]:
    """Return one ``AnnualCosts`` record per year, in order.

    The list length is exactly ``params.analysis_years``.
    """
    annual: list[AnnualCosts] = []

    for year in range(1, params.analysis_years + 1):
        energy_cost = escalate(
            params.energy_cost_per_kwh, params.energy_escalation_rate, year
        )
        air_costs = air_cooling_opex(air, year, energy_cost, params)
        immersion_costs = immersion_cooling_opex(immersion, year, energy_cost, params)
        savings = air_costs.total - immersion_costs.total

        annual.append(
            AnnualCosts(
                year=year,
                air_cooling=air_costs,
                immersion_cooling=immersion_costs,
                savings=savings,
                savings_percent=percent_of(savings, air_costs.total),
            )
        )

    return annual


def build_maintenance_schedule(
    opex_annual: list[AnnualCosts],
) -> list[MaintenanceScheduleEntry]:
    """Per-year maintenance with a major overhaul every fifth year.

    An overhaul year carries twice the combined routine maintenance of
    both methods.
    """
    schedule: list[MaintenanceScheduleEntry] = []
    for costs in opex_annual:
        air_maintenance = costs.air_cooling.maintenance
        immersion_maintenance = costs.immersion_cooling.maintenance

        overhaul = 0.0
        if costs.year % MAJOR_OVERHAUL_INTERVAL_YEARS == 0:
            overhaul = air_maintenance * 2 + immersion_maintenance * 2

        schedule.append(
            MaintenanceScheduleEntry(
                year=costs.year,
                air_cooling_maintenance=air_maintenance,
                immersion_cooling_maintenance=immersion_maintenance,
                major_overhauls=overhaul,
            )
        )
    return schedule
