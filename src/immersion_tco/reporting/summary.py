# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Assemble the financial summary and the detailed breakdown."""

from __future__ import annotations

from immersion_tco.costs.opex import build_maintenance_schedule
from immersion_tco.costs.progression import (
    calculate_npv_savings,
    calculate_payback_months,
    calculate_roi_percent,
)
from immersion_tco.data.models import (
    AnnualCosts,
    CalculationBreakdown,
    CalculationSummary,
    CapexComparison,
    PUEAnalysis,
    ResolvedAirCooling,
    ResolvedImmersionCooling,
    TcoProgressionPoint,
)


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator


def build_summary(
    capex: CapexComparison,
    opex_annual: list[AnnualCosts],
    progression: list[TcoProgressionPoint],
    pue: PUEAnalysis,
    air: ResolvedAirCooling,
    immersion: ResolvedImmersionCooling,
    analysis_years: int,
) -> CalculationSummary:
    """Roll every stage up into the top-level ``CalculationSummary``.

    OPEX savings are summed over the whole horizon regardless of its
    length.  ROI is measured against the immersion CAPEX.
    """
    opex_savings = sum(costs.savings for costs in opex_annual)
    tco_savings = capex.savings + opex_savings

    return CalculationSummary(
        total_capex_savings=capex.savings,
        total_opex_savings_5yr=opex_savings,
        total_tco_savings_5yr=tco_savings,
        roi_percent=calculate_roi_percent(tco_savings, capex.immersion_cooling.total),
        payback_months=calculate_payback_months(capex.savings, opex_annual, analysis_years),
        npv_savings=calculate_npv_savings(progression),
        pue_air_cooling=pue.air_cooling,
        pue_immersion_cooling=pue.immersion_cooling,
        energy_efficiency_improvement=pue.improvement_percent,
        cost_per_kw_air_cooling=_ratio(capex.air_cooling.total, air.total_power_kw),
        cost_per_kw_immersion_cooling=_ratio(
            capex.immersion_cooling.total, immersion.total_power_kw
        ),
        cost_per_rack_air_cooling=_ratio(capex.air_cooling.total, air.total_racks),
        cost_per_rack_equivalent=_ratio(capex.immersion_cooling.total, air.total_racks),
    )


def build_breakdown(
    capex: CapexComparison,
    opex_annual: list[AnnualCosts],
    progression: list[TcoProgressionPoint],
) -> CalculationBreakdown:
    return CalculationBreakdown(
        capex=capex,
        opex_annual=opex_annual,
        tco_cumulative=progression,
        maintenance_schedule=build_maintenance_schedule(opex_annual),
    )
