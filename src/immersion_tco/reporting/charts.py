# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Reshape breakdown data into display-ready chart series.

The series are plain records; rendering is left to the consumer.
"""

from __future__ import annotations

from immersion_tco.data.models import (
    CalculationBreakdown,
    ChartData,
    CostCategoryComparison,
    PUEAnalysis,
    PUEComparison,
    SensitivitySeries,
    TcoChartPoint,
)


def _category(air_value: float, immersion_value: float) -> CostCategoryComparison:
    return CostCategoryComparison(
        air_cooling=air_value,
        immersion_cooling=immersion_value,
        difference=air_value - immersion_value,
    )


def build_cost_categories(
    breakdown: CalculationBreakdown,
) -> dict[str, CostCategoryComparison]:
    """CAPEX categories plus the first-year energy bill, side by side."""
    air_capex = breakdown.capex.air_cooling
    immersion_capex = breakdown.capex.immersion_cooling

    if breakdown.opex_annual:
        first_year = breakdown.opex_annual[0]
        air_energy = first_year.air_cooling.energy
        immersion_energy = first_year.immersion_cooling.energy
    else:
        air_energy = immersion_energy = 0.0

    return {
        "Equipment": _category(air_capex.equipment, immersion_capex.equipment),
        "Installation": _category(air_capex.installation, immersion_capex.installation),
        "Infrastructure": _category(
            air_capex.infrastructure, immersion_capex.infrastructure
        ),
        "Annual Energy": _category(air_energy, immersion_energy),
    }


def build_chart_data(
    breakdown: CalculationBreakdown,
    pue: PUEAnalysis,
    sensitivity: list[SensitivitySeries] | None = None,
) -> ChartData:
    """Build the TCO progression, PUE comparison and cost-category series."""
    tco_progression = [
        TcoChartPoint(
            year=point.year,
            air_cooling=point.air_cooling,
            immersion_cooling=point.immersion_cooling,
            savings=point.savings,
            cumulative_savings=point.savings,
        )
        for point in breakdown.tco_cumulative
    ]

    return ChartData(
        tco_progression=tco_progression,
        pue_comparison=PUEComparison(
            air_cooling=pue.air_cooling,
            immersion_cooling=pue.immersion_cooling,
        ),
        cost_categories=build_cost_categories(breakdown),
        sensitivity_analysis=list(sensitivity or []),
    )
