# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Cumulative TCO progression and time-value-of-money metrics.

Covers the cumulative TCO series, per-year NPV of operating savings,
payback period and ROI.
"""

from __future__ import annotations

import logging

from immersion_tco.data.models import (
    AnnualCosts,
    CapexComparison,
    TcoProgressionPoint,
)

logger = logging.getLogger(__name__)


def discount_factor(rate: float, year: int) -> float:
    """Present-value factor ``1 / (1 + rate) ** year``."""
    return 1 / (1 + rate) ** year


def build_tco_progression(
    capex: CapexComparison,
    opex_annual: list[AnnualCosts],
    discount_rate: float,
) -> list[TcoProgressionPoint]:
    """Accumulate CAPEX plus each year's OPEX for both methods.

    Capital is added once, before year 1.  ``npv_savings`` discounts only
    that year's operating savings, not the cumulative difference.
    """
    air_cumulative = capex.air_cooling.total
    immersion_cumulative = capex.immersion_cooling.total

    progression: list[TcoProgressionPoint] = []
    for costs in opex_annual:
        air_cumulative += costs.air_cooling.total
        immersion_cumulative += costs.immersion_cooling.total

        progression.append(
            TcoProgressionPoint(
                year=costs.year,
                air_cooling=air_cumulative,
                immersion_cooling=immersion_cumulative,
                savings=air_cumulative - immersion_cumulative,
                npv_savings=costs.savings * discount_factor(discount_rate, costs.year),
            )
        )

    return progression


def calculate_npv_savings(progression: list[TcoProgressionPoint]) -> float:
    """Net present value of all operating savings over the horizon."""
    return sum(point.npv_savings for point in progression)


def calculate_payback_months(
    capex_savings: float,
    opex_annual: list[AnnualCosts],
    analysis_years: int,
) -> float:
    """Months until cumulative savings offset the CAPEX deficit.

    Zero when immersion is no more expensive up front.  The crossover
    month is linearly interpolated within the year it happens.  When the
    deficit is never recovered the result is capped at
    ``analysis_years * 12``; callers must read that as a ceiling, not a
    break-even.
    """
    cumulative = capex_savings
    if cumulative >= 0:
        return 0.0

    for costs in opex_annual:
        previous = cumulative
        cumulative += costs.savings
        if cumulative >= 0:
            months_into_year = (-previous / costs.savings) * 12
            return (costs.year - 1) * 12 + months_into_year

    logger.warning(
        "No payback within %d years; reporting the horizon as a ceiling", analysis_years
    )
    return float(analysis_years * 12)


def calculate_roi_percent(total_tco_savings: float, immersion_capex_total: float) -> float:
    """Total TCO savings as a percentage of the immersion CAPEX."""
    if immersion_capex_total == 0:
        return 0.0
    return total_tco_savings / immersion_capex_total * 100
