# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""PUE comparison and environmental impact analysis.

Translates the facility-power difference between the two methods into
annual energy, carbon and water savings.
"""

from __future__ import annotations

from immersion_tco.data.defaults import HOURS_PER_YEAR, WATER_GALLONS_PER_KWH
from immersion_tco.data.models import (
    EnvironmentalImpact,
    PUEAnalysis,
    ResolvedAirCooling,
    ResolvedImmersionCooling,
)


def analyze_pue(
    air: ResolvedAirCooling,
    immersion: ResolvedImmersionCooling,
) -> PUEAnalysis:
    """Compare PUE and annual facility energy of both methods."""
    improvement_percent = (air.pue - immersion.pue) / air.pue * 100
    energy_savings_kwh = (
        air.total_facility_power_kw - immersion.total_facility_power_kw
    ) * HOURS_PER_YEAR

    return PUEAnalysis(
        air_cooling=air.pue,
        immersion_cooling=immersion.pue,
        improvement_percent=improvement_percent,
        energy_savings_kwh_annual=energy_savings_kwh,
    )


def analyze_environmental_impact(
    pue: PUEAnalysis,
    carbon_factor_kg_per_kwh: float,
) -> EnvironmentalImpact:
    """Derive carbon, water and energy savings from the PUE analysis.

    Water savings use a flat 0.5 gallon/kWh proxy with no regional
    variation.  ``carbon_footprint_reduction_percent`` is
    ``improvement_percent / air PUE * 100``; downstream reports depend on
    this exact figure.
    """
    energy_savings = pue.energy_savings_kwh_annual

    return EnvironmentalImpact(
        carbon_savings_kg_co2_annual=energy_savings * carbon_factor_kg_per_kwh,
        water_savings_gallons_annual=energy_savings * WATER_GALLONS_PER_KWH,
        energy_savings_kwh_annual=energy_savings,
        carbon_footprint_reduction_percent=pue.improvement_percent / pue.air_cooling * 100,
    )
