# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""CAPEX, OPEX and cumulative TCO calculators."""

from immersion_tco.costs.capex import (
    air_cooling_capex,
    calculate_capex,
    immersion_cooling_capex,
)
from immersion_tco.costs.opex import build_maintenance_schedule, project_opex
from immersion_tco.costs.progression import (
    build_tco_progression,
    calculate_npv_savings,
    calculate_payback_months,
    calculate_roi_percent,
)

__all__ = [
    "air_cooling_capex",
    "build_maintenance_schedule",
    "build_tco_progression",
    "calculate_capex",
    "calculate_npv_savings",
    "calculate_payback_months",
    "calculate_roi_percent",
    "immersion_cooling_capex",
    "project_opex",
]
