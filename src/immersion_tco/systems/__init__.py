# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Resolvers turning cooling configurations into physical system parameters."""

from immersion_tco.systems.air import resolve_air_cooling
from immersion_tco.systems.immersion import (
    coolant_volume_liters,
    optimize_tank_configuration,
    resolve_immersion_cooling,
    tank_height_units,
)

__all__ = [
    "coolant_volume_liters",
    "optimize_tank_configuration",
    "resolve_air_cooling",
    "resolve_immersion_cooling",
    "tank_height_units",
]
