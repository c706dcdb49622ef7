# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Immersion-cooling system resolution.

Derives tank groups, IT load, pump and heat-exchanger overhead, coolant
volume and PUE from the immersion-cooling section of a configuration.
"""

from __future__ import annotations

import logging
import math

from immersion_tco.data.defaults import (
    AUTO_TANK_POWER_KW,
    AUTO_TANK_SIZE,
    COOLANT_LITERS_PER_U,
    HEAT_EXCHANGER_POWER_FRACTION,
    IMMERSION_HEAT_EXCHANGER_EFFICIENCY,
    IMMERSION_PUMP_EFFICIENCY,
    PUMP_POWER_FRACTION,
)
from immersion_tco.data.models import (
    ImmersionCoolingConfig,
    ImmersionCoolingInputMethod,
    ResolvedImmersionCooling,
    ResolvedTankGroup,
)

logger = logging.getLogger(__name__)


def tank_height_units(size: str) -> int:
    """Parse a tank size label such as ``"23U"`` into rack units."""
    return int(size.upper().rstrip("U"))


def optimize_tank_configuration(target_power_kw: float) -> list[ResolvedTankGroup]:
    """Size a single 23U tank bucket for the target IT load.

    This is a fixed heuristic, not a packing search: the tank count is
    the target divided by the 46 kW rating of a 23U tank, rounded up, and
    the whole target load is assigned to that one bucket.
    """
    quantity = math.ceil(target_power_kw / AUTO_TANK_POWER_KW)
    return [
        ResolvedTankGroup(
            size=AUTO_TANK_SIZE,
            height_units=tank_height_units(AUTO_TANK_SIZE),
            quantity=quantity,
            power_kw=target_power_kw,
        )
    ]


def coolant_volume_liters(groups: list[ResolvedTankGroup]) -> float:
    """Total dielectric coolant across all tank groups (about 25 L per U)."""
    return sum(g.height_units * COOLANT_LITERS_PER_U * g.quantity for g in groups)


def resolve_immersion_cooling(config: ImmersionCoolingConfig) -> ResolvedImmersionCooling:
    """Resolve an immersion-cooling configuration into physical parameters.

    Pump and heat-exchanger draw are fixed fractions (1.5 % and 0.5 %) of
    the IT load.  PUE is floored at 1.0.
    """
    if config.input_method is ImmersionCoolingInputMethod.auto_optimize:
        total_power_kw = config.target_power_kw
        groups = optimize_tank_configuration(total_power_kw)
    else:
        groups = []
        for tank in config.tank_configurations:
            height = tank_height_units(tank.size)
            groups.append(
                ResolvedTankGroup(
                    size=tank.size,
                    height_units=height,
                    quantity=tank.quantity,
                    power_kw=height * tank.power_density_kw_per_u * tank.quantity,
                )
            )
        total_power_kw = sum(g.power_kw for g in groups)

    total_tanks = sum(g.quantity for g in groups)

    pump_power_kw = total_power_kw * PUMP_POWER_FRACTION
    heat_exchanger_power_kw = total_power_kw * HEAT_EXCHANGER_POWER_FRACTION
    total_facility_power_kw = total_power_kw + pump_power_kw + heat_exchanger_power_kw

    pue = total_facility_power_kw / total_power_kw

    logger.debug(
        "Resolved immersion cooling: %d tanks, %.1f kW IT load", total_tanks, total_power_kw
    )

    return ResolvedImmersionCooling(
        total_tanks=total_tanks,
        total_power_kw=total_power_kw,
        tank_groups=groups,
        pump_power_kw=pump_power_kw,
        heat_exchanger_power_kw=heat_exchanger_power_kw,
        total_facility_power_kw=total_facility_power_kw,
        pue=max(pue, 1.0),
        pumping_efficiency=config.pumping_efficiency or IMMERSION_PUMP_EFFICIENCY,
        heat_exchanger_efficiency=(
            config.heat_exchanger_efficiency or IMMERSION_HEAT_EXCHANGER_EFFICIENCY
        ),
        total_coolant_liters=coolant_volume_liters(groups),
    )
