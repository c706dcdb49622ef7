# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Air-cooling system resolution.

Derives rack count, IT load, HVAC and distribution overhead and PUE from
the air-cooling section of a configuration.
"""

from __future__ import annotations

import math

from immersion_tco.data.defaults import (
    AIR_HVAC_COP,
    AIR_HVAC_EFFICIENCY,
    AIR_POWER_DISTRIBUTION_EFFICIENCY,
    AIR_RACK_CAPACITY_KW,
)
from immersion_tco.data.models import (
    AirCoolingConfig,
    AirCoolingInputMethod,
    ResolvedAirCooling,
)


def resolve_air_cooling(config: AirCoolingConfig) -> ResolvedAirCooling:
    """Resolve an air-cooling configuration into physical parameters.

    With the ``rack_count`` method the IT load is ``racks * kW per rack``.
    With ``total_power`` the rack count is derived from the default 15 kW
    rack capacity, rounded up.

    All IT power is assumed to become heat, so the HVAC draw is
    ``heat / (hvac_efficiency * COP)``.  PUE is floored at 1.0.
    """
    if config.input_method is AirCoolingInputMethod.rack_count:
        total_racks = config.rack_count
        power_per_rack_kw = config.power_per_rack_kw
        total_power_kw = total_racks * power_per_rack_kw
    else:
        total_power_kw = config.total_power_kw
        power_per_rack_kw = AIR_RACK_CAPACITY_KW
        total_racks = math.ceil(total_power_kw / power_per_rack_kw)

    hvac_efficiency = config.hvac_efficiency or AIR_HVAC_EFFICIENCY
    distribution_efficiency = (
        config.power_distribution_efficiency or AIR_POWER_DISTRIBUTION_EFFICIENCY
    )

    total_heat_kw = total_power_kw
    hvac_power_kw = total_heat_kw / (hvac_efficiency * AIR_HVAC_COP)
    distribution_losses_kw = total_power_kw * (1 - distribution_efficiency)
    total_facility_power_kw = total_power_kw + hvac_power_kw + distribution_losses_kw

    pue = total_facility_power_kw / total_power_kw

    return ResolvedAirCooling(
        total_racks=total_racks,
        total_power_kw=total_power_kw,
        power_per_rack_kw=power_per_rack_kw,
        hvac_power_kw=hvac_power_kw,
        distribution_losses_kw=distribution_losses_kw,
        total_facility_power_kw=total_facility_power_kw,
        pue=max(pue, 1.0),
        hvac_efficiency=hvac_efficiency,
        power_distribution_efficiency=distribution_efficiency,
    )
