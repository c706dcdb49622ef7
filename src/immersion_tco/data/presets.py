"""Preset configurations for common deployment sizes.

Each preset pairs an air-cooled baseline with an equivalent immersion
deployment so the calculator can be run without writing a config file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from immersion_tco.data.models import (
    AirCoolingConfig,
    CalculationConfiguration,
    FinancialConfig,
    ImmersionCoolingConfig,
    TankConfiguration,
)


class Preset(BaseModel):
    """A named, ready-to-run calculation configuration."""

    name: str = Field(description="Short identifier for the preset")
    description: str = Field(description="Human-readable description of the preset")
    category: str = Field(description="Size class: small, medium, large or enterprise")
    configuration: CalculationConfiguration


# ---------------------------------------------------------------------------
# Preset definitions
# ---------------------------------------------------------------------------

SMALL_EDGE = Preset(
    name="small_edge",
    description=(
        "Ten 15 kW air-cooled racks compared with an auto-sized "
        "150 kW immersion deployment."
    ),
    category="small",
    configuration=CalculationConfiguration(
        air_cooling=AirCoolingConfig(
            input_method="rack_count", rack_count=10, power_per_rack_kw=15.0
        ),
        immersion_cooling=ImmersionCoolingConfig(
            input_method="auto_optimize", target_power_kw=150.0
        ),
        financial=FinancialConfig(analysis_years=5, currency="USD", region="US"),
    ),
)

MEDIUM_ENTERPRISE = Preset(
    name="medium_enterprise",
    description=(
        "A 1 MW enterprise hall sized by total power, with hand-picked "
        "23U and 20U tank groups."
    ),
    category="medium",
    configuration=CalculationConfiguration(
        air_cooling=AirCoolingConfig(input_method="total_power", total_power_kw=1000.0),
        immersion_cooling=ImmersionCoolingConfig(
            input_method="manual_config",
            tank_configurations=(
                TankConfiguration(size="23U", quantity=16, power_density_kw_per_u=2.0),
                TankConfiguration(size="20U", quantity=7, power_density_kw_per_u=2.0),
            ),
        ),
        financial=FinancialConfig(analysis_years=7, currency="USD", region="US"),
    ),
)

LARGE_COLOCATION = Preset(
    name="large_colocation",
    description=(
        "A 4.5 MW European colocation site with high-density 30 kW racks "
        "and elevated energy prices."
    ),
    category="large",
    configuration=CalculationConfiguration(
        air_cooling=AirCoolingConfig(
            input_method="rack_count", rack_count=150, power_per_rack_kw=30.0
        ),
        immersion_cooling=ImmersionCoolingConfig(
            input_method="auto_optimize", target_power_kw=4500.0
        ),
        financial=FinancialConfig(analysis_years=10, currency="EUR", region="EU"),
    ),
)

ENTERPRISE_GULF = Preset(
    name="enterprise_gulf",
    description=(
        "A 10 MW Gulf-region AI campus with subsidised energy and a "
        "carbon-intensive grid."
    ),
    category="enterprise",
    configuration=CalculationConfiguration(
        air_cooling=AirCoolingConfig(input_method="total_power", total_power_kw=10000.0),
        immersion_cooling=ImmersionCoolingConfig(
            input_method="auto_optimize", target_power_kw=10000.0
        ),
        financial=FinancialConfig(analysis_years=10, currency="SAR", region="ME"),
    ),
)


# ---------------------------------------------------------------------------
# Preset registry
# ---------------------------------------------------------------------------

PRESETS: dict[str, Preset] = {
    "small_edge": SMALL_EDGE,
    "medium_enterprise": MEDIUM_ENTERPRISE,
    "large_colocation": LARGE_COLOCATION,
    "enterprise_gulf": ENTERPRISE_GULF,
}


def get_preset(name: str) -> Preset:
    """Return the preset for the given name.

    Parameters
    ----------
    name:
        One of ``small_edge``, ``medium_enterprise``,
        ``large_colocation``, or ``enterprise_gulf``.

    Returns
    -------
    Preset
        The matching preset.

    Raises
    ------
    KeyError
        If *name* does not match any registered preset.
    """
    try:
        return PRESETS[name]
    except KeyError:
        available = ", ".join(sorted(PRESETS.keys()))
        raise KeyError(
            f"Unknown preset '{name}'. Available presets: {available}"
        ) from None
