# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Configuration validation.

Two independent paths:

- :func:`validate_configuration` is the advisory pre-flight check.  It
  accepts anything, never raises, and reports every business-rule
  violation it finds as a human-readable message.
- :func:`coerce_configuration` is the hard check used by the engine.  It
  builds a :class:`CalculationConfiguration` and raises
  :class:`ConfigurationShapeError` when that is impossible.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from immersion_tco.data.defaults import (
    ANALYSIS_YEARS_RANGE,
    DISCOUNT_RATE_RANGE,
    EFFICIENCY_RANGE,
    ENERGY_COST_RANGE,
    ESCALATION_RATE_RANGE,
    LABOR_COST_RANGE,
    MAX_TANK_GROUPS,
    POWER_DENSITY_RANGE_KW_PER_U,
    POWER_PER_RACK_RANGE_KW,
    RACK_COUNT_RANGE,
    TANK_QUANTITY_RANGE,
    TOTAL_POWER_RANGE_KW,
)
from immersion_tco.data.models import (
    AirCoolingInputMethod,
    CalculationConfiguration,
    Currency,
    ImmersionCoolingInputMethod,
    Region,
    ValidationResult,
    ValidationWarning,
)
from immersion_tco.errors import ConfigurationShapeError

_TANK_SIZE_PATTERN = re.compile(r"^[1-9]\d*U$")

# Warning thresholds
_HIGH_POWER_PER_RACK_KW = 30.0
_HIGH_DISCOUNT_RATE = 0.15
_MANY_TANK_GROUPS = 10


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _as_dict(value: Any) -> dict[str, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return dict(value)
    return None


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _check_range(
    errors: list[str],
    label: str,
    value: Any,
    bounds: tuple[float, float],
    unit: str = "",
) -> None:
    """Append an error when *value* is present but not a number in *bounds*."""
    if value is None:
        return
    low, high = bounds
    suffix = f" {unit}" if unit else ""
    if not _is_number(value):
        errors.append(f"{label} must be a finite number")
    elif not low <= value <= high:
        errors.append(f"{label} must be between {low:g} and {high:g}{suffix}")


def _positive(value: Any) -> bool:
    return _is_number(value) and value > 0


# ---------------------------------------------------------------------------
# Section rules
# ---------------------------------------------------------------------------

def _air_total_power(air: dict[str, Any]) -> float | None:
    method = _enum_value(air.get("input_method"))
    if method == AirCoolingInputMethod.rack_count.value:
        racks, per_rack = air.get("rack_count"), air.get("power_per_rack_kw")
        if _is_number(racks) and _is_number(per_rack):
            return racks * per_rack
    elif method == AirCoolingInputMethod.total_power.value:
        total = air.get("total_power_kw")
        if _is_number(total):
            return total
    return None


def _validate_air(air: dict[str, Any], errors: list[str]) -> None:
    method = _enum_value(air.get("input_method"))

    if method == AirCoolingInputMethod.rack_count.value:
        if not _positive(air.get("rack_count")) or not _positive(air.get("power_per_rack_kw")):
            errors.append(
                "Air cooling: rack count and power per rack are required for "
                "the rack_count input method"
            )
        else:
            rack_count = air["rack_count"]
            if not isinstance(rack_count, int):
                errors.append("Air cooling: rack count must be a whole number")
            _check_range(errors, "Air cooling: rack count", rack_count, RACK_COUNT_RANGE)
            _check_range(
                errors, "Air cooling: power per rack", air["power_per_rack_kw"],
                POWER_PER_RACK_RANGE_KW, "kW",
            )
    elif method == AirCoolingInputMethod.total_power.value:
        if not _positive(air.get("total_power_kw")):
            errors.append(
                "Air cooling: total power is required for the total_power input method"
            )
    else:
        errors.append(
            "Air cooling: input method must be one of: "
            + ", ".join(m.value for m in AirCoolingInputMethod)
        )

    for key, label in (
        ("hvac_efficiency", "HVAC efficiency"),
        ("power_distribution_efficiency", "Power distribution efficiency"),
        ("space_efficiency", "Space efficiency"),
    ):
        _check_range(errors, f"Air cooling: {label}", air.get(key), EFFICIENCY_RANGE)


def _validate_tank(index: int, tank: Any, errors: list[str]) -> float | None:
    """Validate one tank group; return its IT power when computable."""
    label = f"Immersion cooling: tank configuration {index + 1}"
    entry = _as_dict(tank)
    if entry is None:
        errors.append(f"{label} must be an object")
        return None

    size = entry.get("size")
    quantity = entry.get("quantity")
    density = entry.get("power_density_kw_per_u")

    height = None
    if not isinstance(size, str) or not _TANK_SIZE_PATTERN.match(size):
        errors.append(f'{label}: size must be in a format like "23U"')
    else:
        height = int(size[:-1])

    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        errors.append(f"{label}: quantity must be at least 1")
        quantity = None
    elif quantity > TANK_QUANTITY_RANGE[1]:
        errors.append(f"{label}: quantity cannot exceed {TANK_QUANTITY_RANGE[1]}")

    if not _is_number(density):
        errors.append(f"{label}: power density is required")
        density = None
    else:
        low, high = POWER_DENSITY_RANGE_KW_PER_U
        if density > high:
            errors.append(f"{label}: power density cannot exceed {high:g} kW per U")
            density = None
        elif density < low:
            errors.append(f"{label}: power density must be at least {low:g} kW per U")
            density = None

    if height is None or quantity is None or density is None:
        return None
    return height * density * quantity


def _validate_immersion(immersion: dict[str, Any], errors: list[str]) -> float | None:
    """Validate the immersion section; return its IT power when computable."""
    method = _enum_value(immersion.get("input_method"))

    if method == ImmersionCoolingInputMethod.manual_config.value:
        tanks = immersion.get("tank_configurations")
        if not isinstance(tanks, (list, tuple)) or len(tanks) == 0:
            errors.append(
                "Immersion cooling: tank configurations are required for the "
                "manual_config input method"
            )
            return None
        if len(tanks) > MAX_TANK_GROUPS:
            errors.append(
                f"Immersion cooling: cannot exceed {MAX_TANK_GROUPS} tank configurations"
            )
        powers = [_validate_tank(i, tank, errors) for i, tank in enumerate(tanks)]
        if any(p is None for p in powers):
            return None
        return sum(powers)

    if method == ImmersionCoolingInputMethod.auto_optimize.value:
        target = immersion.get("target_power_kw")
        if not _positive(target):
            errors.append(
                "Immersion cooling: target power is required for the "
                "auto_optimize input method"
            )
            return None
        return target

    errors.append(
        "Immersion cooling: input method must be one of: "
        + ", ".join(m.value for m in ImmersionCoolingInputMethod)
    )
    return None


def _validate_financial(financial: dict[str, Any], errors: list[str]) -> None:
    years = financial.get("analysis_years")
    if years is not None:
        low, high = ANALYSIS_YEARS_RANGE
        if not isinstance(years, int) or isinstance(years, bool) or not low <= years <= high:
            errors.append(f"Analysis years must be an integer between {low} and {high}")

    currency = _enum_value(financial.get("currency"))
    if currency is not None and currency not in {c.value for c in Currency}:
        errors.append(f"Unsupported currency: {currency}")

    region = _enum_value(financial.get("region"))
    if region is not None and region not in {r.value for r in Region}:
        errors.append(f"Unsupported region: {region}")

    for key in ("discount_rate", "custom_discount_rate"):
        _check_range(errors, "Discount rate", financial.get(key), DISCOUNT_RATE_RANGE)
    for key in ("energy_cost_kwh", "custom_energy_cost"):
        _check_range(errors, "Energy cost", financial.get(key), ENERGY_COST_RANGE, "per kWh")
    _check_range(
        errors, "Energy escalation rate",
        financial.get("energy_escalation_rate"), ESCALATION_RATE_RANGE,
    )
    _check_range(
        errors, "Maintenance escalation rate",
        financial.get("maintenance_escalation_rate"), ESCALATION_RATE_RANGE,
    )
    _check_range(
        errors, "Custom labor cost",
        financial.get("custom_labor_cost"), LABOR_COST_RANGE, "per hour",
    )


def _check_total_power(label: str, total_kw: float | None, errors: list[str]) -> None:
    if total_kw is None:
        return
    maximum = TOTAL_POWER_RANGE_KW[1]
    if total_kw > maximum:
        errors.append(
            f"{label} total power of {total_kw:,.0f} kW exceeds the maximum "
            f"of {maximum:,.0f} kW"
        )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_validation_warnings(configuration: Any) -> list[ValidationWarning]:
    """Return non-blocking hints about unusual but permitted values."""
    config = _as_dict(configuration) or {}
    air = _as_dict(config.get("air_cooling")) or {}
    immersion = _as_dict(config.get("immersion_cooling")) or {}
    financial = _as_dict(config.get("financial")) or {}

    warnings: list[ValidationWarning] = []

    per_rack = air.get("power_per_rack_kw")
    if _is_number(per_rack) and per_rack > _HIGH_POWER_PER_RACK_KW:
        warnings.append(ValidationWarning(
            field="air_cooling.power_per_rack_kw",
            message="Power per rack is very high",
            suggestion="Consider if this value is realistic for your equipment",
        ))

    discount = financial.get("discount_rate")
    if _is_number(discount) and discount > _HIGH_DISCOUNT_RATE:
        warnings.append(ValidationWarning(
            field="financial.discount_rate",
            message="Discount rate is very high",
            suggestion="High discount rates may undervalue long-term savings",
        ))

    tanks = immersion.get("tank_configurations")
    if isinstance(tanks, (list, tuple)) and len(tanks) > _MANY_TANK_GROUPS:
        warnings.append(ValidationWarning(
            field="immersion_cooling.tank_configurations",
            message="Many tank configurations specified",
            suggestion="Consider using auto-optimize for simpler configuration",
        ))

    return warnings


def validate_configuration(configuration: Any) -> ValidationResult:
    """Advisory pre-flight check of a configuration.

    Accepts a mapping (typically parsed JSON) or a
    :class:`CalculationConfiguration`.  Never raises.  A valid result does
    not guarantee the engine will accept the configuration.
    """
    config = _as_dict(configuration)
    if config is None:
        return ValidationResult(valid=False, errors=["Configuration must be an object"])

    errors: list[str] = []

    air = _as_dict(config.get("air_cooling"))
    if air is None:
        errors.append("Air cooling configuration is required")
    else:
        _validate_air(air, errors)
        _check_total_power("Air cooling", _air_total_power(air), errors)

    immersion = _as_dict(config.get("immersion_cooling"))
    if immersion is None:
        errors.append("Immersion cooling configuration is required")
    else:
        _check_total_power("Immersion cooling", _validate_immersion(immersion, errors), errors)

    financial = _as_dict(config.get("financial"))
    if financial is None:
        errors.append("Financial configuration is required")
    else:
        _validate_financial(financial, errors)

    return ValidationResult(
        valid=not errors,
        errors=errors,
        warnings=extract_validation_warnings(config),
    )


def _format_error(error: dict[str, Any]) -> str:
    path = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "invalid value")
    return f"{path}: {message}" if path else message


def coerce_configuration(configuration: Any) -> CalculationConfiguration:
    """Return a validated :class:`CalculationConfiguration`.

    Raises
    ------
    ConfigurationShapeError
        If a section is missing, a field has the wrong type, a count or
        power is not positive, or a numeric parameter is not finite.
    """
    if isinstance(configuration, CalculationConfiguration):
        return configuration
    if isinstance(configuration, BaseModel):
        configuration = configuration.model_dump()
    if not isinstance(configuration, Mapping):
        raise ConfigurationShapeError(
            [f"configuration must be a mapping, got {type(configuration).__name__}"]
        )

    try:
        return CalculationConfiguration.model_validate(dict(configuration))
    except ValidationError as exc:
        raise ConfigurationShapeError(
            [_format_error(err) for err in exc.errors()]
        ) from exc
