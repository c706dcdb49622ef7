# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Configuration and exchange-rate file loaders (YAML or JSON)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from immersion_tco.data.models import CalculationConfiguration
from immersion_tco.errors import ConfigurationShapeError
from immersion_tco.validation import coerce_configuration

_YAML_SUFFIXES = {".yaml", ".yml"}


def _read_document(path: str | Path) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path) as f:
        if file_path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


def load_configuration(path: str | Path) -> CalculationConfiguration:
    """Load a ``CalculationConfiguration`` from a YAML or JSON file.

    Raises:
        FileNotFoundError: if *path* does not exist.
        ConfigurationShapeError: if the document is not a valid configuration.
    """
    return coerce_configuration(_read_document(path))


def load_raw_configuration(path: str | Path) -> Any:
    """Parse a configuration file without validating it."""
    return _read_document(path)


def load_exchange_rates(path: str | Path) -> dict[str, float]:
    """Load a flat ``{"FROM_TO": rate}`` table from a YAML or JSON file."""
    raw = _read_document(path)
    if not isinstance(raw, dict):
        raise ConfigurationShapeError(["exchange rates must be a mapping of FROM_TO to rate"])

    rates: dict[str, float] = {}
    errors: list[str] = []
    for key, value in raw.items():
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            errors.append(f"{key}: rate must be a positive number")
        else:
            rates[str(key).upper()] = float(value)
    if errors:
        raise ConfigurationShapeError(errors)
    return rates
