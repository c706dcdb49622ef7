# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the configuration file loaders."""

from __future__ import annotations

import json

import pytest
import yaml

from immersion_tco.config import load_configuration, load_exchange_rates
from immersion_tco.errors import ConfigurationShapeError


class TestLoadConfiguration:
    """Tests for load_configuration."""

    def test_yaml(self, tmp_path, baseline_config, baseline_configuration):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(baseline_config))
        assert load_configuration(path) == baseline_configuration

    def test_json(self, tmp_path, baseline_config, baseline_configuration):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(baseline_config))
        assert load_configuration(str(path)) == baseline_configuration

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_configuration(tmp_path / "nope.yaml")

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("air_cooling:\n  input_method: rack_count\n")
        with pytest.raises(ConfigurationShapeError):
            load_configuration(path)


class TestLoadExchangeRates:
    """Tests for load_exchange_rates."""

    def test_loads_rates(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(json.dumps({"usd_eur": 0.9, "USD_SAR": 4}))
        assert load_exchange_rates(path) == {"USD_EUR": 0.9, "USD_SAR": 4.0}

    def test_rejects_bad_rate(self, tmp_path):
        path = tmp_path / "rates.yaml"
        path.write_text("USD_EUR: -1\n")
        with pytest.raises(ConfigurationShapeError, match="USD_EUR"):
            load_exchange_rates(path)

    def test_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "rates.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationShapeError):
            load_exchange_rates(path)
