# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for preset configurations."""

from __future__ import annotations

import pytest

from immersion_tco.data.presets import PRESETS, get_preset
from immersion_tco.validation import validate_configuration


class TestPresets:
    """Tests for the preset registry."""

    def test_expected_names(self):
        assert set(PRESETS) == {
            "small_edge",
            "medium_enterprise",
            "large_colocation",
            "enterprise_gulf",
        }

    def test_get_preset(self):
        assert get_preset("small_edge").category == "small"

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Available presets"):
            get_preset("mega_campus")

    @pytest.mark.parametrize("name", list(PRESETS))
    def test_presets_pass_validation(self, name):
        result = validate_configuration(PRESETS[name].configuration)
        assert result.valid, result.errors
