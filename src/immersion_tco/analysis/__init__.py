# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Efficiency, environmental and sensitivity analyzers.

``immersion_tco.analysis.sensitivity`` drives the full engine and is
imported directly rather than re-exported here.
"""

from immersion_tco.analysis.environmental import (
    analyze_environmental_impact,
    analyze_pue,
)

__all__ = [
    "analyze_environmental_impact",
    "analyze_pue",
]
