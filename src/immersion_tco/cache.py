# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Caller-side result cache keyed by configuration hash.

At most one computation runs per hash at a time: concurrent callers with
an identical configuration wait on a per-key lock and then share the
stored result.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

from immersion_tco.data.models import CalculationConfiguration, CalculationResults
from immersion_tco.engine import calculate, configuration_hash
from immersion_tco.validation import coerce_configuration

logger = logging.getLogger(__name__)



class CalculationCache:
    """Single-flight cache around a calculate function.

    Per-key locks live only while a caller holds or waits on them, so the
    lock table stays bounded by the number of in-flight configurations.

    Usage::

        cache = CalculationCache()
        results = cache.get_or_calculate(configuration)
    """

    def __init__(
        self,
        calculate_fn: Callable[[CalculationConfiguration], CalculationResults] = calculate,
    ) -> None:
        self._calculate = calculate_fn
        self._results: dict[str, CalculationResults] = {}
        self._key_locks: dict[str, threading.Lock] = {}
        self._key_users: dict[str, int] = {}
        self._guard = threading.Lock()

    def _acquire_key(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            self._key_users[key] = self._key_users.get(key, 0) + 1
            return lock

    def _release_key(self, key: str) -> None:
        with self._guard:
            remaining = self._key_users[key] - 1
            if remaining:
                self._key_users[key] = remaining
            else:
                del self._key_users[key]
                del self._key_locks[key]

    def get_or_calculate(
        self, configuration: CalculationConfiguration | Mapping[str, Any]
    ) -> CalculationResults:
        """Return the cached result for *configuration*, computing it once."""
        config = coerce_configuration(configuration)
        key = configuration_hash(config)

        lock = self._acquire_key(key)
        try:
            with lock:
                with self._guard:
                    cached = self._results.get(key)
                if cached is not None:
                    logger.debug("Cache hit for %s", key)
                    return cached

                logger.debug("Cache miss for %s, calculating", key)
                results = self._calculate(config)
                with self._guard:
                    self._results[key] = results
                return results
        finally:
            self._release_key(key)

    @property
    def in_flight(self) -> int:
        """Number of configurations with a caller computing or waiting."""
        with self._guard:
            return len(self._key_locks)

    def clear(self) -> None:
        """Drop stored results; in-flight computations keep their locks."""
        with self._guard:
            self._results.clear()

    def __len__(self) -> int:
        with self._guard:
            return len(self._results)

    def __contains__(self, key: object) -> bool:
        with self._guard:
            return key in self._results
