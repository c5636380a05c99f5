"""
BirthWindow - Solar Activity Source

Stands where a NOAA SWPC client would. There is no network call: every
sample comes from the synthetic cycle model, memoized by ISO date so a
session sees one (already randomized) value per date.
"""

import logging
import threading
from datetime import date
from typing import Optional

import numpy as np

from config import settings
from data_fetch.cache import BoundedCache
from models.data_types import SolarActivityData
from models.solar_cycle_model import calculate_solar_activity_data

logger = logging.getLogger(__name__)


class SolarDataSource:
    """Simulated solar activity feed with a date-keyed cache."""

    source_name = "simulated"

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        cache: Optional[BoundedCache] = None,
    ):
        if rng is None:
            rng = np.random.default_rng(settings.RANDOM_SEED)
        self.rng = rng
        self.cache = cache
        self._lock = threading.Lock()

    def get_activity(self, day: Optional[date] = None) -> SolarActivityData:
        """
        Solar sample for ``day`` (today when omitted).

        Returns the cached sample when one exists for the same date. Runs
        under a lock, so concurrent callers share one sample per date.
        """
        cache_key = day.isoformat() if day is not None else "current"

        with self._lock:
            if self.cache is not None:
                cached = self.cache.get(cache_key)
                if cached is not None:
                    logger.debug("solar cache hit for %s", cache_key)
                    return cached

            sample = calculate_solar_activity_data(day or date.today(), self.rng)

            if self.cache is not None:
                self.cache.set(cache_key, sample)
        return sample


def build_default_solar_source() -> SolarDataSource:
    """Source wired with the configured seed and a bounded cache."""
    return SolarDataSource(cache=BoundedCache(max_size=settings.SOLAR_CACHE_SIZE))
