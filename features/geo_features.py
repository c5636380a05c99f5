"""
BirthWindow - Geographic UV Features

Latitude → hemisphere, distance from equator, and monthly UV intensity.
"""

import numpy as np
from config.constants import UV_LATITUDE


def distance_from_equator(latitude: float) -> float:
    return abs(latitude)


def is_northern_hemisphere(latitude: float) -> bool:
    return latitude > 0


def uv_intensity_by_latitude(latitude: float, month: int) -> float:
    """
    Relative UV intensity (0–11) for a latitude and calendar month (1–12).

    Base intensity falls linearly from 10 at the equator to 0 at the poles.
    A cosine seasonal multiplier (1 ± 0.3) peaks in local summer:
    June in the Northern Hemisphere, December in the Southern.
    """
    base = UV_LATITUDE["equator_intensity"]
    base_intensity = max(0.0, base - (distance_from_equator(latitude) / 90.0) * base)

    if is_northern_hemisphere(latitude):
        peak_month = UV_LATITUDE["northern_peak_month"]
    else:
        peak_month = UV_LATITUDE["southern_peak_month"]
    seasonal_multiplier = (
        np.cos((month - peak_month) * np.pi / 6.0) * UV_LATITUDE["seasonal_amplitude"] + 1.0
    )

    return float(np.clip(base_intensity * seasonal_multiplier, 0.0, UV_LATITUDE["max"]))
