# layout/ViewportLimits.py

import logging
from typing import Any, NamedTuple, Tuple

import numpy as np

from BubblePie.Defaults import RADIUS_CAP_FRACTION
from BubblePie.Errors import DegenerateLimitsError

logger = logging.getLogger(__name__)


class AxisLimits(NamedTuple):
    lo: float
    hi: float

    @property
    def span(self) -> float:
        return self.hi - self.lo


def _as_finite_vector(values: Any, name: str) -> np.ndarray:
    arr = np.atleast_1d(np.asarray(values, dtype=float)).ravel()
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite")
    return arr


def solve_axis_limits(positions: Any, diameters: Any, viewport_pixel_extent: float) -> AxisLimits:
    """
    Tightest data limits (lo, hi) for one axis so that every pie stays inside
    the viewport.

    With E the viewport extent in pixels and r the largest pie radius in
    pixels (capped at E/3), the extreme positions are pinned so that min
    maps to pixel r and max maps to pixel E - r:

        (E - r) * lo + r * hi       = min * E
        r * lo       + (E - r) * hi = max * E

    Positions that all coincide are widened by one data unit on each side.
    Cross-array lengths are not checked here; the caller validates them.
    """
    pos = _as_finite_vector(positions, "positions")
    diam = _as_finite_vector(diameters, "diameters")
    if np.any(diam < 0):
        raise ValueError("diameters must be non-negative")

    extent = float(viewport_pixel_extent)
    if not np.isfinite(extent) or extent <= 0:
        raise ValueError(f"viewport_pixel_extent must be positive, got {viewport_pixel_extent!r}")

    min_v = float(pos.min())
    max_v = float(pos.max())
    if min_v == max_v:
        min_v -= 1.0
        max_v += 1.0

    max_radius = min(float(diam.max()) / 2.0, extent * RADIUS_CAP_FRACTION)

    # Closed-form inverse of [[E - r, r], [r, E - r]]; det = E * (E - 2r) > 0
    a = extent - max_radius
    b = max_radius
    det = a * a - b * b
    if det <= 0:
        raise DegenerateLimitsError(
            f"pie radius {max_radius}px leaves no room inside a {extent}px viewport"
        )
    lo = (a * min_v * extent - b * max_v * extent) / det
    hi = (a * max_v * extent - b * min_v * extent) / det

    if not (np.isfinite(lo) and np.isfinite(hi)) or lo >= hi:
        raise DegenerateLimitsError(
            f"limit solve produced non-increasing limits ({lo}, {hi}) "
            f"for range [{min_v}, {max_v}], radius {max_radius}px, extent {extent}px"
        )

    logger.debug("Axis limits (%g, %g) for range [%g, %g], radius %gpx", lo, hi, min_v, max_v, max_radius)
    return AxisLimits(lo, hi)


def solve_viewport_limits(
    x: Any,
    y: Any,
    diameters: Any,
    width: float,
    height: float,
) -> Tuple[AxisLimits, AxisLimits]:
    """Run the axis solve independently for x (against width) and y (against height)."""
    return (
        solve_axis_limits(x, diameters, width),
        solve_axis_limits(y, diameters, height),
    )


def data_to_pixel(value: Any, limits: Tuple[float, float], viewport_pixel_extent: float) -> Any:
    lo, hi = limits
    return viewport_pixel_extent * (np.asarray(value, dtype=float) - lo) / (hi - lo)


def device_to_data_scale(diameter: Any, limits: Tuple[float, float], viewport_pixel_extent: float) -> Any:
    """
    Scale factor turning a unit-radius pie into one whose diameter is
    `diameter` device units on an axis showing `limits` across
    `viewport_pixel_extent` pixels.
    """
    lo, hi = limits
    return (hi - lo) * (np.asarray(diameter, dtype=float) / 2.0) / viewport_pixel_extent
