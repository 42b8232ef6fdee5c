# layout/SizeData.py

from typing import Any, NamedTuple, Tuple

import numpy as np

from BubblePie.Defaults import AUTO_SIZE_LARGEST
from BubblePie.Errors import DegenerateCompositionError


class PointLayout(NamedTuple):
    x: float
    y: float
    diameter: float


def auto_sizes(pie_data: Any, largest: float = AUTO_SIZE_LARGEST) -> np.ndarray:
    """
    Diameters proportional to each pie's total, with the biggest pie at
    `largest` device units.
    """
    data = np.atleast_2d(np.asarray(pie_data, dtype=float))
    if data.size == 0:
        return np.empty(0)
    totals = data.sum(axis=1)
    peak = totals.max()
    if not np.isfinite(peak) or peak <= 0:
        raise DegenerateCompositionError("cannot derive pie sizes: every pie total is zero")
    return largest * totals / peak


def resolve_sizes(size_data: Any, n_points: int) -> np.ndarray:
    """Broadcast a scalar size to every point or check a per-point vector."""
    sizes = np.asarray(size_data, dtype=float)
    if sizes.ndim == 0:
        sizes = np.full(n_points, float(sizes))
    else:
        sizes = sizes.ravel()
        if sizes.size == 1:
            sizes = np.full(n_points, sizes[0])
        elif sizes.size != n_points:
            raise ValueError(
                f"size data must be a scalar or have one entry per point ({n_points}), got {sizes.size}"
            )
    if np.any(sizes < 0) or not np.all(np.isfinite(sizes)):
        raise ValueError("sizes must be finite and non-negative")
    return sizes


def point_layouts(x: Any, y: Any, diameters: Any) -> Tuple[PointLayout, ...]:
    xs = np.asarray(x, dtype=float).ravel()
    ys = np.asarray(y, dtype=float).ravel()
    ds = resolve_sizes(diameters, len(xs))
    return tuple(PointLayout(float(a), float(b), float(d)) for a, b, d in zip(xs, ys, ds))
