# geometry/PieGeometry.py

import logging
import math
from typing import Any, Tuple

import numpy as np

from BubblePie.Defaults import DEFAULT_RESOLUTION_BUDGET, START_ANGLE
from BubblePie.Errors import DegenerateCompositionError

logger = logging.getLogger(__name__)


class Wedge:
    """
    One slice of a pie inscribed in the unit circle centered at the origin.
    The boundary is closed at the center: [origin, arc samples..., origin].
    Instances are immutable; the vertex array is a read-only copy.
    """

    __slots__ = ("_category", "_vertices", "_start_angle", "_end_angle")

    def __init__(self, category: int, vertices: Any, start_angle: float, end_angle: float) -> None:
        verts = np.array(vertices, dtype=float)
        if verts.ndim != 2 or verts.shape[1] != 2:
            raise ValueError(f"Wedge vertices must have shape (m, 2), got {verts.shape}")
        verts.setflags(write=False)

        self._category: int = int(category)
        self._vertices: np.ndarray = verts
        self._start_angle: float = float(start_angle)
        self._end_angle: float = float(end_angle)

    @property
    def category(self) -> int:
        return self._category

    @property
    def vertices(self) -> np.ndarray:
        return self._vertices

    @property
    def x(self) -> np.ndarray:
        return self._vertices[:, 0]

    @property
    def y(self) -> np.ndarray:
        return self._vertices[:, 1]

    @property
    def start_angle(self) -> float:
        return self._start_angle

    @property
    def end_angle(self) -> float:
        return self._end_angle

    @property
    def span(self) -> float:
        """Angular extent in radians."""
        return self._end_angle - self._start_angle

    def __len__(self) -> int:
        return len(self._vertices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Wedge):
            return NotImplemented
        return (
            self._category == other._category
            and self._start_angle == other._start_angle
            and self._end_angle == other._end_angle
            and np.array_equal(self._vertices, other._vertices)
        )

    def __hash__(self) -> int:
        return hash((self._category, self._start_angle, self._end_angle, self._vertices.tobytes()))

    def __repr__(self) -> str:
        return (
            f"Wedge(category={self._category}, vertices={len(self._vertices)}, "
            f"span={math.degrees(self.span):.3f}deg)"
        )


def _check_budget(resolution_budget: Any) -> int:
    if isinstance(resolution_budget, bool) or not isinstance(resolution_budget, (int, np.integer)):
        raise ValueError(f"resolution_budget must be an integer, got {resolution_budget!r}")
    if resolution_budget < 1:
        raise ValueError(f"resolution_budget must be >= 1, got {resolution_budget}")
    return int(resolution_budget)


def normalize_composition(composition: Any) -> np.ndarray:
    """
    Return a new array of shares summing to 1.
    Raises ValueError for empty, non-finite or negative input and
    DegenerateCompositionError when every entry is zero.
    """
    values = np.asarray(composition, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"composition must be one-dimensional, got shape {values.shape}")
    if values.size == 0:
        raise ValueError("composition must contain at least one category")
    if not np.all(np.isfinite(values)):
        raise ValueError("composition entries must be finite")
    if np.any(values < 0):
        raise ValueError("composition entries must be non-negative")

    total = values.sum()
    if total == 0:
        raise DegenerateCompositionError(
            f"composition {values.tolist()} sums to zero; no slice has any angular extent"
        )
    return values / total


class PieGeometryBuilder:
    """
    Builds the wedges of one pie from a composition vector.

    Each category gets max(1, ceil(budget * share)) arc segments, so the total
    vertex count follows the budget and large slices come out smoother than
    slivers. Zero shares still produce a zero-span wedge, so the number of
    wedges always equals the number of categories.
    """

    def __init__(self, resolution_budget: int = DEFAULT_RESOLUTION_BUDGET) -> None:
        self.resolution_budget: int = _check_budget(resolution_budget)

    def build(self, composition: Any) -> Tuple[Wedge, ...]:
        shares = normalize_composition(composition)
        budget = self.resolution_budget

        wedges = []
        theta0 = START_ANGLE
        for i, share in enumerate(shares):
            n = max(1, int(math.ceil(budget * share)))
            theta = theta0 + (share * np.arange(n + 1) / n) * (2 * np.pi)

            arc = np.column_stack((np.cos(theta), np.sin(theta)))
            vertices = np.vstack(([0.0, 0.0], arc, [0.0, 0.0]))

            # Continue from the furthest angle reached, not from a running sum
            theta_end = float(theta.max())
            wedges.append(Wedge(i, vertices, theta0, theta_end))
            theta0 = theta_end

        logger.debug("Built %d wedges (budget=%d)", len(wedges), budget)
        return tuple(wedges)


def build_pie_wedges(composition: Any, resolution_budget: int = DEFAULT_RESOLUTION_BUDGET) -> Tuple[Wedge, ...]:
    return PieGeometryBuilder(resolution_budget).build(composition)
