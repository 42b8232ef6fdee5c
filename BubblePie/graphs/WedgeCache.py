# graphs/WedgeCache.py

import logging
from typing import Any, Dict, Hashable, List, Tuple

import numpy as np

from BubblePie.Defaults import DEFAULT_RESOLUTION_BUDGET
from BubblePie.geometry.PieGeometry import PieGeometryBuilder, Wedge

logger = logging.getLogger(__name__)


class WedgeCache:
    """
    Memoizes wedge sets per composition row so a redraw only rebuilds
    pies whose data changed.
    """

    def __init__(self, resolution_budget: int = DEFAULT_RESOLUTION_BUDGET) -> None:
        self._builder = PieGeometryBuilder(resolution_budget)
        self._entries: Dict[Hashable, Tuple[Wedge, ...]] = {}
        self.hits = 0
        self.misses = 0

    @property
    def resolution_budget(self) -> int:
        return self._builder.resolution_budget

    def set_resolution_budget(self, resolution_budget: int) -> None:
        builder = PieGeometryBuilder(resolution_budget)
        if builder.resolution_budget != self._builder.resolution_budget:
            self._builder = builder
            self.clear()

    @staticmethod
    def key(composition: Any) -> Hashable:
        row = np.ascontiguousarray(composition, dtype=float)
        return (row.shape, row.tobytes())

    def get(self, composition: Any) -> Tuple[Wedge, ...]:
        k = self.key(composition)
        wedges = self._entries.get(k)
        if wedges is None:
            self.misses += 1
            wedges = self._builder.build(composition)
            self._entries[k] = wedges
        else:
            self.hits += 1
        return wedges

    def get_many(self, rows: Any) -> List[Tuple[Wedge, ...]]:
        """
        Wedge sets for every row, in row order. Entries for rows no longer
        present are dropped afterwards.
        """
        result = [self.get(row) for row in rows]
        live = {self.key(row) for row in rows}
        stale = [k for k in self._entries if k not in live]
        for k in stale:
            del self._entries[k]
        if stale:
            logger.debug("Pruned %d stale wedge sets", len(stale))
        return result

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, composition: Any) -> bool:
        return self.key(composition) in self._entries
