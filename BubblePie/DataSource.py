# DataSource.py

from PyQt5.QtCore import QObject, pyqtSignal
import numpy as np
from typing import Any, Optional

from BubblePie.layout.SizeData import auto_sizes, resolve_sizes


class DataSource(QObject):
    """
    Holds the data of one bubble pie chart: x/y locations, one composition
    row per pie and the pie diameters in device units. `size_data=None`
    means the sizes are derived from the pie totals.
    Arrays are copied on the way in, so outside mutation has no effect.
    """

    data_updated = pyqtSignal()

    _FIELDS = ("x", "y", "pie_data", "size_data")

    def __init__(
        self,
        x: Optional[Any] = None,
        y: Optional[Any] = None,
        pie_data: Optional[Any] = None,
        size_data: Optional[Any] = None,
    ) -> None:
        super().__init__()
        self._x: np.ndarray = self._normalize_vector(x)
        self._y: np.ndarray = self._normalize_vector(y)
        self._pie_data: np.ndarray = self._normalize_matrix(pie_data)
        self._size_data: Optional[np.ndarray] = self._normalize_sizes(size_data)

    def set(self, **fields: Any) -> None:
        unknown = set(fields) - set(self._FIELDS)
        if unknown:
            raise TypeError(f"DataSource.set() got unexpected fields: {sorted(unknown)}")

        if "x" in fields:
            self._x = self._normalize_vector(fields["x"])
        if "y" in fields:
            self._y = self._normalize_vector(fields["y"])
        if "pie_data" in fields:
            self._pie_data = self._normalize_matrix(fields["pie_data"])
        if "size_data" in fields:
            self._size_data = self._normalize_sizes(fields["size_data"])
        self.data_updated.emit()

    def _normalize_vector(self, data: Any) -> np.ndarray:
        if data is None:
            return np.empty(0)
        return np.atleast_1d(np.array(data, dtype=float)).ravel()

    def _normalize_matrix(self, data: Any) -> np.ndarray:
        if data is None:
            return np.empty((0, 0))
        arr = np.array(data, dtype=float)
        if arr.ndim == 0:
            return arr.reshape(1, 1)
        elif arr.ndim == 1:  # a single pie
            return arr.reshape(1, -1) if arr.size else np.empty((0, 0))
        elif arr.ndim == 2:
            return arr
        raise ValueError(f"pie_data must be at most two-dimensional, got shape {arr.shape}")

    def _normalize_sizes(self, data: Any) -> Optional[np.ndarray]:
        if data is None:
            return None
        return np.array(data, dtype=float)

    def get_x(self) -> np.ndarray:
        return self._x

    def get_y(self) -> np.ndarray:
        return self._y

    def get_pie_data(self) -> np.ndarray:
        return self._pie_data

    def get_size_data(self) -> Optional[np.ndarray]:
        return self._size_data

    def get_sizes(self) -> np.ndarray:
        """Per-pie diameters, resolved from the size data or the pie totals."""
        if self._size_data is None:
            return auto_sizes(self._pie_data)
        return resolve_sizes(self._size_data, self.size())

    def size(self) -> int:
        return self._pie_data.shape[0]

    def num_categories(self) -> int:
        return self._pie_data.shape[1] if self._pie_data.ndim == 2 else 0
