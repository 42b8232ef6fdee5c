from abc import ABC, abstractmethod
from typing import Any, Optional


class GraphBase(ABC):
    """
    Abstract base class for all layers that can be placed on a Canvas.
    A layer owns its graphics items and attaches them to a pyqtgraph
    PlotItem / ViewBox pair.
    """

    @abstractmethod
    def clone(self) -> "GraphBase":
        ...

    @abstractmethod
    def add_to(self, plot_item: Any, view_box: Any) -> None:
        ...

    @abstractmethod
    def remove_from(self, plot_item: Any) -> None:
        ...

    @abstractmethod
    def _update_plot(self) -> None:
        ...

    def bounds(self) -> Optional[tuple[float, float, float, float]]:
        return None
