# graphs/BubblePiePlot.py

import logging
from PyQt5 import QtCore, QtGui, QtWidgets
from typing import Any, List, Optional, Sequence, Tuple
import numpy as np
import pyqtgraph as pg

from BubblePie.BasePlot import GraphBase
from BubblePie.Errors import BubblePieError
from BubblePie.Defaults import (
    DEFAULT_COLOR_ORDER,
    DEFAULT_RESOLUTION_BUDGET,
    LIMIT_MODES,
    LINE_STYLES,
)
from BubblePie.graphs.WedgeCache import WedgeCache
from BubblePie.layout.ViewportLimits import (
    AxisLimits,
    device_to_data_scale,
    solve_viewport_limits,
)

logger = logging.getLogger(__name__)

_PEN_STYLES = {
    "-": QtCore.Qt.SolidLine,
    "--": QtCore.Qt.DashLine,
    ":": QtCore.Qt.DotLine,
    "-.": QtCore.Qt.DashDotLine,
    "none": QtCore.Qt.NoPen,
}


class BubblePiePlot(GraphBase):
    """
    Scatter layer drawing one pie per data point.

    Pies are built once in unit-circle coordinates and placed with a per-pie
    QTransform (translate to the point, scale from device units to data
    units). The scale is refreshed on every range change so pies keep their
    on-screen diameter; in "auto" limits mode the axis range itself is solved
    so that no pie is clipped at the border of the view box.
    """

    def __init__(
        self,
        data_source: Any,
        *,
        color_order: Optional[Sequence[Any]] = None,
        line_style: str = "-",
        line_width: float = 1.0,
        edge_color: Any = "k",
        labels: Optional[Sequence[Any]] = None,
        x_limits_mode: str = "auto",
        y_limits_mode: str = "auto",
        resolution_budget: int = DEFAULT_RESOLUTION_BUDGET,
        name: Optional[str] = None,
        opacity: float = 1.0,
        z: int = 10,
    ) -> None:
        self.data_source = data_source
        self.name = name

        self._color_order: List[Any] = self._check_color_order(color_order)
        self._line_style: str = self._check_line_style(line_style)
        self._line_width = float(line_width)
        self._edge_color = edge_color
        self._labels: List[str] = [str(l) for l in labels] if labels is not None else []
        self.x_limits_mode: str = self._check_limits_mode(x_limits_mode)
        self.y_limits_mode: str = self._check_limits_mode(y_limits_mode)

        self._cache = WedgeCache(resolution_budget)

        self._plot_item = None
        self._view_box = None
        self._pie_groups: List[QtWidgets.QGraphicsItemGroup] = []
        self._wedge_items: List[List[QtWidgets.QGraphicsPolygonItem]] = []
        self._drawn_keys: Optional[Tuple[Any, ...]] = None
        self._legend = None
        self._legend_samples: List[Any] = []
        self._showing = True
        self._opacity = opacity
        self._z = z

        self.data_source.data_updated.connect(self._update_plot)

    @staticmethod
    def _check_color_order(color_order: Optional[Sequence[Any]]) -> List[Any]:
        if color_order is None:
            return list(DEFAULT_COLOR_ORDER)
        colors = list(color_order)
        if not colors:
            raise ValueError("color_order must contain at least one color")
        for c in colors:
            pg.mkColor(c)
        return colors

    @staticmethod
    def _check_line_style(line_style: str) -> str:
        if line_style not in LINE_STYLES:
            raise ValueError(f"line_style must be one of {LINE_STYLES}, got {line_style!r}")
        return line_style

    @staticmethod
    def _check_limits_mode(mode: str) -> str:
        if mode not in LIMIT_MODES:
            raise ValueError(f"limits mode must be one of {LIMIT_MODES}, got {mode!r}")
        return mode

    def add_to(self, plot_item: Any, view_box: Any) -> None:
        self._plot_item = plot_item
        self._view_box = view_box
        self._drawn_keys = None

        self._view_box.sigResized.connect(self._on_view_resized)
        self._view_box.sigRangeChanged.connect(self._on_range_changed)

        self._update_plot()

    def remove_from(self, plot_item: Any) -> None:
        if self._view_box is not None:
            self._view_box.sigResized.disconnect(self._on_view_resized)
            self._view_box.sigRangeChanged.disconnect(self._on_range_changed)

        self._clear_pies()
        self._remove_legend()
        self._plot_item = None
        self._view_box = None

    def clone(self) -> "BubblePiePlot":
        return BubblePiePlot(
            self.data_source,
            color_order=self._color_order,
            line_style=self._line_style,
            line_width=self._line_width,
            edge_color=self._edge_color,
            labels=self._labels,
            x_limits_mode=self.x_limits_mode,
            y_limits_mode=self.y_limits_mode,
            resolution_budget=self._cache.resolution_budget,
            name=self.name,
            opacity=self._opacity,
            z=self._z,
        )

    def bounds(self) -> Optional[tuple[float, float, float, float]]:
        x = self.data_source.get_x()
        y = self.data_source.get_y()
        if x.size == 0 or y.size == 0:
            return None
        return (float(np.min(x)), float(np.max(x)), float(np.min(y)), float(np.max(y)))

    def verify_data_properties(self) -> bool:
        """
        Check that locations, pie rows and sizes agree in length.
        Mismatches are logged and hide the chart instead of raising.
        """
        n_x = self.data_source.get_x().size
        n_y = self.data_source.get_y().size
        n_pies = self.data_source.size()

        if not (n_x == n_y == n_pies):
            logger.warning(
                "XData, YData and PieData must have the same number of rows "
                "(x=%d, y=%d, pies=%d); chart hidden.", n_x, n_y, n_pies
            )
            return False

        size_data = self.data_source.get_size_data()
        if size_data is not None and size_data.size not in (1, n_x):
            logger.warning(
                "SizeData must be a scalar or have the same number of rows as XData "
                "(sizes=%d, x=%d); chart hidden.", size_data.size, n_x
            )
            return False
        return True

    def _update_plot(self) -> None:
        """
        Redraw the pies from the current data.
        1. Verify data consistency and that every row and size can be drawn;
           hide everything otherwise.
        2. Fetch wedge sets from the cache; rebuild graphics only if the
           composition rows changed since the last draw.
        3. Restyle wedges, refresh the legend.
        4. Solve auto limits, then place and scale every pie.
        """
        if self._plot_item is None:
            return

        rows = self.data_source.get_pie_data()
        wedge_sets = []
        self._showing = self.verify_data_properties()
        if self._showing and self.data_source.size() > 0:
            try:
                wedge_sets = self._cache.get_many(rows)
                self.data_source.get_sizes()
            except (BubblePieError, ValueError) as e:
                logger.warning("PieData or SizeData cannot be drawn (%s); chart hidden.", e)
                self._showing = False

        for group in self._pie_groups:
            group.setVisible(self._showing)
        if not self._showing:
            return

        if self.data_source.size() == 0:
            self._clear_pies()
            self._drawn_keys = ()
            self._update_legend()
            return

        keys = tuple(self._cache.key(r) for r in rows)
        if keys != self._drawn_keys:
            self._rebuild_pie_items(wedge_sets)
            self._drawn_keys = keys

        self._apply_style()
        self._update_legend()
        self._apply_auto_limits()
        self._apply_pie_transforms()

    def _clear_pies(self) -> None:
        if self._plot_item is not None:
            for group in self._pie_groups:
                self._plot_item.removeItem(group)
        self._pie_groups.clear()
        self._wedge_items.clear()

    def _rebuild_pie_items(self, wedge_sets: List[Tuple[Any, ...]]) -> None:
        self._clear_pies()
        for wedges in wedge_sets:
            group = QtWidgets.QGraphicsItemGroup()
            items = []
            for wedge in wedges:
                polygon = QtGui.QPolygonF([QtCore.QPointF(px, py) for px, py in wedge.vertices])
                item = QtWidgets.QGraphicsPolygonItem(polygon)
                group.addToGroup(item)
                items.append(item)
            group.setOpacity(self._opacity)
            group.setZValue(self._z)
            self._plot_item.addItem(group, ignoreBounds=True)
            self._pie_groups.append(group)
            self._wedge_items.append(items)
        logger.debug("Rebuilt %d pies", len(self._pie_groups))

    def category_color(self, category: int) -> Any:
        return self._color_order[category % len(self._color_order)]

    def _edge_pen(self) -> QtGui.QPen:
        if self._line_style == "none":
            return pg.mkPen(None)
        return pg.mkPen(self._edge_color, width=self._line_width, style=_PEN_STYLES[self._line_style])

    def _apply_style(self) -> None:
        pen = self._edge_pen()
        for items in self._wedge_items:
            for category, item in enumerate(items):
                item.setBrush(pg.mkBrush(self.category_color(category)))
                item.setPen(pen)

    def _update_legend(self) -> None:
        if not self._labels:
            self._remove_legend()
            return

        if self._legend is None:
            self._legend = self._plot_item.addLegend()
        self._legend.clear()
        self._legend_samples = []

        # One entry per category, not per pie
        pen = self._edge_pen()
        for category, label in enumerate(self._labels):
            sample = pg.PlotDataItem(
                [], [], pen=None, symbol="s",
                symbolBrush=pg.mkBrush(self.category_color(category)), symbolPen=pen,
            )
            self._legend.addItem(sample, label)
            self._legend_samples.append(sample)

    def _remove_legend(self) -> None:
        if self._legend is None:
            return
        self._legend.clear()
        if self._legend.scene() is not None:
            self._legend.scene().removeItem(self._legend)
        if self._plot_item is not None and getattr(self._plot_item, "legend", None) is self._legend:
            self._plot_item.legend = None
        self._legend = None
        self._legend_samples = []

    def viewport_size(self) -> Tuple[float, float]:
        if self._view_box is None:
            return (0.0, 0.0)
        rect = self._view_box.boundingRect()
        return (rect.width(), rect.height())

    def compute_auto_limits(self, width: float, height: float) -> Tuple[AxisLimits, AxisLimits]:
        """Limits that fit every pie into a view box of `width` x `height` pixels."""
        return solve_viewport_limits(
            self.data_source.get_x(),
            self.data_source.get_y(),
            self.data_source.get_sizes(),
            width,
            height,
        )

    def _apply_auto_limits(self) -> None:
        auto_x = self.x_limits_mode == "auto"
        auto_y = self.y_limits_mode == "auto"
        if not (auto_x or auto_y) or not self._showing or self.data_source.size() == 0:
            return

        width, height = self.viewport_size()
        if width <= 0 or height <= 0:
            logger.debug("View box has no pixel extent yet; auto limits deferred")
            return

        xlim, ylim = self.compute_auto_limits(width, height)
        if auto_x:
            self._view_box.setXRange(xlim.lo, xlim.hi, padding=0)
        if auto_y:
            self._view_box.setYRange(ylim.lo, ylim.hi, padding=0)
        self._view_box.disableAutoRange()

    def pie_scales(self) -> Tuple[np.ndarray, np.ndarray]:
        """Per-pie (sx, sy) scale factors for the current view range."""
        (x0, x1), (y0, y1) = self._view_box.viewRange()
        width, height = self.viewport_size()
        sizes = self.data_source.get_sizes()
        sx = device_to_data_scale(sizes, (x0, x1), width)
        sy = device_to_data_scale(sizes, (y0, y1), height)
        return sx, sy

    def _apply_pie_transforms(self) -> None:
        if not self._pie_groups or self._view_box is None or not self._showing:
            return
        width, height = self.viewport_size()
        if width <= 0 or height <= 0:
            return

        sx, sy = self.pie_scales()
        xs = self.data_source.get_x()
        ys = self.data_source.get_y()
        for group, x, y, a, b in zip(self._pie_groups, xs, ys, sx, sy):
            group.setTransform(QtGui.QTransform(a, 0.0, 0.0, b, x, y))

    def _on_view_resized(self, *args: Any) -> None:
        # Pixel radius is resize-invariant, data radius is not
        if self._plot_item is None or not self._showing:
            return
        self._apply_auto_limits()
        self._apply_pie_transforms()

    def _on_range_changed(self, *args: Any) -> None:
        self._apply_pie_transforms()

    def reset_view(self) -> None:
        """Re-solve the limits of every axis in auto mode."""
        self._update_plot()

    def set_limits(self, x: Optional[Sequence[float]] = None, y: Optional[Sequence[float]] = None) -> None:
        """Set fixed limits; the affected axes switch to manual mode."""
        for lim in (x, y):
            if lim is not None and (len(lim) != 2 or not lim[1] > lim[0]):
                raise ValueError("Specify limits as two increasing values.")

        if x is not None:
            self.x_limits_mode = "manual"
        if y is not None:
            self.y_limits_mode = "manual"
        if self._view_box is None:
            return
        if x is not None:
            self._view_box.setXRange(x[0], x[1], padding=0)
        if y is not None:
            self._view_box.setYRange(y[0], y[1], padding=0)
        self._view_box.disableAutoRange()

    def set_limits_mode(self, axis: str, mode: str) -> None:
        mode = self._check_limits_mode(mode)
        if axis == "x":
            self.x_limits_mode = mode
        elif axis == "y":
            self.y_limits_mode = mode
        else:
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")
        self._update_plot()

    def set_color_order(self, color_order: Sequence[Any]) -> None:
        self._color_order = self._check_color_order(color_order)
        self._update_plot()

    def get_color_order(self) -> List[Any]:
        return list(self._color_order)

    def set_line_style(self, line_style: str) -> None:
        self._line_style = self._check_line_style(line_style)
        self._update_plot()

    def set_labels(self, labels: Optional[Sequence[Any]]) -> None:
        self._labels = [str(l) for l in labels] if labels is not None else []
        self._update_plot()

    def set_resolution_budget(self, resolution_budget: int) -> None:
        self._cache.set_resolution_budget(resolution_budget)
        self._drawn_keys = None
        self._update_plot()

    def set_opacity(self, alpha: float) -> None:
        self._opacity = alpha
        for group in self._pie_groups:
            group.setOpacity(self._opacity)

    def set_z(self, z: int) -> None:
        self._z = z
        for group in self._pie_groups:
            group.setZValue(self._z)

    def pie_items(self) -> List[List[QtWidgets.QGraphicsPolygonItem]]:
        return [list(items) for items in self._wedge_items]
