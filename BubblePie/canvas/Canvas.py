# canvas/Canvas.py

import html
import logging
from PyQt5 import QtWidgets
import pyqtgraph as pg
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class Canvas(QtWidgets.QWidget):
    _uid_counter: int = 1

    def __init__(self, name: Optional[str] = None, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)

        self._canvas_uid: int = Canvas._uid_counter
        Canvas._uid_counter += 1

        self.graph_name: str = name if name is not None else f"Plot#{self._canvas_uid}"
        self.setWindowTitle(self.graph_name)

        self._layers: List[Any] = []

        self.plot_widget: pg.PlotWidget = pg.PlotWidget()
        self.plot_item: Any = self.plot_widget.getPlotItem()
        self.view_box: Any = self.plot_widget.getViewBox()

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.plot_widget)
        self.setLayout(layout)

        self._title: str = ""
        self._subtitle: str = ""
        self._x_label: str = ""
        self._y_label: str = ""
        self._axis_labels_visible: bool = True

        self.resize(900, 600)

    def plot(self, layer_or_plot: Any) -> Any:
        """
        Add a graph layer to the Canvas.
        - Layers already on another Canvas are cloned (if they can be).
        - Re-plotting a layer that is already present is a no-op.
        - Later layers are stacked above earlier ones.
        Returns the layer instance.
        """
        layer = self._coerce_to_layer(layer_or_plot)
        if layer in self._layers:
            return layer

        layer.add_to(self.plot_item, self.view_box)
        self._layers.append(layer)
        self._apply_z_order()
        return layer

    def unplot(self, layer_or_plot: Any) -> None:
        layer = self.get_graph(layer_or_plot)
        if layer is None:
            return

        try:
            layer.remove_from(self.plot_item)
        finally:
            if layer in self._layers:
                self._layers.remove(layer)
        self._apply_z_order()

    def get_graph(self, layer_or_plot: Any) -> Optional[Any]:
        for layer in self._layers:
            if layer is layer_or_plot:
                return layer
        return None

    def layers(self) -> List[Any]:
        return list(self._layers)

    def set_view_port(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """Show a fixed range; layers with auto limits are switched to manual."""
        for layer in self._layers:
            if hasattr(layer, "set_limits"):
                layer.set_limits(x=(min(x1, x2), max(x1, x2)), y=(min(y1, y2), max(y1, y2)))
        self.plot_widget.setXRange(x1, x2, padding=0)
        self.plot_widget.setYRange(y1, y2, padding=0)
        self.view_box.disableAutoRange()

    def reset_view(self) -> None:
        for layer in self._layers:
            if hasattr(layer, "reset_view"):
                layer.reset_view()

    def set_title(self, title: str, subtitle: str = "") -> None:
        self._title = str(title)
        self._subtitle = str(subtitle)
        if not self._title and not self._subtitle:
            self.plot_item.setTitle(None)
            return
        text = html.escape(self._title)
        if self._subtitle:
            text += f"<br><span style='font-size: 9pt'>{html.escape(self._subtitle)}</span>"
        self.plot_item.setTitle(text)

    def title(self) -> str:
        return self._title

    def subtitle(self) -> str:
        return self._subtitle

    def set_axis_label(self, axis: str, text: str) -> None:
        if axis == "x":
            self._x_label = text
            self.plot_widget.setLabel("bottom", text if self._axis_labels_visible else "")
        elif axis == "y":
            self._y_label = text
            self.plot_widget.setLabel("left", text if self._axis_labels_visible else "")
        else:
            raise ValueError(f"axis must be 'x' or 'y', got {axis!r}")

    def set_axis_labels_visible(self, visible: bool) -> None:
        self._axis_labels_visible = bool(visible)
        self.update_axis_labels()

    def update_axis_labels(self) -> None:
        if self._axis_labels_visible:
            self.plot_widget.setLabel("bottom", self._x_label)
            self.plot_widget.setLabel("left", self._y_label)
        else:
            self.plot_widget.setLabel("bottom", "")
            self.plot_widget.setLabel("left", "")

    def _apply_z_order(self) -> None:
        for i, layer in enumerate(self._layers):
            if hasattr(layer, "set_z"):
                layer.set_z(10 + i)

    def _coerce_to_layer(self, obj: Any) -> Any:
        """
        Ensure the given object can be added to the Canvas.
        A layer implements `add_to(plot_item, view_box)` and
        `remove_from(plot_item)`. If it is already attached to another
        PlotItem it is cloned so one instance is never shared.
        Raises TypeError otherwise.
        """
        if hasattr(obj, "add_to") and hasattr(obj, "remove_from"):
            if getattr(obj, "_plot_item", None) is not None and obj._plot_item is not self.plot_item:
                if hasattr(obj, "clone"):
                    logger.debug("Layer already plotted elsewhere; cloning it for %s", self.graph_name)
                    return obj.clone()
            return obj

        raise TypeError("Canvas.plot() expects a graph layer with add_to() and remove_from().")

    def closeEvent(self, event: Any) -> None:
        for layer in list(self._layers):
            self.unplot(layer)
        super().closeEvent(event)
