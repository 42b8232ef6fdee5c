from PyQt5 import QtWidgets

from .Errors import BubblePieError, DegenerateCompositionError, DegenerateLimitsError
from .geometry.PieGeometry import Wedge, PieGeometryBuilder, build_pie_wedges
from .layout.ViewportLimits import AxisLimits, solve_axis_limits, solve_viewport_limits
from .layout.SizeData import PointLayout, auto_sizes, resolve_sizes, point_layouts
from .DataSource import DataSource
from .graphs.BubblePiePlot import BubblePiePlot
from .canvas.Canvas import Canvas
from .LoggingConfig import setup_logging

__all__ = [
    "QtWidgets",
    "BubblePieError",
    "DegenerateCompositionError",
    "DegenerateLimitsError",
    "Wedge",
    "PieGeometryBuilder",
    "build_pie_wedges",
    "AxisLimits",
    "solve_axis_limits",
    "solve_viewport_limits",
    "PointLayout",
    "auto_sizes",
    "resolve_sizes",
    "point_layouts",
    "DataSource",
    "BubblePiePlot",
    "Canvas",
    "setup_logging",
]
