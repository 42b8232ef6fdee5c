# main_minimal.py

import logging
import os
import sys
import numpy as np
from PyQt5 import QtWidgets

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from BubblePie import DataSource, Canvas, BubblePiePlot, setup_logging

setup_logging(logging.DEBUG)

# Random locations and a three-category composition per location
rng = np.random.default_rng(42)
n = 12
x = rng.uniform(0, 100, size=n)
y = rng.uniform(0, 50, size=n)
pies = rng.integers(0, 10, size=(n, 3))
pies[:, 0] += 1  # every pie needs a non-zero total

# No size data: diameters follow the pie totals
data_source = DataSource(x, y, pies)

# Standard Qt application
app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])

canvas = Canvas(name="Bubble pies")
canvas.set_title("Regional sales", "pie size follows total volume")
canvas.set_axis_label("x", "Longitude")
canvas.set_axis_label("y", "Latitude")

plot = BubblePiePlot(data_source, labels=["North", "Central", "South"])
canvas.plot(plot)
canvas.show()

# Run the event loop
app.exec()
