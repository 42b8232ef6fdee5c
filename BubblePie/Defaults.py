# Defaults.py

import math

# Max number of arc samples across a whole pie
DEFAULT_RESOLUTION_BUDGET = 100

# Pies start at 12 o'clock and run counter-clockwise
START_ANGLE = math.pi / 2

# Diameter of the largest pie when sizes are derived from the pie totals
AUTO_SIZE_LARGEST = 50.0

# Radius used for the limit margin never exceeds this fraction of the viewport
RADIUS_CAP_FRACTION = 1.0 / 3.0

DEFAULT_COLOR_ORDER = [
    "#0072BD",
    "#D95319",
    "#EDB120",
    "#7E2F8E",
    "#77AC30",
    "#4DBEEE",
    "#A2142F",
]

LINE_STYLES = ("-", "--", ":", "-.", "none")

LIMIT_MODES = ("auto", "manual")
