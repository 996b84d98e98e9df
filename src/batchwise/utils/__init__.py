"""Small pure helpers: templating, rounding, modular arithmetic, geo types.

These have no concurrency concerns; they are typically used inside the
operations handed to the batch scheduler (building tile URLs, formatting
progress numbers, wrapping coordinates).
"""

from .geo import LatLng, LatLngZoom, NormaliseMode, TileCoords
from .numbers import clamp, local_format_number, mod_with_neg, roll, round_digits
from .text import format_template

__all__ = [
    "LatLng",
    "LatLngZoom",
    "NormaliseMode",
    "TileCoords",
    "clamp",
    "format_template",
    "local_format_number",
    "mod_with_neg",
    "roll",
    "round_digits",
]
