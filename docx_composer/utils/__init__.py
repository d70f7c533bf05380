"""
Utils module for docx_composer.

Unit conversions and logging helpers shared by the model, layout and
export layers.
"""

from .units import (
    parse_float,
    parse_int,
    twips_to_points,
    points_to_half_points,
    mm_to_twips,
)
from .logger import get_logger, setup_logging

__all__ = [
    "parse_float",
    "parse_int",
    "twips_to_points",
    "points_to_half_points",
    "mm_to_twips",
    "get_logger",
    "setup_logging",
]
