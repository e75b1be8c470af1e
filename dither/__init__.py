"""
Dither Module - surface-stable fractal (Bayer) dithering
"""

from .bayer import BayerPatternTable, generate_bayer_points, get_bayer_table
from .pattern import DitherSampler

__all__ = ['BayerPatternTable', 'generate_bayer_points', 'get_bayer_table', 'DitherSampler']
