"""
Helper utility functions for Matrix Maze
"""

import math


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def distance(x1, y1, x2, y2):
    """Calculate Euclidean distance between two points"""
    return math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)


def wrap_angle(angle):
    """Wrap an angle into [0, 2*pi)"""
    two_pi = 2.0 * math.pi
    angle = math.fmod(angle, two_pi)
    if angle < 0.0:
        angle += two_pi
    if angle >= two_pi:
        angle = 0.0
    return angle


def format_time(seconds):
    """Format seconds to MM:SS.cc string, or --:-- when unknown"""
    if seconds is None:
        return "--:--"
    minutes = int(seconds) // 60
    secs = int(seconds) % 60
    hundredths = int((seconds % 1.0) * 100)
    return f"{minutes:02d}:{secs:02d}.{hundredths:02d}"


def pulse_visible(elapsed, cycle, on_fraction):
    """True while a blinking element is in the 'on' part of its cycle"""
    phase = (elapsed % cycle) / cycle
    return phase < on_fraction
