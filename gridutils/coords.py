"""
Coordinate helpers: message keys and the quarter-turn remaps used when a saved
board was taken on a grid of transposed shape.
"""
from typing import Tuple


def coordinate_to_string(x: int, y: int) -> str:
    """Convert a coordinate to the "x,y" form used in messages and keys."""
    return f"{x},{y}"


def rotate_left(x: int, y: int, height: int) -> Tuple[int, int]:
    """
    Map a saved (x, y) onto a live grid of height `height` whose shape is the
    transpose of the saved one. Contents turn a quarter anticlockwise.
    """
    return y, height - x - 1


def rotate_right(x: int, y: int, width: int) -> Tuple[int, int]:
    """Quarter turn clockwise onto a live grid of width `width`."""
    return width - y - 1, x
