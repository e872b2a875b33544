"""
Scrambled Net - Grid Utilities Package
Direction bitmask helpers and coordinate remaps.
"""
from .directions import Direction, CARDINALS, rotate_dirs, reverse, count_dirs, step
from .coords import coordinate_to_string, rotate_left, rotate_right

__all__ = ['Direction', 'CARDINALS', 'rotate_dirs', 'reverse', 'count_dirs', 'step',
           'coordinate_to_string', 'rotate_left', 'rotate_right']
