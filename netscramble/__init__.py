"""
Scrambled Net - Engine Package
Board model, network generation, connectivity, autosolve and save/restore.
"""
from .board import Board, Cell, GridTopology
from .config import Skill, ScreenSize, GeneratorSettings
from .game import NetGame
from .types import ActionResult, CellView, Move, ValidationError

__all__ = ['Board', 'Cell', 'GridTopology', 'Skill', 'ScreenSize', 'GeneratorSettings',
           'NetGame', 'ActionResult', 'CellView', 'Move', 'ValidationError']
