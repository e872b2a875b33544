"""
Game configuration: skill levels, screen-size tables and generator tuning.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Skill(Enum):
    """Skill levels. Value: (label, branches, wrapped, blind threshold)."""
    NOVICE = ("novice", 2, False, 9)
    NORMAL = ("normal", 2, False, 9)
    EXPERT = ("expert", 2, False, 9)
    MASTER = ("master", 3, True, 9)
    INSANE = ("insane", 3, True, 3)

    def __init__(self, label: str, branches: int, wrapped: bool, blind: int):
        self.label = label
        self.branches = branches    # Max branches off each square; at least 2
        self.wrapped = wrapped      # Network wraps around the board edges
        self.blind = blind          # Cells with this many connections are blind

    @classmethod
    def from_name(cls, name: str) -> 'Skill':
        """Look up a skill by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown skill: {name}") from None


class ScreenSize(Enum):
    """
    Grid sizes per screen class.

    Value: (major, minor, expert_major, expert_minor, normal_major,
    normal_minor, novice_major, novice_minor). MASTER and INSANE use the
    whole grid.
    """
    SMALL = (8, 6, 8, 6, 6, 6, 6, 4)
    WSMALL = (9, 6, 9, 6, 5, 6, 5, 4)
    MEDIUM = (11, 7, 11, 7, 9, 7, 5, 5)
    WMEDIUM = (12, 7, 10, 7, 8, 7, 6, 5)
    HUGE = (17, 10, 15, 8, 11, 8, 7, 6)

    def __init__(self, ml: int, ms: int, el: int, es: int,
                 nl: int, ns: int, vl: int, vs: int):
        self.major = ml
        self.minor = ms
        self.sizes: Dict[Skill, Tuple[int, int]] = {
            Skill.INSANE: (ml, ms),
            Skill.MASTER: (ml, ms),
            Skill.EXPERT: (el, es),
            Skill.NORMAL: (nl, ns),
            Skill.NOVICE: (vl, vs),
        }

    def grid_size(self, landscape: bool = False) -> Tuple[int, int]:
        """(width, height) of the full cell matrix for an orientation."""
        if landscape:
            return self.major, self.minor
        return self.minor, self.major

    def board_size(self, skill: Skill, grid_width: int, grid_height: int) -> Tuple[int, int]:
        """(width, height) of the playing board for a skill on a given grid."""
        major, minor = self.sizes[skill]
        if grid_width > grid_height:
            return major, minor
        return minor, major


@dataclass(frozen=True)
class GeneratorSettings:
    """Tuning for network generation. The probabilities only shape the boards."""
    min_coverage: float = 0.85
    max_attempts: int = 10
    defer_probability: float = 0.5
    root_branch_probability: float = 0.5
    second_branch_probability: float = 0.5
    third_branch_probability: float = 1.0 / 3.0


DEFAULT_SETTINGS = GeneratorSettings()
