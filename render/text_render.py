"""
Plain-text rendering of the cell views, for terminals and logs.
"""
from typing import Dict, List

from netscramble.types import CellView

# Box-drawing glyph per direction mask (L=1, D=2, R=4, U=8)
GLYPHS: Dict[int, str] = {
    0: "·",
    1: "╴",
    2: "╷",
    3: "┐",
    4: "╶",
    5: "─",
    6: "┌",
    7: "┬",
    8: "╵",
    9: "┘",
    10: "│",
    11: "┤",
    12: "└",
    13: "┴",
    14: "├",
    15: "┼",
}

INACTIVE = " "
BLIND = "?"


def cell_marker(view: CellView) -> str:
    """One-character tag after the glyph: server, terminal state, lock."""
    if view.is_root:
        return "S"
    if view.is_locked:
        return "#"
    if view.current_dirs is not None and bin(view.current_dirs).count("1") == 1:
        return "o" if view.is_connected else "x"
    return " "


def cell_text(view: CellView) -> str:
    if view.is_inactive:
        return INACTIVE * 2
    if view.is_blind:
        return BLIND + cell_marker(view)
    return GLYPHS[int(view.current_dirs)] + cell_marker(view)


def render_text(views: List[CellView], width: int, height: int) -> str:
    """
    Lay the views out row by row.

    Args:
        views: Cell views in board order (index y * width + x)
        width, height: Grid size

    Returns:
        Multi-line string, one line per grid row
    """
    assert len(views) == width * height, f"expected {width * height} views, got {len(views)}"
    lines = []
    for y in range(height):
        row = views[y * width:(y + 1) * width]
        lines.append("".join(cell_text(v) for v in row).rstrip())
    return "\n".join(lines)
