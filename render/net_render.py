"""
Matplotlib renderer for Scrambled Net boards.
Draws a list of cell views: tiles, cable segments, the server and terminals.

Key features:
- Cable coloured by connection state
- Server drawn as a square badge, terminals as round workstations
- Locked tiles shaded, blind tiles drawn without their cable
"""

from typing import List, Optional, Tuple

import matplotlib.patches as patches
import numpy as np
from matplotlib.collections import LineCollection

from gridutils.directions import CARDINALS, delta
from netscramble.types import CellView

CONNECTED_COLOR = "#2a9d3a"
UNCONNECTED_COLOR = "#8a8a8a"
SOLVED_COLOR = "#1f6fd1"
TILE_COLOR = "#f4f1e8"
LOCKED_COLOR = "#d9cfae"
BLIND_COLOR = "#505050"


class NetRenderer:
    """
    Render cell views onto a matplotlib axis.
    Screen convention: x to the right, y downward.
    """

    def __init__(self, cell_size: float = 40.0, padding: float = 0.5, cable_width: float = 4.0):
        """
        Initialize the renderer.

        Args:
            cell_size: Side of a square tile in data units
            padding: Padding around the grid in units of cell_size
            cable_width: Line width of cable segments in points
        """
        self.S = float(cell_size)
        self.pad = float(padding)
        self.lw = float(cable_width)

    def _center(self, view: CellView) -> Tuple[float, float]:
        return (view.x + 0.5) * self.S, (view.y + 0.5) * self.S

    def _cable_color(self, view: CellView) -> str:
        if view.is_fully_connected:
            return SOLVED_COLOR
        return CONNECTED_COLOR if view.is_connected else UNCONNECTED_COLOR

    def _tile_color(self, view: CellView) -> str:
        if view.is_blind:
            return BLIND_COLOR
        return LOCKED_COLOR if view.is_locked else TILE_COLOR

    def cable_segments(self, view: CellView) -> np.ndarray:
        """
        Half-edge segments from the tile centre toward each connection.

        Returns:
            Array of shape (n, 2, 2), one [start, end] pair per connection
        """
        if view.current_dirs is None or view.is_blind:
            return np.zeros((0, 2, 2))
        cx, cy = self._center(view)
        segs = []
        for d in CARDINALS:
            if view.current_dirs & d:
                dx, dy = delta(d)
                segs.append([(cx, cy), (cx + dx * self.S / 2, cy + dy * self.S / 2)])
        return np.array(segs, dtype=float).reshape(-1, 2, 2)

    def _draw_tile(self, ax, view: CellView):
        x0, y0 = view.x * self.S, view.y * self.S
        ax.add_patch(patches.Rectangle(
            (x0, y0), self.S, self.S,
            facecolor=self._tile_color(view),
            edgecolor='black',
            linewidth=1 + 1.5 * view.is_focused,
        ))

    def _draw_node(self, ax, view: CellView):
        """Server badge or terminal disc on top of the cable."""
        if view.is_blind or view.current_dirs is None:
            return
        cx, cy = self._center(view)
        color = self._cable_color(view)
        if view.is_root:
            side = 0.5 * self.S
            ax.add_patch(patches.Rectangle(
                (cx - side / 2, cy - side / 2), side, side,
                facecolor=color, edgecolor='black', linewidth=1, zorder=12))
        elif bin(int(view.current_dirs)).count("1") == 1:
            ax.add_patch(patches.Circle(
                (cx, cy), radius=0.22 * self.S,
                facecolor=color, edgecolor='black', linewidth=1, zorder=12))

    def render_board(self, views: List[CellView], width: int, height: int, ax=None):
        """
        Render a complete board.

        Args:
            views: Cell views in board order
            width, height: Grid size
            ax: Optional matplotlib axis (creates new figure if None)

        Returns:
            Matplotlib axis object
        """
        if ax is None:
            import matplotlib.pyplot as plt
            fig, ax = plt.subplots(figsize=(width * 0.8, height * 0.8))

        segments = []
        colors = []
        for view in views:
            if view.is_inactive:
                continue
            self._draw_tile(ax, view)
            segs = self.cable_segments(view)
            segments.extend(segs)
            colors.extend([self._cable_color(view)] * len(segs))

        if segments:
            ax.add_collection(LineCollection(
                segments, colors=colors, linewidths=self.lw, capstyle='round', zorder=10))

        for view in views:
            if not view.is_inactive:
                self._draw_node(ax, view)

        pad = self.pad * self.S
        ax.set_aspect('equal')
        ax.set_xlim(-pad, width * self.S + pad)
        ax.set_ylim(height * self.S + pad, -pad)  # Invert Y to match grid convention
        ax.axis('off')
        return ax


def save_png(views: List[CellView], width: int, height: int, filename: str,
             renderer: Optional[NetRenderer] = None, title: Optional[str] = None) -> None:
    """Render a board to an image file."""
    import matplotlib.pyplot as plt

    renderer = renderer or NetRenderer()
    fig, ax = plt.subplots(figsize=(width * 0.8, height * 0.8))
    renderer.render_board(views, width, height, ax)
    if title:
        ax.set_title(title, fontsize=12)
    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)
