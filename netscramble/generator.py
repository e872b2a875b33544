"""
Random network generation.

Grows a spanning tree of cable from a randomly placed server. Cells waiting
to be extended sit in a FIFO worklist; the head of the list is either
extended in one to three random directions or deferred to the back, which
keeps branches from running long and straight. Boards that cover too little
of the active area are thrown away and regrown.
"""
import logging
import random
from typing import List, Optional, Tuple

from gridutils.directions import CARDINALS, FREE, reverse
from netscramble.board import Board, Cell
from netscramble.config import DEFAULT_SETTINGS, GeneratorSettings
from netscramble.types import GenerationResult

logger = logging.getLogger(__name__)


class NetworkGenerator:
    """Builds the solved cable layout on a board's active area."""

    def __init__(self, rng: random.Random, settings: GeneratorSettings = DEFAULT_SETTINGS):
        self.rng = rng
        self.settings = settings

    def generate(self, board: Board, branches: int,
                 root: Optional[Tuple[int, int]] = None) -> GenerationResult:
        """
        Fill the active board with a connected network.

        Args:
            board: Board already reset for the game
            branches: Max branches per extension step (2 or 3)
            root: Fixed server position; random when None

        Returns:
            GenerationResult for the accepted attempt. The last attempt is
            accepted even when it misses the coverage target.
        """
        active = board.active_count()
        tries = 0
        # At least one attempt runs, whatever max_attempts says
        while True:
            cells = self._create_net(board, branches, root)
            tries += 1
            if cells / active >= self.settings.min_coverage or tries >= self.settings.max_attempts:
                break

        logger.info("Created net in %d tries with %d of %d cells (min coverage %.2f)",
                    tries, cells, active, self.settings.min_coverage)
        if cells / active < self.settings.min_coverage:
            logger.warning("Coverage target missed after %d tries: %.2f < %.2f",
                           tries, cells / active, self.settings.min_coverage)
        return GenerationResult(cells=cells, active_cells=active, attempts=tries)

    def _create_net(self, board: Board, branches: int,
                    root: Optional[Tuple[int, int]]) -> int:
        """One generation attempt. Returns the number of cells used."""
        s = self.settings
        rng = self.rng
        t = board.topology

        for c in board.active_cells():
            c.generated_dirs = FREE
            c.is_root = False

        if root is None:
            root = (rng.randrange(t.start_x, t.end_x), rng.randrange(t.start_y, t.end_y))
        board.set_root(*root)

        worklist: List[Cell] = [board.root]
        if rng.random() < s.root_branch_probability:
            self._add_random_dir(board, worklist)

        while worklist:
            if rng.random() < s.defer_probability:
                worklist.append(worklist[0])
            else:
                self._add_random_dir(board, worklist)
                if rng.random() < s.second_branch_probability:
                    self._add_random_dir(board, worklist)
                # A third branch allows 4-way crosses
                if branches >= 3 and rng.random() < s.third_branch_probability:
                    self._add_random_dir(board, worklist)
            worklist.pop(0)

        used = board.used_count()
        logger.debug("Net attempt with root %s used %d cells", root, used)
        return used

    def _add_random_dir(self, board: Board, worklist: List[Cell]) -> None:
        """Link the head of the worklist to one random free neighbor."""
        cell = worklist[0]
        free = []
        for d in CARDINALS:
            other = board.neighbor(cell, d)
            if other is not None and other is not cell and other.is_free:
                free.append((d, other))
        if not free:
            return

        d, dest = free[self.rng.randrange(len(free))]
        cell.add_dir(d)
        dest.add_dir(reverse(d))
        worklist.append(dest)
