"""
Command-line front end for Scrambled Net.
Starts a game, prints the board, and can autosolve, save and draw it.
"""

import argparse
import logging
import os
import random
import sys

# Add project root to path first
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Then import project modules
from netscramble.config import ScreenSize, Skill
from netscramble.game import NetGame
from netscramble.persistence import load_json, save_json
from render.text_render import render_text

logger = logging.getLogger("app.main")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Scrambled Net: rotate the tiles to connect every terminal")
    p.add_argument("--skill", choices=[s.label for s in Skill],
                   help="Skill level (default novice, or the saved one with --load)")
    p.add_argument("--screen", default="medium", choices=[s.name.lower() for s in ScreenSize],
                   help="Screen size class")
    p.add_argument("--landscape", action="store_true", help="Use the landscape grid")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--load", metavar="FILE", help="Restore a saved game instead of starting one")
    p.add_argument("--solve", action="store_true", help="Run the autosolver to completion")
    p.add_argument("--save", metavar="FILE", help="Save the game to a JSON file")
    p.add_argument("--png", metavar="FILE", help="Draw the board to an image file")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def print_board(game: NetGame, heading: str):
    print(f"{heading}:")
    print(render_text(game.cell_views(), game.board.grid_width, game.board.grid_height))
    s = game.summary()
    print(f"skill={s['skill']} tiles={s['tiles']} clicks={s['clicks']} "
          f"unused={s['unused']} solved={s['solved']}")
    print()


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    game = NetGame(ScreenSize[args.screen.upper()], landscape=args.landscape,
                   rng=random.Random(args.seed))
    game.add_solved_listener(lambda summary: print(f"Solved! {summary}"))

    skill = Skill.from_name(args.skill) if args.skill else None
    if args.load:
        if not game.restore_state(load_json(args.load), skill):
            logger.warning("Saved game %s can't be used here, starting a new one", args.load)
            game.new_game(skill)
    else:
        game.new_game(skill)
    print_board(game, "Board")

    errors = game.validate()
    for err in errors:
        logger.error(str(err))

    if args.solve:
        moves = game.run_autosolve()
        print_board(game, f"Autosolved in {moves} moves")

    if args.save:
        save_json(args.save, game.save_state())
        logger.info("Saved game to %s", args.save)

    if args.png:
        from render.net_render import save_png
        save_png(game.cell_views(), game.board.grid_width, game.board.grid_height,
                 args.png, title=f"Scrambled Net ({game.skill.label})")
        logger.info("Saved board image to %s", args.png)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
