import argparse
import sys
import time

from loguru import logger

from senet import Game, GameArchive, MoveRecorder, render_text
from senet.config import config
from senet.simulator import Simulator


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play Senet games with random legal moves for both sides"
    )
    parser.add_argument("--games", type=int, default=1, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=config.SEED, help="RNG seed")
    parser.add_argument(
        "--history-dir",
        type=str,
        default=config.HISTORY_DIR,
        help="Directory of the move-history archive",
    )
    parser.add_argument(
        "--no-history", action="store_true", help="Do not record moves to disk"
    )
    parser.add_argument(
        "--render", action="store_true", help="Print the board after every roll"
    )
    parser.add_argument("--log-level", type=str, default=config.LOG_LEVEL)
    return parser.parse_args()


def print_board(game: Game) -> None:
    print(render_text(game))
    print()


def main() -> None:
    args = parse_args()
    logger.remove()
    logger.add(sys.stderr, level=args.log_level.upper())

    game = Game(seed=args.seed)
    sim = Simulator.for_game(
        game, seed=args.seed, on_step=print_board if args.render else None
    )
    recorder = None
    if not args.no_history:
        recorder = MoveRecorder(GameArchive(args.history_dir))
        recorder.attach(game)

    print("--- Starting Senet Simulation ---")
    print(f"Max rolls per game set to: {config.MAX_TURNS}")
    start_time = time.time()
    for index in range(args.games):
        if index > 0:
            game.reset()
            if recorder is not None:
                recorder.new_game()
        if sim.run():
            print(
                f"Game {index + 1}: {game.winner.label} wins after {game.move_count} moves "
                f"({sim.turns} rolls, {sim.passes} passes)"
            )

    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")
    if recorder is not None:
        print("Archive stats:", recorder.archive.stats())


if __name__ == "__main__":
    main()
