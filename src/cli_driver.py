# cli_driver.py
# This file is intended to be run to play the 2048 game on the CLI.
# It owns the session: the grid, the saved state and the high score.

import argparse
import logging
import random
from typing import Any, List, NamedTuple, Optional

from core import (
    DIRECTION,
    apply_move,
    compute_score,
    is_move_possible,
    max_tile,
    spawn_tile,
)
from persistence import (
    GAME_STATE_FILE,
    HIGH_SCORE_FILE,
    GameState,
    PathLike,
    load_game_state,
    read_high_score,
    save_game_state,
    write_high_score,
)

logger = logging.getLogger(__name__)

DIRECTION_KEYS = {'W': DIRECTION.UP, 'A': DIRECTION.LEFT, 'S': DIRECTION.DOWN, 'D': DIRECTION.RIGHT}
SAVE_AND_EXIT_KEY = 'E'
QUIT_KEY = 'Q'


class TurnResult(NamedTuple):
    moved: bool
    game_over: bool
    new_high_score: bool


def start_session(size: int, state_path: PathLike, high_score_path: PathLike, rng: Any = None) -> GameState:
    """
    Restores the saved game if there is one, otherwise starts a new one.
    A board with no score yet gets its two starting tiles.
    """
    high_score = read_high_score(high_score_path)
    state = load_game_state(state_path)
    if state is None:
        state = GameState.fresh(size, high_score)

    state.current_score = compute_score(state.game_board)
    state.high_score = max(high_score, state.high_score)
    if state.current_score == 0:
        spawn_tile(state.game_board, rng)
        spawn_tile(state.game_board, rng)
        state.current_score = compute_score(state.game_board)
    return state


def play_turn(state: GameState, direction: DIRECTION, high_score_path: PathLike, rng: Any = None) -> TurnResult:
    """
    Applies one move to the session.
    Args:
        state (GameState): The session, updated in place.
        direction (DIRECTION): The direction to move.
        high_score_path: Where to record a new high score.
        rng: Optional randomness source for the spawned tile.
    Returns:
        TurnResult: Whether the board moved, whether the game is now over and
                    whether a new high score was reached.
    """
    if not apply_move(state.game_board, direction):
        return TurnResult(moved=False, game_over=False, new_high_score=False)

    spawn_tile(state.game_board, rng)
    state.current_score = compute_score(state.game_board)

    new_high_score = state.current_score > state.high_score
    if new_high_score:
        state.high_score = state.current_score
        try:
            write_high_score(state.high_score, high_score_path)
        except OSError as e:
            # The move stands even if the score file cannot be written.
            logger.error("Failed to write high score: %s", e)

    return TurnResult(moved=True, game_over=not is_move_possible(state.game_board), new_high_score=new_high_score)


def end_game(state: GameState, state_path: PathLike) -> None:
    """Leaves an empty board behind so the next session starts a new game."""
    size = len(state.game_board)
    try:
        save_game_state(GameState.fresh(size, state.high_score), state_path)
    except OSError as e:
        logger.error("Failed to save game state: %s", e)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play 2048 in the terminal.")
    parser.add_argument("--size", type=int, default=4, help="Board dimension N for a new N x N game (default: 4)")
    parser.add_argument("--state-file", default=GAME_STATE_FILE, help="Saved game location")
    parser.add_argument("--high-score-file", default=HIGH_SCORE_FILE, help="High score location")
    parser.add_argument("--win-tile", type=int, default=None, help="Announce a win when this tile is reached")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible tile spawns")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    if args.size < 2:
        raise SystemExit("Board size must be at least 2.")

    rng = random.Random(args.seed)
    state = start_session(args.size, args.state_file, args.high_score_file, rng)
    won_announced = False
    display_board_state(state)

    while True:
        move_input = input("Enter move (W/A/S/D to move, E to save and exit, Q to quit): ").strip().upper()

        if move_input == SAVE_AND_EXIT_KEY:
            try:
                save_game_state(state, args.state_file)
            except OSError as e:
                logger.error("Failed to save game state: %s", e)
                print("Failed to save game.")
            else:
                print("Game saved.")
            break
        if move_input == QUIT_KEY:
            print("Quitting game.")
            break

        chosen_direction = DIRECTION_KEYS.get(move_input)
        if not chosen_direction:
            print("Invalid input. Use W, A, S, D.")
            continue

        result = play_turn(state, chosen_direction, args.high_score_file, rng)
        if not result.moved:
            print("Move did not change the board. Try a different direction.")
            continue

        display_board_state(state)

        if args.win_tile and not won_announced and max_tile(state.game_board) >= args.win_tile:
            won_announced = True
            print(f"You reached {args.win_tile}! Keep going.")

        if result.game_over:
            end_game(state, args.state_file)
            print("Game Over!")
            break


# --- Display Function ---
def display_board_state(state: GameState):
    """Prints the board, score and high score to the console."""
    width = max(4, len(str(max_tile(state.game_board))))
    for row in state.game_board:
        print(" ".join(f"{value:>{width}}" for value in row))
    print(f" > Current score : {state.current_score}")
    print(f" > High score    : {state.high_score}")
    print()


if __name__ == "__main__":
    main()
