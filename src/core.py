# core.py
# Grid engine for a 2048 game: moves, spawning, terminal checks and scoring.
# The engine performs no I/O; drivers own the grid and call into it.

from enum import Enum
from typing import Any, List, Optional, Tuple
import logging
import random

logger = logging.getLogger(__name__)

SPAWN_TWO_PROBABILITY = 0.9

class GameProgressState(Enum):
    """Represents the current progress state of the game."""
    IN_PROGRESS = 1
    GAME_OVER = 2  # Lost
    GAME_WON = 3

class DIRECTION(Enum):
    """Represents the possible move directions."""
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

# --- Board Helper Functions ---

def get_board_size(board: List[List[int]]) -> int:
    """
    Gets the size (N) of an N x N board.
    Args:
        board (List[List[int]]): The game board.
    Returns:
        int: The dimension of the board.
    Raises:
        ValueError: If the board is not square or empty.
    """
    if not board or not all(len(row) == len(board) for row in board):
        raise ValueError("Board must be a non-empty square matrix.")
    return len(board)

def validate_board(board: List[List[int]]) -> int:
    """
    Checks that a board is square and holds only empty cells or power-of-two tiles.
    Args:
        board (List[List[int]]): The game board.
    Returns:
        int: The dimension of the board.
    Raises:
        ValueError: If the board shape or any cell value is invalid.
    """
    n = get_board_size(board)
    for r, row in enumerate(board):
        for c, value in enumerate(row):
            if not isinstance(value, int) or value < 0:
                raise ValueError(f"Cell ({r}, {c}) must be a non-negative integer, got {value!r}.")
            if value and (value < 2 or value & (value - 1)):
                raise ValueError(f"Cell ({r}, {c}) must be 0 or a power of two >= 2, got {value}.")
    return n

def get_empty_cells(board: List[List[int]]) -> List[Tuple[int, int]]:
    """
    Get coordinates of empty (0-value) cells in the given board.
    Args:
        board (List[List[int]]): The board to check.
    Returns:
        List[Tuple[int, int]]: List of (row, col) tuples for empty cells.
    """
    n = get_board_size(board)
    empty_cells = []
    for row in range(n):
        for col in range(n):
            if board[row][col] == 0:
                empty_cells.append((row, col))
    return empty_cells

def new_board(size: int = 4) -> List[List[int]]:
    """Returns an all-empty size x size board."""
    if not isinstance(size, int) or size <= 0:
        raise ValueError("Board size must be a positive integer.")
    return [[0] * size for _ in range(size)]

def spawn_tile(board: List[List[int]], rng: Any = None) -> Optional[Tuple[int, int, int]]:
    """
    Places a new tile (90% chance of 2, 10% chance of 4) on a random empty cell, in place.
    Args:
        board (List[List[int]]): The board to modify.
        rng: Randomness source with ``choice`` and ``random`` methods.
             Defaults to the ``random`` module.
    Returns:
        Optional[Tuple[int, int, int]]: (row, col, value) of the placed tile,
                                        or None if the board had no empty cell.
    """
    if rng is None:
        rng = random
    empty_cells = get_empty_cells(board)
    if not empty_cells:
        return None

    row, col = rng.choice(empty_cells)
    value = 2 if rng.random() < SPAWN_TWO_PROBABILITY else 4
    board[row][col] = value
    return row, col, value

def initialize_board(size: int = 4, rng: Any = None) -> List[List[int]]:
    """
    Creates a new game board with two random tiles.
    Args:
        size (int): The dimension of the N x N game board. Default is 4.
        rng: Optional randomness source passed through to spawn_tile.
    Returns:
        List[List[int]]: The initial board.
    Raises:
        ValueError: If board size is not a positive integer.
    """
    board = new_board(size)
    spawn_tile(board, rng)
    spawn_tile(board, rng)
    return board

def compute_score(board: List[List[int]]) -> int:
    """The score is the sum of every tile on the board."""
    return sum(sum(row) for row in board)

def max_tile(board: List[List[int]]) -> int:
    """
    Finds the largest tile on the board.
    Args:
        board (List[List[int]]): The game board.
    Returns:
        int: The highest cell value, 0 for an empty board.
    """
    return max((max(row) for row in board), default=0)

# --- Line Manipulation (Core Move Logic Helpers) ---
# Lines are ordered so that index 0 is the cell at the target end of the move.

def _compress_line(line: List[int]) -> List[int]:
    """
    Slides all non-zero tiles to the start of the line, keeping their order.
    Args:
        line (List[int]): The line to compress.
    Returns:
        List[int]: The compressed line, same length as the input.
    """
    compressed = [value for value in line if value != 0]
    return compressed + [0] * (len(line) - len(compressed))

def _merge_line(line: List[int]) -> List[int]:
    """
    Merges adjacent equal tiles, scanning once from the start of the line.
    The tile nearer the start takes the doubled value and its partner becomes
    empty; the emptied cell stops the doubled tile from merging again.
    Args:
        line (List[int]): A compressed line.
    Returns:
        List[int]: The merged line (may contain gaps).
    """
    merged = list(line)
    for i in range(len(merged) - 1):
        if merged[i] != 0 and merged[i] == merged[i + 1]:
            merged[i] *= 2
            merged[i + 1] = 0
    return merged

def slide_line(line: List[int]) -> List[int]:
    """
    Applies compress, merge, then compress again to a single line, moving
    toward index 0.
    Args:
        line (List[int]): The line to process.
    Returns:
        List[int]: The processed line.
    """
    return _compress_line(_merge_line(_compress_line(line)))

# --- Board Transformations ---

def _line_coordinates(n: int, direction: DIRECTION) -> List[List[Tuple[int, int]]]:
    """
    Lists the cells of every line affected by a move, each line ordered from
    the target end backward.
    Args:
        n (int): The board dimension.
        direction (DIRECTION): The direction of the move.
    Returns:
        List[List[Tuple[int, int]]]: One list of (row, col) per row or column.
    Raises:
        ValueError: If an invalid direction is specified.
    """
    forward = list(range(n))
    backward = forward[::-1]
    if direction == DIRECTION.LEFT:
        return [[(r, c) for c in forward] for r in forward]
    if direction == DIRECTION.RIGHT:
        return [[(r, c) for c in backward] for r in forward]
    if direction == DIRECTION.UP:
        return [[(r, c) for r in forward] for c in forward]
    if direction == DIRECTION.DOWN:
        return [[(r, c) for r in backward] for c in forward]
    raise ValueError(f"Invalid direction specified: {direction!r}.")

# --- Core Game Move Processing ---

def apply_move(board: List[List[int]], direction: DIRECTION) -> bool:
    """
    Moves every tile on the board in the given direction, in place.
    Args:
        board (List[List[int]]): The game board, mutated in place.
        direction (DIRECTION): The direction to move.
    Returns:
        bool: True if the settled board differs from the board before the move.
    Raises:
        ValueError: If the board is not a non-empty square or the direction is invalid.
    """
    n = get_board_size(board)
    lines = _line_coordinates(n, direction)
    initial_board = [list(row) for row in board]

    for cells in lines:
        settled = slide_line([board[r][c] for r, c in cells])
        for (r, c), value in zip(cells, settled):
            board[r][c] = value

    changed = board != initial_board
    logger.debug("Applied move %s, changed=%s", direction.name, changed)
    return changed

def process_move(board: List[List[int]], direction: DIRECTION) -> Tuple[List[List[int]], bool]:
    """
    Processes a move in the specified direction on a copy of the board.
    Args:
        board (List[List[int]]): The current game board (left untouched).
        direction (DIRECTION): The direction to move.
    Returns:
        Tuple[List[List[int]], bool]:
            - The new board state after the move.
            - A boolean indicating if the board changed as a result of the move.
    """
    board_to_operate_on = [list(r) for r in board] # Work on a copy
    changed = apply_move(board_to_operate_on, direction)
    return board_to_operate_on, changed

# --- Game State Checks ---

def is_move_possible(board: List[List[int]]) -> bool:
    """
    Checks whether any move could change the board.
    A board is terminal only when it has no empty cell and no two equal
    tiles side by side, horizontally or vertically.
    Args:
        board (List[List[int]]): The game board.
    Returns:
        bool: False if the board is terminal, True otherwise.
    """
    n = get_board_size(board)
    for r in range(n):
        for c in range(n):
            value = board[r][c]
            if value == 0:
                return True
            if c < n - 1 and value == board[r][c + 1]:
                return True
            if r < n - 1 and value == board[r + 1][c]:
                return True
    return False

def is_move_possible_in_direction(board: List[List[int]], direction: DIRECTION) -> bool:
    """
    Check if any tile can move or merge in the given specific direction.
    Args:
        board (List[List[int]]): The game board.
        direction (DIRECTION): The direction to check.
    Returns:
       bool: True if at least one tile can move or merge in that direction, False otherwise.
    """
    n = get_board_size(board)
    for cells in _line_coordinates(n, direction):
        line = [board[r][c] for r, c in cells]
        # Walking away from the target end, a tile can move if the cell ahead
        # of it is empty or holds the same value.
        for i in range(1, n):
            if line[i] != 0 and (line[i - 1] == 0 or line[i - 1] == line[i]):
                return True
    return False

def available_moves(board: List[List[int]]) -> List[DIRECTION]:
    """
    Lists the directions that would change the board.
    Args:
        board (List[List[int]]): The game board.
    Returns:
        List[DIRECTION]: Effective directions, in DIRECTION declaration order.
    """
    return [d for d in DIRECTION if is_move_possible_in_direction(board, d)]

def determine_game_status(board: List[List[int]], win_tile: Optional[int] = None) -> GameProgressState:
    """
    Determines the current progress state of the game based on the board.
    Args:
        board (List[List[int]]): The current game board.
        win_tile (Optional[int]): The tile value that signifies a win.
                                  None disables the win condition.
    Returns:
        GameProgressState: The current state (IN_PROGRESS, GAME_WON, GAME_OVER).
    """
    if win_tile is not None and max_tile(board) >= win_tile:
        return GameProgressState.GAME_WON
    if not is_move_possible(board):
        return GameProgressState.GAME_OVER
    return GameProgressState.IN_PROGRESS
