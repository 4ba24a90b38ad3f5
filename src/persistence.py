# persistence.py
# Session state and high-score storage used by the drivers. The engine in
# core.py never touches the file system; drivers call these functions.

import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

import core

logger = logging.getLogger(__name__)

GAME_STATE_FILE = os.environ.get("GAME_STATE_FILE", "game_state.json")
HIGH_SCORE_FILE = os.environ.get("HIGH_SCORE_FILE", "highscore.txt")

PathLike = Union[str, Path]


class GameState(BaseModel):
    """A saved game session."""
    game_board: List[List[int]] = Field(..., description="The N x N game board.")
    current_score: int = Field(default=0, ge=0, description="Sum of the tiles on the board.")
    high_score: int = Field(default=0, ge=0, description="Best score seen so far.")

    @classmethod
    def fresh(cls, size: int = 4, high_score: int = 0) -> "GameState":
        """An empty board with no score, keeping the given high score."""
        return cls(game_board=core.new_board(size), current_score=0, high_score=high_score)


def save_game_state(state: GameState, path: PathLike = GAME_STATE_FILE) -> None:
    """
    Writes the session state as JSON.
    Raises:
        OSError: If the file cannot be written.
    """
    Path(path).write_text(state.model_dump_json())
    logger.debug("Saved game state to %s", path)


def load_game_state(path: PathLike = GAME_STATE_FILE) -> Optional[GameState]:
    """
    Reads a saved session.
    Returns:
        Optional[GameState]: The saved state, or None if there is no usable
                             saved game at ``path``.
    """
    try:
        data = Path(path).read_text()
    except FileNotFoundError:
        logger.debug("No saved game at %s", path)
        return None
    except OSError as e:
        logger.warning("Could not read saved game %s: %s", path, e)
        return None

    try:
        state = GameState.model_validate_json(data)
        core.validate_board(state.game_board)
    except (ValidationError, ValueError) as e:
        logger.warning("Ignoring invalid saved game %s: %s", path, e)
        return None
    return state


def read_high_score(path: PathLike = HIGH_SCORE_FILE) -> int:
    """Returns the stored high score, or 0 if it is missing or unreadable."""
    try:
        content = Path(path).read_text()
    except OSError:
        return 0
    try:
        return max(int(content.strip()), 0)
    except ValueError:
        logger.warning("High score file %s does not hold an integer", path)
        return 0


def write_high_score(high_score: int, path: PathLike = HIGH_SCORE_FILE) -> None:
    """
    Stores the high score as plain text.
    Raises:
        OSError: If the file cannot be written.
    """
    Path(path).write_text(str(high_score))
