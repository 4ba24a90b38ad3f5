"""Tests for the stateless HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api import app
from core import GameProgressState


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


class TestNewGame:
    """Tests for POST /game/new."""

    def test_defaults(self, client: TestClient) -> None:
        """A default game is 4x4 with two tiles."""
        response = client.post("/game/new", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["board_size"] == 4
        assert data["win_tile"] == 2048
        assert data["progress"] == GameProgressState.IN_PROGRESS.value
        tiles = [v for row in data["board"] for v in row if v]
        assert len(tiles) == 2
        assert data["score"] == sum(tiles)
        assert data["available_moves"]

    def test_custom_size(self, client: TestClient) -> None:
        """The board size follows the request."""
        response = client.post("/game/new", json={"size": 6, "win_tile": 64})
        assert response.status_code == 200
        assert len(response.json()["board"]) == 6

    def test_size_too_small(self, client: TestClient) -> None:
        """Boards smaller than 2x2 are rejected."""
        response = client.post("/game/new", json={"size": 1})
        assert response.status_code == 422


class TestMove:
    """Tests for POST /game/move."""

    def test_effective_move(self, client: TestClient) -> None:
        """A changing move merges, spawns one tile and rescores."""
        board = [[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        response = client.post("/game/move", json={"board": board, "direction": "LEFT"})
        assert response.status_code == 200
        data = response.json()
        assert data["move_was_effective"] is True
        assert data["board"][0][0] == 4
        tiles = [v for row in data["board"] for v in row if v]
        assert len(tiles) == 2
        assert data["score"] == sum(tiles)
        assert data["score"] in (6, 8)

    def test_noop_move(self, client: TestClient) -> None:
        """A move that changes nothing returns the same board."""
        board = [[4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        response = client.post("/game/move", json={"board": board, "direction": "UP"})
        assert response.status_code == 200
        data = response.json()
        assert data["move_was_effective"] is False
        assert data["board"] == board
        assert data["score"] == 4
        assert data["available_moves"] == ["DOWN", "RIGHT"]

    def test_game_over(self, client: TestClient) -> None:
        """A terminal board reports game over."""
        board = [[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]]
        response = client.post("/game/move", json={"board": board, "direction": "LEFT"})
        data = response.json()
        assert data["progress"] == GameProgressState.GAME_OVER.value
        assert data["available_moves"] == []
        assert data["message"] == "Game Over. No more valid moves."

    def test_win(self, client: TestClient) -> None:
        """Reaching the win tile reports a win."""
        board = [[8, 8, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]]
        response = client.post("/game/move", json={"board": board, "direction": "LEFT", "win_tile": 16})
        data = response.json()
        assert data["progress"] == GameProgressState.GAME_WON.value
        assert data["message"] == "Congratulations! You won!"

    @pytest.mark.parametrize(
        "board",
        [
            [[2, 2, 0], [0, 0, 0]],
            [[3, 0], [0, 0]],
            [],
        ],
    )
    def test_invalid_board(self, client: TestClient, board: list[list[int]]) -> None:
        """Malformed boards are rejected with 400."""
        response = client.post("/game/move", json={"board": board, "direction": "LEFT"})
        assert response.status_code == 400

    def test_invalid_direction(self, client: TestClient) -> None:
        """Unknown directions fail request validation."""
        board = [[2, 0], [0, 0]]
        response = client.post("/game/move", json={"board": board, "direction": "SIDEWAYS"})
        assert response.status_code == 422
