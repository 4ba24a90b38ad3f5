"""Pytest configuration and fixtures for the 2048 engine tests."""

from __future__ import annotations

import pytest


class FixedRandom:
    """Randomness source that always picks the same index and roll."""

    def __init__(self, index: int = 0, roll: float = 0.0) -> None:
        self.index = index
        self.roll = roll

    def choice(self, seq):
        return seq[self.index]

    def random(self) -> float:
        return self.roll


@pytest.fixture
def fixed_rng() -> FixedRandom:
    """Always picks the first empty cell and spawns a 2."""
    return FixedRandom()


@pytest.fixture
def make_rng() -> type[FixedRandom]:
    """Factory for randomness sources with a chosen index and roll."""
    return FixedRandom


@pytest.fixture
def checkerboard() -> list[list[int]]:
    """A full board with no equal neighbours."""
    return [
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ]
