"""
Kniffel - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from itertools import cycle
from typing import Iterable

import pytest

from kniffel.engine.base import Category


class ScriptedDice:
    """DiceSource that replays a fixed sequence of faces, then repeats it."""

    def __init__(self, faces: Iterable[int]) -> None:
        self.faces = list(faces)
        self._it = cycle(self.faces)
        self.rolls = 0

    def roll(self) -> int:
        self.rolls += 1
        return next(self._it)


@pytest.fixture
def scripted_dice():
    """Factory for ScriptedDice: ``scripted_dice(3, 1, 4, 1, 5)``."""
    def _make(*faces: int) -> ScriptedDice:
        return ScriptedDice(faces)
    return _make


@pytest.fixture
def sixes() -> ScriptedDice:
    """Every roll is a 6."""
    return ScriptedDice([6])


# =============================================================================
# SCORING TEST DATA
# =============================================================================

@pytest.fixture
def scored_hands() -> dict[str, tuple[tuple[int, ...], Category, int]]:
    """
    Hand/category pairs with expected scores.

    Returns:
        Dict mapping name to (hand, category, expected_points)
    """
    return {
        "full_house": ((1, 1, 1, 2, 2), Category.FULL_HOUSE, 25),
        "four_plus_one_not_full_house": ((1, 1, 1, 1, 2), Category.FULL_HOUSE, 0),
        "kniffel_not_full_house": ((1, 1, 1, 1, 1), Category.FULL_HOUSE, 0),
        "small_straight_low": ((1, 2, 3, 4, 6), Category.SMALL_STRAIGHT, 30),
        "large_straight_low": ((1, 2, 3, 4, 5), Category.LARGE_STRAIGHT, 40),
        "broken_large_straight": ((1, 1, 3, 4, 5), Category.LARGE_STRAIGHT, 0),
        "three_threes": ((3, 3, 3, 5, 6), Category.THREE_OF_A_KIND, 20),
        "two_pairs_no_triple": ((3, 3, 5, 5, 6), Category.THREE_OF_A_KIND, 0),
        "kniffel": ((4, 4, 4, 4, 4), Category.KNIFFEL, 50),
        "chance": ((1, 3, 4, 6, 6), Category.CHANCE, 20),
    }


@pytest.fixture
def record_dict() -> dict:
    """A stored mid-game record for two players."""
    return {
        "game_id": "3f2c9a0e5b7d4c1a8e6f0b2d4a6c8e01",
        "roll_round": 2,
        "stage": "Roll",
        "dice_rolls": "1,2,2,5,6",
        "current_player": "Bob",
        "players": [
            {
                "name": "Alice",
                "score": 25,
                "used_booking_types": "FULL_HOUSE",
                "turn_order": 0,
            },
            {
                "name": "Bob",
                "score": 32,
                "used_booking_types": "SIXES,CHANCE",
                "turn_order": 1,
            },
        ],
    }
