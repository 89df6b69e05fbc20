"""
Kniffel - Scoring

Pure functions mapping a five-dice hand and a category to a score.
Hands are plain sequences of face values in 1..6; every function is
deterministic and never mutates its input.

Scoring Rules:
    - Ones..Sixes: face value x number of dice showing it
    - Three / Four of a Kind: sum of all dice if any face appears 3 / 4+ times
    - Full House: 25 (exactly three of one face, exactly two of another)
    - Small Straight: 30 (four consecutive faces)
    - Large Straight: 40 (five consecutive faces)
    - Kniffel: 50 (all five dice equal)
    - Chance: sum of all dice
"""

from collections import Counter
from typing import Iterable, Sequence

from kniffel.engine.base import Category

FULL_HOUSE_POINTS = 25
SMALL_STRAIGHT_POINTS = 30
LARGE_STRAIGHT_POINTS = 40
KNIFFEL_POINTS = 50

_SMALL_STRAIGHTS = ({1, 2, 3, 4}, {2, 3, 4, 5}, {3, 4, 5, 6})
_LARGE_STRAIGHTS = ({1, 2, 3, 4, 5}, {2, 3, 4, 5, 6})


def count_values(hand: Sequence[int]) -> Counter:
    """Count occurrences of each face value."""
    return Counter(hand)


def has_n_of_kind(hand: Sequence[int], n: int) -> bool:
    """True if at least ``n`` dice share a face value."""
    counts = count_values(hand)
    return bool(counts) and max(counts.values()) >= n


def has_full_house(hand: Sequence[int]) -> bool:
    """
    Check for a full house: one face exactly three times and a different
    face exactly twice. Five of a kind does not qualify.
    """
    return sorted(count_values(hand).values(), reverse=True) == [3, 2]


def has_small_straight(hand: Sequence[int]) -> bool:
    """Check whether the distinct faces contain four consecutive values."""
    values = set(hand)
    return any(straight <= values for straight in _SMALL_STRAIGHTS)


def has_large_straight(hand: Sequence[int]) -> bool:
    """Check whether the distinct faces are exactly five consecutive values."""
    values = set(hand)
    return any(straight == values for straight in _LARGE_STRAIGHTS)


def has_kniffel(hand: Sequence[int]) -> bool:
    """Check whether all dice show the same face."""
    return len(hand) > 0 and len(set(hand)) == 1


def score_upper(hand: Sequence[int], face: int) -> int:
    """Score for Ones..Sixes: face value times its count."""
    return face * sum(1 for value in hand if value == face)


def score_n_of_kind(hand: Sequence[int], n: int) -> int:
    """Sum of all dice if ``n`` or more share a face, else 0."""
    return sum(hand) if has_n_of_kind(hand, n) else 0


def score(hand: Sequence[int], category: Category) -> int:
    """
    Calculate the score a hand is worth in a category.

    Args:
        hand: Five dice values in 1..6
        category: Category to score

    Returns:
        Non-negative score
    """
    face = category.face
    if face is not None:
        return score_upper(hand, face)

    if category is Category.THREE_OF_A_KIND:
        return score_n_of_kind(hand, 3)
    if category is Category.FOUR_OF_A_KIND:
        return score_n_of_kind(hand, 4)
    if category is Category.FULL_HOUSE:
        return FULL_HOUSE_POINTS if has_full_house(hand) else 0
    if category is Category.SMALL_STRAIGHT:
        return SMALL_STRAIGHT_POINTS if has_small_straight(hand) else 0
    if category is Category.LARGE_STRAIGHT:
        return LARGE_STRAIGHT_POINTS if has_large_straight(hand) else 0
    if category is Category.KNIFFEL:
        return KNIFFEL_POINTS if has_kniffel(hand) else 0
    if category is Category.CHANCE:
        return sum(hand)

    raise ValueError(f"Unsupported category {category!r}")


def score_all(
    hand: Sequence[int],
    exclude: Iterable[Category] = (),
) -> dict[Category, int]:
    """
    Score a hand in every category not listed in ``exclude``.

    Returns:
        Mapping of category to score, in category declaration order
    """
    skipped = set(exclude)
    return {
        category: score(hand, category)
        for category in Category
        if category not in skipped
    }
