"""
Kniffel - Dice

Randomness is isolated behind the DiceSource protocol so the game engine
can be driven by scripted rolls in tests. Hands are always returned in
ascending order; the position of an individual die carries no meaning
across rolls, only face values and their counts do.
"""

import random
from collections import Counter
from typing import Protocol, Sequence

from kniffel.engine.base import DIE_FACES, NUM_DICE


class DiceSource(Protocol):
    """Anything that can produce a single uniform die face in 1..6."""

    def roll(self) -> int:
        ...


class RandomDiceSource:
    """DiceSource backed by a private ``random.Random`` instance."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def roll(self) -> int:
        return self._rng.randint(1, DIE_FACES)


def keep_dice(hand: Sequence[int], dice_to_keep: Sequence[int]) -> tuple[int, ...]:
    """
    Decide which dice survive a re-roll.

    Walks ``dice_to_keep`` in order with a cursor that advances once per
    entry. A requested face is placed at the cursor position while the hand
    still holds an unclaimed copy of it; requests beyond the available
    count are dropped. Every slot not filled this way is 0 (pending).

    Args:
        hand: Current five dice
        dice_to_keep: Face values to retain, in any order

    Returns:
        Five slots, kept faces or 0
    """
    remaining = Counter(hand)
    result = [0] * NUM_DICE

    for cursor, value in enumerate(dice_to_keep[:NUM_DICE]):
        if remaining[value] > 0:
            result[cursor] = value
            remaining[value] -= 1

    return tuple(result)


def roll_hand(kept: Sequence[int], source: DiceSource) -> tuple[int, ...]:
    """
    Fill every pending (0) slot with a fresh roll.

    Returns:
        The complete hand, sorted ascending
    """
    return tuple(sorted(value if value else source.roll() for value in kept))
