"""
Kniffel - Input Validation Utilities

Provides validation functions for game engine inputs. All validators
either return validated data or raise a descriptive engine error.
"""

from collections import Counter
from typing import Sequence

from kniffel.engine.base import DIE_FACES, NUM_DICE
from kniffel.engine.errors import (
    InvalidDiceSelection,
    InvalidGameRecord,
    InvalidPlayerList,
)


def validate_dice_values(
    values: Sequence[int],
    allow_pending: bool = False,
) -> tuple[int, ...]:
    """
    Validate a full hand of dice.

    Args:
        values: Sequence of exactly five dice values
        allow_pending: Whether 0 ("not rolled yet") is accepted

    Returns:
        Validated values as a tuple

    Raises:
        InvalidGameRecord: If validation fails
    """
    values_tuple = tuple(values)
    if len(values_tuple) != NUM_DICE:
        raise InvalidGameRecord(
            f"Exactly {NUM_DICE} dice required, got {len(values_tuple)}."
        )

    low = 0 if allow_pending else 1
    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidGameRecord(
                f"Die value at index {i} must be an integer, got {type(value).__name__}."
            )
        if not (low <= value <= DIE_FACES):
            raise InvalidGameRecord(
                f"Die value at index {i} is {value}, must be between {low} and {DIE_FACES}."
            )

    return values_tuple


def validate_dice_to_keep(
    dice_to_keep: Sequence[int],
    hand: Sequence[int] | None = None,
) -> tuple[int, ...]:
    """
    Validate a keep request (face values, not positions).

    Args:
        dice_to_keep: Face values the player wants to keep
        hand: Current hand; when given, requesting more copies of a face
              than the hand holds is rejected

    Returns:
        Validated values as a tuple, in request order

    Raises:
        InvalidDiceSelection: If the request is malformed
    """
    if dice_to_keep is None:
        return tuple()

    values_tuple = tuple(dice_to_keep)
    if len(values_tuple) > NUM_DICE:
        raise InvalidDiceSelection(
            f"At most {NUM_DICE} dice can be kept, got {len(values_tuple)}."
        )

    for i, value in enumerate(values_tuple):
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidDiceSelection(
                f"Kept value at index {i} must be an integer, got {type(value).__name__}."
            )
        if not (1 <= value <= DIE_FACES):
            raise InvalidDiceSelection(
                f"Kept value at index {i} is {value}, must be between 1 and {DIE_FACES}."
            )

    if hand is not None:
        available = Counter(hand)
        for value, wanted in Counter(values_tuple).items():
            if wanted > available[value]:
                raise InvalidDiceSelection(
                    f"Cannot keep {wanted} x {value}, hand only has {available[value]}."
                )

    return values_tuple


def validate_player_names(names: Sequence[str]) -> tuple[str, ...]:
    """
    Validate the roster for a new game.

    Args:
        names: Player names in turn order

    Returns:
        Validated names as a tuple, order preserved

    Raises:
        InvalidPlayerList: If the list is empty, has blank or
                           non-string entries, or repeats a name
    """
    if names is None or isinstance(names, str):
        raise InvalidPlayerList("Player names must be a sequence of strings.")

    names_tuple = tuple(names)
    if not names_tuple:
        raise InvalidPlayerList("At least one player is required.")

    seen: set[str] = set()
    for i, name in enumerate(names_tuple):
        if not isinstance(name, str):
            raise InvalidPlayerList(
                f"Player name at index {i} must be a string, got {type(name).__name__}."
            )
        if not name.strip():
            raise InvalidPlayerList(f"Player name at index {i} is blank.")
        if name in seen:
            raise InvalidPlayerList(f"Duplicate player name {name!r}.")
        seen.add(name)

    return names_tuple


def validate_score(score: int) -> int:
    """
    Validate a non-negative score value.

    Raises:
        ValueError: If score is not a non-negative integer
    """
    if not isinstance(score, int) or isinstance(score, bool):
        raise ValueError(f"Score must be an integer, got {type(score).__name__}.")

    if score < 0:
        raise ValueError(f"Score cannot be negative, got {score}.")

    return score
