"""
Kniffel - Game Engine Base Types

This module defines the enums and constants shared by the scoring
functions, the player model, and the game state machine.
"""

from enum import Enum

from kniffel.engine.errors import InvalidGameRecord, UnknownCategory


NUM_DICE = 5
DIE_FACES = 6
MAX_ROLLS = 3


class Category(Enum):
    """Scoring categories. Values are the storage tags."""
    ONES = "ONES"
    TWOS = "TWOS"
    THREES = "THREES"
    FOURS = "FOURS"
    FIVES = "FIVES"
    SIXES = "SIXES"
    THREE_OF_A_KIND = "THREE_OF_A_KIND"
    FOUR_OF_A_KIND = "FOUR_OF_A_KIND"
    FULL_HOUSE = "FULL_HOUSE"
    SMALL_STRAIGHT = "SMALL_STRAIGHT"
    LARGE_STRAIGHT = "LARGE_STRAIGHT"
    KNIFFEL = "KNIFFEL"
    CHANCE = "CHANCE"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def face(self) -> int | None:
        """Face value for the upper section (Ones..Sixes), else None."""
        return _UPPER_FACES.get(self)

    @classmethod
    def from_tag(cls, tag: str) -> "Category":
        """
        Parse a storage tag such as ``FULL_HOUSE``.

        Raises:
            UnknownCategory: If the tag names no category
        """
        if isinstance(tag, str):
            try:
                return cls(tag.strip().upper())
            except ValueError:
                pass
        raise UnknownCategory(f"Unknown booking category {tag!r}.")


_UPPER_FACES: dict[Category, int] = {
    Category.ONES: 1,
    Category.TWOS: 2,
    Category.THREES: 3,
    Category.FOURS: 4,
    Category.FIVES: 5,
    Category.SIXES: 6,
}

ALL_CATEGORIES: tuple[Category, ...] = tuple(Category)
UPPER_CATEGORIES: tuple[Category, ...] = tuple(_UPPER_FACES)


class Phase(Enum):
    """Coarse state of a turn. Values are the storage tags."""
    ROLLING = "Roll"
    BOOKING = "Book"
    ENDED = "Ended"

    @property
    def tag(self) -> str:
        return self.value

    @classmethod
    def from_tag(cls, tag: str) -> "Phase":
        """
        Parse a stored phase tag, case-insensitively.

        Raises:
            InvalidGameRecord: If the tag names no phase
        """
        if isinstance(tag, str):
            for phase in cls:
                if phase.value.lower() == tag.strip().lower():
                    return phase
        raise InvalidGameRecord(f"Unknown game stage {tag!r}.")
