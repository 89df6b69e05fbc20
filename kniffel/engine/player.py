"""
Kniffel - Player

Per-player scorecard: cumulative score and the set of categories already
booked. A category can be booked once per player per game.
"""

from dataclasses import dataclass, field

from kniffel.engine.base import ALL_CATEGORIES, Category
from kniffel.engine.errors import CategoryAlreadyUsed
from kniffel.engine.validators import validate_score


@dataclass
class Player:
    """
    Mutable player state within one game.

    Attributes:
        name: Unique name within the game (also the lookup key)
        score: Cumulative score, never decreases
        used_categories: Categories already booked
    """
    name: str
    score: int = 0
    used_categories: set[Category] = field(default_factory=set)

    def add_score(self, delta: int) -> None:
        """Add a booked category's score to the running total."""
        self.score += validate_score(delta)

    def mark_used(self, category: Category) -> None:
        """
        Record that a category has been booked.

        Raises:
            CategoryAlreadyUsed: If the category was booked before
        """
        if category in self.used_categories:
            raise CategoryAlreadyUsed(
                f"{self.name} already booked {category.tag}."
            )
        self.used_categories.add(category)

    def has_used(self, category: Category) -> bool:
        return category in self.used_categories

    def used_count(self) -> int:
        return len(self.used_categories)

    @property
    def is_finished(self) -> bool:
        """True once every category has been booked."""
        return self.used_count() == len(ALL_CATEGORIES)

    def available_categories(self) -> tuple[Category, ...]:
        """Categories still open, in declaration order."""
        return tuple(c for c in ALL_CATEGORIES if c not in self.used_categories)
