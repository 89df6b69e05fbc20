"""
Kniffel - Storage Records

Flat, string-friendly representation of a game used by the persistence
layer. Dice and used categories are stored as comma-joined strings:

    dice_rolls:          "1,3,3,5,6"
    used_booking_types:  "ONES,FULL_HOUSE,CHANCE"   ("" when nothing booked)
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from kniffel.engine.base import ALL_CATEGORIES, Category
from kniffel.engine.errors import InvalidGameRecord, UnknownCategory
from kniffel.engine.validators import validate_dice_values


def encode_dice(dice: Iterable[int]) -> str:
    return ",".join(str(value) for value in dice)


def decode_dice(text: str) -> tuple[int, ...]:
    """
    Parse a comma-joined list of five dice (0 allowed for pending dice).

    Raises:
        InvalidGameRecord: If the text is not five integers in 0..6
    """
    if not isinstance(text, str):
        raise InvalidGameRecord(f"Dice must be stored as text, got {type(text).__name__}.")
    try:
        values = tuple(int(part) for part in text.split(","))
    except ValueError as exc:
        raise InvalidGameRecord(f"Malformed dice {text!r}.") from exc
    return validate_dice_values(values, allow_pending=True)


def encode_categories(categories: Iterable[Category]) -> str:
    """Join category tags in declaration order so output is stable."""
    used = set(categories)
    return ",".join(c.tag for c in ALL_CATEGORIES if c in used)


def decode_categories(text: str) -> set[Category]:
    """
    Parse a comma-joined list of category tags.

    Raises:
        InvalidGameRecord: On unknown or repeated tags
    """
    if not isinstance(text, str):
        raise InvalidGameRecord(
            f"Used categories must be stored as text, got {type(text).__name__}."
        )

    used: set[Category] = set()
    for part in text.split(","):
        if not part.strip():
            continue
        try:
            category = Category.from_tag(part)
        except UnknownCategory as exc:
            raise InvalidGameRecord(str(exc)) from exc
        if category in used:
            raise InvalidGameRecord(f"Category {category.tag} stored twice.")
        used.add(category)
    return used


@dataclass(frozen=True)
class PlayerRecord:
    """
    Stored form of one player.

    Attributes:
        name: Player name
        score: Cumulative score
        used_booking_types: Comma-joined category tags
        turn_order: Zero-based seat in the rotation
    """
    name: str
    score: int = 0
    used_booking_types: str = ""
    turn_order: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerRecord":
        try:
            return cls(
                name=data["name"],
                score=int(data.get("score", 0)),
                used_booking_types=data.get("used_booking_types") or "",
                turn_order=int(data.get("turn_order", 0)),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidGameRecord(f"Malformed player record {data!r}.") from exc

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "used_booking_types": self.used_booking_types,
            "turn_order": self.turn_order,
        }


@dataclass(frozen=True)
class GameRecord:
    """
    Stored form of a whole game.

    Attributes:
        game_id: Opaque game identifier
        roll_round: Rolls taken in the current turn (0-3)
        stage: Phase tag ("Roll", "Book" or "Ended")
        dice_rolls: Comma-joined five dice values
        current_player: Name of the player whose turn it is
        players: Player records (any order; turn_order decides the rotation)
    """
    game_id: str
    roll_round: int
    stage: str
    dice_rolls: str
    current_player: str
    players: tuple[PlayerRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameRecord":
        """Create a GameRecord from database dictionary format."""
        try:
            return cls(
                game_id=str(data["game_id"]),
                roll_round=int(data["roll_round"]),
                stage=data["stage"],
                dice_rolls=data["dice_rolls"],
                current_player=data["current_player"],
                players=tuple(
                    p if isinstance(p, PlayerRecord) else PlayerRecord.from_dict(p)
                    for p in data.get("players", ())
                ),
            )
        except (KeyError, TypeError, ValueError) as exc:
            if isinstance(exc, InvalidGameRecord):
                raise
            raise InvalidGameRecord(f"Malformed game record: {exc}") from exc

    def to_dict(self) -> dict[str, Any]:
        """Convert to database dictionary format."""
        return {
            "game_id": self.game_id,
            "roll_round": self.roll_round,
            "stage": self.stage,
            "dice_rolls": self.dice_rolls,
            "current_player": self.current_player,
            "players": [p.to_dict() for p in self.players],
        }
