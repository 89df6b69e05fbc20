"""
Kniffel - Database Models

Pydantic models that mirror the Supabase table schemas, plus conversion
to and from the engine's storage records.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from kniffel.engine.records import GameRecord, PlayerRecord


class GameRow(BaseModel):
    """Mirrors the `games` table."""

    id: int | None = None
    game_id: str = Field(max_length=255)
    roll_round: int = Field(ge=0, le=3)
    stage: str = Field(max_length=255)
    dice_rolls: str = Field(max_length=255)
    current_player: str = Field(max_length=255)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, record: GameRecord) -> "GameRow":
        return cls(
            game_id=record.game_id,
            roll_round=record.roll_round,
            stage=record.stage,
            dice_rolls=record.dice_rolls,
            current_player=record.current_player,
        )

    def to_payload(self) -> dict:
        """Columns written on insert and update."""
        return self.model_dump(include={
            "game_id", "roll_round", "stage", "dice_rolls", "current_player",
        })


class PlayerRow(BaseModel):
    """Mirrors the `players` table."""

    id: int | None = None
    game_id: str = Field(max_length=255)
    name: str = Field(max_length=255)
    score: int = Field(default=0, ge=0)
    used_booking_types: str = Field(default="", max_length=255)
    turn_order: int = Field(default=0, ge=0)

    model_config = {"from_attributes": True}

    @classmethod
    def from_record(cls, game_id: str, record: PlayerRecord) -> "PlayerRow":
        return cls(
            game_id=game_id,
            name=record.name,
            score=record.score,
            used_booking_types=record.used_booking_types,
            turn_order=record.turn_order,
        )

    def to_payload(self) -> dict:
        return self.model_dump(include={
            "game_id", "name", "score", "used_booking_types", "turn_order",
        })

    def to_record(self) -> PlayerRecord:
        return PlayerRecord(
            name=self.name,
            score=self.score,
            used_booking_types=self.used_booking_types or "",
            turn_order=self.turn_order,
        )


def to_game_record(game: GameRow, players: list[PlayerRow]) -> GameRecord:
    """Combine a game row and its player rows into an engine record."""
    return GameRecord(
        game_id=game.game_id,
        roll_round=game.roll_round,
        stage=game.stage,
        dice_rolls=game.dice_rolls,
        current_player=game.current_player,
        players=tuple(p.to_record() for p in sorted(players, key=lambda p: p.turn_order)),
    )
