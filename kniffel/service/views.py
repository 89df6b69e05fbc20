"""
Kniffel - Game Views

Read-only snapshot of a game shaped for API clients.
"""

from pydantic import BaseModel

from kniffel.engine.base import ALL_CATEGORIES
from kniffel.engine.game import KniffelGame


class PlayerData(BaseModel):
    name: str
    score: int


class GameView(BaseModel):
    """Snapshot of a game from the current player's point of view."""

    game_id: str
    player_data: list[PlayerData]
    current_player_name: str
    state: str
    used_booking_types: list[str]
    available_booking_types: list[str]
    dice_rolls: list[int]
    roll_round: int

    @classmethod
    def from_game(cls, game: KniffelGame) -> "GameView":
        current = game.current_player
        return cls(
            game_id=game.game_id,
            player_data=[PlayerData(name=p.name, score=p.score) for p in game.players],
            current_player_name=current.name,
            state=game.phase.tag.upper(),
            used_booking_types=[c.tag for c in ALL_CATEGORIES if current.has_used(c)],
            available_booking_types=[c.tag for c in current.available_categories()],
            dice_rolls=list(game.dice),
            roll_round=game.roll_round,
        )
