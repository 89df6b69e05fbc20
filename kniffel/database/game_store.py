"""
Kniffel - Game Store

CRUD operations for the `games` and `players` tables. A game is stored as
one `games` row plus one `players` row per seat, keyed by the game's
opaque id.
"""

import logging

from supabase import Client

from kniffel.database.models import GameRow, PlayerRow, to_game_record
from kniffel.engine.dice import DiceSource
from kniffel.engine.errors import GameNotFound
from kniffel.engine.game import KniffelGame

logger = logging.getLogger(__name__)


class GameStore:
    """Persists Kniffel games in Supabase."""

    def __init__(
        self,
        client: Client,
        games_table: str = "games",
        players_table: str = "players",
    ) -> None:
        self.client = client
        self.games = client.table(games_table)
        self.players = client.table(players_table)

    def create(self, game: KniffelGame) -> KniffelGame:
        """Insert a freshly created game and its roster."""
        record = game.to_record()
        self.games.insert(GameRow.from_record(record).to_payload()).execute()
        self.players.insert([
            PlayerRow.from_record(record.game_id, p).to_payload()
            for p in record.players
        ]).execute()
        logger.info(
            "Stored new game %s with %d players", record.game_id, len(record.players)
        )
        return game

    def load(
        self,
        game_id: str,
        dice_source: DiceSource | None = None,
    ) -> KniffelGame | None:
        """Load a game by its id, or None if it does not exist."""
        data = (
            self.games
            .select("*")
            .eq("game_id", game_id)
            .limit(1)
            .execute()
        )
        if not data.data:
            logger.debug("Game %s not found", game_id)
            return None

        game_row = GameRow.model_validate(data.data[0])
        player_data = (
            self.players
            .select("*")
            .eq("game_id", game_id)
            .order("turn_order")
            .execute()
        )
        player_rows = [PlayerRow.model_validate(row) for row in player_data.data]
        record = to_game_record(game_row, player_rows)
        return KniffelGame.from_record(record, dice_source=dice_source)

    def save(self, game: KniffelGame) -> None:
        """
        Write back the mutable state of an existing game.

        Raises:
            GameNotFound: If no games row has this id
        """
        record = game.to_record()
        payload = GameRow.from_record(record).to_payload()
        payload.pop("game_id")
        response = (
            self.games
            .update(payload)
            .eq("game_id", record.game_id)
            .execute()
        )
        if not response.data:
            raise GameNotFound(f"No game with id {record.game_id!r}.")
        for p in record.players:
            (
                self.players
                .update({
                    "score": p.score,
                    "used_booking_types": p.used_booking_types,
                })
                .eq("game_id", record.game_id)
                .eq("name", p.name)
                .execute()
            )
        logger.debug("Saved game %s (stage=%s)", record.game_id, record.stage)

    def delete(self, game_id: str) -> None:
        """Delete a game and its players."""
        self.players.delete().eq("game_id", game_id).execute()
        self.games.delete().eq("game_id", game_id).execute()
        logger.info("Deleted game %s", game_id)
