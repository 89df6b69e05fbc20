"""
Kniffel - Game Service

Owns the load-mutate-persist cycle around the rules engine. Calls for the
same game id are serialized with a per-game lock so two concurrent
re-rolls or bookings cannot overwrite each other's result within one
process.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol, Sequence

from kniffel.config.settings import configure_logging, get_settings
from kniffel.database.client import get_supabase_client
from kniffel.database.game_store import GameStore
from kniffel.engine.base import Category
from kniffel.engine.dice import DiceSource
from kniffel.engine.errors import GameNotFound
from kniffel.engine.game import KniffelGame
from kniffel.service.views import GameView

logger = logging.getLogger(__name__)


class GameRepository(Protocol):
    """Storage interface shared by GameStore and InMemoryGameStore."""

    def create(self, game: KniffelGame) -> KniffelGame:
        ...

    def load(self, game_id: str, dice_source: DiceSource | None = None) -> KniffelGame | None:
        ...

    def save(self, game: KniffelGame) -> None:
        ...


class GameService:
    """Coordinates game creation, rolling and booking against a store."""

    def __init__(
        self,
        store: GameRepository,
        dice_source: DiceSource | None = None,
    ) -> None:
        self._store = store
        self._dice_source = dice_source
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def create_game(self, player_names: Sequence[str]) -> GameView:
        """Start and store a new game."""
        game = KniffelGame(player_names, dice_source=self._dice_source)
        self._store.create(game)
        logger.info(
            "Created game %s for %s", game.game_id, ", ".join(p.name for p in game.players)
        )
        return GameView.from_game(game)

    def get_game(self, game_id: str) -> GameView:
        """
        Return the current state of a game.

        Raises:
            GameNotFound: If the id is unknown
        """
        return GameView.from_game(self._load(game_id))

    def roll(
        self,
        game_id: str,
        dice_to_keep: Sequence[int] = (),
        *,
        strict: bool = False,
    ) -> GameView:
        """
        Re-roll the current player's dice, keeping the given face values.

        With ``strict`` set, asking to keep more copies of a face than the
        hand shows raises InvalidDiceSelection instead of re-rolling them.
        """
        keep = tuple(dice_to_keep or ())
        view = self._mutate(game_id, lambda game: game.reroll(keep, strict=strict))
        logger.info(
            "Game %s: rolled %s (kept %s, round %d)",
            game_id, view.dice_rolls, list(keep), view.roll_round,
        )
        return view

    def book(self, game_id: str, category: Category | str) -> GameView:
        """Book the current hand into a category (tag or enum member)."""
        if not isinstance(category, Category):
            category = Category.from_tag(category)
        view = self._mutate(game_id, lambda game: game.book(category))
        logger.info("Game %s: booked %s, now %s", game_id, category.tag, view.state)
        return view

    # -- Internals -------------------------------------------------------

    def _lock_for(self, game_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(game_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[game_id] = lock
            return lock

    def _release_lock(self, game_id: str) -> None:
        with self._locks_guard:
            self._locks.pop(game_id, None)

    def _load(self, game_id: str) -> KniffelGame:
        game = self._store.load(game_id, dice_source=self._dice_source)
        if game is None:
            logger.warning("Game %s not found", game_id)
            raise GameNotFound(f"No game with id {game_id!r}.")
        return game

    def _mutate(self, game_id: str, action: Callable[[KniffelGame], KniffelGame]) -> GameView:
        # Unknown and ended ids never keep a lock entry.
        game = None
        try:
            with self._lock_for(game_id):
                game = self._load(game_id)
                action(game)
                self._store.save(game)
                return GameView.from_game(game)
        finally:
            if game is None or game.is_over:
                self._release_lock(game_id)


def build_service() -> GameService:
    """Wire settings, logging and the Supabase-backed store."""
    settings = get_settings()
    configure_logging(settings)
    store = GameStore(
        get_supabase_client(),
        games_table=settings.games_table,
        players_table=settings.players_table,
    )
    return GameService(store)
