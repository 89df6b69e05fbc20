"""
Kniffel - In-Memory Game Store

Keyed store of serialized games with the same interface as GameStore.
Games are kept as record dictionaries, never as live engine objects, so
every load returns an independent copy.
"""

import logging
import threading
from typing import Any

from kniffel.engine.dice import DiceSource
from kniffel.engine.errors import GameNotFound
from kniffel.engine.game import KniffelGame
from kniffel.engine.records import GameRecord

logger = logging.getLogger(__name__)


class InMemoryGameStore:
    """Dictionary-backed store for tests and single-process deployments."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def create(self, game: KniffelGame) -> KniffelGame:
        record = game.to_record()
        with self._lock:
            if record.game_id in self._records:
                raise ValueError(f"Game {record.game_id} already exists.")
            self._records[record.game_id] = record.to_dict()
        logger.info(
            "Stored new game %s with %d players", record.game_id, len(record.players)
        )
        return game

    def load(
        self,
        game_id: str,
        dice_source: DiceSource | None = None,
    ) -> KniffelGame | None:
        with self._lock:
            data = self._records.get(game_id)
        if data is None:
            return None
        return KniffelGame.from_record(GameRecord.from_dict(data), dice_source=dice_source)

    def save(self, game: KniffelGame) -> None:
        """Overwrite a stored game; raises GameNotFound for unknown ids."""
        record = game.to_record()
        with self._lock:
            if record.game_id not in self._records:
                raise GameNotFound(f"No game with id {record.game_id!r}.")
            self._records[record.game_id] = record.to_dict()
        logger.debug("Saved game %s (stage=%s)", record.game_id, record.stage)

    def delete(self, game_id: str) -> None:
        with self._lock:
            self._records.pop(game_id, None)

    def __contains__(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
