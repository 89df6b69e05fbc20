"""
Kniffel Database Layer.

Supabase integration for game persistence, plus an in-memory store with
the same interface.
"""

from kniffel.database.client import get_supabase_client
from kniffel.database.game_store import GameStore
from kniffel.database.memory import InMemoryGameStore
from kniffel.database.models import GameRow, PlayerRow

__all__ = [
    "get_supabase_client",
    "GameRow",
    "GameStore",
    "InMemoryGameStore",
    "PlayerRow",
]
