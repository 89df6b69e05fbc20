"""
Kniffel Session Service.

Load-mutate-persist coordination and client-facing game views.
"""

from kniffel.service.game_service import GameRepository, GameService, build_service
from kniffel.service.views import GameView, PlayerData

__all__ = [
    "GameRepository",
    "GameService",
    "GameView",
    "PlayerData",
    "build_service",
]
