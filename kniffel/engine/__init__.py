"""
Kniffel Game Engine.

Pure Python rules engine with zero database dependencies.
Handles dice rolling, keep/re-roll matching, category scoring,
turn rotation and game-end detection.
"""

from kniffel.engine.base import ALL_CATEGORIES, Category, Phase
from kniffel.engine.dice import DiceSource, RandomDiceSource, keep_dice
from kniffel.engine.errors import (
    CategoryAlreadyUsed,
    GameNotFound,
    InvalidDiceSelection,
    InvalidGameRecord,
    InvalidPhase,
    InvalidPlayerList,
    KniffelError,
    PlayerNotFound,
    UnknownCategory,
)
from kniffel.engine.game import KniffelGame, book, create_game, reroll
from kniffel.engine.player import Player
from kniffel.engine.records import GameRecord, PlayerRecord
from kniffel.engine.scoring import score, score_all

__all__ = [
    # Enums
    "ALL_CATEGORIES",
    "Category",
    "Phase",
    # Dice
    "DiceSource",
    "RandomDiceSource",
    "keep_dice",
    # Errors
    "CategoryAlreadyUsed",
    "GameNotFound",
    "InvalidDiceSelection",
    "InvalidGameRecord",
    "InvalidPhase",
    "InvalidPlayerList",
    "KniffelError",
    "PlayerNotFound",
    "UnknownCategory",
    # Game
    "KniffelGame",
    "Player",
    "book",
    "create_game",
    "reroll",
    # Records
    "GameRecord",
    "PlayerRecord",
    # Scoring
    "score",
    "score_all",
]
