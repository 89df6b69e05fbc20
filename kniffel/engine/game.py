"""
Kniffel - Game Engine

Turn and roll state machine for one game.

Game Rules:
- Players take turns in the order their names were supplied
- A turn starts with an automatic roll of all five dice
- Up to two re-rolls follow, keeping any dice by face value
- The turn ends with exactly one booking into an unused category
- After the third roll the phase switches to Booking on its own
- The game ends when the next player in rotation has booked all 13 categories

The engine holds no references outside itself and performs no I/O.
Randomness comes from an injectable DiceSource.
"""

import uuid
from typing import Sequence

from kniffel.engine.base import MAX_ROLLS, NUM_DICE, Category, Phase
from kniffel.engine.dice import DiceSource, RandomDiceSource, keep_dice, roll_hand
from kniffel.engine.errors import (
    InvalidGameRecord,
    InvalidPhase,
    InvalidPlayerList,
    PlayerNotFound,
)
from kniffel.engine.player import Player
from kniffel.engine.records import (
    GameRecord,
    PlayerRecord,
    decode_categories,
    decode_dice,
    encode_categories,
    encode_dice,
)
from kniffel.engine.scoring import score, score_all
from kniffel.engine.validators import validate_dice_to_keep, validate_player_names


class KniffelGame:
    """
    Mutable state of a single Kniffel game.

    State changes only through ``reroll`` and ``book``; everything else is
    a read-only view.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        dice_source: DiceSource | None = None,
        game_id: str | None = None,
    ) -> None:
        names = validate_player_names(player_names)

        self._dice_source: DiceSource = dice_source or RandomDiceSource()
        self._game_id = game_id or uuid.uuid4().hex
        self._players = [Player(name=name) for name in names]
        self._current_index = 0
        self._roll_round = 0
        self._phase = Phase.ROLLING
        self._dice: tuple[int, ...] = (0,) * NUM_DICE

        self._roll(())

    # -- Read-only state -------------------------------------------------

    @property
    def game_id(self) -> str:
        return self._game_id

    @property
    def players(self) -> tuple[Player, ...]:
        """Players in turn order."""
        return tuple(self._players)

    @property
    def dice(self) -> tuple[int, ...]:
        return self._dice

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def roll_round(self) -> int:
        return self._roll_round

    @property
    def is_over(self) -> bool:
        return self._phase is Phase.ENDED

    @property
    def rolls_left(self) -> int:
        """Re-rolls still available to the current player this turn."""
        if self._phase is not Phase.ROLLING:
            return 0
        return MAX_ROLLS - self._roll_round

    @property
    def current_player(self) -> Player:
        """
        The player whose turn it is.

        Raises:
            PlayerNotFound: If the turn pointer does not reference a player
        """
        if not 0 <= self._current_index < len(self._players):
            raise PlayerNotFound(
                f"Turn pointer {self._current_index} references no player."
            )
        return self._players[self._current_index]

    @property
    def current_player_name(self) -> str:
        return self.current_player.name

    def player(self, name: str) -> Player:
        """
        Look up a player by name.

        Raises:
            PlayerNotFound: If no player has that name
        """
        for player in self._players:
            if player.name == name:
                return player
        raise PlayerNotFound(f"No player named {name!r} in game {self._game_id}.")

    def potential_scores(self) -> dict[Category, int]:
        """What the current hand would score in each open category."""
        return score_all(self._dice, exclude=self.current_player.used_categories)

    def standings(self) -> list[Player]:
        """Players by descending score; ties keep turn order."""
        return sorted(self._players, key=lambda p: p.score, reverse=True)

    def winners(self) -> list[Player]:
        """Players sharing the top score once the game has ended."""
        if not self.is_over:
            return []
        top = max(p.score for p in self._players)
        return [p for p in self._players if p.score == top]

    # -- Mutations -------------------------------------------------------

    def reroll(self, dice_to_keep: Sequence[int] = (), *, strict: bool = False) -> "KniffelGame":
        """
        Keep some dice by face value and roll the rest.

        Args:
            dice_to_keep: Face values to retain; copies beyond what the hand
                          holds are dropped and rolled fresh
            strict: Reject requests for more copies than the hand holds

        Returns:
            This game, for chaining

        Raises:
            InvalidPhase: Outside the Rolling phase
            InvalidDiceSelection: If the keep request is malformed
        """
        if self._phase is not Phase.ROLLING:
            raise InvalidPhase(
                f"Cannot re-roll while game {self._game_id} is in phase {self._phase.tag}."
            )
        keep = validate_dice_to_keep(dice_to_keep, self._dice if strict else None)
        self._roll(keep)
        return self

    def book(self, category: Category | str) -> "KniffelGame":
        """
        Book the current hand into a category and end the turn.

        Booking is allowed before the third roll as well; the turn ends
        either way.

        Returns:
            This game, for chaining

        Raises:
            InvalidPhase: Once the game has ended
            UnknownCategory: If a tag string names no category
            CategoryAlreadyUsed: If the current player booked it before
            PlayerNotFound: If the turn pointer is inconsistent
        """
        if self._phase is Phase.ENDED:
            raise InvalidPhase(f"Game {self._game_id} has ended.")
        if not isinstance(category, Category):
            category = Category.from_tag(category)

        player = self.current_player
        points = score(self._dice, category)
        player.mark_used(category)
        player.add_score(points)

        self._phase = Phase.BOOKING
        self._advance_phase()
        return self

    # -- Internals -------------------------------------------------------

    def _roll(self, dice_to_keep: Sequence[int]) -> None:
        kept = keep_dice(self._dice, dice_to_keep)
        self._dice = roll_hand(kept, self._dice_source)
        self._roll_round += 1

        if self._roll_round >= MAX_ROLLS:
            self._advance_phase()

    def _advance_phase(self) -> None:
        """Rolling -> Booking, or Booking -> next player's Rolling (or Ended)."""
        if self._phase is Phase.ROLLING:
            self._phase = Phase.BOOKING
            return
        if self._phase is Phase.ENDED:
            return

        self._phase = Phase.ROLLING
        self._current_index = (self._current_index + 1) % len(self._players)
        if self.current_player.is_finished:
            self._phase = Phase.ENDED
            return

        self._roll_round = 0
        self._roll(())

    # -- Storage ---------------------------------------------------------

    def to_record(self) -> GameRecord:
        """Flatten this game into its storage representation."""
        return GameRecord(
            game_id=self._game_id,
            roll_round=self._roll_round,
            stage=self._phase.tag,
            dice_rolls=encode_dice(self._dice),
            current_player=self.current_player_name,
            players=tuple(
                PlayerRecord(
                    name=p.name,
                    score=p.score,
                    used_booking_types=encode_categories(p.used_categories),
                    turn_order=seat,
                )
                for seat, p in enumerate(self._players)
            ),
        )

    @classmethod
    def from_record(
        cls,
        record: GameRecord,
        dice_source: DiceSource | None = None,
    ) -> "KniffelGame":
        """
        Rebuild a game from its storage representation.

        Raises:
            InvalidGameRecord: If the record is inconsistent
        """
        if isinstance(record, dict):
            record = GameRecord.from_dict(record)

        ordered = sorted(record.players, key=lambda p: p.turn_order)
        try:
            names = validate_player_names([p.name for p in ordered])
        except InvalidPlayerList as exc:
            raise InvalidGameRecord(f"Invalid roster in game {record.game_id}: {exc}") from exc

        if record.current_player not in names:
            raise InvalidGameRecord(
                f"Current player {record.current_player!r} is not part of game {record.game_id}."
            )
        if not 0 <= record.roll_round <= MAX_ROLLS:
            raise InvalidGameRecord(
                f"Roll round must be between 0 and {MAX_ROLLS}, got {record.roll_round}."
            )

        players = []
        for p in ordered:
            if p.score < 0:
                raise InvalidGameRecord(f"Player {p.name!r} has negative score {p.score}.")
            players.append(
                Player(
                    name=p.name,
                    score=p.score,
                    used_categories=decode_categories(p.used_booking_types),
                )
            )

        current_index = names.index(record.current_player)
        phase = Phase.from_tag(record.stage)
        dice = decode_dice(record.dice_rolls)
        _check_turn_state(record, phase, dice, players[current_index])

        game = cls.__new__(cls)
        game._dice_source = dice_source or RandomDiceSource()
        game._game_id = record.game_id
        game._players = players
        game._current_index = current_index
        game._roll_round = record.roll_round
        game._phase = phase
        game._dice = dice
        return game


def _check_turn_state(
    record: GameRecord,
    phase: Phase,
    dice: tuple[int, ...],
    current: Player,
) -> None:
    """
    Reject stored turn states the engine itself can never produce.

    Every persisted turn has taken at least one roll, so all five dice are
    showing; Rolling always has a re-roll left; Ended is reached exactly
    when the player next in rotation has booked everything.

    Raises:
        InvalidGameRecord: On any mismatch
    """
    game_id = record.game_id
    if 0 in dice:
        raise InvalidGameRecord(
            f"Game {game_id} stores pending dice {record.dice_rolls!r}."
        )
    if record.roll_round < 1:
        raise InvalidGameRecord(f"Game {game_id} has not rolled this turn.")
    if phase is Phase.ROLLING and record.roll_round >= MAX_ROLLS:
        raise InvalidGameRecord(
            f"Game {game_id} is in phase {phase.tag} with no re-rolls left."
        )
    if phase is Phase.ENDED and not current.is_finished:
        raise InvalidGameRecord(
            f"Game {game_id} has ended but {current.name!r} still has open categories."
        )
    if phase is not Phase.ENDED and current.is_finished:
        raise InvalidGameRecord(
            f"Game {game_id} is in phase {phase.tag} but {current.name!r} has booked everything."
        )


def create_game(
    player_names: Sequence[str],
    dice_source: DiceSource | None = None,
) -> KniffelGame:
    """Start a new game; the first player's opening roll is already taken."""
    return KniffelGame(player_names, dice_source=dice_source)


def reroll(
    game: KniffelGame,
    dice_to_keep: Sequence[int] = (),
    *,
    strict: bool = False,
) -> KniffelGame:
    return game.reroll(dice_to_keep, strict=strict)


def book(game: KniffelGame, category: Category | str) -> KniffelGame:
    return game.book(category)
