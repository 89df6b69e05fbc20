"""
Kniffel - Game Engine Tests

Tests for the turn/roll state machine driven by scripted dice.
"""

import pytest

from kniffel.engine.base import Category, Phase
from kniffel.engine.errors import (
    CategoryAlreadyUsed,
    InvalidDiceSelection,
    InvalidPhase,
    InvalidPlayerList,
    PlayerNotFound,
    UnknownCategory,
)
from kniffel.engine.game import KniffelGame, book, create_game, reroll


def play_out(game: KniffelGame) -> None:
    """Book every category for every player in declaration order."""
    for category in Category:
        for _ in game.players:
            game.book(category)


class TestCreateGame:
    """Tests for game creation."""

    def test_fresh_two_player_game(self, scripted_dice):
        game = create_game(["Alice", "Bob"], dice_source=scripted_dice(3, 1, 4, 1, 5))
        assert game.phase is Phase.ROLLING
        assert game.roll_round == 1
        assert game.dice == (1, 1, 3, 4, 5)
        assert game.current_player_name == "Alice"

    def test_random_dice_in_range(self):
        game = KniffelGame(["Alice", "Bob"])
        assert len(game.dice) == 5
        assert all(1 <= d <= 6 for d in game.dice)

    def test_game_id_is_unique_hex(self):
        a = KniffelGame(["Alice"])
        b = KniffelGame(["Alice"])
        assert a.game_id != b.game_id
        assert len(a.game_id) == 32
        int(a.game_id, 16)

    def test_turn_order_follows_supplied_names(self):
        game = KniffelGame(["Zed", "Amy", "Max"])
        assert [p.name for p in game.players] == ["Zed", "Amy", "Max"]

    def test_players_start_empty(self):
        game = KniffelGame(["Alice", "Bob"])
        for player in game.players:
            assert player.score == 0
            assert player.used_count() == 0

    def test_empty_roster_raises(self):
        with pytest.raises(InvalidPlayerList):
            create_game([])

    def test_duplicate_names_raise(self):
        with pytest.raises(InvalidPlayerList, match="Duplicate"):
            create_game(["Alice", "Alice"])

    def test_rolls_left(self):
        game = KniffelGame(["Alice"])
        assert game.rolls_left == 2


class TestReroll:
    """Tests for keeping and re-rolling dice."""

    def test_keep_pair_rerolls_rest(self, scripted_dice):
        game = KniffelGame(["Alice"], dice_source=scripted_dice(2, 2, 3, 4, 5, 6, 6, 6))
        assert game.dice == (2, 2, 3, 4, 5)

        game.reroll([2, 2])

        assert game.dice == (2, 2, 6, 6, 6)
        assert game.roll_round == 2

    def test_unmet_copy_is_rolled_fresh(self, scripted_dice):
        game = KniffelGame(["Alice"], dice_source=scripted_dice(2, 2, 3, 4, 5, 1, 1, 1))

        game.reroll([2, 2, 2])

        assert game.dice == (1, 1, 1, 2, 2)

    def test_strict_rejects_unmet_copy(self, scripted_dice):
        game = KniffelGame(["Alice"], dice_source=scripted_dice(2, 2, 3, 4, 5))

        with pytest.raises(InvalidDiceSelection):
            game.reroll([2, 2, 2], strict=True)

        assert game.dice == (2, 2, 3, 4, 5)
        assert game.roll_round == 1

    def test_malformed_keep_leaves_state_unchanged(self, scripted_dice):
        game = KniffelGame(["Alice"], dice_source=scripted_dice(2, 2, 3, 4, 5))
        with pytest.raises(InvalidDiceSelection):
            game.reroll([7])
        assert game.roll_round == 1
        assert game.dice == (2, 2, 3, 4, 5)

    def test_keep_everything(self, scripted_dice):
        source = scripted_dice(6, 5, 4, 3, 2)
        game = KniffelGame(["Alice"], dice_source=source)
        game.reroll([2, 3, 4, 5, 6])
        assert game.dice == (2, 3, 4, 5, 6)
        assert source.rolls == 5

    def test_third_roll_moves_to_booking(self, sixes):
        game = KniffelGame(["Alice", "Bob"], dice_source=sixes)
        game.reroll([])
        assert game.phase is Phase.ROLLING
        game.reroll([6, 6])
        assert game.roll_round == 3
        assert game.phase is Phase.BOOKING
        assert game.rolls_left == 0
        assert game.current_player_name == "Alice"

    def test_reroll_during_booking_raises(self, sixes):
        game = KniffelGame(["Alice"], dice_source=sixes)
        game.reroll()
        game.reroll()
        with pytest.raises(InvalidPhase, match="Book"):
            game.reroll()

    def test_module_function_returns_same_game(self, sixes):
        game = KniffelGame(["Alice"], dice_source=sixes)
        assert reroll(game, [6]) is game

    def test_module_function_passes_strict(self, scripted_dice):
        game = KniffelGame(["Alice"], dice_source=scripted_dice(2, 2, 3, 4, 5))

        with pytest.raises(InvalidDiceSelection, match="hand only has"):
            reroll(game, [2, 2, 2], strict=True)

        assert game.roll_round == 1
        assert reroll(game, [2, 2, 2]).roll_round == 2


class TestBook:
    """Tests for booking a hand."""

    def test_book_after_three_rolls(self, scripted_dice):
        game = KniffelGame(
            ["Alice", "Bob"],
            dice_source=scripted_dice(1, 2, 3, 4, 5, 6, 6, 6, 6, 6, 6, 6, 6, 6, 6),
        )
        game.reroll([1, 2, 3, 4, 5])
        game.reroll([1, 2, 3, 4, 5])
        assert game.phase is Phase.BOOKING

        game.book(Category.LARGE_STRAIGHT)

        alice = game.player("Alice")
        assert alice.score == 40
        assert alice.has_used(Category.LARGE_STRAIGHT)
        assert game.current_player_name == "Bob"
        assert game.phase is Phase.ROLLING
        assert game.roll_round == 1
        assert game.dice == (6, 6, 6, 6, 6)

    def test_book_before_third_roll_ends_turn(self, scripted_dice):
        game = KniffelGame(["Alice", "Bob"], dice_source=scripted_dice(3, 3, 3, 5, 6))
        game.book(Category.THREE_OF_A_KIND)
        assert game.player("Alice").score == 20
        assert game.current_player_name == "Bob"
        assert game.phase is Phase.ROLLING
        assert game.roll_round == 1

    def test_book_by_tag(self, sixes):
        game = KniffelGame(["Alice"], dice_source=sixes)
        book(game, "KNIFFEL")
        assert game.player("Alice").score == 50

    def test_unknown_tag_raises(self, sixes):
        game = KniffelGame(["Alice"], dice_source=sixes)
        with pytest.raises(UnknownCategory):
            game.book("BONUS")

    def test_zero_score_booking_still_uses_category(self, scripted_dice):
        game = KniffelGame(["Alice", "Bob"], dice_source=scripted_dice(1, 2, 3, 5, 6))
        game.book(Category.KNIFFEL)
        alice = game.player("Alice")
        assert alice.score == 0
        assert alice.has_used(Category.KNIFFEL)

    def test_rebooking_raises_without_mutation(self, sixes):
        game = KniffelGame(["Alice"], dice_source=sixes)
        game.book(Category.CHANCE)
        alice = game.player("Alice")
        assert alice.score == 30
        phase, round_before = game.phase, game.roll_round

        with pytest.raises(CategoryAlreadyUsed):
            game.book(Category.CHANCE)

        assert alice.score == 30
        assert alice.used_categories == {Category.CHANCE}
        assert game.phase is phase
        assert game.roll_round == round_before

    def test_turn_order_wraps(self, sixes):
        game = KniffelGame(["A", "B", "C"], dice_source=sixes)
        bookings = [Category.ONES] * 3 + [Category.TWOS] * 3 + [Category.THREES]
        seen = []
        for category in bookings:
            seen.append(game.current_player_name)
            game.book(category)
        assert seen == ["A", "B", "C", "A", "B", "C", "A"]

    def test_potential_scores_skip_used(self, sixes):
        game = KniffelGame(["Alice"], dice_source=sixes)
        game.book(Category.SIXES)
        potential = game.potential_scores()
        assert Category.SIXES not in potential
        assert potential[Category.KNIFFEL] == 50

    def test_unknown_player_lookup_raises(self):
        game = KniffelGame(["Alice"])
        with pytest.raises(PlayerNotFound):
            game.player("Mallory")


class TestGameEnd:
    """Tests for game-end detection."""

    def test_two_player_game_ends_after_last_booking(self, sixes):
        game = KniffelGame(["Alice", "Bob"], dice_source=sixes)
        play_out(game)

        assert game.phase is Phase.ENDED
        assert game.is_over
        assert all(p.is_finished for p in game.players)
        assert game.current_player_name == "Alice"

    def test_not_ended_until_last_player_finishes(self, sixes):
        game = KniffelGame(["Alice", "Bob"], dice_source=sixes)
        for category in Category:
            game.book(category)
            if category is not Category.CHANCE:
                game.book(category)

        assert game.player("Alice").is_finished
        assert not game.player("Bob").is_finished
        assert game.phase is Phase.ROLLING
        assert game.current_player_name == "Bob"

    def test_final_scores(self, sixes):
        game = KniffelGame(["Alice", "Bob"], dice_source=sixes)
        play_out(game)
        # Sixes 30, three/four of a kind 30 each, Kniffel 50, Chance 30
        assert [p.score for p in game.players] == [170, 170]
        assert [p.name for p in game.winners()] == ["Alice", "Bob"]

    def test_operations_rejected_after_end(self, sixes):
        game = KniffelGame(["Solo"], dice_source=sixes)
        play_out(game)
        assert game.is_over
        with pytest.raises(InvalidPhase):
            game.reroll()
        with pytest.raises(InvalidPhase):
            game.book(Category.CHANCE)

    def test_scores_never_decrease(self, scripted_dice):
        game = KniffelGame(["Alice", "Bob"], dice_source=scripted_dice(1, 3, 2, 6, 4, 5, 5))
        last = {p.name: 0 for p in game.players}
        for category in reversed(list(Category)):
            for _ in game.players:
                name = game.current_player_name
                game.reroll([])
                game.book(category)
                assert game.player(name).score >= last[name]
                last[name] = game.player(name).score
        assert game.is_over
        assert all(p.used_count() == 13 for p in game.players)

    def test_standings_and_winner(self, scripted_dice):
        game = KniffelGame(["Alice", "Bob"], dice_source=scripted_dice(6))
        assert game.winners() == []
        play_out(game)
        assert game.standings()[0].name == "Alice"
