"""
Tests for heads-up showdown: winner determination and settlement.

These tests verify:
- Best 5 from 7 cards selection at the table
- Kicker and tie handling
- Winner records and logs
"""

from wagerpoker.core.game import HeadsUpGame, ActionType


def play_to_showdown(game):
    while game.is_hand_running():
        player = game.current_player
        if game.current_bet > player.current_bet:
            game.take_action(ActionType.CALL)
        else:
            game.take_action(ActionType.CHECK)


def make_game():
    return HeadsUpGame(
        stacks=(1000, 1000), player_ids=("alice", "bob"),
        names=("Alice", "Bob"), ai_seats=(),
    )


class TestBestFiveFromSeven:
    """Hole cards play only when they improve the board."""

    def test_both_hole_cards_play(self, rig):
        game = make_game()
        game.start_hand()
        rig(game, "9h Th", "As Ad", "Jh Qh 2c 3d Kd")
        play_to_showdown(game)

        winner = game.get_winners()[0]
        assert winner["player_id"] == "alice"
        assert winner["description"] == "Straight, King high"

    def test_one_hole_card_plays(self, rig):
        game = make_game()
        game.start_hand()
        rig(game, "Ah 2c", "Kh 3c", "Ad Kd 9s 7h 4c")
        play_to_showdown(game)

        winner = game.get_winners()[0]
        assert winner["player_id"] == "alice"
        assert winner["description"] == "Pair of Aces"

    def test_board_plays_for_both(self, rig):
        game = make_game()
        game.start_hand()
        rig(game, "2c 3c", "2d 3d", "9s 9h 9d 9c As")
        play_to_showdown(game)

        assert len(game.get_winners()) == 2


class TestKickers:
    """Equal categories are settled by kickers."""

    def test_kicker_breaks_tie(self, rig):
        game = make_game()
        game.start_hand()
        rig(game, "Kc 7d", "Kd Qc", "Ks 9h 5d 3c 2h")
        play_to_showdown(game)

        winners = game.get_winners()
        assert len(winners) == 1
        assert winners[0]["player_id"] == "bob"
        assert game.players[1].stack == 1010

    def test_counterfeited_kicker_splits(self, rig):
        """Both kickers lose to the board's cards, so the pot is shared."""
        game = make_game()
        game.start_hand()
        rig(game, "Ac 2d", "Ad 3c", "As Ks Qd Jh 9c")
        play_to_showdown(game)

        assert [w["amount"] for w in game.get_winners()] == [10, 10]


class TestWinnerRecords:
    """Shape of the winner list and log after showdown."""

    def test_winner_record(self, rig):
        game = make_game()
        game.start_hand()
        rig(game, "Qs Qd", "Jc Tc", "Qh 7s 7d 2c 3h")
        play_to_showdown(game)

        winner = game.get_winners()[0]
        assert winner["player_id"] == "alice"
        assert winner["name"] == "Alice"
        assert winner["hand_rank"] == "FULL_HOUSE"
        assert winner["description"] == "Full House, Queens over Sevens"
        assert len(winner["cards"]) == 5
        assert "Alice wins 20 with Full House, Queens over Sevens" in game.log

    def test_both_hands_shown(self, rig):
        game = make_game()
        game.start_hand()
        rig(game, "Qs Qd", "Jc Tc", "Qh 7s 7d 2c 3h")
        play_to_showdown(game)

        shows = [line for line in game.log if " shows " in line]
        assert len(shows) == 2
        assert all(p.hand_evaluation is not None for p in game.players)

    def test_winners_empty_during_hand(self):
        game = make_game()
        game.start_hand()
        assert game.get_winners() == []
