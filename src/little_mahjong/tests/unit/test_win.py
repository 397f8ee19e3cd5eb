"""
Unit tests for triplet + pair win detection, wildcard substitution included.
"""

from itertools import permutations

import pytest

from little_mahjong.logic.enums import TileKind
from little_mahjong.logic.win import (
    NO_WIN,
    REASON_TRIPLET_PAIR,
    REASON_TRIPLET_WILD_PAIR,
    REASON_WILD_TRIPLET_PAIR,
    REASON_WILD_TRIPLET_WILD_PAIR,
    Concrete,
    Wild,
    WinResult,
    classify_tile,
    evaluate_hand,
    is_winning_hand,
)
from little_mahjong.tests.helpers import tile, tiles


class TestClassifyTile:
    def test_universal_is_wild(self):
        assert classify_tile(tile("U")) == Wild()

    def test_circle_is_concrete(self):
        assert classify_tile(tile("7")) == Concrete(kind=TileKind.CIRCLE, rank=7)

    def test_dragon_is_concrete(self):
        slot = classify_tile(tile("D"))
        assert isinstance(slot, Concrete)
        assert slot.kind == TileKind.DRAGON

    def test_copies_share_the_same_slot(self):
        assert classify_tile(tile("3", 0)) == classify_tile(tile("3", 2))


class TestEvaluateHandExamples:
    @pytest.mark.parametrize(
        ("codes", "expected"),
        [
            ("1 1 1 2 2", WinResult(is_win=True, reason=REASON_TRIPLET_PAIR)),
            ("1 1 1 2 3", NO_WIN),
            ("U 1 1 1 2", WinResult(is_win=True, reason=REASON_TRIPLET_WILD_PAIR)),
            ("U 1 1 2 2", WinResult(is_win=True, reason=REASON_WILD_TRIPLET_PAIR)),
            ("U 1 2 3 4", NO_WIN),
        ],
    )
    def test_reference_hands(self, codes, expected):
        assert evaluate_hand(tiles(codes)) == expected


class TestEvaluateHandShapes:
    def test_dragon_triplet_with_circle_pair(self):
        result = evaluate_hand(tiles("D D D 5 5"))
        assert result.is_win is True
        assert result.reason == REASON_TRIPLET_PAIR

    def test_circle_triplet_with_dragon_pair(self):
        assert evaluate_hand(tiles("9 9 9 D D")).reason == REASON_TRIPLET_PAIR

    def test_four_of_a_kind_plus_single_is_not_a_win(self):
        assert evaluate_hand(tiles("4 4 4 4 5")) == NO_WIN

    def test_five_distinct_is_not_a_win(self):
        assert evaluate_hand(tiles("1 3 5 7 D")) == NO_WIN

    def test_two_pairs_and_single_is_not_a_win(self):
        assert evaluate_hand(tiles("1 1 2 2 3")) == NO_WIN

    def test_wildcard_with_four_of_a_kind_is_not_a_win(self):
        assert evaluate_hand(tiles("U 6 6 6 6")) == NO_WIN

    def test_wildcard_with_pair_and_two_singles_is_not_a_win(self):
        assert evaluate_hand(tiles("U 2 2 3 4")) == NO_WIN

    def test_wildcard_completes_dragon_pair(self):
        result = evaluate_hand(tiles("U D 8 8 8"))
        assert result.reason == REASON_TRIPLET_WILD_PAIR

    def test_wildcard_completes_dragon_triplet(self):
        result = evaluate_hand(tiles("U D D 3 3"))
        assert result.reason == REASON_WILD_TRIPLET_PAIR

    def test_no_win_has_empty_reason(self):
        result = evaluate_hand(tiles("1 2 3 4 5"))
        assert result.is_win is False
        assert result.reason == ""


class TestEvaluateHandSize:
    def test_four_tiles_is_not_a_win(self):
        assert evaluate_hand(tiles("1 1 1 2")) == NO_WIN

    def test_six_tiles_is_not_a_win(self):
        assert evaluate_hand(tiles("1 1 1 2 2 2")) == NO_WIN

    def test_empty_hand_is_not_a_win(self):
        assert evaluate_hand([]) == NO_WIN


class TestMultipleWildcards:
    """Wildcards only extend existing groups, so extra wildcards stay bounded."""

    def test_two_wildcards_fill_triplet_from_single(self):
        result = evaluate_hand([tile("U", 0), tile("U", 1), *tiles("1 2 2")])
        assert result.reason == REASON_WILD_TRIPLET_PAIR

    def test_two_wildcards_fill_both_groups(self):
        result = evaluate_hand([tile("U", 0), tile("U", 1), *tiles("4 4 5")])
        assert result.reason == REASON_WILD_TRIPLET_PAIR

    def test_two_wildcards_cannot_form_a_pair_alone(self):
        assert evaluate_hand([tile("U", 0), tile("U", 1), *tiles("7 7 7")]) == NO_WIN

    def test_three_wildcards_fill_triplet_and_pair(self):
        hand = [tile("U", 0), tile("U", 1), tile("U", 2), *tiles("1 2")]
        assert evaluate_hand(hand).reason == REASON_WILD_TRIPLET_WILD_PAIR


class TestPermutationInvariance:
    @pytest.mark.parametrize(
        "codes",
        ["1 1 1 2 2", "1 1 1 2 3", "U 1 1 1 2", "U 1 1 2 2", "U 1 2 3 4", "D D U 9 9"],
    )
    def test_every_order_gives_the_same_result(self, codes):
        hand = tiles(codes)
        expected = evaluate_hand(hand)
        for order in permutations(hand):
            assert evaluate_hand(order) == expected


class TestIsWinningHand:
    def test_true_for_winning_hand(self):
        assert is_winning_hand(tiles("3 3 3 D D")) is True

    def test_false_for_losing_hand(self):
        assert is_winning_hand(tiles("3 3 D D 5")) is False
