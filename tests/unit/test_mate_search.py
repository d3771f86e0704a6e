from __future__ import annotations

import chess
import pytest

from botbrain.domain.engine.mate_search import MATE_IN_THREE_SAMPLE, MATE_IN_TWO_SAMPLE, MateSearch


class TreeRules:
    """Abstract game tree: positions are node names and moves are child names."""

    def __init__(self, tree, mates=(), stalemates=()):
        self.tree = tree
        self.mates = set(mates)
        self.stalemates = set(stalemates)

    def legal_replies(self, position):
        return list(self.tree.get(position, []))

    def apply_move(self, position, move):
        return move

    def gives_check(self, position, move):
        return True

    def is_checkmate(self, position):
        return position in self.mates

    def is_stalemate(self, position):
        return position in self.stalemates


def _mate_in_two_tree(**overrides):
    tree = {
        "root": ["a", "b"],
        "a": ["a1", "a2"],
        "a1": ["a1_mate"],
        "a2": ["a2_mate"],
        "b": ["b1"],
        "b1": ["b1_quiet"],
    }
    tree.update(overrides)
    return tree


def test_mate_in_one_on_real_board() -> None:
    search = MateSearch()
    assert search.mates_in_one(chess.Board("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"))
    assert not search.mates_in_one(chess.Board())


def test_mate_in_one_is_false_when_defender_has_luft() -> None:
    search = MateSearch()
    assert not search.mates_in_one(chess.Board("6k1/5pp1/7p/8/8/8/8/R5K1 w - - 0 1"))


def test_allows_forced_mate_dispatches_on_depth() -> None:
    search = MateSearch()
    board = chess.Board("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
    for depth in (1, 2, 3):
        assert search.allows_forced_mate(board, depth)


def test_mate_in_two_found_when_every_defence_loses() -> None:
    rules = TreeRules(_mate_in_two_tree(), mates={"a1_mate", "a2_mate"})
    search = MateSearch(rules)
    assert not search.mates_in_one("root")
    assert search.mates_in_two("root")
    assert search.allows_forced_mate("root", 2)


def test_mate_in_two_refuted_by_single_defence() -> None:
    rules = TreeRules(_mate_in_two_tree(a2=["a2_quiet"]), mates={"a1_mate"})
    assert not MateSearch(rules).mates_in_two("root")


def test_moves_that_end_the_game_are_not_forcing_lines() -> None:
    rules = TreeRules({"root": ["stale"]}, stalemates={"stale"})
    assert not MateSearch(rules).mates_in_two("root")


def test_mate_in_three_needs_the_extra_move() -> None:
    tree = {
        "root": ["m"],
        "m": ["m1"],
        "m1": ["n"],
        "n": ["n1"],
        "n1": ["mate"],
    }
    search = MateSearch(TreeRules(tree, mates={"mate"}))
    assert not search.allows_forced_mate("root", 1)
    assert not search.allows_forced_mate("root", 2)
    assert search.allows_forced_mate("root", 3)


def test_sampled_search_misses_mate_beyond_the_cap() -> None:
    tree = {"root": [f"dud{index}" for index in range(MATE_IN_TWO_SAMPLE)] + ["a"]}
    for index in range(MATE_IN_TWO_SAMPLE):
        tree[f"dud{index}"] = [f"dud{index}_defence"]
    tree.update({"a": ["a1"], "a1": ["a1_mate"]})
    rules = TreeRules(tree, mates={"a1_mate"})

    assert not MateSearch(rules).mates_in_two("root")
    assert MateSearch(rules, exhaustive=True).mates_in_two("root")


def test_escape_beyond_the_sample_cap_is_still_found() -> None:
    defences = [f"d{index}" for index in range(MATE_IN_TWO_SAMPLE + 1)]
    tree = {"root": ["a"], "a": defences}
    for defence in defences[:-1]:
        tree[defence] = [f"{defence}_mate"]
    tree[defences[-1]] = [f"{defences[-1]}_quiet"]
    rules = TreeRules(tree, mates={f"{defence}_mate" for defence in defences[:-1]})

    assert not MateSearch(rules).mates_in_two("root")
    assert not MateSearch(rules, exhaustive=True).mates_in_two("root")


def test_mate_in_three_checks_every_defence() -> None:
    defences = [f"d{index}" for index in range(MATE_IN_THREE_SAMPLE + 1)]
    tree = {"root": ["a"], "a": defences}
    for defence in defences[:-1]:
        tree[defence] = [f"{defence}_mate"]
    tree[defences[-1]] = [f"{defences[-1]}_quiet"]
    tree[f"{defences[-1]}_quiet"] = ["reply"]
    rules = TreeRules(tree, mates={f"{defence}_mate" for defence in defences[:-1]})

    assert not MateSearch(rules).mates_in_three("root")


@pytest.mark.parametrize("exhaustive", [False, True])
def test_exhaustive_flag_is_exposed(exhaustive: bool) -> None:
    assert MateSearch(exhaustive=exhaustive).exhaustive is exhaustive
