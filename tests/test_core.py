from __future__ import annotations

import random

from conftest import FakeClock, merge, solve_category

from clusters_puzzle.data import SAMPLE_PUZZLE, find_category_for_item
from clusters_puzzle.game import (
    ClustersGame,
    GameConfig,
    GameStatus,
    MergeFailure,
    MergeFailureReason,
    MergeSuccess,
    NoSelection,
    OneSelected,
)


def test_new_game_starts_playing(game, clock):
    state = game.state
    assert len(state.grid) == 100
    assert state.mistakes == 0
    assert state.status is GameStatus.PLAYING
    assert state.start_time == clock.now
    assert state.end_time is None
    assert isinstance(game.selection, NoSelection)
    assert game.selected_square_ids == ()
    assert game.shaking_square_ids == ()
    assert game.last_merge_result is None


def test_first_selection_is_remembered(game):
    assert game.select_square("cat-fruits-0") is None
    assert game.selection == OneSelected("cat-fruits-0")
    assert game.is_square_selected("cat-fruits-0")
    assert not game.is_square_selected("cat-fruits-1")


def test_selecting_same_square_twice_deselects(game):
    game.select_square("cat-fruits-0")
    assert game.select_square("cat-fruits-0") is None
    assert isinstance(game.selection, NoSelection)
    assert game.state.mistakes == 0
    assert len(game.state.grid) == 100


def test_cross_category_merge_is_a_mistake(game):
    result = merge(game, "cat-fruits-0", "cat-countries-0")
    assert isinstance(result, MergeFailure)
    assert result.success is False
    assert result.reason is MergeFailureReason.DIFFERENT_CATEGORIES
    assert result.reason == "different-categories"
    assert game.state.mistakes == 1
    assert len(game.state.grid) == 100
    assert game.shaking_square_ids == ("cat-fruits-0", "cat-countries-0")
    assert game.is_square_shaking("cat-countries-0")
    assert isinstance(game.selection, NoSelection)
    assert game.last_merge_result is result


def test_failed_merge_leaves_grid_untouched(game):
    before = list(game.state.grid)
    merge(game, "cat-fruits-0", "cat-countries-0")
    assert game.state.grid == before


def test_same_category_merge(game):
    result = merge(game, "cat-fruits-0", "cat-fruits-1")
    assert isinstance(result, MergeSuccess)
    assert result.success is True
    assert result.solved_category is None
    merged = result.merged_square
    assert merged.id == "cat-fruits-0"
    assert merged.items == ("Apple", "Banana")
    assert merged.category_id == "cat-fruits"
    assert merged.is_solved is False
    assert len(game.state.grid) == 99
    assert game.state.grid[-1] == merged
    assert game.get_square_by_id("cat-fruits-1") is None
    assert game.state.mistakes == 0
    assert game.shaking_square_ids == ()


def test_first_selected_square_survives(game):
    result = merge(game, "cat-fruits-5", "cat-fruits-2")
    assert result.merged_square.id == "cat-fruits-5"
    assert result.merged_square.items == ("Pineapple", "Orange")


def test_clusters_merge_in_selection_order(game):
    merge(game, "cat-fruits-0", "cat-fruits-1")
    merge(game, "cat-fruits-2", "cat-fruits-3")
    result = merge(game, "cat-fruits-2", "cat-fruits-0")
    assert result.merged_square.id == "cat-fruits-2"
    assert result.merged_square.items == ("Orange", "Grape", "Apple", "Banana")
    assert len(game.state.grid) == 97


def test_solving_a_category(game):
    results = solve_category(game, "cat-fruits")
    assert all(r.success for r in results)
    assert all(r.solved_category is None for r in results[:-1])
    last = results[-1]
    assert last.merged_square.is_solved
    assert last.merged_square.size == 10
    assert last.solved_category == SAMPLE_PUZZLE.categories[0]
    assert game.state.solved_category_ids == ["cat-fruits"]
    assert game.state.status is GameStatus.PLAYING
    assert len(game.state.grid) == 91


def test_solved_square_cannot_be_selected(game):
    solve_category(game, "cat-fruits")
    assert game.select_square("cat-fruits-0") is None
    assert isinstance(game.selection, NoSelection)
    game.select_square("cat-countries-0")
    assert game.select_square("cat-fruits-0") is None
    assert game.selection == OneSelected("cat-countries-0")
    assert game.state.mistakes == 0


def test_unknown_square_is_ignored(game):
    game.select_square("cat-fruits-0")
    assert game.select_square("nope") is None
    assert game.selection == OneSelected("cat-fruits-0")


def test_ignored_selection_keeps_feedback(game):
    merge(game, "cat-fruits-0", "cat-countries-0")
    game.select_square("missing")
    assert game.shaking_square_ids == ("cat-fruits-0", "cat-countries-0")
    assert game.last_merge_result is not None


def test_next_selection_clears_feedback(game):
    merge(game, "cat-fruits-0", "cat-countries-0")
    game.select_square("cat-dogs-0")
    assert game.shaking_square_ids == ()
    assert game.last_merge_result is None
    assert game.state.mistakes == 1


def test_winning_the_game(game, clock):
    for category in SAMPLE_PUZZLE.categories[:-1]:
        solve_category(game, category.id)
    assert game.state.status is GameStatus.PLAYING
    assert game.state.end_time is None

    clock.advance(90.0)
    results = solve_category(game, "cat-dances")
    assert results[-1].solved_category.id == "cat-dances"
    state = game.state
    assert state.status is GameStatus.WON
    assert state.is_won and game.game_over
    assert state.end_time == clock.now
    assert len(state.solved_category_ids) == 10
    assert len(set(state.solved_category_ids)) == 10
    assert len(state.grid) == 10
    assert all(sq.is_solved for sq in state.grid)
    assert game.elapsed_time() == 90.0


def test_selection_after_win_is_a_noop(game, clock):
    for category in SAMPLE_PUZZLE.categories:
        solve_category(game, category.id)
    end_time = game.state.end_time
    clock.advance(30.0)
    assert game.select_square("cat-fruits-0") is None
    assert isinstance(game.selection, NoSelection)
    assert game.state.end_time == end_time
    assert game.elapsed_time() == end_time - game.state.start_time
    # queries stay usable
    assert game.get_square_by_id("cat-fruits-0").is_solved
    assert game.get_category_by_id("cat-gemstones").name == "Gemstones"
    assert not game.is_square_selected("cat-fruits-0")


def test_direct_merge_with_missing_square_fails_without_mistake(game):
    result = game._attempt_merge("cat-fruits-0", "ghost")
    assert isinstance(result, MergeFailure)
    assert result.reason is MergeFailureReason.DIFFERENT_CATEGORIES
    assert game.state.mistakes == 0
    assert len(game.state.grid) == 100


def test_clear_selection_and_shake(game):
    merge(game, "cat-fruits-0", "cat-countries-0")
    game.clear_shake()
    assert game.shaking_square_ids == ()
    assert game.last_merge_result is not None

    game.select_square("cat-dogs-0")
    game.clear_selection()
    assert isinstance(game.selection, NoSelection)
    assert game.last_merge_result is None
    assert game.state.mistakes == 1
    assert len(game.state.grid) == 100


def test_reset_restores_initial_shape(game, clock):
    order_before = [sq.id for sq in game.state.grid]
    merge(game, "cat-fruits-0", "cat-fruits-1")
    merge(game, "cat-fruits-0", "cat-countries-0")
    game.select_square("cat-dogs-0")
    clock.advance(10.0)

    game.reset()
    state = game.state
    assert len(state.grid) == 100
    assert all(sq.size == 1 for sq in state.grid)
    assert state.mistakes == 0
    assert state.solved_category_ids == []
    assert state.status is GameStatus.PLAYING
    assert state.start_time == clock.now
    assert state.end_time is None
    assert isinstance(game.selection, NoSelection)
    assert game.shaking_square_ids == ()
    assert game.last_merge_result is None
    assert [sq.id for sq in state.grid] != order_before


def test_reset_after_win_starts_over(game):
    for category in SAMPLE_PUZZLE.categories:
        solve_category(game, category.id)
    game.reset()
    assert game.state.status is GameStatus.PLAYING
    assert game.select_square("cat-fruits-0") is None
    assert game.is_square_selected("cat-fruits-0")


def test_same_seed_gives_same_grid(clock):
    a = ClustersGame(SAMPLE_PUZZLE, GameConfig(random_seed=3), clock=clock)
    b = ClustersGame(SAMPLE_PUZZLE, GameConfig(random_seed=3), clock=clock)
    assert [sq.id for sq in a.state.grid] == [sq.id for sq in b.state.grid]


def test_injected_rng_is_used(clock):
    a = ClustersGame(SAMPLE_PUZZLE, clock=clock, rng=random.Random(8))
    b = ClustersGame(SAMPLE_PUZZLE, GameConfig(random_seed=8), clock=clock)
    assert [sq.id for sq in a.state.grid] == [sq.id for sq in b.state.grid]


def test_invariants_hold_under_random_play():
    rng = random.Random(2024)
    game = ClustersGame(SAMPLE_PUZZLE, GameConfig(random_seed=11), clock=FakeClock())
    for _ in range(3000):
        if game.state.is_won:
            break
        candidates = [sq.id for sq in game.state.grid if not sq.is_solved]
        mistakes_before = game.state.mistakes
        result = game.select_square(rng.choice(candidates))
        state = game.state

        assert state.total_items() == 100
        for square in state.grid:
            owners = {find_category_for_item(SAMPLE_PUZZLE, item).id for item in square.items}
            assert owners == {square.category_id}
            assert square.is_solved == (square.size == 10)
        assert len(set(state.solved_category_ids)) == len(state.solved_category_ids)
        assert (state.status is GameStatus.WON) == (len(state.solved_category_ids) == 10)
        assert (state.end_time is not None) == state.is_won

        delta = state.mistakes - mistakes_before
        if result is None or result.success:
            assert delta == 0
        else:
            assert delta == 1


def test_game_stats(game, clock):
    merge(game, "cat-fruits-0", "cat-countries-0")
    merge(game, "cat-fruits-0", "cat-fruits-1")
    clock.advance(12.5)
    stats = game.get_game_stats()
    assert stats == {
        "puzzle_id": "puzzle-sample-001",
        "status": "playing",
        "mistakes": 1,
        "solved_categories": 0,
        "squares_remaining": 99,
        "elapsed_seconds": 12.5,
    }


def test_layout_rows_follow_the_grid(game):
    rows = game.layout_rows()
    assert len(rows) == 20
    assert all(row.total_items == 5 for row in rows)

    solve_category(game, "cat-fruits")
    rows = game.layout_rows()
    assert sum(row.total_items for row in rows) == 90
    assert all(not sq.is_solved for row in rows for sq in row.squares)


def test_state_copy_is_detached(game):
    snapshot = game.state.copy()
    merge(game, "cat-fruits-0", "cat-fruits-1")
    assert len(snapshot.grid) == 100
    assert len(game.state.grid) == 99


def test_state_property_returns_a_snapshot(game):
    state = game.state
    state.grid.clear()
    state.solved_category_ids.append("cat-fruits")
    state.mistakes = 7
    assert game.state.total_items() == 100
    assert game.state.solved_category_ids == []
    assert game.state.mistakes == 0
    assert game.state is not game.state
