"""
tests for the move resolver
"""
from collections import Counter

import pytest

from nyx2048.board import board_from_values, board_values, empty_cells, is_consistent, tiles_of
from nyx2048.moves import Direction, parse_direction, resolve_move, valid_moves


def row0(board):
    return board_values(board)[0]


def test_pair_merges_to_the_left_edge():
    board = board_from_values([[2, 2, 0, 0]])
    result = resolve_move(board, 'left')

    assert row0(result.board) == [4, 0, 0, 0]
    assert result.score_delta == 4
    assert result.moved


def test_alternating_row_does_not_move():
    board = board_from_values([[2, 4, 2, 4]])
    result = resolve_move(board, 'left')

    assert row0(result.board) == [2, 4, 2, 4]
    assert result.score_delta == 0
    assert not result.moved
    assert result.board is board


def test_merged_tile_does_not_merge_again():
    result = resolve_move(board_from_values([[2, 2, 4, 0]]), 'left')
    assert row0(result.board) == [4, 4, 0, 0]
    assert result.score_delta == 4

    result = resolve_move(board_from_values([[2, 2, 2, 2]]), 'left')
    assert row0(result.board) == [4, 4, 0, 0]
    assert result.score_delta == 8
    assert len(result.merged) == 2


def test_two_merges_in_one_line():
    result = resolve_move(board_from_values([[4, 4, 8, 8]]), 'left')
    assert row0(result.board) == [8, 16, 0, 0]
    assert result.score_delta == 24


def test_merge_order_starts_at_the_moving_edge():
    result = resolve_move(board_from_values([[2, 2, 2, 0]]), 'right')
    assert row0(result.board) == [0, 0, 2, 4]

    result = resolve_move(board_from_values([[2, 2, 2, 0]]), 'left')
    assert row0(result.board) == [4, 2, 0, 0]


def test_columns():
    board = board_from_values([
        [2, 0, 0, 0],
        [2, 0, 0, 0],
        [4, 0, 0, 0],
    ])

    up = board_values(resolve_move(board, Direction.UP).board)
    assert [row[0] for row in up] == [4, 4, 0, 0]

    down = board_values(resolve_move(board, Direction.DOWN).board)
    assert [row[0] for row in down] == [0, 0, 4, 4]


def test_lines_are_independent():
    board = board_from_values([
        [0, 0, 0, 2],
        [0, 0, 0, 0],
        [4, 0, 4, 0],
        [0, 8, 0, 0],
    ])
    result = resolve_move(board, 'left')
    assert board_values(result.board) == [
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [8, 0, 0, 0],
        [8, 0, 0, 0],
    ]
    assert result.score_delta == 8


def test_no_move_along_one_axis_even_if_the_other_could_merge():
    board = board_from_values([
        [2, 4, 0, 0],
        [2, 8, 0, 0],
    ])
    assert not resolve_move(board, 'left').moved
    assert resolve_move(board, 'up').moved


def test_sliding_tile_keeps_its_id_and_merge_makes_a_new_one():
    board = board_from_values([[0, 8, 2, 2]])
    eight, first, second = tiles_of(board)

    result = resolve_move(board, 'left')
    new_eight, merged = tiles_of(result.board)

    assert new_eight.id == eight.id
    assert (new_eight.row, new_eight.col) == (0, 0)
    assert merged.value == 4
    assert merged.id not in (first.id, second.id)
    assert merged.is_merged
    assert not new_eight.is_merged


def test_turn_flags_are_cleared_on_the_next_move():
    first = resolve_move(board_from_values([[2, 2, 0, 0]]), 'left')
    second = resolve_move(first.board, 'right')
    (tile,) = tiles_of(second.board)
    assert tile.value == 4
    assert not tile.is_merged
    assert not tile.is_new


@pytest.mark.parametrize("direction", ["diagonal", "", None, 3, "upp"])
def test_invalid_direction_is_a_no_op(direction):
    board = board_from_values([[2, 2, 0, 0]])
    result = resolve_move(board, direction)
    assert not result.moved
    assert result.board is board
    assert result.score_delta == 0


def test_parse_direction():
    assert parse_direction(" LEFT ") is Direction.LEFT
    assert parse_direction(Direction.DOWN) is Direction.DOWN
    assert parse_direction("north") is None


def test_conservation_of_tile_values():
    board = board_from_values([
        [2, 2, 4, 4],
        [8, 0, 8, 2],
        [0, 16, 16, 16],
        [4, 4, 4, 0],
    ])
    for direction in Direction:
        result = resolve_move(board, direction)
        expected = Counter(v for row in board_values(board) for v in row if v)
        for tile in result.merged:
            expected[tile.value // 2] -= 2
            expected[tile.value] += 1
        after = Counter(v for row in board_values(result.board) for v in row if v)
        assert after == +expected
        assert is_consistent(result.board)


def test_valid_moves_on_a_full_board():
    board = board_from_values([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])
    assert not empty_cells(board)
    assert valid_moves(board) == []
