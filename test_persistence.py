"""
tests for saving and loading games
"""
import json
import logging

import pytest

from nyx2048.board import board_from_values, board_values
from nyx2048.config import BEST_KEY, GAME_KEY
from nyx2048.game import Game2048
from nyx2048.persistence import (
    GamePersistence, JsonFileStore, MemoryStore, SnapshotError, decode_state, encode_state,
)
from nyx2048.state import GameState


def sample_state(**kwargs):
    board = board_from_values([
        [2, 0, 0, 4],
        [0, 8, 0, 0],
        [0, 0, 0, 0],
        [16, 0, 0, 2],
    ])
    return GameState(board, **kwargs)


class BrokenStore(MemoryStore):
    def set(self, key, value):
        raise OSError("disk full")


def test_snapshot_layout():
    data = encode_state(sample_state(score=36, move_count=7))

    assert data['score'] == 36
    assert data['moveCount'] == 7
    assert len(data['board']) == 4 and all(len(row) == 4 for row in data['board'])
    assert data['board'][1][1] == {'id': data['tiles'][2]['id'], 'value': 8, 'row': 1, 'col': 1}
    assert data['board'][2] == [None, None, None, None]
    assert [t['value'] for t in data['tiles']] == [2, 4, 8, 16, 2]
    assert set(data['tiles'][0]) == {'id', 'value', 'row', 'col'}


def test_decode_restores_tiles_and_ids():
    state = sample_state(score=36, move_count=7)
    restored = decode_state(json.loads(json.dumps(encode_state(state))))

    assert board_values(restored.board) == board_values(state.board)
    assert [t.id for t in restored.tiles] == [t.id for t in state.tiles]
    assert restored.score == 36
    assert restored.move_count == 7
    assert restored.previous is None
    assert not restored.is_game_over


def test_decode_keeps_best_score_at_least_score():
    data = encode_state(sample_state(score=40))
    assert decode_state(data, best_score=10).best_score == 40
    assert decode_state(data, best_score=99).best_score == 99


def test_decode_marks_won_boards():
    data = encode_state(GameState(board_from_values([[2048, 2]])))
    del data['isWon']
    assert decode_state(data).is_won


def corrupt_snapshots():
    good = encode_state(sample_state(score=36))

    wrong_value = json.loads(json.dumps(good))
    wrong_value['tiles'][0]['value'] = 3

    mismatch = json.loads(json.dumps(good))
    mismatch['board'][0][0] = None

    same_cell = json.loads(json.dumps(good))
    same_cell['tiles'][1]['row'] = 0
    same_cell['tiles'][1]['col'] = 0

    off_board = json.loads(json.dumps(good))
    off_board['tiles'][0]['row'] = 4

    bool_score = json.loads(json.dumps(good))
    bool_score['score'] = True

    negative = json.loads(json.dumps(good))
    negative['moveCount'] = -1

    return [wrong_value, mismatch, same_cell, off_board, bool_score, negative, [], {'tiles': 'x'}]


@pytest.mark.parametrize("data", corrupt_snapshots())
def test_decode_rejects_corrupt_data(data):
    with pytest.raises(SnapshotError):
        decode_state(data)


def test_load_missing_and_corrupt():
    assert GamePersistence(MemoryStore()).load() is None
    assert GamePersistence(MemoryStore({GAME_KEY: 'not json'})).load() is None

    mismatch = corrupt_snapshots()[1]
    assert GamePersistence(MemoryStore({GAME_KEY: json.dumps(mismatch)})).load() is None
    assert GamePersistence(MemoryStore({GAME_KEY: '[' * 100000})).load() is None


def test_best_score_has_its_own_key():
    store = MemoryStore()
    persistence = GamePersistence(store)

    persistence.save(sample_state(score=100, best_score=100))
    assert store.get(BEST_KEY) == '100'

    # a later, lower game does not touch the stored best
    persistence.save(sample_state(score=50, best_score=50))
    assert store.get(BEST_KEY) == '100'
    assert persistence.load().best_score == 100
    assert persistence.load().score == 50


@pytest.mark.parametrize("raw", ['abc', '-5', 'null', '[1]', '1e999', 'Infinity', '-Infinity', '1.5', 'true', '[' * 100000])
def test_bad_best_score_reads_as_zero(raw):
    assert GamePersistence(MemoryStore({BEST_KEY: raw})).load_best_score() == 0


def test_save_errors_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger='nyx2048.persistence'):
        GamePersistence(BrokenStore()).save(sample_state())
    assert "could not save game" in caplog.text


def test_json_file_store(tmp_path):
    store = JsonFileStore(tmp_path / "saves")
    assert store.get('missing') is None

    persistence = GamePersistence(store)
    persistence.save(sample_state(score=12, best_score=12, move_count=3))

    assert (tmp_path / "saves" / f"{GAME_KEY}.json").exists()
    assert (tmp_path / "saves" / f"{BEST_KEY}.json").read_text() == '12'

    restored = persistence.load()
    assert restored.score == 12
    assert restored.move_count == 3


def test_game_starts_fresh_on_infinite_best_score():
    store = MemoryStore({BEST_KEY: '1e999'})
    game = Game2048(persistence=GamePersistence(store))
    assert game.best_score == 0
    assert len(game.tiles) == 2
