import sys, pathlib
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

import pytest
from connect_game import ConnectGame
from errors import IllegalMoveError
from game_data import GameData, training_iterations
from mcts_agent import MCTSAgent


def make_game(mode='ava', seed=0, per_move=3):
    data = GameData(agent=MCTSAgent(seed=seed), seed=seed)
    data.set_game_mode(mode)
    data.set_training_schedule(per_move, 10_000)
    return ConnectGame(data)


def test_training_schedule_tapers_to_one():
    assert training_iterations(0) == 100
    assert training_iterations(1_500_000) == 50
    assert training_iterations(2_999_999) == 1
    assert training_iterations(3_000_000) == 1
    assert training_iterations(10_000_000) == 1
    assert training_iterations(0, max_train_per_move=10, max_train_threshold=100) == 10
    assert training_iterations(75, max_train_per_move=10, max_train_threshold=100) == 2


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        GameData(seed=0).set_game_mode('pvp')


def test_agent_vs_agent_games_are_tallied():
    game = make_game()
    results = game.play(3)
    data = game.game_data

    assert game.games_finished == 3
    assert sum(results.values()) == 3
    assert data.agent.games_played == 3
    assert data.agent.wins == results['trained_wins']
    assert data.game_over
    assert data.state.is_terminal()


def test_training_happens_every_tick():
    game = make_game(per_move=5)
    agent = game.game_data.agent

    game.update()

    # 5 background iterations plus the naive agent's move (own table).
    assert agent.total_iterations == 5
    assert len(game.game_data.last_move_col) == 1


def test_update_restarts_a_finished_agent_game():
    game = make_game()
    game.play(1)
    game.update()
    assert not game.game_data.game_over
    assert game.game_data.state.piece_count() == 0


def test_caller_moves_then_agent_replies():
    game = make_game(mode='pva')
    data = game.game_data

    game.make_move(3)
    assert data.is_agent_turn()

    game.update()
    assert data.state.piece_count() == 2
    assert not data.is_agent_turn()

    # Human to move: the tick only trains.
    before = data.agent.total_iterations
    game.update()
    assert data.state.piece_count() == 2
    assert data.agent.total_iterations == before + data.training_budget()


def test_illegal_caller_move_propagates():
    game = make_game(mode='pva')
    for _ in range(6):
        game.make_move(0)
    with pytest.raises(IllegalMoveError):
        game.make_move(0)


def test_human_win_is_recorded(capsys):
    game = make_game(mode='pva')
    for col in [3, 0, 3, 0, 3, 0, 3]:
        game.make_move(col)
    data = game.game_data

    assert data.game_over
    assert data.player_wins == 1
    assert data.agent_wins == 0
    assert data.agent.games_played == 1
    assert data.agent.wins == 0
    assert "HUMAN WINS!" in capsys.readouterr().out

    # pva games wait for the caller to start a new one.
    game.update()
    assert data.game_over
    game.new_game()
    assert not data.game_over


def test_agent_win_is_recorded(capsys):
    game = make_game(mode='ava')
    game.game_data.agent_is_first = True
    for col in [3, 0, 3, 0, 3, 0, 3]:
        game.make_move(col, is_agent_move=True)
    data = game.game_data

    assert data.agent_wins == 1
    assert data.agent.wins == 1
    assert "TRAINED MODEL WINS!" in capsys.readouterr().out
