"""Tests for the session driver and the command-line runner."""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.board import Position, PuzzleMode
from src.engine import PuzzleSession, SessionConfig, Outcome
from src.main import load_config, main


RADAR = [[0, 0], [0, 1], [0, 2], [0, 3], [0, 4]]
CAT = [[4, 0], [4, 1], [4, 2]]


def workshop_config(**overrides) -> SessionConfig:
    data = {"board": {"source": "fixed", "layout_id": "word-workshop"}}
    data.update(overrides)
    return SessionConfig(**data)


class TestSessionConfig:
    """Test cases for session configuration."""

    def test_defaults(self):
        """A bare config plays a procedural solo game."""
        config = SessionConfig()
        assert config.board.source == "procedural"
        assert config.players == ["p1"]
        assert config.game_mode == "solo"

    def test_fixed_source_parsed(self):
        """The board source union is chosen by its tag."""
        config = workshop_config()
        assert config.board.source == "fixed"
        assert config.board.layout_id == "word-workshop"

    def test_moves_parsed(self):
        """Scripted positions become Position tuples."""
        config = workshop_config(moves=[{"positions": RADAR}])
        assert config.moves[0].positions[0] == Position(0, 0)

    def test_solo_needs_one_player(self):
        """Solo sessions take exactly one player."""
        with pytest.raises(PydanticValidationError):
            SessionConfig(players=["a", "b"])

    def test_duplicate_players(self):
        """Player ids are unique."""
        with pytest.raises(PydanticValidationError):
            SessionConfig(game_mode="multiplayer", players=["a", "a"])

    def test_move_for_unknown_player(self):
        """Moves must name a configured player."""
        with pytest.raises(PydanticValidationError):
            SessionConfig(moves=[{"player": "zed", "positions": CAT}])

    def test_unknown_source(self):
        """Unknown board sources are rejected."""
        with pytest.raises(PydanticValidationError):
            SessionConfig(board={"source": "random"})


class TestPuzzleSession:
    """Test cases for PuzzleSession."""

    def test_create_from_layout(self):
        """A fixed layout supplies the puzzle mode and win condition."""
        session = PuzzleSession.create(workshop_config())
        assert session.puzzle_mode == PuzzleMode.VAULT_BREAK
        assert session.win_condition.description == "Unlock the workshop vault"
        assert session.turns_left == 10
        assert not session.is_complete

    def test_config_turn_limit_overrides(self):
        """An explicit turn limit wins over the layout's."""
        session = PuzzleSession.create(workshop_config(turn_limit=3))
        assert session.turns_left == 3

    def test_mismatched_win_condition(self):
        """The win condition must match the puzzle mode."""
        config = SessionConfig(
            puzzle_mode="vault_break",
            win_condition={"type": "score_target", "target": 10},
        )
        with pytest.raises(ValueError):
            PuzzleSession.create(config)

    def test_accepted_move_updates_state(self):
        """Accepted moves add score, use a turn and thread the effect."""
        session = PuzzleSession.create(workshop_config())
        result = session.play(None, RADAR)
        assert result.accepted is True
        assert session.scores["p1"] == result.score
        assert session.moves_made == 1
        assert session.turns_left == 9
        assert session.previous_effect == result.primary_effect
        assert session.board is result.new_board

    def test_rejected_move_uses_no_turn(self):
        """Rejected moves are recorded but cost nothing."""
        session = PuzzleSession.create(workshop_config())
        board = session.board
        result = session.play("p1", [[0, 0], [5, 5]])
        assert result.accepted is False
        assert session.turns_left == 10
        assert session.moves_made == 0
        assert session.board is board
        assert len(session.turn_history) == 1
        assert session.turn_history[0].accepted is False

    def test_malformed_move_recorded(self):
        """A malformed selection is rejected and still recorded."""
        session = PuzzleSession.create(workshop_config())
        result = session.play("p1", [[0, 0, 0], [0, 1], [0, 2]])
        assert result.accepted is False
        assert session.turns_left == 10
        assert session.turn_history[0].errors[0].code == "MALFORMED_POSITION"

    def test_unknown_player(self):
        """Playing as an unknown player raises KeyError."""
        session = PuzzleSession.create(workshop_config())
        with pytest.raises(KeyError):
            session.play("ghost", RADAR)

    def test_out_of_turns(self):
        """A solo session that runs out of turns is lost."""
        session = PuzzleSession.create(workshop_config(turn_limit=1))
        session.play("p1", CAT)
        assert session.outcome == Outcome.LOSS
        assert session.is_complete
        result = session.play("p1", RADAR)
        assert result.accepted is False
        assert result.errors[0].code == "GAME_OVER"

    def test_multiplayer_rotation(self):
        """Players take turns on accepted moves."""
        config = workshop_config(game_mode="multiplayer", players=["a", "b"])
        session = PuzzleSession.create(config)
        assert session.get_current_player() == "a"
        session.play(None, RADAR)
        assert session.get_current_player() == "b"
        session.play(None, [[0, 0], [5, 5]])
        assert session.get_current_player() == "b"

    def test_multiplayer_turn_limit(self):
        """A multiplayer session ends at its turn limit without a loss."""
        config = workshop_config(game_mode="multiplayer", players=["a", "b"], turn_limit=1)
        session = PuzzleSession.create(config)
        session.play("a", RADAR)
        assert session.is_complete
        assert session.outcome == Outcome.ONGOING
        assert session.winner == "a"

    def test_run_scripted_moves(self):
        """run() plays every scripted move and builds a result."""
        config = workshop_config(moves=[{"positions": RADAR}, {"positions": [[0, 0], [5, 5]]}, {"positions": CAT}])
        session = PuzzleSession.create(config)
        result = session.run()
        assert result.total_turns == 3
        assert result.moves_accepted == 2
        assert result.end_reason == "Scripted moves exhausted"
        assert result.final_board == session.board

    def test_get_state(self):
        """State reports scores and progress."""
        session = PuzzleSession.create(workshop_config())
        session.play("p1", RADAR)
        state = session.get_state()
        assert state["moves_made"] == 1
        assert state["scores"]["p1"] > 0
        assert state["outcome"] == "ongoing"

    def test_replenish(self):
        """Replenishing sessions refill played tiles the same way each run."""
        boards = []
        for _ in range(2):
            session = PuzzleSession.create(workshop_config(replenish=True, seed=9))
            assert session.play("p1", RADAR).accepted
            boards.append(session.board)
        assert boards[0] == boards[1]

    def test_save_result(self, tmp_path):
        """Results are written as JSON."""
        session = PuzzleSession.create(workshop_config(moves=[{"positions": RADAR}]))
        session.run()
        path = tmp_path / "out" / "result.json"
        session.save_result(path)
        data = json.loads(path.read_text())
        assert data["puzzle_mode"] == "vault_break"
        assert data["turn_history"][0]["word"] == "RADAR"
        assert data["config"]["board"]["layout_id"] == "word-workshop"


class TestCli:
    """Test cases for the command-line runner."""

    def test_load_config(self, tmp_path):
        """YAML configs become SessionConfig models."""
        path = tmp_path / "session.yaml"
        path.write_text(
            "board:\n"
            "  source: fixed\n"
            "  layout_id: word-workshop\n"
            "moves:\n"
            "  - positions: [[0, 0], [0, 1], [0, 2], [0, 3], [0, 4]]\n"
        )
        config = load_config(str(path))
        assert config.board.layout_id == "word-workshop"
        assert len(config.moves) == 1

    def test_load_missing_config(self, tmp_path):
        """A missing config raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_main_runs_session(self, tmp_path, monkeypatch, capsys):
        """The runner plays the session and saves the result."""
        config = tmp_path / "session.yaml"
        config.write_text(
            "board: {source: fixed, layout_id: word-workshop}\n"
            "moves:\n"
            "  - positions: [[0, 0], [0, 1], [0, 2], [0, 3], [0, 4]]\n"
        )
        output = tmp_path / "result.json"
        monkeypatch.setattr("sys.argv", ["verbloc", str(config), "--output", str(output)])
        assert main() == 0
        assert output.exists()
        assert "Session Summary" in capsys.readouterr().out

    def test_main_bad_config(self, tmp_path, monkeypatch, capsys):
        """Config errors are reported on stderr with exit code 1."""
        config = tmp_path / "session.yaml"
        config.write_text("board: {source: fixed, layout_id: nowhere}\n")
        monkeypatch.setattr("sys.argv", ["verbloc", str(config)])
        assert main() == 1
        assert "Error loading config" in capsys.readouterr().err

    def test_list_layouts(self, monkeypatch, capsys):
        """--list-layouts prints the library."""
        monkeypatch.setattr("sys.argv", ["verbloc", "--list-layouts"])
        assert main() == 0
        assert "word-workshop" in capsys.readouterr().out
