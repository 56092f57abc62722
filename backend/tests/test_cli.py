"""Tests for the command line calculator."""

import pytest

from clinical_risk.cli import parse_assignments, run
from clinical_risk.services.scoring import reset_risk_scoring_service


class TestParseAssignments:
    """Tests for field=value parsing."""

    def test_pairs(self):
        assert parse_assignments(["age=80", " diabetes = yes "]) == {
            "age": "80",
            "diabetes": "yes",
        }

    def test_empty_value_kept(self):
        assert parse_assignments(["race="]) == {"race": ""}

    def test_rejects_bare_word(self):
        with pytest.raises(ValueError, match="field=value"):
            parse_assignments(["age"])


class TestRun:
    """Tests for the CLI entry point."""

    def setup_method(self):
        reset_risk_scoring_service()

    def test_list(self, capsys):
        assert run(["--list"]) == 0
        out = capsys.readouterr().out
        assert "gwtg_hf" in out
        assert "euroscore_ii" in out

    def test_calculate(self, capsys):
        assert run(["dapt", "age=80", "diabetes=yes", "stent_diameter=2.5"]) == 0
        out = capsys.readouterr().out
        assert "Risk category: Low" in out
        assert "Score: 0 points" in out

    def test_invalid_input(self, capsys):
        assert run(["dapt", "age=abc", "stent_diameter=3"]) == 1
        assert "age: Age must be a number" in capsys.readouterr().out

    def test_unknown_calculator(self, capsys):
        assert run(["nope"]) == 2
        assert "Unknown calculator: nope" in capsys.readouterr().out

    def test_preview(self, capsys):
        assert run(["hcm_risk_scd", "age=45", "max_wall_thickness=22", "--preview"]) == 0
        assert "PRELIMINARY ESTIMATE" in capsys.readouterr().out

    def test_preview_needs_required_fields(self, capsys):
        assert run(["hcm_risk_scd", "age=45", "--preview"]) == 1
        assert "age, max_wall_thickness" in capsys.readouterr().out

    def test_interactive(self, capsys, monkeypatch):
        answers = iter(["80", "2.5", "", "yes", "", "", "", "", ""])
        monkeypatch.setattr("builtins.input", lambda prompt: next(answers))
        assert run(["dapt", "--interactive"]) == 0
        out = capsys.readouterr().out
        assert "Preview:" in out
        assert "Risk category: Low" in out
