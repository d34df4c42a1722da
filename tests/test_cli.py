"""Tests for the command-line runner."""

from pathlib import Path

import pytest

from boulder.__main__ import main


class TestMain:
    """Tests for main()."""

    def test_runs_script_and_prints_grid(self, capsys):
        code = main(["--map", "02", "--seed", "1", "--actions", "RR"])

        out = capsys.readouterr().out
        assert code == 0
        assert "#  s   .  ** #" in out.splitlines()
        assert "Diamonds: 0" in out
        assert "Ticks: 2" in out

    def test_prints_zero_padded_score(self, tmp_path: Path, capsys):
        path = tmp_path / "gems.txt"
        path.write_text("######\n#s** #\n######\n", encoding="utf-8")

        code = main(["--map", str(path), "--actions", "RR"])

        lines = capsys.readouterr().out.splitlines()
        assert code == 0
        assert "Diamonds: 2" in lines
        assert "Score: 000010" in lines
        assert any(line.startswith("Time: ") for line in lines)

    def test_ticks_default_to_one(self, capsys):
        main(["--map", "02", "--seed", "1"])
        assert "Ticks: 1" in capsys.readouterr().out

    def test_explicit_ticks_extend_script(self, capsys):
        main(["--map", "02", "--seed", "1", "--actions", "R", "--ticks", "4"])
        assert "Ticks: 4" in capsys.readouterr().out

    def test_config_by_name(self, capsys):
        code = main(["--config", "creatures", "--ticks", "3"])
        assert code == 0
        assert "Ticks: 3" in capsys.readouterr().out

    def test_missing_map(self, capsys):
        code = main(["--map", "no_such_map"])

        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_malformed_map(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text("####\n#s#\n####\n", encoding="utf-8")

        code = main(["--map", str(path)])

        assert code == 1
        assert "not equal length" in capsys.readouterr().err

    def test_invalid_config(self, tmp_path: Path, capsys):
        path = tmp_path / "bad.toml"
        path.write_text("[session]\ntick_duration_ms = 0\n", encoding="utf-8")

        code = main(["--config", str(path)])

        assert code == 1
        assert "tick_duration_ms" in capsys.readouterr().err

    def test_bad_action_code(self):
        with pytest.raises(SystemExit):
            main(["--actions", "RX"])
