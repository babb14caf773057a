"""
Tests for the command line interface.
"""

import json
import struct

import pytest

from solidviz.__main__ import main


class TestCheck:

    def test_ok(self, capsys):
        assert main(["check", "x^2 + sin(x)"]) == 0
        assert "OK" in capsys.readouterr().out

    def test_problems(self, capsys):
        assert main(["check", "x^2 + abs(x)"]) == 1
        out = capsys.readouterr().out
        assert "3 problem(s)" in out
        assert "E201" in out

    def test_orientation(self, capsys):
        assert main(["check", "y^2", "--orientation", "y"]) == 0


class TestEval:

    def test_values(self, capsys):
        assert main(["eval", "x^2", "3", "-2"]) == 0
        out = capsys.readouterr().out
        assert "x = 3.0: 9.0" in out
        assert "x = -2.0: 4.0" in out

    def test_non_finite(self, capsys):
        assert main(["eval", "1/x", "0"]) == 0
        assert "inf" in capsys.readouterr().out

    def test_invalid(self, capsys):
        assert main(["eval", "(x", "1"]) == 1
        assert "E103" in capsys.readouterr().err


class TestGeometryCommands:

    def test_sample(self, capsys):
        assert main(["sample"]) == 0
        assert "2000 points" in capsys.readouterr().out

    def test_sample_invalid_formula(self, capsys):
        assert main(["sample", "--f1", "abs(x)"]) == 1

    def test_sections_json(self, tmp_path, capsys):
        out = tmp_path / "sections.json"
        assert main(["sections", "--step", "0.5", "--profile", "triangle",
                     "-o", str(out)]) == 0
        assert "10 triangle cross-section(s)" in capsys.readouterr().out
        data = json.loads(out.read_text())
        assert len(data["cross_sections"]) == 10

    def test_sections_bad_step(self, capsys):
        assert main(["sections", "--step", "0"]) == 1

    def test_revolve_stl(self, tmp_path, capsys):
        out = tmp_path / "solid.stl"
        assert main(["revolve", "--axis", "-1", "-o", str(out)]) == 0
        data = out.read_bytes()
        count = struct.unpack('<I', data[80:84])[0]
        assert count > 0
        assert len(data) == 84 + 50 * count

    def test_revolve_ascii(self, tmp_path):
        out = tmp_path / "solid.stl"
        assert main(["revolve", "--ascii", "-o", str(out)]) == 0
        assert out.read_text().startswith("solid solidviz")

    def test_revolve_unknown_format(self, tmp_path, capsys):
        assert main(["revolve", "-o", str(tmp_path / "solid.obj")]) == 1
        assert "unsupported" in capsys.readouterr().err

    def test_config_file(self, tmp_path, capsys):
        cfg = tmp_path / "scene.yaml"
        cfg.write_text("interval_start: 0\ninterval_end: 1\nstep: 0.25\n")
        assert main(["sections", "--config", str(cfg)]) == 0
        assert "4 square cross-section(s)" in capsys.readouterr().out

    def test_command_line_overrides_config(self, tmp_path, capsys):
        cfg = tmp_path / "scene.yaml"
        cfg.write_text("step: 0.25\nprofile: semicircle\n")
        assert main(["sections", "--config", str(cfg), "--profile", "square"]) == 0
        assert "square" in capsys.readouterr().out

    def test_bad_config(self, tmp_path, capsys):
        cfg = tmp_path / "scene.yaml"
        cfg.write_text("colour: red\n")
        assert main(["sections", "--config", str(cfg)]) == 1
        assert "colour" in capsys.readouterr().err


class TestOptions:

    def test_bad_log_level(self, capsys):
        assert main(["--log-level", "chatty", "check", "x"]) == 2

    def test_log_file(self, tmp_path):
        log = tmp_path / "run.log"
        assert main(["--log-level", "debug", "--log-file", str(log), "sections"]) == 0
        assert "cross-sections" in log.read_text()

    def test_missing_command(self):
        with pytest.raises(SystemExit):
            main([])
