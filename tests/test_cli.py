"""Tests for the pydeduce CLI: laws and progress subcommands."""

import json
import tempfile
from pathlib import Path

import pytest

from pydeduce.cli.main import main


def _write_store(data) -> str:
    with tempfile.NamedTemporaryFile(suffix=".json", delete=False, mode="w") as f:
        json.dump(data, f)
        return f.name


class TestMain:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "laws" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "pydeduce" in capsys.readouterr().out


class TestLawsCommand:
    def test_lists_catalog(self, capsys):
        assert main(["laws"]) == 0
        out = capsys.readouterr().out
        assert "Modus ponens: Given A, A IMPLIES B: deduce B." in out
        assert "22 laws, 0 unlocked" in out

    def test_json(self, capsys):
        assert main(["laws", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["laws"]) == 22
        first = data["laws"][0]
        assert first["name"] == "Modus ponens"
        assert first["unlocked"] is False
        assert first["desc"] == "Given A, A IMPLIES B: deduce B."
        truth = next(law for law in data["laws"] if law["name"] == "Truth")
        assert truth["clone_index"] == truth["index"] + 1

    def test_store_restores_unlocks(self, capsys):
        path = _write_store({"law Modus ponens": "PROVED"})
        assert main(["laws", "--store", path, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        unlocked = [law["name"] for law in data["laws"] if law["unlocked"]]
        assert unlocked == ["Modus ponens"]
        assert data["store_file"] == path
        Path(path).unlink()

    def test_bad_store(self, capsys):
        path = _write_store(["not", "an", "object"])
        assert main(["laws", "--store", path]) == 1
        assert "Error:" in capsys.readouterr().err
        Path(path).unlink()


class TestProgressCommand:
    def test_show(self, capsys):
        path = _write_store({"Exercise 1": "solved", "proof Exercise 1": "Rain. [given]\nQED!"})
        assert main(["progress", "--store", path]) == 0
        out = capsys.readouterr().out
        assert "Exercise 1: solved" in out
        assert "    QED!" in out
        Path(path).unlink()

    def test_show_json(self, capsys):
        path = _write_store({"Exercise 1": "solved"})
        assert main(["progress", "--store", path, "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data == {"action": "show", "entries": {"Exercise 1": "solved"}, "store_file": path}
        Path(path).unlink()

    def test_empty(self, tmp_path, capsys):
        assert main(["progress", "--store", str(tmp_path / "none.json")]) == 0
        assert "No progress recorded." in capsys.readouterr().out

    def test_reset(self, capsys):
        path = _write_store({"Exercise 1": "solved"})
        assert main(["progress", "--store", path, "--reset"]) == 0
        with open(path) as f:
            assert json.load(f) == {}
        Path(path).unlink()

    def test_bad_store_json_error(self, capsys):
        path = _write_store([1])
        assert main(["progress", "--store", path, "--json"]) == 1
        assert "error" in json.loads(capsys.readouterr().out)
        Path(path).unlink()

    def test_store_required(self):
        with pytest.raises(SystemExit):
            main(["progress"])
