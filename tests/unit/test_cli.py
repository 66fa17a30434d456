"""Unit tests: CLI commands."""
import json

import pytest
from typer.testing import CliRunner

from ethrpg.cli import app

runner = CliRunner()


@pytest.fixture
def fighter_files(tmp_path):
    stats = {"level": 30, "hp": 400, "mp": 200, "str": 200, "int": 100, "dex": 250, "luck": 120, "power": 40000}
    f1 = tmp_path / "f1.json"
    f2 = tmp_path / "f2.json"
    f1.write_text(json.dumps({"address": "0x" + "a" * 40, "class_id": "warrior", "stats": stats}))
    f2.write_text(
        json.dumps({"address": "0x" + "b" * 40, "ens_name": "rogue.eth", "class_id": "rogue", "stats": stats})
    )
    return f1, f2


def test_simulate_prints_log(fighter_files):
    f1, f2 = fighter_files
    result = runner.invoke(app, ["simulate", str(f1), str(f2), "--nonce", "cli-test"])
    assert result.exit_code == 0, result.output
    assert "nonce=cli-test" in result.output
    assert "Winner:" in result.output


def test_simulate_json_is_stable(fighter_files):
    f1, f2 = fighter_files
    first = runner.invoke(app, ["simulate", str(f1), str(f2), "--nonce", "n", "--json"])
    second = runner.invoke(app, ["simulate", str(f1), str(f2), "--nonce", "n", "--json"])
    assert first.exit_code == 0, first.output
    assert json.loads(first.output) == json.loads(second.output)
    assert json.loads(first.output)["fighters"][1]["ens_name"] == "rogue.eth"


def test_simulate_rejects_bad_file(tmp_path, fighter_files):
    bad = tmp_path / "bad.json"
    bad.write_text("{}")
    result = runner.invoke(app, ["simulate", str(bad), str(fighter_files[1])])
    assert result.exit_code != 0


def test_sweep(fighter_files):
    f1, f2 = fighter_files
    result = runner.invoke(app, ["sweep", str(f1), str(f2), "--count", "10"])
    assert result.exit_code == 0, result.output
    assert "/10" in result.output
    assert "avg turns:" in result.output


def test_matchups():
    result = runner.invoke(app, ["matchups"])
    assert result.exit_code == 0
    assert "Elder Wizard" in result.output
    assert len(result.output.strip().splitlines()) == 8
