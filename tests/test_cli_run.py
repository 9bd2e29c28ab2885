from __future__ import annotations

import json
import random
from pathlib import Path

from typer.testing import CliRunner

from randutf8 import rand_utf8
from randutf8.cli import app


def test_generate_hex_exact_length() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "--length", "32", "--count", "5", "--seed", "0"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 5
    for line in lines:
        raw = bytes.fromhex(line)
        assert len(raw) == 32
        raw.decode("utf-8")


def test_generate_matches_library() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "-n", "24", "-c", "2", "--seed", "7"])
    rng = random.Random(7)
    expected = [rand_utf8(rng, 24).encode("utf-8").hex() for _ in range(2)]
    assert result.stdout.splitlines() == expected


def test_generate_json_format() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "-n", "16", "--seed", "3", "--format", "json"])
    assert result.exit_code == 0
    text = json.loads(result.stdout)
    assert len(text.encode("utf-8")) == 16


def test_generate_seed_from_env() -> None:
    runner = CliRunner()
    first = runner.invoke(app, ["generate", "-n", "16"], env={"RANDUTF8_SEED": "5"})
    second = runner.invoke(app, ["generate", "-n", "16"], env={"RANDUTF8_SEED": "5"})
    assert first.exit_code == 0
    assert first.stdout == second.stdout


def test_generate_zero_count() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["generate", "-n", "8", "-c", "0", "--seed", "1"])
    assert result.exit_code == 0
    assert result.stdout == ""


def test_generate_uses_config(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("generator:\n  full_weight: 0\nseed:\n  value: 3\n")
    runner = CliRunner()
    result = runner.invoke(
        app, ["generate", "-n", "20", "--config", str(cfg_file)], env={"RANDUTF8_SEED": ""}
    )
    assert result.exit_code == 0
    assert len(bytes.fromhex(result.stdout.strip())) == 20


def test_distribution_report() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["distribution", "--count", "64", "--seed", "1"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0].startswith("min: ")
    assert lines[-1].startswith("-- score_sum: ")


def test_distribution_strict_passes() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["distribution", "--seed", "1", "--strict"])
    assert result.exit_code == 0


def test_distribution_naive_strict_fails() -> None:
    runner = CliRunner()
    result = runner.invoke(
        app, ["distribution", "--naive", "--count", "256", "--seed", "2", "--strict"]
    )
    assert result.exit_code == 6
