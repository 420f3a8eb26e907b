"""Tests for the command line entry point and the rich report."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from rich.console import Console

from risk_engine.cli import main
from risk_engine.config import get_config
from risk_engine.report import render_outcome
from risk_engine.services.assessment import evaluate_assessment

SUBMISSION = {
    "profile": {"age": 30, "gender": "male", "weight": 70, "height": 175},
    "assessment": {
        "glucose_level": 150,
        "blood_pressure_systolic": 145,
        "blood_pressure_diastolic": 80,
        "cholesterol": 180,
        "heart_rate": 72,
        "exercise_hours": 3,
        "smoking": False,
        "alcohol_consumption": "moderate",
        "family_history": True,
        "stress_level": 6,
        "sleep_hours": 7,
    },
}


@pytest.fixture(autouse=True)
def production_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_config.cache_clear()
    yield
    get_config.cache_clear()


@pytest.fixture
def submission_file(tmp_path: Path) -> Path:
    path = tmp_path / "submission.json"
    path.write_text(json.dumps(SUBMISSION), encoding="utf-8")
    return path


def test_evaluate_prints_json(submission_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["evaluate", str(submission_file), "--json"]) == 0

    output = json.loads(capsys.readouterr().out)
    diabetes = output["risk_scores"][0]
    assert diabetes["disease_type"] == "diabetes"
    assert diabetes["risk_level"] == "high"
    assert len(output["recommendations"]) == 4


def test_evaluate_renders_report(
    submission_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    assert main(["evaluate", str(submission_file)]) == 0

    out = capsys.readouterr().out
    assert "Diabetes" in out
    assert "HIGH" in out


def test_evaluate_persists_with_store(submission_file: Path, tmp_path: Path) -> None:
    data_dir = tmp_path / "store"

    argv = ["evaluate", str(submission_file), "--store", str(data_dir), "--user-id", "u9"]
    assert main(argv) == 0

    predictions = json.loads((data_dir / "predictions.json").read_text(encoding="utf-8"))
    assert len(predictions) == 4
    assert {p["user_id"] for p in predictions} == {"u9"}


def test_evaluate_uses_configured_store(
    submission_file: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    data_dir = tmp_path / "configured"
    monkeypatch.setenv("STORE_BACKEND", "json")
    monkeypatch.setenv("STORE_DATA_DIR", str(data_dir))

    assert main(["evaluate", str(submission_file), "--json"]) == 0

    assessments = json.loads((data_dir / "health_assessments.json").read_text(encoding="utf-8"))
    assert [a["user_id"] for a in assessments] == ["local-user"]


def test_out_of_range_input_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = json.loads(json.dumps(SUBMISSION))
    bad["assessment"]["stress_level"] = 12
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(bad), encoding="utf-8")

    assert main(["evaluate", str(path)]) == 1
    assert "assessment.stress_level" in capsys.readouterr().out


def test_invalid_profile_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = json.loads(json.dumps(SUBMISSION))
    bad["profile"]["height"] = 0
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(bad), encoding="utf-8")

    assert main(["evaluate", str(path)]) == 1
    assert "Invalid profile data" in capsys.readouterr().out


def test_missing_file_fails(tmp_path: Path) -> None:
    assert main(["evaluate", str(tmp_path / "nope.json")]) == 1


def test_undecodable_file_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"profile": "\xe9"}')

    assert main(["evaluate", str(path)]) == 1
    assert "Cannot read" in capsys.readouterr().out


def test_config_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["config"]) == 0
    assert "Environment: production" in capsys.readouterr().out


def test_render_outcome_without_elevated_risk(quiet_assessment, profile) -> None:
    console = Console(record=True, width=120)

    render_outcome(evaluate_assessment(quiet_assessment, profile), console)

    text = console.export_text()
    assert "No elevated risks detected" in text
    assert "BMI 22.9" in text
