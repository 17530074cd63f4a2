"""Tests for the command-line interface."""

import pytest

from survey_analyzer.main import main
from survey_analyzer.samples import SAMPLE_QUESTION_LIST, SAMPLE_SURVEY_TEXT


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("AZURE_OPENAI_API_KEY", "AZURE_OPENAI_ENDPOINT", "DEFAULT_LAYOUT"):
        monkeypatch.delenv(name, raising=False)


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_sample_prints_bundled_text(capsys):
    assert main(["sample"]) == 0
    assert capsys.readouterr().out == SAMPLE_SURVEY_TEXT

    assert main(["sample", "--questions"]) == 0
    assert capsys.readouterr().out.strip() == SAMPLE_QUESTION_LIST


def test_ingest_writes_text_and_questions(tmp_path):
    source = tmp_path / "survey.csv"
    source.write_text("id,Q one,Q two\nalice,a1,a2\n", encoding="utf-8")
    text_out = tmp_path / "survey.txt"
    questions_out = tmp_path / "questions.txt"

    code = main([
        "ingest", str(source), "--layout", "rows_are_users",
        "-o", str(text_out), "--questions-out", str(questions_out),
    ])

    assert code == 0
    assert text_out.read_text(encoding="utf-8") == (
        "--- Q1: Q one ---\n[alice] a1\n\n--- Q2: Q two ---\n[alice] a2\n\n"
    )
    assert questions_out.read_text(encoding="utf-8") == "Q1: Q one\nQ2: Q two"


def test_ingest_reports_ingestion_errors(tmp_path, capsys):
    source = tmp_path / "survey.csv"
    source.write_text("only,one,row\n", encoding="utf-8")

    assert main(["ingest", str(source), "--layout", "rows_are_questions"]) == 1
    assert "Ingestion failed" in capsys.readouterr().out


def test_ingest_missing_file(tmp_path, capsys):
    assert main(["ingest", str(tmp_path / "missing.csv")]) == 1
    assert "not found" in capsys.readouterr().out


def test_config_test_without_credentials_fails(capsys):
    assert main(["config", "test"]) == 1
    assert "AZURE_OPENAI_API_KEY" in capsys.readouterr().out
