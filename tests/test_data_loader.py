"""Tests for loading spreadsheets into cell matrices."""

import pytest
from openpyxl import Workbook

from survey_analyzer.services.data_loader import DataLoader


def test_csv_with_jagged_rows(tmp_path):
    path = tmp_path / "survey.csv"
    path.write_text(
        ",U1,U2\n"
        "Q1,good,bad\n"
        "Q2,only one\n"
        "Q3,a,b,extra\n",
        encoding="utf-8",
    )

    matrix = DataLoader().load_matrix(str(path))

    assert matrix == [
        [None, "U1", "U2"],
        ["Q1", "good", "bad"],
        ["Q2", "only one"],
        ["Q3", "a", "b", "extra"],
    ]


def test_csv_keeps_text_verbatim(tmp_path):
    path = tmp_path / "survey.csv"
    path.write_text(
        'user,Q1\n'
        '007,"multi\nline, with comma"\n'
        'NA,N/A\n',
        encoding="utf-8",
    )

    matrix = DataLoader().load_matrix(str(path))

    assert matrix[1] == ["007", "multi\nline, with comma"]
    assert matrix[2] == ["NA", "N/A"]


def test_tsv_and_encoding_fallback(tmp_path):
    path = tmp_path / "survey.tsv"
    path.write_bytes("\tQ1\nu1\tcafé\n".encode("latin-1"))

    matrix = DataLoader().load_matrix(str(path))

    assert matrix == [[None, "Q1"], ["u1", "café"]]


def test_xlsx_first_sheet(tmp_path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append([None, "U1", "U2"])
    sheet.append(["Q1", "good", 5])
    sheet.append(["Q2", None, "bad"])
    path = tmp_path / "survey.xlsx"
    workbook.save(path)

    matrix = DataLoader().load_matrix(str(path))

    assert matrix[0] == [None, "U1", "U2"]
    assert matrix[1] == ["Q1", "good", 5]
    assert matrix[2] == ["Q2", None, "bad"]


def test_xlsx_named_sheet(tmp_path):
    workbook = Workbook()
    workbook.active.append(["ignored"])
    other = workbook.create_sheet("Responses")
    other.append([None, "Q1"])
    other.append(["u1", "yes"])
    path = tmp_path / "survey.xlsx"
    workbook.save(path)

    matrix = DataLoader().load_matrix(str(path), sheet_name="Responses")

    assert matrix == [[None, "Q1"], ["u1", "yes"]]


def test_missing_file_fails_validation(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        DataLoader().load_matrix(str(tmp_path / "missing.csv"))


def test_unsupported_extension_fails_validation(tmp_path):
    path = tmp_path / "survey.json"
    path.write_text("{}", encoding="utf-8")

    with pytest.raises(ValueError, match="Unsupported file format"):
        DataLoader().load_matrix(str(path))


def test_legacy_xls_is_rejected(tmp_path):
    path = tmp_path / "survey.xls"
    path.write_bytes(b"\xd0\xcf\x11\xe0")

    with pytest.raises(ValueError, match="Unsupported file format: .xls"):
        DataLoader().load_matrix(str(path))
