from __future__ import annotations

from pathlib import Path

import pytest

from scripts import import_questions
from scripts.import_questions import _read_csv, build_records

HEADER = "category,question,option_a,option_b,option_c,option_d,correct_option\n"


def _row(**overrides: str) -> dict[str, str]:
    row = {
        "category": "Geography",
        "question": "Capital of  Peru?",
        "option_a": "Lima",
        "option_b": "Quito",
        "option_c": "Bogota",
        "option_d": "La Paz",
        "correct_option": " a ",
    }
    row.update(overrides)
    return row


def test_build_records_normalizes_whitespace_and_letter() -> None:
    records = build_records(Path("bank.csv"), [_row()])

    assert records == [
        {
            "category": "Geography",
            "question_text": "Capital of Peru?",
            "option_a": "Lima",
            "option_b": "Quito",
            "option_c": "Bogota",
            "option_d": "La Paz",
            "correct_option": "A",
        }
    ]


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"category": " "}, "empty category"),
        ({"question": ""}, "empty question"),
        ({"option_c": ""}, "all options must be non-empty"),
        ({"correct_option": "E"}, "invalid correct_option"),
    ],
)
def test_build_records_rejects_invalid_rows(overrides: dict[str, str], message: str) -> None:
    with pytest.raises(ValueError, match=message):
        build_records(Path("bank.csv"), [_row(**overrides)])


def test_build_records_rejects_duplicates_within_import() -> None:
    with pytest.raises(ValueError, match="bank.csv:3: duplicate question"):
        build_records(Path("bank.csv"), [_row(), _row(question="capital of peru?")])


def test_read_csv_requires_all_columns(tmp_path: Path) -> None:
    path = tmp_path / "broken.csv"
    path.write_text("category,question\nGeography,Capital?\n", encoding="utf-8")

    with pytest.raises(ValueError, match="missing required columns"):
        _read_csv(path)


def test_read_csv_reads_rows(tmp_path: Path) -> None:
    path = tmp_path / "bank.csv"
    path.write_text(HEADER + "Geography,Capital of Peru?,Lima,Quito,Bogota,La Paz,A\n", encoding="utf-8")

    rows = _read_csv(path)

    assert len(rows) == 1
    assert rows[0]["option_a"] == "Lima"


@pytest.mark.asyncio
async def test_dry_run_reports_rows_and_releases_engine(tmp_path: Path, monkeypatch, capsys) -> None:
    disposed: list[bool] = []

    async def fake_dispose() -> None:
        disposed.append(True)

    async def fail_persist(records, summary):  # noqa: ANN001
        del records, summary
        raise AssertionError("dry run must not write")

    monkeypatch.setattr(import_questions, "dispose_engine", fake_dispose)
    monkeypatch.setattr(import_questions, "_persist_records", fail_persist)
    path = tmp_path / "bank.csv"
    path.write_text(HEADER + "Geography,Capital of Peru?,Lima,Quito,Bogota,La Paz,A\n", encoding="utf-8")

    exit_code = await import_questions._run_with_db_cleanup([str(path), "--dry-run"])

    assert exit_code == 0
    assert disposed == [True]
    assert "rows_imported=1" in capsys.readouterr().out
