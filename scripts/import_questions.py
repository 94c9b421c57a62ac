from __future__ import annotations

import argparse
import asyncio
import csv
import re
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.questions import Question
from app.db.repo.categories_repo import CategoriesRepo
from app.db.repo.questions_repo import QuestionsRepo
from app.db.session import SessionLocal, dispose_engine
from app.game.questions.types import OPTION_LETTERS

REQUIRED_COLUMNS = {
    "category",
    "question",
    "option_a",
    "option_b",
    "option_c",
    "option_d",
    "correct_option",
}
CATEGORY_NAME_MAX_LENGTH = 100


@dataclass(slots=True)
class ImportSummary:
    total_rows_read: int = 0
    total_rows_imported: int = 0
    categories_created: int = 0


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import multiple-choice questions from CSV files.")
    parser.add_argument("paths", nargs="+", type=Path, help="CSV files to import.")
    parser.add_argument("--dry-run", action="store_true")
    return parser.parse_args(argv)


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip()


def _read_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        fieldnames = set(reader.fieldnames or [])
        missing = sorted(REQUIRED_COLUMNS - fieldnames)
        if missing:
            missing_str = ", ".join(missing)
            raise ValueError(f"{path.name}: missing required columns: {missing_str}")
        return [dict(row) for row in reader]


def build_records(path: Path, rows: list[dict[str, str]]) -> list[dict[str, str]]:
    records: list[dict[str, str]] = []
    seen: set[tuple[str, str]] = set()
    for row_index, row in enumerate(rows, start=2):
        category = _clean(row.get("category"))
        if not category:
            raise ValueError(f"{path.name}:{row_index}: empty category")
        if len(category) > CATEGORY_NAME_MAX_LENGTH:
            raise ValueError(f"{path.name}:{row_index}: category exceeds {CATEGORY_NAME_MAX_LENGTH} characters")

        question_text = _clean(row.get("question"))
        if not question_text:
            raise ValueError(f"{path.name}:{row_index}: empty question")

        options = {letter: _clean(row.get(f"option_{letter.lower()}")) for letter in OPTION_LETTERS}
        if not all(options.values()):
            raise ValueError(f"{path.name}:{row_index}: all options must be non-empty")

        correct_option = _clean(row.get("correct_option")).upper()
        if correct_option not in OPTION_LETTERS:
            raise ValueError(f"{path.name}:{row_index}: invalid correct_option={correct_option!r}")

        key = (category.lower(), question_text.lower())
        if key in seen:
            raise ValueError(f"{path.name}:{row_index}: duplicate question in import set")
        seen.add(key)

        records.append(
            {
                "category": category,
                "question_text": question_text,
                "option_a": options["A"],
                "option_b": options["B"],
                "option_c": options["C"],
                "option_d": options["D"],
                "correct_option": correct_option,
            }
        )
    return records


async def _resolve_category_id(
    session: AsyncSession,
    *,
    name: str,
    cache: dict[str, int],
    summary: ImportSummary,
) -> int:
    cache_key = name.lower()
    if cache_key in cache:
        return cache[cache_key]

    category = await CategoriesRepo.get_by_name(session, name)
    if category is None:
        category = await CategoriesRepo.create(session, name=name)
        summary.categories_created += 1
    cache[cache_key] = category.id
    return category.id


async def _persist_records(records: list[dict[str, str]], summary: ImportSummary) -> None:
    if not records:
        raise ValueError("no importable rows found")

    category_ids: dict[str, int] = {}
    async with SessionLocal.begin() as session:
        for record in records:
            category_id = await _resolve_category_id(
                session,
                name=record["category"],
                cache=category_ids,
                summary=summary,
            )
            await QuestionsRepo.create(
                session,
                question=Question(
                    category_id=category_id,
                    question_text=record["question_text"],
                    option_a=record["option_a"],
                    option_b=record["option_b"],
                    option_c=record["option_c"],
                    option_d=record["option_d"],
                    correct_option=record["correct_option"],
                ),
            )


async def _run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    summary = ImportSummary()
    by_category = Counter[str]()
    records: list[dict[str, str]] = []

    for path in args.paths:
        if not path.is_file():
            raise ValueError(f"input file does not exist: {path}")
        rows = _read_csv(path)
        summary.total_rows_read += len(rows)
        file_records = build_records(path, rows)
        records.extend(file_records)
        by_category.update(record["category"] for record in file_records)

    summary.total_rows_imported = len(records)
    if not args.dry_run:
        await _persist_records(records, summary)

    category_stats = ", ".join(f"{name}={count}" for name, count in sorted(by_category.items()))
    print(  # noqa: T201
        "questions_import "
        f"rows_read={summary.total_rows_read} "
        f"rows_imported={summary.total_rows_imported} "
        f"categories_created={summary.categories_created} "
        f"dry_run={args.dry_run}"
    )
    print(f"questions_import_by_category {category_stats}")  # noqa: T201
    return 0


async def _run_with_db_cleanup(argv: list[str] | None = None) -> int:
    try:
        return await _run(argv)
    finally:
        await dispose_engine()


def main() -> int:
    return asyncio.run(_run_with_db_cleanup())


if __name__ == "__main__":
    raise SystemExit(main())
