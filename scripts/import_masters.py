# scripts/import_masters.py
"""
Bulk-load master records from a CSV file.

The header row names the fields (``code,name,phone,...``). Every row is
validated with the kind's create schema; rows that fail, and rows repeating
a unique value seen earlier in the file, are reported and skipped. The
remaining rows are inserted in a single transaction.

Usage example:
    python scripts/import_masters.py customers data/customers.csv --dry-run
"""

import argparse
import csv
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from inventory_admin.config import settings
from inventory_admin.db.engine import get_engine
from inventory_admin.db.repository import EntityRepository, Outcome
from inventory_admin.db.store import TableStore
from inventory_admin.entities import ENTITIES, EntityKind, get_kind
from inventory_admin.logging_setup import configure_logging
from inventory_admin.validation import format_errors, validate

logger = logging.getLogger(__name__)

MAX_EXAMPLES = 5

BOOLEAN_CELLS = {
    "true": True,
    "false": False,
    "yes": True,
    "no": False,
    "1": True,
    "0": False,
}


def boolean_columns(kind: EntityKind) -> List[str]:
    return [
        name
        for name, info in kind.create_model.model_fields.items()
        if info.annotation is bool
    ]


def parse_cells(row: Dict[str, Any], booleans: Sequence[str]) -> Dict[str, Any]:
    """
    CSV cells are always text. Boolean columns are parsed here so the
    schemas can stay strict for JSON input; unrecognised text is left for
    validation to report.
    """
    parsed = dict(row)
    for name in booleans:
        cell = parsed.get(name)
        if isinstance(cell, str) and cell.strip().lower() in BOOLEAN_CELLS:
            parsed[name] = BOOLEAN_CELLS[cell.strip().lower()]
    return parsed


def parse_masters_csv(kind: EntityKind, file_path: str) -> Tuple[List[BaseModel], Dict[str, Any]]:
    values: List[BaseModel] = []

    n_rows = 0
    n_errors = 0
    error_examples: List[Dict[str, Any]] = []

    booleans = boolean_columns(kind)
    seen = {rule.column: set() for rule in kind.unique}
    duplicate_count = 0
    duplicate_examples: List[str] = []

    with open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)

        for row in reader:
            n_rows += 1

            result = validate(kind.create_model, parse_cells(row, booleans))
            if not result.ok:
                n_errors += 1
                if len(error_examples) < MAX_EXAMPLES:
                    error_examples.append(
                        {
                            "row_number": n_rows,
                            "row": dict(row),
                            "errors": format_errors(result),
                        }
                    )
                continue

            duplicate = None
            for column, values_seen in seen.items():
                value = getattr(result.value, column, None)
                if value is not None and value in values_seen:
                    duplicate = (column, value)
                    break

            if duplicate is not None:
                duplicate_count += 1
                if len(duplicate_examples) < MAX_EXAMPLES:
                    duplicate_examples.append(
                        f"Duplicate {duplicate[0]} {duplicate[1]!r} at CSV row {n_rows}"
                    )
                continue

            for column, values_seen in seen.items():
                value = getattr(result.value, column, None)
                if value is not None:
                    values_seen.add(value)

            values.append(result.value)

    stats = {
        "n_rows": n_rows,
        "n_valid": len(values),
        "n_errors": n_errors,
        "error_examples": error_examples,
        "n_duplicates": duplicate_count,
        "duplicate_examples": duplicate_examples,
    }
    return values, stats


def load_into_db(repo: EntityRepository, kind: EntityKind, values: Sequence[BaseModel]) -> Outcome:
    """All or nothing: one rejected row leaves the table untouched."""
    return repo.batch_create(kind, values)


def log_stats(kind: EntityKind, stats: Dict[str, Any]) -> None:
    logger.info("Total CSV rows read:   %s", stats["n_rows"])
    logger.info("Valid %s rows:         %s", kind.label.lower(), stats["n_valid"])
    logger.info("Rows with errors:      %s", stats["n_errors"])
    logger.info("Duplicates in file:    %s", stats["n_duplicates"])

    for example in stats["duplicate_examples"]:
        logger.warning("Duplicate example: %s", example)

    if stats["error_examples"]:
        logger.warning("Example errors:")
        for ex in stats["error_examples"]:
            logger.warning("Row %s: %s", ex["row_number"], ex["errors"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import master records from a CSV file.")
    parser.add_argument("kind", choices=sorted(ENTITIES), help="Master table to load")
    parser.add_argument("csv_path", help="CSV file with a header row of field names")
    parser.add_argument("--dry-run", action="store_true", help="Validate only; write nothing")
    return parser


def main(argv: Optional[Sequence[str]] = None, repo: Optional[EntityRepository] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    kind = get_kind(args.kind)
    values, stats = parse_masters_csv(kind, args.csv_path)
    log_stats(kind, stats)

    if args.dry_run:
        logger.info("Dry run: nothing written.")
        return 0

    if repo is None:
        repo = EntityRepository(TableStore(get_engine()))

    outcome = load_into_db(repo, kind, values)
    if not outcome.ok:
        logger.error("Import aborted (%s): %s", outcome.status.value, outcome.message)
        return 1

    logger.info("Inserted %d %s.", len(outcome.value), kind.plural.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
