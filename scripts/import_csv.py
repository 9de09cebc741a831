"""
CSV -> DB bulk loader.

    python -m scripts.import_csv person data/person.csv
    python -m scripts.import_csv enrolment data/enrolment.csv

Header names must match the table's column names. Empty cells load as NULL.
The whole file is one transaction: a bad row leaves the table untouched.
"""

import argparse
import csv
import enum
import logging
from datetime import date, datetime

from sqlalchemy.orm import Session

from database.db import Base, SessionLocal, atomic
from database.schema import import_models

logger = logging.getLogger(__name__)


def model_for_table(table_name: str):
    import_models()
    for mapper in Base.registry.mappers:
        if mapper.class_.__tablename__ == table_name:
            return mapper.class_
    raise ValueError(f"unknown table: {table_name}")


def _coerce(column, raw: str):
    if raw is None or raw.strip() == "":
        return None
    raw = raw.strip()
    python_type = column.type.python_type
    if issubclass(python_type, enum.Enum):
        return python_type(raw)
    if python_type is datetime:
        return datetime.fromisoformat(raw)
    if python_type is date:
        return date.fromisoformat(raw)
    return python_type(raw)


def load_rows(db: Session, model, rows) -> int:
    columns = {c.name: c for c in model.__table__.columns}
    count = 0
    with atomic(db):
        for row in rows:
            values = {name: _coerce(columns[name], raw) for name, raw in row.items() if name in columns}
            db.add(model(**values))
            count += 1
    return count


def import_csv(table_name: str, csv_path: str, db: Session = None) -> int:
    model = model_for_table(table_name)
    own_session = db is None
    db = db or SessionLocal()
    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            count = load_rows(db, model, csv.DictReader(csvfile))
    finally:
        if own_session:
            db.close()
    logger.info("%s: %d rows imported from %s", table_name, count, csv_path)
    return count


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Load one table from a CSV file")
    parser.add_argument("table")
    parser.add_argument("csv_path")
    args = parser.parse_args()
    import_csv(args.table, args.csv_path)
