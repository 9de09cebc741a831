import pytest
from sqlalchemy.exc import IntegrityError

from utils.db_errors import CHECK, FOREIGN_KEY, OTHER, UNIQUE, classify_integrity_error


class FakeMySQLError(Exception):
    pass


def _wrap(orig):
    return IntegrityError("INSERT ...", {}, orig)


@pytest.mark.parametrize("code, kind", [(1062, UNIQUE), (1451, FOREIGN_KEY), (1452, FOREIGN_KEY), (3819, CHECK)])
def test_mysql_codes(code, kind):
    assert classify_integrity_error(_wrap(FakeMySQLError(code, "..."))) == kind


@pytest.mark.parametrize("message, kind", [
    ("UNIQUE constraint failed: person.email", UNIQUE),
    ("FOREIGN KEY constraint failed", FOREIGN_KEY),
    ("CHECK constraint failed: ck_grade_score_0_100", CHECK),
    ("NOT NULL constraint failed: grade.score", OTHER),
])
def test_sqlite_messages(message, kind):
    assert classify_integrity_error(_wrap(Exception(message))) == kind
