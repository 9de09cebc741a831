from sqlalchemy.exc import IntegrityError

UNIQUE = "unique"
FOREIGN_KEY = "foreign_key"
CHECK = "check"
OTHER = "other"

# MySQL server error codes
_MYSQL_CODES = {
    1062: UNIQUE,        # ER_DUP_ENTRY
    1451: FOREIGN_KEY,   # ER_ROW_IS_REFERENCED_2
    1452: FOREIGN_KEY,   # ER_NO_REFERENCED_ROW_2
    3819: CHECK,         # ER_CHECK_CONSTRAINT_VIOLATED
}


def classify_integrity_error(exc: IntegrityError) -> str:
    """Map a driver-level IntegrityError to UNIQUE / FOREIGN_KEY / CHECK / OTHER."""
    orig = exc.orig
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in _MYSQL_CODES:
        return _MYSQL_CODES[args[0]]

    message = str(orig).lower()
    if "unique" in message or "duplicate" in message:
        return UNIQUE
    if "foreign key" in message:
        return FOREIGN_KEY
    if "check constraint" in message:
        return CHECK
    return OTHER
