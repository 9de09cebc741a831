"""Create every LMS table in the configured database (idempotent)."""

import logging

from database.schema import create_all

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_all()
