from contextlib import contextmanager

from sqlalchemy import create_engine, event         # SQLAlchemy engine factory
from sqlalchemy.orm import declarative_base         # base class for models
from sqlalchemy.orm import sessionmaker             # session factory
from sqlalchemy.pool import StaticPool

from config.settings import settings                # ✅ env-driven settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, echo: bool = False):
    """Create the engine; SQLite gets one shared connection with FK enforcement."""
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, echo=echo, pool_pre_ping=True)


# ✅ engine built from the settings URL
engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# ✅ session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ declarative base shared by every model
Base = declarative_base()


# ==========================================================
# [common] request-scoped DB session
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db):
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
