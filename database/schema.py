import importlib
import logging

from database.db import Base, engine as default_engine

logger = logging.getLogger(__name__)

# every module that declares tables; import order follows FK dependencies
MODEL_MODULES = (
    "models.people",
    "models.students",
    "models.instructors",
    "models.courses",
    "models.terms",
    "models.class_offerings",
    "models.teaching_assignments",
    "models.class_sessions",
    "models.enrolments",
    "models.attendance",
    "models.assessment_types",
    "models.grades",
    "models.grades_attendance",
)


def import_models():
    for name in MODEL_MODULES:
        importlib.import_module(name)


def create_all(engine=None):
    """Create every table that does not exist yet."""
    import_models()
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)
    logger.info("schema ready (%d tables)", len(Base.metadata.tables))


def drop_all(engine=None):
    import_models()
    Base.metadata.drop_all(bind=engine or default_engine)
