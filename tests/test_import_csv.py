import pytest

from models.courses import Course
from models.people import Person
from models.terms import Term
from scripts.import_csv import import_csv, model_for_table


def test_model_for_table():
    assert model_for_table("person") is Person
    with pytest.raises(ValueError):
        model_for_table("nope")


def test_import_coerces_column_types(tmp_path, db):
    path = tmp_path / "term.csv"
    path.write_text("term_id,start_date,end_date,term_label\n7,2025-02-10,2025-05-02,2025 T1\n", encoding="utf-8")

    assert import_csv("term", str(path), db=db) == 1

    term = db.get(Term, 7)
    assert term.start_date.isoformat() == "2025-02-10"
    assert term.term_label == "2025 T1"


def test_empty_cells_load_as_null(tmp_path, db):
    path = tmp_path / "course.csv"
    path.write_text(
        "course_code,course_name,credit,course_description\nCS101,Intro,6,\n",
        encoding="utf-8",
    )
    import_csv("course", str(path), db=db)
    assert db.get(Course, "CS101").course_description is None


def test_bad_row_rolls_back_whole_file(tmp_path, db):
    path = tmp_path / "person.csv"
    path.write_text(
        "full_name,email\nAda,ada@uni.test\nAda again,ada@uni.test\n",
        encoding="utf-8",
    )
    with pytest.raises(Exception):
        import_csv("person", str(path), db=db)
    assert db.query(Person).count() == 0
