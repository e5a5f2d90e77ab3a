"""
Shared fixtures: the Flask app on an in-memory SQLite database seeded with
a small Word / Excel course catalogue.
"""
import os

import pytest

# Must be set before app.py is imported (load_dotenv never overrides it)
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret")

from app import app as flask_app
from models.user_models import db, User
from models.class_model import ClassBatch
from models.course_model import Course
from models.enrollment_model import Enrollment


def _seed():
    users = {
        "instructor": User(email="grace@example.com", first_name="Grace", last_name="Hopper", role="instructor"),
        "other_instructor": User(email="alan@example.com", first_name="Alan", last_name="Turing", role="instructor"),
        "student": User(email="ada@example.com", first_name="Ada", last_name="Lovelace", role="student"),
        "completed_student": User(email="katherine@example.com", first_name="Katherine", last_name="Johnson", role="student"),
        "dropped_student": User(email="linus@example.com", first_name="Linus", last_name="Torvalds", role="student"),
        "excel_student": User(email="barbara@example.com", first_name="Barbara", last_name="Liskov", role="student"),
    }
    db.session.add_all(users.values())

    word = Course(title="Microsoft Word (Office 2019) Certification Prep")
    excel = Course(title="Microsoft Excel (Office 2019) Certification Prep")
    db.session.add_all([word, excel])
    db.session.flush()

    word_class = ClassBatch(course_id=word.id, instructor_id=users["instructor"].id)
    other_word_class = ClassBatch(course_id=word.id, instructor_id=users["other_instructor"].id)
    excel_class = ClassBatch(course_id=excel.id, instructor_id=users["instructor"].id)
    db.session.add_all([word_class, other_word_class, excel_class])
    db.session.flush()

    db.session.add_all([
        Enrollment(student_id=users["student"].id, class_id=word_class.id, status="active"),
        Enrollment(student_id=users["completed_student"].id, class_id=other_word_class.id, status="completed"),
        Enrollment(student_id=users["dropped_student"].id, class_id=word_class.id, status="dropped"),
        Enrollment(student_id=users["excel_student"].id, class_id=excel_class.id, status="active"),
    ])
    db.session.commit()

    ids = {name: user.id for name, user in users.items()}
    ids.update(
        word_class=word_class.id,
        other_word_class=other_word_class.id,
        excel_class=excel_class.id,
    )
    return ids


@pytest.fixture
def app():
    flask_app.config["TESTING"] = True
    with flask_app.app_context():
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def seeded(app):
    """Ids of the seeded users and class batches."""
    return _seed()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put a user into the Flask session the way the portal login does."""
    def _login(user_id, role, **cached):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["user_role"] = role
            sess.update(cached)
        return client
    return _login
