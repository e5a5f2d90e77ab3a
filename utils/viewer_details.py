"""
Display details for the course-material pages: who is viewing and who teaches them.

Lookups never fail the page. When the database has no row (or errors out)
the values cached in the Flask session at login are used instead.
"""
import logging

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models.user_models import db, User, STUDENT_ROLE, INSTRUCTOR_ROLE
from models.class_model import ClassBatch
from models.course_model import Course
from models.enrollment_model import Enrollment
from utils.access_control import COURSE_TITLE_FRAGMENT

logger = logging.getLogger(__name__)


def _from_session(cached):
    return {
        "email": cached.get("user_email") or "",
        "first_name": cached.get("first_name") or "",
        "last_name": cached.get("last_name") or "",
    }


def load_user_details(user_id, cached):
    """Return {'email', 'first_name', 'last_name'} for the viewer."""
    try:
        user = db.session.get(User, user_id)
    except SQLAlchemyError as e:
        logger.warning(f"Could not load user {user_id}, using session values: {e}")
        db.session.rollback()
        return _from_session(cached)

    if not user:
        logger.warning(f"User {user_id} not found, using session values")
        return _from_session(cached)

    return {"email": user.email, "first_name": user.first_name, "last_name": user.last_name}


def _active_instructor_filter():
    return (User.role == INSTRUCTOR_ROLE) & (User.status == "active")


def _class_instructor(class_id):
    return (
        db.session.query(User)
        .join(ClassBatch, ClassBatch.instructor_id == User.id)
        .filter(ClassBatch.id == class_id, _active_instructor_filter())
        .first()
    )


def _enrolled_course_instructor(student_id):
    """Instructor of a Word class the student is enrolled in (lowest class id)."""
    return (
        db.session.query(User)
        .join(ClassBatch, ClassBatch.instructor_id == User.id)
        .join(Course, ClassBatch.course_id == Course.id)
        .join(Enrollment, Enrollment.class_id == ClassBatch.id)
        .filter(
            Enrollment.student_id == student_id,
            Course.title.like(f"%{COURSE_TITLE_FRAGMENT}%"),
            _active_instructor_filter(),
        )
        .order_by(ClassBatch.id)
        .first()
    )


def load_instructor_details(class_id, user_id, role, cached):
    """Return {'name', 'email'} for the instructor shown on the material.

    Order: the class batch's active instructor, then (for students browsing without
    a class) the instructor of their Word class, then the session cache,
    then the configured defaults.
    """
    try:
        if class_id is not None:
            instructor = _class_instructor(class_id)
        elif role == STUDENT_ROLE:
            instructor = _enrolled_course_instructor(user_id)
        else:
            instructor = None
    except SQLAlchemyError as e:
        logger.warning(f"Instructor lookup failed (class={class_id}, user={user_id}): {e}")
        db.session.rollback()
        instructor = None

    if instructor:
        return {"name": instructor.full_name, "email": instructor.email}

    # Empty cached strings count as missing
    config = current_app.config
    return {
        "name": cached.get("instructor_name") or config["DEFAULT_INSTRUCTOR_NAME"],
        "email": cached.get("instructor_email") or config["DEFAULT_INSTRUCTOR_EMAIL"],
    }
