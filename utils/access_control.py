"""
Access checks for the Word (MO-100) course materials.

Every check is an existence query: a COUNT(*) over the enrollment / class
batch / course joins, restricted to the Word course by title. A viewer has
access when the count is non-zero.
"""
import logging

from sqlalchemy import func

from models.user_models import db, STUDENT_ROLE, INSTRUCTOR_ROLE
from models.class_model import ClassBatch
from models.course_model import Course
from models.enrollment_model import Enrollment, ACCESS_STATUSES

logger = logging.getLogger(__name__)

ALLOWED_ROLES = (STUDENT_ROLE, INSTRUCTOR_ROLE)
COURSE_TITLE_FRAGMENT = "Microsoft Word (Office 2019)"


def _word_course_filter():
    return Course.title.like(f"%{COURSE_TITLE_FRAGMENT}%")


def parse_class_id(raw):
    """Return a positive int class id, or None when absent or malformed."""
    if raw is None:
        return None
    try:
        class_id = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return class_id if class_id > 0 else None


def count_student_access(user_id, class_id=None):
    query = (
        db.session.query(func.count(Enrollment.id))
        .join(ClassBatch, Enrollment.class_id == ClassBatch.id)
        .join(Course, ClassBatch.course_id == Course.id)
        .filter(
            Enrollment.student_id == user_id,
            Enrollment.status.in_(ACCESS_STATUSES),
            _word_course_filter(),
        )
    )
    if class_id is not None:
        query = query.filter(Enrollment.class_id == class_id)
    return int(query.scalar() or 0)


def count_instructor_access(user_id, class_id=None):
    query = (
        db.session.query(func.count(ClassBatch.id))
        .join(Course, ClassBatch.course_id == Course.id)
        .filter(ClassBatch.instructor_id == user_id, _word_course_filter())
    )
    if class_id is not None:
        query = query.filter(ClassBatch.id == class_id)
    return int(query.scalar() or 0)


def has_material_access(user_id, role, class_id=None):
    """Return True if the viewer may open a Word material.

    With ``class_id`` the check is scoped to that class batch, otherwise any
    Word class the viewer studies in (active/completed) or teaches counts.
    Database errors propagate to the caller.
    """
    if role == STUDENT_ROLE:
        count = count_student_access(user_id, class_id)
    elif role == INSTRUCTOR_ROLE:
        count = count_instructor_access(user_id, class_id)
    else:
        return False

    logger.debug(f"Access count for user {user_id} ({role}) class={class_id}: {count}")
    return count > 0
