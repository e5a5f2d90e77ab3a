#!/usr/bin/env python3
"""Create the portal tables on a development database and insert a demo Word class.

Usage:
  DATABASE_URL=sqlite:///course_materials.db python -m scripts.seed_demo_data

Never point this at the production database: the tables there belong to the
enrollment and user-management services.
"""
from app import app
from models.user_models import db, User
from models.class_model import ClassBatch
from models.course_model import Course
from models.enrollment_model import Enrollment

DEMO_COURSE_TITLE = "Microsoft Word (Office 2019) Certification Prep"

DEMO_USERS = [
    ("instructor@example.com", "Grace", "Hopper", "instructor"),
    ("student@example.com", "Ada", "Lovelace", "student"),
]


def seed_demo_data():
    """Insert the demo rows if missing; return the demo class batch."""
    db.create_all()

    users = {}
    for email, first_name, last_name, role in DEMO_USERS:
        user = User.query.filter_by(email=email).first()
        if not user:
            user = User(email=email, first_name=first_name, last_name=last_name, role=role, status="active")
            db.session.add(user)
            print(f"✅ Inserted {role} {email}")
        else:
            print(f"⚠️ {email} already exists")
        users[role] = user

    course = Course.query.filter_by(title=DEMO_COURSE_TITLE).first()
    if not course:
        course = Course(title=DEMO_COURSE_TITLE)
        db.session.add(course)
    db.session.flush()

    class_batch = ClassBatch.query.filter_by(course_id=course.id, instructor_id=users["instructor"].id).first()
    if not class_batch:
        class_batch = ClassBatch(course_id=course.id, instructor_id=users["instructor"].id)
        db.session.add(class_batch)
        db.session.flush()

    enrollment = Enrollment.query.filter_by(student_id=users["student"].id, class_id=class_batch.id).first()
    if not enrollment:
        db.session.add(Enrollment(student_id=users["student"].id, class_id=class_batch.id, status="active"))

    db.session.commit()
    print(f"🎉 Demo class batch {class_batch.id} ready.")
    return class_batch


if __name__ == '__main__':
    with app.app_context():
        seed_demo_data()
