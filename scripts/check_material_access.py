#!/usr/bin/env python3
"""Show which Word course materials a user can open and which instructor they would see.

Usage:
  python -m scripts.check_material_access 42               # general access for user 42
  python -m scripts.check_material_access 42 --class 7     # scoped to class batch 7

Reads DATABASE_URL from .env or environment (through app.py).
"""
import argparse

from sqlalchemy.exc import SQLAlchemyError

from app import app
from models.user_models import db, User
from utils.access_control import has_material_access
from utils.materials import all_materials
from utils.viewer_details import load_instructor_details


def material_report(user_id, class_id=None):
    """Return (user, rows, instructor); rows are (slug, title, allowed) per material."""
    user = db.session.get(User, user_id)
    if not user:
        return None, [], None

    rows = []
    for material in all_materials():
        scope = class_id if material.class_scoped_access else None
        rows.append((material.slug, material.title, has_material_access(user.id, user.role, scope)))

    instructor = load_instructor_details(class_id, user.id, user.role, {})
    return user, rows, instructor


def main(argv=None):
    parser = argparse.ArgumentParser(description="Check Word course material access for a user")
    parser.add_argument('user_id', type=int, help='users.id to check')
    parser.add_argument('--class', dest='class_id', type=int, default=None, help='class_batches.id to scope the check to')
    args = parser.parse_args(argv)

    with app.app_context():
        try:
            user, rows, instructor = material_report(args.user_id, args.class_id)
        except SQLAlchemyError as e:
            print(f"Error querying database: {e}")
            return 1

    if not user:
        print(f"No user with id {args.user_id}.")
        return 1

    print(f"User {user.id}: {user.full_name} <{user.email}> role={user.role}")
    if args.class_id:
        print(f"Class batch: {args.class_id}")
    print(f"Instructor shown: {instructor['name']} <{instructor['email']}>\n")

    width = max(len(slug) for slug, _, _ in rows)
    for slug, title, allowed in rows:
        print(f"{slug.ljust(width)} | {'ALLOWED' if allowed else 'DENIED '} | {title}")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
