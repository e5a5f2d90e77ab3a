from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Roles allowed to open course materials; other portal roles exist in the same table.
STUDENT_ROLE = "student"
INSTRUCTOR_ROLE = "instructor"


class User(db.Model):
    """Portal account. Owned by the user-management service, read-only here."""
    __tablename__ = "users"
    __table_args__ = {'extend_existing': True}

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(100), unique=True, nullable=False)
    first_name = db.Column(db.String(50), nullable=False)
    last_name = db.Column(db.String(50), nullable=False)
    role = db.Column(db.String(20), nullable=False)  # student / instructor / admin ...
    status = db.Column(db.String(20), nullable=False, default="active")

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
