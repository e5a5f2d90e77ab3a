from models.user_models import db

# Enrollment states that still grant access to course materials
ACCESS_STATUSES = ("active", "completed")


class Enrollment(db.Model):
    __tablename__ = "enrollments"
    __table_args__ = {'extend_existing': True}

    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    class_id = db.Column(db.Integer, db.ForeignKey("class_batches.id"), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default="active")  # active / completed / dropped ...

    student = db.relationship("User", backref="enrollments", lazy=True)
    class_batch = db.relationship("ClassBatch", backref="enrollments", lazy=True)

    def __repr__(self):
        return f"<Enrollment Student={self.student_id} Class={self.class_id} {self.status}>"
