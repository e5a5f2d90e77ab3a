from models.user_models import db  # ✅ Use shared db


class ClassBatch(db.Model):
    __tablename__ = 'class_batches'
    __table_args__ = {'extend_existing': True}  # ✅ Prevents "already defined" error

    id = db.Column(db.Integer, primary_key=True)
    instructor_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    course_id = db.Column(db.Integer, db.ForeignKey("courses.id"), nullable=False)

    instructor = db.relationship("User", backref="class_batches", lazy=True)
    course = db.relationship("Course", backref="class_batches", lazy=True)

    def __repr__(self):
        return f"<ClassBatch {self.id} Course={self.course_id} Instructor={self.instructor_id}>"
