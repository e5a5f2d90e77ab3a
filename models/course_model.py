from models.user_models import db


class Course(db.Model):
    __tablename__ = 'courses'
    __table_args__ = {'extend_existing': True}

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)

    def __repr__(self):
        return f"<Course {self.title}>"
