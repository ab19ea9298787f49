from datetime import datetime, timezone
from learnplaces.extensions import db


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utc_now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def __init__(self, **kwargs):
        """
        Dummy __init__ to satisfy static type checkers (Pylance, MyPy).
        SQLAlchemy ORM will populate fields dynamically.
        """
        super().__init__(**kwargs)
