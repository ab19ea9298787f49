from contextlib import contextmanager
from learnplaces.extensions import db

@contextmanager
def transactional():
    """
    Commit the session when the block exits cleanly,
    roll back and re-raise otherwise.
    """
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
