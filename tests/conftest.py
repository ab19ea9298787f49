"""
Shared fixtures: an application on an in-memory database, a test client and
bearer headers for the different roles.
"""
import pytest
from flask_jwt_extended import create_access_token

from learnplaces import create_app
from learnplaces.application.learnplaces.create_learnplace import create_learnplace
from learnplaces.extensions import db as _db
from learnplaces.models.user import User


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", UPLOAD_FOLDER=str(tmp_path / "uploads"))
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


def _user(db, email, role):
    user = User()
    user.email = email
    user.role = role
    user.set_password("s3cret")
    db.session.add(user)
    db.session.commit()
    return user


def _bearer(user):
    token = create_access_token(identity=str(user.id), additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor(db):
    return _user(db, "editor@example.com", "editor")


@pytest.fixture
def admin(db):
    return _user(db, "admin@example.com", "admin")


@pytest.fixture
def reader(db):
    return _user(db, "reader@example.com", "user")


@pytest.fixture
def editor_headers(editor):
    return _bearer(editor)


@pytest.fixture
def admin_headers(admin):
    return _bearer(admin)


@pytest.fixture
def reader_headers(reader):
    return _bearer(reader)


@pytest.fixture
def learnplace(app):
    return create_learnplace(data={
        "object_id": 42,
        "title": "Old town",
        "configuration": {"default_visibility": "ONLY_AT_PLACE"},
        "location": {"latitude": 46.95, "longitude": 7.44, "radius": 250},
    })


@pytest.fixture
def create_block(client, editor_headers, learnplace):
    """POST a block and return the decoded response."""
    def _create(kind, payload=None, position=None, accordion=None, expect=201):
        query = {}
        if position is not None:
            query["position"] = position
        if accordion is not None:
            query["accordion"] = accordion
        response = client.post(
            f"/api/v1/learnplaces/{learnplace.id}/blocks/{kind}",
            json=payload or {},
            query_string=query,
            headers=editor_headers,
        )
        assert response.status_code == expect, response.get_json()
        return response.get_json()
    return _create
