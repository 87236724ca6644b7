import os

os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("MAPBOX_TOKEN", "test-token")

import pytest

from app import app as flask_app, db


@pytest.fixture()
def app():
    flask_app.config["TESTING"] = True
    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_idea(client):
    def _make(title, lat=None, lng=None, **extra):
        payload = {"title": title, "lat": lat, "lng": lng}
        payload.update(extra)
        resp = client.post("/api/ideas", json=payload)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()
    return _make
