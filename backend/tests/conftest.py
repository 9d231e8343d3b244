import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from marketplace.database import get_db, get_engine, init_db
from marketplace.main import app
from marketplace.models import Role, User

PASSWORD = "correct-horse-battery"


@pytest.fixture
def test_db(tmp_path):
    db_path = tmp_path / "marketplace.sqlite"
    engine = get_engine(db_path)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    init_db(db_path)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def client(test_db):
    return TestClient(app)


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(client, test_db):
    """Register and log in a user; ``admin=True`` grants ADMIN before login."""
    counter = itertools.count(1)

    def _make(username: str | None = None, admin: bool = False):
        username = username or f"user{next(counter)}"
        r = client.post("/api/auth/register", json={
            "name": username.title(),
            "username": username,
            "email": f"{username}@example.com",
            "password": PASSWORD,
        })
        assert r.status_code == 201, r.text
        user_id = r.json()["data"]["id"]

        if admin:
            with test_db() as db:
                user = db.get(User, user_id)
                user.roles.append(db.query(Role).filter(Role.code == "ADMIN").one())
                db.commit()

        r = client.post("/api/auth/login", json={"emailOrUsername": username, "password": PASSWORD})
        assert r.status_code == 200, r.text
        data = r.json()["data"]
        return SimpleNamespace(
            id=user_id,
            username=username,
            headers=auth_headers(data["accessToken"]),
            refresh_token=data["refreshToken"],
        )

    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin", admin=True)


@pytest.fixture
def approved_business(client, admin):
    def _create(owner, name: str = "Acme"):
        r = client.post("/api/businesses", json={"name": name}, headers=owner.headers)
        assert r.status_code == 201, r.text
        business_id = r.json()["data"]["id"]
        r = client.patch(
            f"/api/admin/businesses/{business_id}/status",
            json={"status": "APPROVED"},
            headers=admin.headers,
        )
        assert r.status_code == 200, r.text
        return r.json()["data"]

    return _create


def job_payload(business_id: str, **overrides) -> dict:
    payload = {
        "businessId": business_id,
        "title": "Backend Engineer",
        "locationType": "REMOTE",
        "locationText": "Jakarta",
        "employmentType": "FULL_TIME",
        "description": "Build APIs",
    }
    payload.update(overrides)
    return payload


def event_payload(**overrides) -> dict:
    payload = {
        "title": "Python Meetup",
        "description": "Talks and networking",
        "location": "Bandung",
        "startDatetime": "2030-05-01T09:00:00Z",
        "endDatetime": "2030-05-01T17:00:00Z",
    }
    payload.update(overrides)
    return payload
