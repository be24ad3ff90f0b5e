import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["MEDIA_BASE_URL"] = "https://media.weblog.test"

import pytest
from fastapi.testclient import TestClient

from main import app
from weblog.core.config import get_settings
from weblog.core.security import TokenIssuer
from weblog.db import models  # noqa: F401
from weblog.db.base import Base
from weblog.db.models import Category
from weblog.db.seed import seed_categories
from weblog.db.session import SessionLocal, engine
from weblog.services import media


@pytest.fixture(autouse=True)
def database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        seed_categories(session)
    finally:
        session.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def issuer():
    return TokenIssuer(get_settings())


@pytest.fixture
def category_id(db):
    return db.query(Category).filter(Category.name == "Tech").one().id


class FakeCloudinary:
    """Records uploads/destroys instead of talking to Cloudinary."""

    def __init__(self):
        self.uploads = []
        self.destroyed = []
        self.fail_destroy = False

    def upload(self, data, folder=None, public_id=None, **kwargs):
        full_id = f"{folder}/{public_id}_{len(self.uploads)}"
        self.uploads.append(full_id)
        return {"secure_url": f"https://res.cloudinary.com/demo/image/upload/{full_id}.png", "public_id": full_id}

    def destroy(self, public_id, **kwargs):
        if self.fail_destroy:
            from cloudinary.exceptions import Error
            raise Error("cloudinary is down")
        self.destroyed.append(public_id)
        return {"result": "ok"}


@pytest.fixture(autouse=True)
def cloudinary_store(monkeypatch):
    fake = FakeCloudinary()
    monkeypatch.setattr(media.uploader, "upload", fake.upload)
    monkeypatch.setattr(media.uploader, "destroy", fake.destroy)
    return fake


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(username, email=None, password="secret1"):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email or f"{username}@x.com", "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], auth_headers(body["token"])

    return _register


@pytest.fixture
def alice(register):
    return register("alice", "alice@x.com")


@pytest.fixture
def bob(register):
    return register("bob", "bob@x.com")


@pytest.fixture
def make_post(client, category_id):
    def _make_post(headers, title="Hello World!!", content="0123456789", files=None, category=None):
        response = client.post(
            "/api/posts",
            data={"title": title, "content": content, "category": str(category or category_id)},
            files=files,
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _make_post
