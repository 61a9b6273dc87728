import io
import os
import tempfile

# Settings are read at import time, so the environment is prepared first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="fitfolio-uploads-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_REGISTRATION_KEY"] = "test-admin-key"

import pytest
from fastapi.testclient import TestClient
from PIL import Image

import models
from database import SessionLocal, engine
from main import app

ADMIN_KEY = "test-admin-key"


@pytest.fixture(autouse=True)
def reset_database():
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register a user over HTTP and return ``(user, headers)``."""

    def _register(name="Alice", email="alice@example.com", password="secret123"):
        response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register


@pytest.fixture
def register_admin(client):
    def _register(name="Root", email="root@example.com", password="supersecret"):
        response = client.post("/auth/admin/register", json={
            "name": name, "email": email, "password": password, "admin_key": ADMIN_KEY,
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register


def _jpeg(exif=None) -> bytes:
    buffer = io.BytesIO()
    image = Image.new("RGB", (8, 8), color=(200, 30, 30))
    if exif is not None:
        image.save(buffer, format="JPEG", exif=exif)
    else:
        image.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def make_jpeg():
    return _jpeg


@pytest.fixture
def upload_item(client, make_jpeg):
    """POST a clothing item with a generated photo and return the response."""

    def _upload(headers, image_bytes=None, filename="shirt.jpg", content_type="image/jpeg", **fields):
        data = {"brand": "", "price": "", "season": "", "size": "", "category": ""}
        data.update(fields)
        files = {"image": (filename, image_bytes if image_bytes is not None else make_jpeg(), content_type)}
        return client.post("/clothing-items/", data=data, files=files, headers=headers)

    return _upload
