# File: tests/conftest.py

"""
Fixtures compartidos. Mongo se sustituye por mongomock inyectado con
`set_db`, así que no hace falta un servidor para correr:
    pytest -q
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.infrastructure.db import mongo
from app.main import app


@pytest.fixture()
def db():
    database = mongomock.MongoClient()["memo_test"]
    mongo.set_db(database)
    yield database
    mongo.set_db(None)


@pytest.fixture()
def client(db):
    with TestClient(app) as c:
        # El shutdown cierra la conexión; los tests que siguen usando
        # la base después del bloque la reinyectan.
        yield c
    mongo.set_db(db)


def signup_and_login(client: TestClient, name: str, email: str, password: str = "secret-pass") -> dict:
    resp = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, resp.text
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    data = resp.json()
    return {
        "user": data["user"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


@pytest.fixture()
def alice(client):
    return signup_and_login(client, "Alice", "alice@example.com")


@pytest.fixture()
def bob(client):
    return signup_and_login(client, "Bob", "bob@example.com")
