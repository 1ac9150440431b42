# tests/conftest.py
import os
import shutil
import tempfile

# settings are read once, at import time of the app
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="autos-lujo-media-")
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_dummy"
os.environ["FRONTEND_URL"] = "http://localhost:3000"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from autos_lujo.core.database import Base, get_db
from autos_lujo.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    shutil.rmtree(os.environ["MEDIA_ROOT"], ignore_errors=True)
    os.makedirs(os.environ["MEDIA_ROOT"], exist_ok=True)


def auto_payload(**overrides):
    payload = {
        "marca": "Ferrari",
        "modelo": "SF90 Stradale",
        "año": 2023,
        "precio": 9500000,
        "descripcion": "Híbrido enchufable de 986 hp",
        "potencia": "986 hp",
        "caballosFuerza": 986,
        "cilindrada": "3990 cc",
        "tamanoMotor": "4.0L V8",
        "tipoCombustible": "Híbrido",
        "transmision": "Automática 8 vel.",
        "traccion": "AWD",
        "imagenes": ["https://cdn.example.mx/sf90/1.jpg"],
        "videos": [],
        "categoria": "hypercar",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def auto(client):
    resp = client.post("/api/autos", json=auto_payload())
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture()
def usuario(client):
    resp = client.post(
        "/api/register",
        json={"email": "ana@autoslujo.mx", "password": "Secreta123!", "nombre": "Ana López"},
    )
    assert resp.status_code == 201
    return resp.json()
