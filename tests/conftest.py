# tests/conftest.py
import os

# must be set before repairshop reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from repairshop.core.database import Base, get_db
from repairshop.main import app
from repairshop.ticket import models  # noqa: F401


@pytest.fixture()
def engine():
    # SQLite in-memory, one shared connection per test
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def intake():
    """Build an intake payload with the required fields filled in."""

    def build(**overrides):
        payload = {
            "nombre_cliente": "Ana Ruiz",
            "telefono": "9999-0000",
            "descripcion_problema": "no enciende",
        }
        payload.update(overrides)
        return payload

    return build
