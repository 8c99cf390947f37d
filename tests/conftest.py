from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from db.base import Base
from db.deps import get_db
from models.agent import Agent
from models.list_item import ListItem  # noqa: F401
from authentication import models as auth_models  # noqa: F401
from authentication.deps import require_admin
from routers.lists import get_upload_service
from services.upload_service import UploadService

BASE_TIME = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_agent(db_session):
    counter = {"n": 0}

    def _make(name: str, active: bool = True, email: str | None = None) -> Agent:
        counter["n"] += 1
        agent = Agent(
            name=name,
            email=email or f"{name.lower()}@example.com",
            country_code="+1",
            mobile_number="5550000000",
            password_hash="x",
            is_active=active,
            created_at=BASE_TIME + timedelta(minutes=counter["n"]),
        )
        db_session.add(agent)
        db_session.commit()
        db_session.refresh(agent)
        return agent

    return _make


@pytest.fixture()
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture()
def app(db_session, upload_dir):
    from main import app

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_upload_service] = lambda: UploadService(db_session, upload_dir=upload_dir)
    app.dependency_overrides[require_admin] = lambda: SimpleNamespace(
        username="admin@example.com", role="admin", is_active=True
    )
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
