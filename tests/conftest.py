import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

from barbershop import models  # noqa: F401  registers tables
from barbershop.auth import create_access_token, hash_password
from barbershop.db import get_session, make_engine
from barbershop.main import app
from barbershop.models import Service, User
from barbershop.work_hours import upsert_work_hours

# A Monday far enough ahead that "now" never gets in the way
MONDAY = date(2030, 1, 7)
BEFORE_MONDAY = datetime(2030, 1, 1, 8, 0)


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    # objects stay loaded after commit so fixtures leave no read transaction open
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(session, phone="0501234567", name="Test User", role="user", password="secret-pass"):
    user = User(phone=phone, name=name, role=role, password_hash=hash_password(password))
    session.add(user)
    session.commit()
    return user


def auth_header(user) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def customer(session):
    return make_user(session)


@pytest.fixture
def other_customer(session):
    return make_user(session, phone="0559876543", name="Other")


@pytest.fixture
def admin(session):
    return make_user(session, phone="0500000000", name="Owner", role="admin")


@pytest.fixture
def haircut(session):
    service = Service(name="Haircut", duration_minutes=30, price=50)
    session.add(service)
    session.commit()
    return service


@pytest.fixture
def long_service(session):
    service = Service(name="Cut and Beard", duration_minutes=45, price=75)
    session.add(service)
    session.commit()
    return service


@pytest.fixture
def morning_hours(session):
    """Every day open 09:00-12:00 with 30 minute slots."""
    for day in range(7):
        upsert_work_hours(session, day, "09:00", "12:00", True, 30)
    session.commit()


def at(hour, minute=0, day=MONDAY):
    return datetime.combine(day, datetime.min.time()) + timedelta(hours=hour, minutes=minute)
