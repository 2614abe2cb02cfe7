"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-do-not-use")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from expense_ledger.config.database import get_db
from expense_ledger.core.auth.service import AuthService
from expense_ledger.main import app
from expense_ledger.shared.database.models import (
    Base, Budget, Category, Event, Expense, Product, User, UserRole, Workshop,
)
from expense_ledger.shared.services import notifications


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a clean in-memory database session for each test."""
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = factory()
    yield session
    session.close()


@pytest.fixture
def seed(db_session):
    """Users, an event with a coordinator, categories and budgets."""
    admin = User(name="Ada Admin", email="admin@example.com", role=UserRole.ADMIN.value)
    finance = User(name="Fin Lead", email="finance@example.com", role=UserRole.FINANCE_TEAM.value)
    facilities = User(name="Fay Facilities", email="facilities@example.com", role=UserRole.FACILITIES_TEAM.value)
    staff = User(name="Sam Staff", email="staff@example.com", role=UserRole.STAFF.value)
    coordinator = User(name="Cora Coordinator", email="coordinator@example.com", role=UserRole.EVENT_COORDINATOR.value)
    inactive = User(name="Ivy Inactive", email="inactive@example.com", role=UserRole.ADMIN.value, is_active=False)
    db_session.add_all([admin, finance, facilities, staff, coordinator, inactive])
    db_session.flush()

    catering = Category(name="Catering")
    venue = Category(name="Venue")
    transport = Category(name="Transport")
    db_session.add_all([catering, venue, transport])

    summit = Event(title="Annual Summit", coordinator_id=coordinator.id)
    offsite = Event(title="Team Offsite")
    workshop = Workshop(title="Budgeting 101")
    projector = Product(name="Projector", unit_price=250.0)
    db_session.add_all([summit, offsite, workshop, projector])
    db_session.flush()

    db_session.add_all([
        Budget(event_id=summit.id, category_id=catering.id, amount=1200.0, approved_amount=1000.0,
               created_at=datetime(2026, 1, 1, 9, 0)),
        Budget(event_id=summit.id, category_id=venue.id, amount=500.0,
               created_at=datetime(2026, 1, 1, 9, 5)),
    ])
    db_session.commit()

    return SimpleNamespace(
        admin=admin, finance=finance, facilities=facilities, staff=staff,
        coordinator=coordinator, inactive=inactive,
        catering=catering, venue=venue, transport=transport,
        summit=summit, offsite=offsite, workshop=workshop, projector=projector,
    )


@pytest.fixture
def mail_sender(monkeypatch):
    """Replace the SMTP sender used by background notifications."""
    sender = MagicMock()
    sender.send_email = AsyncMock(return_value=True)
    monkeypatch.setattr(notifications, "email_service", sender)
    return sender


@pytest.fixture
def client(db_session, mail_sender):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    token = AuthService.create_access_token({"user_id": user.id})
    return {"Authorization": f"Bearer {token}"}


def add_expense(db_session, seed, **overrides) -> Expense:
    """Insert an expense directly, bypassing the API."""
    values = dict(
        event_id=seed.summit.id,
        category_id=seed.catering.id,
        added_by_id=seed.finance.id,
        item_name="Sandwiches",
        quantity=10.0,
        unit_price=5.0,
        amount=50.0,
        created_at=datetime(2026, 2, 1, 12, 0),
    )
    values.update(overrides)
    expense = Expense(**values)
    db_session.add(expense)
    db_session.commit()
    return expense
