"""Pytest fixtures for testing"""

import pytest
from datetime import datetime, timezone
from typing import Generator
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from mukhymat_pricing.api.main import create_app
from mukhymat_pricing.api.dependencies import get_ledger_client
from mukhymat_pricing.infrastructure.database.models import Base
from mukhymat_pricing.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def ledger_client() -> MagicMock:
    """Payout ledger stand-in; no webhook leaves the test process"""
    client = MagicMock()
    client.send_cancellation_event = AsyncMock(return_value=None)
    return client


@pytest.fixture
def client(db: Session, ledger_client: MagicMock) -> TestClient:
    """Create FastAPI test client with test database and stubbed ledger"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ledger_client] = lambda: ledger_client
    return TestClient(app)


@pytest.fixture
def check_in() -> datetime:
    """Check-in moment used across refund and penalty tests"""
    return datetime(2026, 6, 1, 14, 0, tzinfo=timezone.utc)
