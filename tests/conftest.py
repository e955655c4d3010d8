import os
import tempfile

# Tests always run against a private in-memory database.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "ledger-posting-test-logs"))

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
import models  # noqa: F401
from crud.chart_of_accounts import initialize_default_accounts
from crud.ledger_gateway import LedgerGateway
from services.ledger_posting import LedgerPostingService

TENANT = "acme"
HEADERS = {"X-Tenant-ID": TENANT, "X-User-ID": "alice"}


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    initialize_default_accounts(db, TENANT)
    return db


@pytest.fixture
def ledger(seeded_db):
    return LedgerPostingService(LedgerGateway(seeded_db))


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        initialize_default_accounts(session, TENANT)
    finally:
        session.close()

    from main import app
    with TestClient(app) as test_client:
        yield test_client
