import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / f"campus-market-test-{os.getpid()}.db"
TEST_DB_URL = os.getenv("TEST_DB_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ["DATABASE_URL"] = TEST_DB_URL
os.environ["SIDE_EFFECT_BACKOFF_SECONDS"] = "0"

from sqlmodel import Session

from app.core.config import settings
from app.core.policy import reset_moderation_policy
from app.db.init_db import init_db
from app.db.session import engine

settings.DATABASE_URL = TEST_DB_URL


@pytest.fixture(autouse=True, scope="session")
def _configure_policy():
    reset_moderation_policy()
    yield
    reset_moderation_policy()


@pytest.fixture(autouse=True)
def _fresh_database():
    init_db(drop_all=True)
    yield


@pytest.fixture(scope="session", autouse=True)
def _remove_test_database():
    yield
    engine.dispose()
    if TEST_DB_URL.startswith("sqlite") and TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture
def session():
    with Session(engine) as db_session:
        yield db_session
