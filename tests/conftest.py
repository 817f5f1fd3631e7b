"""
Test configuration and fixtures for the patient queue.
Each test gets its own SQLite file under pytest's tmp_path.
"""

import os
import pytest

from core.database import init_db
from services.queue_service import PatientQueue


@pytest.fixture
def db_path(tmp_path) -> str:
    return os.path.join(tmp_path, "patients.db")


@pytest.fixture
def store(db_path):
    store = init_db(db_path)
    yield store
    store.close()


@pytest.fixture
def db(store):
    """A session on the test store."""
    with store.session() as session:
        yield session


@pytest.fixture
def queue(store) -> PatientQueue:
    return PatientQueue(store, avg_visit_minutes=7)
