# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# Settings are loaded at import time, so the environment is prepared before
# anything under app/ is imported.
# =============================================================================

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DIRECTORY_API_URL", "http://directory.test/api/volunteers")
os.environ.setdefault("REQUEST_TIMEOUT", "2")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base
from app.services.directory_client import ClientResult
from app.services.reconciler import DirectoryReconciler
from app.services.record_store import RecordStore
from app.services.records import VolunteerRecord


class FakeDirectoryClient:
    """Stands in for the remote directory; each operation can be switched to fail."""

    def __init__(self, records=None, *, list_ok=True, create_ok=True, delete_ok=True):
        self.records = list(records or [])
        self.list_ok = list_ok
        self.create_ok = create_ok
        self.delete_ok = delete_ok
        self.created = []
        self.deleted = []

    def list_volunteers(self):
        if not self.list_ok:
            return ClientResult.failure("connection refused")
        return ClientResult.success(list(self.records), 200)

    def create_volunteer(self, payload):
        if not self.create_ok:
            return ClientResult.failure("503 Server Error", 503)
        number = len(self.created) + 1
        record = VolunteerRecord(
            id=f"srv_{number}",
            sequence_number=2000 + number,
            name=payload.name,
            membership_code=payload.membership_code,
            mobile_number=payload.mobile_number,
            address=payload.address,
            image_url=payload.image or "",
        )
        self.created.append(record)
        return ClientResult.success(record, 201)

    def delete_volunteer(self, record_id):
        self.deleted.append(record_id)
        if not self.delete_ok:
            return ClientResult.failure("connection reset")
        return ClientResult.success(None, 200)


class FakeImageHost:
    def __init__(self, url=None):
        self.url = url
        self.uploads = []

    def upload(self, image):
        self.uploads.append(image)
        return self.url


@pytest.fixture
def make_record():
    def _make(record_id, name="Asha Rao", code="AAK0001", mobile="9800000001", address="Pune, Maharashtra", **extra):
        return VolunteerRecord(
            id=record_id,
            name=name,
            membership_code=code,
            mobile_number=mobile,
            address=address,
            **extra,
        )
    return _make


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'cache.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return RecordStore(session_factory, key="volunteers")


@pytest.fixture
def fake_client():
    return FakeDirectoryClient()


@pytest.fixture
def fake_image_host():
    return FakeImageHost()


@pytest.fixture
def reconciler(fake_client, store):
    return DirectoryReconciler(fake_client, store)
