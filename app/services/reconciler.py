import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..core.logging import logger
from ..db.seed import generate_mock_volunteers
from .directory_client import RemoteDirectoryClient
from .record_store import RecordStore
from .records import VolunteerPayload, VolunteerRecord


class LoadOutcome(str, Enum):
    FROM_REMOTE = "from_remote"
    FROM_CACHE = "from_cache"
    SEEDED = "seeded"


@dataclass
class DirectoryState:
    records: List[VolunteerRecord] = field(default_factory=list)
    selected: Optional[VolunteerRecord] = None
    loading: bool = False
    last_outcome: Optional[LoadOutcome] = None


@dataclass
class CreateResult:
    ok: bool
    record: Optional[VolunteerRecord] = None
    error: Optional[str] = None


@dataclass
class DeleteResult:
    remote_ok: bool
    removed: bool
    error: Optional[str] = None


class DirectoryReconciler:
    """Keeps the in-memory volunteer list and the record cache in step with the remote directory."""

    def __init__(self, client: RemoteDirectoryClient, store: RecordStore,
                 state: Optional[DirectoryState] = None):
        self.client = client
        self.store = store
        self.state = state or DirectoryState()

    @property
    def records(self) -> List[VolunteerRecord]:
        return self.state.records

    @property
    def selected(self) -> Optional[VolunteerRecord]:
        return self.state.selected

    async def load(self) -> Optional[LoadOutcome]:
        """Load the list from the remote, else the cache, else the seed set.

        Returns None without touching state when a load is already running.
        """
        if self.state.loading:
            logger.info("Directory load already in progress, skipping")
            return None

        self.state.loading = True
        try:
            result = await asyncio.to_thread(self.client.list_volunteers)
            if result.ok:
                self.state.records = list(result.data)
                self.store.write(self.state.records)
                outcome = LoadOutcome.FROM_REMOTE
            else:
                cached = self.store.read()
                if cached:
                    self.state.records = cached
                    outcome = LoadOutcome.FROM_CACHE
                else:
                    self.state.records = generate_mock_volunteers()
                    self.store.write(self.state.records)
                    outcome = LoadOutcome.SEEDED
        finally:
            self.state.loading = False

        self.state.last_outcome = outcome
        logger.info(f"Directory loaded {len(self.state.records)} volunteer(s) ({outcome.value})")
        return outcome

    async def create(self, payload: VolunteerPayload) -> CreateResult:
        """Register remotely; on success the server record joins the list and becomes the selection.

        A failed call leaves state untouched; the caller builds a local record
        and passes it to add_local.
        """
        result = await asyncio.to_thread(self.client.create_volunteer, payload)
        if not result.ok:
            logger.warning(f"Remote create failed for {payload.name}: {result.error}")
            return CreateResult(ok=False, error=result.error)

        record = self.add_local(result.data)
        return CreateResult(ok=True, record=record)

    def add_local(self, record: VolunteerRecord) -> VolunteerRecord:
        """Prepend a record, persist the list and select the record."""
        self.state.records = [record] + self.state.records
        self.store.write(self.state.records)
        self.state.selected = record
        logger.info(f"Volunteer {record.id} added ({record.name})")
        return record

    async def delete(self, record_id: str) -> DeleteResult:
        """Delete remotely, then remove locally whatever the remote said."""
        result = await asyncio.to_thread(self.client.delete_volunteer, record_id)
        if not result.ok:
            logger.warning(f"Remote delete failed for {record_id}, removing locally: {result.error}")

        remaining = [record for record in self.state.records if record.id != record_id]
        removed = len(remaining) != len(self.state.records)
        self.state.records = remaining
        self.store.write(self.state.records)

        if self.state.selected is not None and self.state.selected.id == record_id:
            self.state.selected = None

        logger.info(f"Volunteer {record_id} deleted locally (removed={removed}, remote_ok={result.ok})")
        return DeleteResult(remote_ok=result.ok, removed=removed, error=result.error)

    def find(self, record_id: str) -> Optional[VolunteerRecord]:
        for record in self.state.records:
            if record.id == record_id:
                return record
        return None

    def select(self, record_id: str) -> Optional[VolunteerRecord]:
        record = self.find(record_id)
        if record is not None:
            self.state.selected = record
        return record

    def clear_selection(self) -> None:
        self.state.selected = None

    def next_sequence_number(self) -> int:
        numbers = [r.sequence_number for r in self.state.records if r.sequence_number is not None]
        if not numbers:
            return 1001
        return max(numbers) + 1
