import asyncio
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.logging import logger
from ..services.image_host import ImageHost, avatar_url
from ..services.normalization import clean_text, normalize_membership_code, normalize_mobile
from ..services.projector import filter_records, membership_categories
from ..services.reconciler import DeleteResult, DirectoryReconciler, LoadOutcome
from ..services.records import VolunteerPayload, VolunteerRecord
from .validation import is_view_mode, payload_errors


class InvalidVolunteer(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class Notice:
    level: str
    message: str


@dataclass
class GalleryView:
    search_term: str = ""
    category: str = ""
    view_mode: str = "grid"
    show_add_form: bool = False
    delete_target: Optional[VolunteerRecord] = None
    notices: List[Notice] = field(default_factory=list)


@dataclass
class SubmitResult:
    record: VolunteerRecord
    source: str


class GalleryFlow:
    """View state of the volunteer gallery and dispatch of user intents."""

    def __init__(self, reconciler: DirectoryReconciler, image_host: ImageHost,
                 view: Optional[GalleryView] = None):
        self.reconciler = reconciler
        self.image_host = image_host
        self.view = view or GalleryView()

    async def load(self) -> Optional[LoadOutcome]:
        outcome = await self.reconciler.load()
        if outcome == LoadOutcome.SEEDED:
            self._notify("info", "Directory unavailable, showing sample volunteers")
        elif outcome == LoadOutcome.FROM_CACHE:
            self._notify("info", "Directory unavailable, showing saved volunteers")
        return outcome

    # Search and filter

    def set_search(self, term: str) -> None:
        self.view.search_term = term or ""

    def set_category(self, category: str) -> None:
        self.view.category = category or ""

    def clear_filters(self) -> None:
        self.view.search_term = ""
        self.view.category = ""

    def set_view_mode(self, mode: str) -> None:
        if not is_view_mode(mode):
            raise ValueError(f"Unknown view mode: {mode}")
        self.view.view_mode = mode.strip().lower()

    def toggle_view_mode(self) -> str:
        self.view.view_mode = "list" if self.view.view_mode == "grid" else "grid"
        return self.view.view_mode

    def visible_records(self) -> List[VolunteerRecord]:
        return filter_records(self.reconciler.records, self.view.search_term, self.view.category)

    def categories(self) -> List[str]:
        return membership_categories(self.reconciler.records)

    # Add

    def request_add(self) -> None:
        self.view.show_add_form = True
        self.reconciler.clear_selection()

    def cancel_add(self) -> None:
        self.view.show_add_form = False

    async def submit(self, payload: VolunteerPayload) -> SubmitResult:
        """Register a volunteer remotely, falling back to a locally built record."""
        errors = payload_errors(payload)
        if errors:
            raise InvalidVolunteer(errors)

        payload = VolunteerPayload(
            name=clean_text(payload.name),
            membership_code=normalize_membership_code(payload.membership_code),
            mobile_number=normalize_mobile(payload.mobile_number),
            address=clean_text(payload.address),
            image=payload.image,
        )

        result = await self.reconciler.create(payload)
        if result.ok:
            record, source = result.record, "remote"
        else:
            self._notify("warning", "Directory unavailable, volunteer saved on this device only")
            record = self.reconciler.add_local(await self._local_record(payload))
            source = "local"

        self.view.show_add_form = False
        self._notify("success", f"Volunteer {record.name} added successfully!")
        return SubmitResult(record=record, source=source)

    async def _local_record(self, payload: VolunteerPayload) -> VolunteerRecord:
        image_url = await asyncio.to_thread(self.image_host.upload, payload.image)
        now = datetime.utcnow()
        return VolunteerRecord(
            id=self._local_id(),
            sequence_number=self.reconciler.next_sequence_number(),
            name=payload.name,
            membership_code=payload.membership_code,
            mobile_number=payload.mobile_number,
            address=payload.address,
            image_url=image_url or avatar_url(payload.name),
            join_date=now,
            created_at=now,
        )

    def _local_id(self) -> str:
        stamp = int(time.time() * 1000)
        while self.reconciler.find(f"local_{stamp}") is not None:
            stamp += 1
        return f"local_{stamp}"

    # Detail

    def view_detail(self, record_id: str) -> Optional[VolunteerRecord]:
        return self.reconciler.select(record_id)

    def close_detail(self) -> None:
        self.reconciler.clear_selection()

    # Delete

    def request_delete(self, record_id: str) -> Optional[VolunteerRecord]:
        record = self.reconciler.find(record_id)
        self.view.delete_target = record
        return record

    def cancel_delete(self) -> None:
        self.view.delete_target = None

    async def confirm_delete(self) -> Optional[DeleteResult]:
        target = self.view.delete_target
        if target is None:
            return None

        result = await self.reconciler.delete(target.id)
        if not result.remote_ok:
            logger.warning(f"Volunteer {target.id} removed locally only")
            self._notify("warning", "Directory unavailable, volunteer removed on this device only")
        self._notify("success", "Volunteer deleted successfully")
        self.view.delete_target = None
        return result

    # Rendering

    def pop_notices(self) -> List[Dict[str, str]]:
        notices = [{"level": n.level, "message": n.message} for n in self.view.notices]
        self.view.notices = []
        return notices

    def snapshot(self) -> Dict[str, Any]:
        visible = self.visible_records()
        selected = self.reconciler.selected
        target = self.view.delete_target
        return {
            "loading": self.reconciler.state.loading,
            "source": self.reconciler.state.last_outcome.value if self.reconciler.state.last_outcome else None,
            "total": len(self.reconciler.records),
            "count": len(visible),
            "volunteers": [record.to_wire() for record in visible],
            "categories": self.categories(),
            "search_term": self.view.search_term,
            "category": self.view.category,
            "view_mode": self.view.view_mode,
            "show_add_form": self.view.show_add_form,
            "selected": selected.to_wire() if selected else None,
            "delete_target": target.to_wire() if target else None,
            "notices": self.pop_notices(),
        }

    def _notify(self, level: str, message: str) -> None:
        self.view.notices.append(Notice(level=level, message=message))
