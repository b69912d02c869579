import json
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.logging import logger
from ..db import models
from .records import VolunteerRecord, normalize_records


class RecordStore:
    """Best-effort local cache holding the last known volunteer list.

    Never raises: read errors yield an empty list and write errors are logged.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None, key: Optional[str] = None):
        if session_factory is None:
            from ..db.session import SessionLocal
            session_factory = SessionLocal
        self.session_factory = session_factory
        self.key = key or settings.cache_key

    def read(self) -> List[VolunteerRecord]:
        db = self.session_factory()
        try:
            row = db.get(models.RecordCache, self.key)
            if row is None or not row.payload:
                return []
            items = json.loads(row.payload)
        except (SQLAlchemyError, ValueError) as e:
            logger.warning(f"Record cache '{self.key}' unreadable: {e}")
            return []
        finally:
            db.close()

        if not isinstance(items, list):
            logger.warning(f"Record cache '{self.key}' does not hold a list, ignoring it")
            return []
        return normalize_records(items)

    def write(self, records: Sequence[VolunteerRecord]) -> None:
        payload = json.dumps([record.to_wire() for record in records], ensure_ascii=False)
        db = self.session_factory()
        try:
            row = db.get(models.RecordCache, self.key)
            if row is None:
                row = models.RecordCache(key=self.key)
                db.add(row)
            row.payload = payload
            row.updated_at = datetime.utcnow()
            db.commit()
            logger.info(f"Record cache '{self.key}' updated with {len(records)} volunteer(s)")
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Could not write record cache '{self.key}': {e}")
        finally:
            db.close()

    def clear(self) -> None:
        db = self.session_factory()
        try:
            db.query(models.RecordCache).filter(models.RecordCache.key == self.key).delete()
            db.commit()
            logger.info(f"Record cache '{self.key}' cleared")
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Could not clear record cache '{self.key}': {e}")
        finally:
            db.close()
