"""
Seed data for demonstration and for the last load fallback.
Run this to populate an empty record cache with the sample volunteers.

Usage:
    cd /path/to/project
    python -m app.db.seed
"""

from datetime import datetime, timedelta
from typing import List, Optional

from ..core.logging import logger
from ..services.image_host import avatar_url
from ..services.records import VolunteerRecord, normalize_records

SEED_NAMES = [
    "Rajesh Kumar", "Priya Sharma", "Amit Patel", "Sneha Singh",
    "Vikram Yadav", "Anjali Gupta", "Rahul Verma", "Pooja Mehta",
]

SEED_ADDRESSES = [
    "Mumbai, Maharashtra", "Delhi, NCR", "Bangalore, Karnataka",
    "Chennai, Tamil Nadu", "Kolkata, West Bengal", "Hyderabad, Telangana",
]

SEED_SIZE = 8
SEED_SEQUENCE_START = 1000


def generate_mock_volunteers(now: Optional[datetime] = None) -> List[VolunteerRecord]:
    """Build the fixed placeholder volunteer set, newest first, one day apart."""
    now = now or datetime.utcnow()

    raw = []
    for i in range(SEED_SIZE):
        number = SEED_SEQUENCE_START + i + 1
        stamp = now - timedelta(days=i)
        raw.append({
            "_id": f"mock_{i + 1}",
            "uniqueId": number,
            "name": SEED_NAMES[i],
            "aakNo": f"AAK{number:04d}",
            "mobileNo": f"9876543{i:03d}",
            "address": SEED_ADDRESSES[i % len(SEED_ADDRESSES)],
            "imageUrl": avatar_url(SEED_NAMES[i]),
            "joinDate": stamp,
            "createdAt": stamp,
        })

    return normalize_records(raw)


def seed_cache(store=None) -> int:
    """Write the sample volunteers into the record cache if it is empty.

    Returns the number of records written.
    """
    if store is None:
        from ..services.record_store import RecordStore
        store = RecordStore()

    if store.read():
        logger.info("Record cache already has data, skipping seed.")
        return 0

    records = generate_mock_volunteers()
    store.write(records)
    logger.info(f"Seeded record cache with {len(records)} sample volunteers")
    return len(records)


if __name__ == "__main__":
    from .base import Base
    from .session import engine

    Base.metadata.create_all(bind=engine)
    seed_cache()
