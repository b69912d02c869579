from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..db.seed import seed_cache
from ..services.record_store import RecordStore


router = APIRouter()


def get_store() -> RecordStore:
    return RecordStore()


@router.get("/cache")
async def get_cache(store: RecordStore = Depends(get_store)) -> Dict[str, Any]:
    """Debug: the volunteer snapshot currently held in the record cache."""
    records = store.read()
    return {
        "key": store.key,
        "count": len(records),
        "volunteers": [record.to_wire() for record in records],
    }


@router.post("/cache/seed")
async def seed(store: RecordStore = Depends(get_store)) -> Dict[str, Any]:
    """Fill an empty cache with the sample volunteers."""
    return {"seeded": seed_cache(store)}


@router.delete("/cache")
async def clear_cache(store: RecordStore = Depends(get_store)) -> Dict[str, Any]:
    store.clear()
    return {"cleared": True}
