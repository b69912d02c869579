from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ..flows.gallery import GalleryFlow, InvalidVolunteer
from ..services.records import VolunteerPayload


router = APIRouter()


class SearchRequest(BaseModel):
    term: str = ""


class FilterRequest(BaseModel):
    category: str = ""


class ViewModeRequest(BaseModel):
    mode: str


def get_gallery(request: Request) -> GalleryFlow:
    """Dependency returning the gallery flow owned by the application."""
    gallery = getattr(request.app.state, "gallery", None)
    if gallery is None:
        raise HTTPException(status_code=503, detail="Directory not ready")
    return gallery


@router.get("")
async def get_view(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    """Current gallery view: filtered volunteers, filters, selection and notices."""
    return gallery.snapshot()


@router.post("/reload")
async def reload(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    outcome = await gallery.load()
    return {"outcome": outcome.value if outcome else "skipped", "view": gallery.snapshot()}


@router.get("/categories")
async def get_categories(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    return {"categories": gallery.categories()}


@router.put("/search")
async def set_search(body: SearchRequest, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.set_search(body.term)
    return gallery.snapshot()


@router.put("/filter")
async def set_filter(body: FilterRequest, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.set_category(body.category)
    return gallery.snapshot()


@router.delete("/filters")
async def clear_filters(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.clear_filters()
    return gallery.snapshot()


@router.put("/view-mode")
async def set_view_mode(body: ViewModeRequest, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    try:
        gallery.set_view_mode(body.mode)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"view_mode": gallery.view.view_mode}


@router.post("/view-mode/toggle")
async def toggle_view_mode(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    return {"view_mode": gallery.toggle_view_mode()}


@router.post("/add")
async def request_add(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.request_add()
    return {"show_add_form": True}


@router.delete("/add")
async def cancel_add(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.cancel_add()
    return {"show_add_form": False}


@router.post("/volunteers", status_code=201)
async def submit_volunteer(payload: VolunteerPayload, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    """Register a volunteer; stored locally when the directory API is down."""
    try:
        result = await gallery.submit(payload)
    except InvalidVolunteer as e:
        raise HTTPException(status_code=422, detail=e.errors)

    return {
        "source": result.source,
        "volunteer": result.record.to_wire(),
        "notices": gallery.pop_notices(),
    }


@router.get("/volunteers/{record_id}")
async def get_volunteer(record_id: str, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    record = gallery.reconciler.find(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Volunteer not found")
    return record.to_wire()


@router.post("/selection/{record_id}")
async def view_volunteer(record_id: str, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    """Open the detail card of a volunteer."""
    record = gallery.view_detail(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Volunteer not found")
    return record.to_wire()


@router.delete("/selection")
async def close_detail(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.close_detail()
    return {"selected": None}


@router.post("/volunteers/{record_id}/delete-request")
async def request_delete(record_id: str, gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    record = gallery.request_delete(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Volunteer not found")
    return {
        "delete_target": record.to_wire(),
        "prompt": f"Are you sure you want to delete {record.name} (AAK: {record.membership_code})? "
                  "This action cannot be undone.",
    }


@router.post("/delete/confirm")
async def confirm_delete(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    result = await gallery.confirm_delete()
    if result is None:
        raise HTTPException(status_code=409, detail="No deletion pending")
    return {
        "removed": result.removed,
        "remote_ok": result.remote_ok,
        "notices": gallery.pop_notices(),
    }


@router.delete("/delete")
async def cancel_delete(gallery: GalleryFlow = Depends(get_gallery)) -> Dict[str, Any]:
    gallery.cancel_delete()
    return {"delete_target": None}
