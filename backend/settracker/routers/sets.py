import uuid
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from settracker.db import get_db
from settracker.errors import SetNotFoundError
from settracker.export import build_sets_export
from settracker.repositories.set_repo import SetRepository
from settracker.schemas.logged_set import BulkSyncRequest, DeleteRequest, LoggedSet, SetCreate, SetPatch
from settracker.timeutil import now_iso

router = APIRouter(prefix="/api/sets", tags=["sets"])

@router.get("", response_model=list[LoggedSet])
def list_sets(db: Session = Depends(get_db)):
    return SetRepository(db).list()

@router.post("", response_model=LoggedSet, status_code=status.HTTP_201_CREATED)
def create_set(payload: SetCreate, db: Session = Depends(get_db)):
    stamp = now_iso()
    new_set = LoggedSet(
        id=str(uuid.uuid4()),
        created_at_iso=stamp,
        updated_at_iso=stamp,
        **payload.model_dump(),
    )
    return SetRepository(db).create(new_set)

@router.patch("", response_model=LoggedSet)
def update_set(payload: SetPatch, db: Session = Depends(get_db)):
    try:
        return SetRepository(db).update(payload.id, payload.changes(), updated_at_iso=payload.updated_at_iso)
    except SetNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")

@router.delete("")
def delete_set(
    payload: DeleteRequest | None = Body(default=None),
    set_id: str | None = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
):
    target = (payload.id if payload else None) or set_id
    if not target:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing id.")
    SetRepository(db).delete(target)
    return {"ok": True}

@router.put("", response_model=list[LoggedSet])
def sync_sets(payload: BulkSyncRequest, db: Session = Depends(get_db)):
    return SetRepository(db).bulk_sync(payload.sets, payload.deleted_ids)

@router.get("/export")
def export_sets(db: Session = Depends(get_db)):
    return build_sets_export(SetRepository(db).list())
