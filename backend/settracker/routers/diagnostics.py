from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import literal_column, select
from sqlalchemy.exc import SQLAlchemyError

from settracker import db as store
from settracker.errors import StoreNotConfiguredError
from settracker.models import SetRow

router = APIRouter(prefix="/api", tags=["diagnostics"])

def store_hint(message: str) -> str:
    normalized = message.lower()
    if ("relation" in normalized or "table" in normalized) and (
        "does not exist" in normalized or "no such table" in normalized
    ):
        return "Connected to the store, but the 'sets' table doesn't exist yet. Run `alembic upgrade head`."
    if "permission denied" in normalized or "row level security" in normalized:
        return "Connected to the store, but access is blocked. Check the database role's grants."
    return "Connected to the store, but the query failed. See error for details."

@router.get("/db-test")
def db_test():
    try:
        with store.SessionLocal() as db:
            rows = db.execute(select(literal_column("*")).select_from(SetRow.__table__).limit(1)).mappings().all()
    except StoreNotConfiguredError as e:
        body = {"ok": False, "error": str(e), "hint": e.hint, "data": None}
        return JSONResponse(body, status_code=500)
    except SQLAlchemyError as e:
        message = str(getattr(e, "orig", None) or e)
        body = {"ok": False, "error": message, "hint": store_hint(message), "data": None}
        return JSONResponse(body, status_code=500)
    return {"ok": True, "error": None, "hint": None, "data": jsonable_encoder([dict(r) for r in rows])}
