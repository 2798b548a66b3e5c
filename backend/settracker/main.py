# settracker/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from settracker.errors import StoreNotConfiguredError
from settracker.routers.sets import router as sets_router
from settracker.routers.trends import router as trends_router
from settracker.routers.diagnostics import router as diagnostics_router
from settracker.db import SessionLocal  # for healthz DB check
from settracker.settings import get_settings

log = logging.getLogger("uvicorn")
settings = get_settings()
logging.getLogger("settracker").setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="Set Tracker API",
    openapi_tags=[
        {"name": "sets", "description": "Logged workout sets and bulk sync"},
        {"name": "trends", "description": "Daily counts, volume and max-weight progression"},
        {"name": "diagnostics", "description": "Backing store probes"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    device_id = request.headers.get("X-Device-ID") or "-"
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s device=%s %s %s -> %s in %.1fms",
             req_id, device_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

# Every error body is {"error": str, "details"?: any}
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code,
                        headers=getattr(exc, "headers", None))

@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Invalid payload.", "details": jsonable_encoder(exc.errors())}, status_code=400)

@app.exception_handler(StoreNotConfiguredError)
async def store_not_configured(request: Request, exc: StoreNotConfiguredError):
    return JSONResponse({"error": str(exc), "details": {"hint": exc.hint}}, status_code=500)

# a stored row that no longer passes LoggedSet validation
@app.exception_handler(ValidationError)
async def stored_row_invalid(request: Request, exc: ValidationError):
    log.error("invalid stored set on %s %s: %s", request.method, request.url.path, exc)
    details = jsonable_encoder(exc.errors(include_url=False, include_context=False))
    return JSONResponse({"error": "Stored set failed validation.", "details": details}, status_code=500)

@app.exception_handler(SQLAlchemyError)
async def store_error(request: Request, exc: SQLAlchemyError):
    log.error("store error on %s %s: %s", request.method, request.url.path, exc)
    message = str(getattr(exc, "orig", None) or exc)
    return JSONResponse({"error": message}, status_code=500)

@app.get("/")
def root():
    return {"ok": True, "name": "Set Tracker API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except (SQLAlchemyError, RuntimeError) as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(sets_router)
app.include_router(trends_router)
app.include_router(diagnostics_router)
