from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .errors import StoreNotConfiguredError
from .settings import get_settings

# Define the base class that all models should inherit from
class Base(DeclarativeBase):
    pass

@lru_cache
def get_engine() -> Engine:
    url = get_settings().database_url
    if not url:
        raise StoreNotConfiguredError()
    return create_engine(url, pool_pre_ping=True)

# Session factory, built on first use
@lru_cache
def get_sessionmaker() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)

def SessionLocal():
    """Open a session on the configured engine (raises if unconfigured)."""
    return get_sessionmaker()()

# Dependency for FastAPI routes
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
