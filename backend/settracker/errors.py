# settracker/errors.py
from __future__ import annotations


class StoreNotConfiguredError(RuntimeError):
    """Raised when neither DATABASE_URL nor DB_HOST is set."""

    hint = "Set DATABASE_URL (or DB_HOST/DB_USER/DB_PASSWORD/DB_NAME) before using the sets API."

    def __init__(self, message: str = "Backing store is not configured."):
        super().__init__(message)


class SetNotFoundError(LookupError):
    def __init__(self, set_id: str):
        super().__init__(f"Set {set_id} not found")
        self.set_id = set_id
