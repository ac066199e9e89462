from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy.orm import Session

from freshtrack.config import get_settings
from freshtrack.database import get_db
from freshtrack.store import InventoryStore, SqlInventoryStore


def get_store(db: Session = Depends(get_db)) -> InventoryStore:
    return SqlInventoryStore(db)


def get_now() -> datetime:
    """Evaluation instant for derived views; overridden in tests."""
    return datetime.now(timezone.utc)


def get_civil_tz() -> str:
    return get_settings().CIVIL_TIMEZONE
