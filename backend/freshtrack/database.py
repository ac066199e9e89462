import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine, Column, DateTime, Uuid
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from freshtrack.config import get_settings

settings = get_settings()


def normalize_database_url(url: str) -> str:
    """Force the psycopg v3 driver for bare postgres URLs."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    return url


def is_cloud_database(url: str) -> bool:
    return "supabase" in url or "neon.tech" in url or "pooler" in url


_db_url = normalize_database_url(settings.DATABASE_URL)

# Managed Postgres hosts (Supabase, Neon) only accept SSL connections.
# For psycopg v3 this is configured on the URL, not through connect_args.
if is_cloud_database(_db_url) and "sslmode" not in _db_url:
    _db_url += ("&" if "?" in _db_url else "?") + "sslmode=require"

engine = create_engine(_db_url, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


class BaseMixin:
    """Adds UUID primary key, owner and creation timestamp to all models."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
