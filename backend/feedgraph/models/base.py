# feedgraph/models/base.py
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

# Base class for the ORM models to inherit from
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp (SQLite stores DateTime without tz)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
