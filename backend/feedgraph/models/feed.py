# feedgraph/models/feed.py
from sqlalchemy import Column, DateTime, Integer, String

from feedgraph.models.base import Base, utcnow


class Feed(Base):
    __tablename__ = "feeds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # identity: exact URL as supplied by the caller, never normalized here
    url = Column(String, unique=True, nullable=False)
    # set once on creation, later adds of the same URL keep it
    title = Column(String, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
