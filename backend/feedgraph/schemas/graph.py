# backend/feedgraph/schemas/graph.py
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel


# ---------- OUT MODELS ----------
class FeedOut(BaseModel):
    id: int
    url: str
    title: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LinkOut(BaseModel):
    id: int
    source_feed_id: int
    target_feed_id: int
    context_text: Optional[str] = None
    post_url: Optional[str] = None
    post_title: Optional[str] = None
    discovered_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MentionOut(BaseModel):
    id: int
    source_feed_id: int
    name: str
    entity_type: str
    context_text: Optional[str] = None
    post_url: Optional[str] = None
    post_title: Optional[str] = None
    discovered_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---------- RANKINGS (read-only projections, never persisted) ----------
class RankedFeed(BaseModel):
    feed: FeedOut
    inbound_count: int


class RankedMention(BaseModel):
    name: str
    entity_type: str
    mention_count: int


class RisingMention(BaseModel):
    name: str
    entity_type: str
    current_count: int
    previous_count: int
    velocity: float  # (current - previous) / previous, or current when previous == 0
    status: str      # "hot" | "rising" | "new"


# ---------- API wrappers ----------
class FeedLinks(BaseModel):
    feed: FeedOut
    inbound: List[LinkOut]
    outbound: List[LinkOut]


class SnapshotTaken(BaseModel):
    snapshot_date: date
    rows: int


class SnapshotPruned(BaseModel):
    before: date
    deleted: int


class SnapshotDates(BaseModel):
    dates: List[date]


class RisingList(BaseModel):
    current: date
    previous: date
    items: List[RisingMention]
