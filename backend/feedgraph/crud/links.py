# feedgraph/crud/links.py
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from feedgraph.crud._upsert import insert_for
from feedgraph.models.base import utcnow
from feedgraph.models.feed import Feed
from feedgraph.models.link import Link
from feedgraph.schemas.graph import FeedOut, RankedFeed


def add_link(
    db: Session,
    *,
    source_feed_id: int,
    target_feed_id: int,
    context_text: Optional[str] = None,
    post_url: Optional[str] = None,
    post_title: Optional[str] = None,
) -> bool:
    """Insert-or-ignore on (source, target, post_url). True if a row was written."""
    stmt = insert_for(db, Link).values(
        source_feed_id=source_feed_id,
        target_feed_id=target_feed_id,
        context_text=context_text,
        # NULLs never collide in a UNIQUE index, so store "" instead
        post_url=post_url or "",
        post_title=post_title,
    ).on_conflict_do_nothing(
        index_elements=["source_feed_id", "target_feed_id", "post_url"]
    )
    res = db.execute(stmt)
    db.commit()
    return res.rowcount > 0


def get_outbound_links(db: Session, feed_id: int) -> List[Link]:
    return list(
        db.execute(select(Link).where(Link.source_feed_id == feed_id).order_by(Link.id)).scalars().all()
    )


def get_inbound_links(db: Session, feed_id: int) -> List[Link]:
    return list(
        db.execute(select(Link).where(Link.target_feed_id == feed_id).order_by(Link.id)).scalars().all()
    )


def _ranked(rows) -> List[RankedFeed]:
    return [RankedFeed(feed=FeedOut.model_validate(f), inbound_count=n) for f, n in rows]


def get_most_linked(db: Session, limit: int) -> List[RankedFeed]:
    """
    Feeds ranked by inbound link count. Feeds nobody links to are left out
    (inner join). Equal counts are ordered by feed id ascending.
    """
    if limit <= 0:
        return []
    inbound = func.count(Link.id).label("inbound_count")
    stmt = (
        select(Feed, inbound)
        .join(Link, Link.target_feed_id == Feed.id)
        .group_by(Feed.id)
        .order_by(inbound.desc(), Feed.id.asc())
        .limit(limit)
    )
    return _ranked(db.execute(stmt).all())


def get_new_feeds(db: Session, days: int, limit: int, now: Optional[datetime] = None) -> List[RankedFeed]:
    """
    Feeds created within the last `days` days, newest first, each with its
    all-time inbound count (zero included).
    """
    if limit <= 0:
        return []
    cutoff = (now or utcnow()) - timedelta(days=days)
    inbound = func.count(Link.id).label("inbound_count")
    stmt = (
        select(Feed, inbound)
        .outerjoin(Link, Link.target_feed_id == Feed.id)
        .where(Feed.created_at >= cutoff)
        .group_by(Feed.id)
        .order_by(Feed.created_at.desc(), Feed.id.desc())
        .limit(limit)
    )
    return _ranked(db.execute(stmt).all())
