# feedgraph/crud/feeds.py
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session

from feedgraph.crud._upsert import insert_for
from feedgraph.models.feed import Feed


def get_feed_by_url(db: Session, url: str) -> Optional[Feed]:
    """Exact-URL lookup. None means not registered, storage errors raise."""
    return db.execute(select(Feed).where(Feed.url == url)).scalar_one_or_none()


def get_feed(db: Session, feed_id: int) -> Optional[Feed]:
    return db.get(Feed, feed_id)


def add_feed(db: Session, *, url: str, title: Optional[str] = None) -> int:
    """
    Return the id of the feed registered under `url`, creating it if needed.
    First title wins: an existing row is returned unchanged.
    """
    existing = get_feed_by_url(db, url)
    if existing:
        return existing.id

    # a concurrent insert of the same URL is ignored and picked up by the re-read
    stmt = insert_for(db, Feed).values(url=url, title=title).on_conflict_do_nothing(
        index_elements=["url"]
    )
    db.execute(stmt)
    db.commit()
    return db.execute(select(Feed.id).where(Feed.url == url)).scalar_one()
