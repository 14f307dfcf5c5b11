# feedgraph/crud/mentions.py
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from feedgraph.crud._upsert import insert_for
from feedgraph.models.mention import Mention
from feedgraph.schemas.graph import RankedMention


def add_mention(
    db: Session,
    *,
    source_feed_id: int,
    name: str,
    entity_type: str,
    context_text: Optional[str] = None,
    post_url: Optional[str] = None,
    post_title: Optional[str] = None,
) -> bool:
    """Insert-or-ignore on (source, name, post_url). True if a row was written."""
    stmt = insert_for(db, Mention).values(
        source_feed_id=source_feed_id,
        name=name,
        entity_type=entity_type,
        context_text=context_text,
        post_url=post_url or "",
        post_title=post_title,
    ).on_conflict_do_nothing(
        index_elements=["source_feed_id", "name", "post_url"]
    )
    res = db.execute(stmt)
    db.commit()
    return res.rowcount > 0


def get_mentions_by_feed(db: Session, feed_id: int) -> List[Mention]:
    return list(
        db.execute(select(Mention).where(Mention.source_feed_id == feed_id).order_by(Mention.id)).scalars().all()
    )


def get_most_mentioned(db: Session, entity_type: str, limit: int) -> List[RankedMention]:
    """Names of one entity type by live mention count; ties by name ascending."""
    if limit <= 0:
        return []
    n = func.count(Mention.id).label("mention_count")
    stmt = (
        select(Mention.name, n)
        .where(Mention.entity_type == entity_type)
        .group_by(Mention.name)
        .order_by(n.desc(), Mention.name.asc())
        .limit(limit)
    )
    return [
        RankedMention(name=name, entity_type=entity_type, mention_count=count)
        for name, count in db.execute(stmt).all()
    ]


def live_mention_counts(db: Session, entity_type: str) -> Dict[str, int]:
    """{name: count} aggregated from the live mentions table."""
    stmt = (
        select(Mention.name, func.count(Mention.id))
        .where(Mention.entity_type == entity_type)
        .group_by(Mention.name)
    )
    return {name: count for name, count in db.execute(stmt).all()}
