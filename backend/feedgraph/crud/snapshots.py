# feedgraph/crud/snapshots.py
import logging
from datetime import date
from typing import Dict, List

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from feedgraph.crud._upsert import insert_for
from feedgraph.crud.mentions import live_mention_counts
from feedgraph.models.mention import Mention
from feedgraph.models.mention_snapshot import MentionSnapshot
from feedgraph.schemas.graph import RisingMention
from feedgraph.services.velocity import rank_rising

logger = logging.getLogger(__name__)


def take_snapshot(db: Session, snapshot_date: date) -> int:
    """
    Recompute live mention counts per (name, entity_type) and store them
    under `snapshot_date`. Rows already present for that date are replaced,
    not added to. Returns the number of rows written.
    """
    groups = db.execute(
        select(Mention.name, Mention.entity_type, func.count(Mention.id))
        .group_by(Mention.name, Mention.entity_type)
    ).all()
    if not groups:
        logger.info("[snapshot] %s: no mentions, nothing written", snapshot_date)
        return 0

    stmt = insert_for(db, MentionSnapshot)
    stmt = stmt.on_conflict_do_update(
        index_elements=["name", "entity_type", "snapshot_date"],
        set_={"mention_count": stmt.excluded.mention_count},
    )
    db.execute(stmt, [
        {"name": name, "entity_type": etype, "mention_count": count, "snapshot_date": snapshot_date}
        for name, etype, count in groups
    ])
    db.commit()
    logger.info("[snapshot] %s: %d rows", snapshot_date, len(groups))
    return len(groups)


def get_snapshot_dates(db: Session) -> List[date]:
    """Distinct snapshot dates, most recent first."""
    stmt = select(MentionSnapshot.snapshot_date).distinct().order_by(MentionSnapshot.snapshot_date.desc())
    return list(db.execute(stmt).scalars().all())


def prune_snapshots(db: Session, before_date: date) -> int:
    """Delete snapshot rows dated strictly before `before_date`."""
    res = db.execute(
        delete(MentionSnapshot)
        .where(MentionSnapshot.snapshot_date < before_date)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    logger.info("[snapshot] pruned %d rows before %s", res.rowcount, before_date)
    return res.rowcount


def snapshot_counts(db: Session, entity_type: str, snapshot_date: date) -> Dict[str, int]:
    stmt = select(MentionSnapshot.name, MentionSnapshot.mention_count).where(
        MentionSnapshot.entity_type == entity_type,
        MentionSnapshot.snapshot_date == snapshot_date,
    )
    return {name: count for name, count in db.execute(stmt).all()}


def get_rising_mentions(
    db: Session,
    entity_type: str,
    current_date: date,
    previous_date: date,
    limit: int,
) -> List[RisingMention]:
    """
    Velocity ranking between two snapshot dates. Without a snapshot for
    `current_date` the live counts stand in for it; a missing previous
    snapshot simply means every name is new.
    """
    current = snapshot_counts(db, entity_type, current_date)
    if not current:
        current = live_mention_counts(db, entity_type)
    previous = snapshot_counts(db, entity_type, previous_date)
    return rank_rising(entity_type, current, previous, limit)
