# feedgraph/models/mention_snapshot.py
from sqlalchemy import Column, Date, Integer, String, UniqueConstraint

from feedgraph.models.base import Base


class MentionSnapshot(Base):
    __tablename__ = "mention_snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    entity_type = Column(String, nullable=False)
    mention_count = Column(Integer, nullable=False)
    # DATE only; one row per (name, type, date), re-taking a date replaces the count
    snapshot_date = Column(Date, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("name", "entity_type", "snapshot_date", name="uq_snapshots_name_type_date"),
    )
