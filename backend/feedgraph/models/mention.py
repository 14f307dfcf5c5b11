# feedgraph/models/mention.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from feedgraph.models.base import Base, utcnow


class Mention(Base):
    __tablename__ = "mentions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_feed_id = Column(Integer, ForeignKey("feeds.id"), nullable=False, index=True)
    name = Column(String, nullable=False, index=True)  # normalized by the extractor
    entity_type = Column(String, nullable=False)  # e.g. 'PERSON', 'ORG'

    context_text = Column(Text, nullable=True)
    post_url = Column(String, nullable=True)
    post_title = Column(Text, nullable=True)

    discovered_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("source_feed_id", "name", "post_url", name="uq_mentions_source_name_post"),
    )
