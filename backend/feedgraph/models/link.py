# feedgraph/models/link.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from feedgraph.models.base import Base, utcnow


class Link(Base):
    """A post on the source feed cites the target feed."""

    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    source_feed_id = Column(Integer, ForeignKey("feeds.id"), nullable=False, index=True)
    target_feed_id = Column(Integer, ForeignKey("feeds.id"), nullable=False, index=True)

    # provenance
    context_text = Column(Text, nullable=True)  # anchor text around the link
    post_url = Column(String, nullable=True)
    post_title = Column(Text, nullable=True)

    discovered_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("source_feed_id", "target_feed_id", "post_url", name="uq_links_source_target_post"),
    )
