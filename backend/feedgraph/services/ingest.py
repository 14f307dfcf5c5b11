# backend/feedgraph/services/ingest.py
"""
Best-effort ingestion of already-parsed feeds.

Every write is an independent idempotent call (register the cited feed,
then link to it). A storage failure on one item is rolled back, logged and
counted, and the batch carries on with the next item.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from feedgraph.core.config import settings
from feedgraph.crud.feeds import add_feed
from feedgraph.crud.links import add_link
from feedgraph.crud.mentions import add_mention
from feedgraph.schemas.ingest import IngestStats, ParsedFeed, ParsedItem
from feedgraph.services.urls import is_same_domain, normalize_to_feed_url

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _best_effort(db: Session, stats: IngestStats, what: str, fn: Callable[[], T]) -> Optional[T]:
    try:
        return fn()
    except SQLAlchemyError as e:
        db.rollback()
        stats.failures += 1
        logger.warning("[ingest] %s failed, continuing: %s", what, e)
        return None


def _ingest_item(
    db: Session,
    stats: IngestStats,
    *,
    source_id: int,
    site_url: str,
    item: ParsedItem,
    entity_type: str,
    blocklist: frozenset,
) -> None:
    for link in item.links:
        if is_same_domain(site_url, link.url):
            continue
        target_url = normalize_to_feed_url(link.url)
        target_id = _best_effort(
            db, stats, f"feed {target_url}",
            lambda: add_feed(db, url=target_url, title=link.text),
        )
        if target_id is None:
            continue
        written = _best_effort(
            db, stats, f"link {source_id}->{target_id}",
            lambda: add_link(
                db,
                source_feed_id=source_id,
                target_feed_id=target_id,
                context_text=link.text,
                post_url=item.url,
                post_title=item.title,
            ),
        )
        if written:
            stats.links += 1

    for name in item.people:
        if name in blocklist:
            continue
        written = _best_effort(
            db, stats, f"mention {name!r}",
            lambda: add_mention(
                db,
                source_feed_id=source_id,
                name=name,
                entity_type=entity_type,
                post_url=item.url,
                post_title=item.title,
            ),
        )
        if written:
            stats.mentions += 1


def ingest_feed(
    db: Session,
    parsed: ParsedFeed,
    *,
    entity_type: Optional[str] = None,
    blocklist: Iterable[str] = (),
) -> IngestStats:
    """
    Register `parsed` as a source feed, then record its outbound links to
    other sites and the people its items mention. Only newly written edges
    and mentions are counted.
    """
    entity_type = entity_type or settings.DEFAULT_ENTITY_TYPE
    blocked = frozenset(blocklist)
    stats = IngestStats()

    source_id = _best_effort(
        db, stats, f"feed {parsed.url}",
        lambda: add_feed(db, url=parsed.url, title=parsed.title),
    )
    if source_id is None:
        return stats
    stats.feeds += 1

    site_url = parsed.site_url or parsed.url
    for item in parsed.items:
        _ingest_item(
            db, stats,
            source_id=source_id,
            site_url=site_url,
            item=item,
            entity_type=entity_type,
            blocklist=blocked,
        )

    logger.info(
        "[ingest] %s: %d items, %d links, %d mentions, %d failures",
        parsed.title or parsed.url, len(parsed.items), stats.links, stats.mentions, stats.failures,
    )
    return stats


def ingest_feeds(
    db: Session,
    feeds: Iterable[ParsedFeed],
    *,
    entity_type: Optional[str] = None,
    blocklist: Iterable[str] = (),
) -> IngestStats:
    blocked = frozenset(blocklist)
    total = IngestStats()
    for parsed in feeds:
        total = total.merge(ingest_feed(db, parsed, entity_type=entity_type, blocklist=blocked))
    logger.info(
        "[ingest] total: %d feeds, %d links, %d mentions, %d failures",
        total.feeds, total.links, total.mentions, total.failures,
    )
    return total


def register_feeds(db: Session, feeds: Iterable[Tuple[str, str]]) -> int:
    """Register (url, title) subscriptions; returns how many succeeded."""
    stats = IngestStats()
    for url, title in feeds:
        if _best_effort(db, stats, f"feed {url}", lambda: add_feed(db, url=url, title=title)) is not None:
            stats.feeds += 1
    logger.info("[ingest] registered %d feeds (%d failures)", stats.feeds, stats.failures)
    return stats.feeds
