# backend/feedgraph/services/rankings.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from feedgraph.core.config import settings
from feedgraph.crud.links import get_most_linked
from feedgraph.crud.snapshots import get_rising_mentions, get_snapshot_dates, prune_snapshots, take_snapshot
from feedgraph.models.base import utcnow
from feedgraph.schemas.graph import RankedFeed, RisingMention
from feedgraph.services.urls import host_of


def is_common_domain(url: str, domains: Iterable[str]) -> bool:
    """True if the URL's host is one of `domains` or a subdomain of one."""
    host = host_of(url).split(":", 1)[0]
    if not host:
        return False
    return any(host == d or host.endswith("." + d) for d in domains)


def get_most_linked_filtered(
    db: Session,
    limit: int,
    domains: Optional[Iterable[str]] = None,
    overfetch: Optional[int] = None,
) -> List[RankedFeed]:
    """Most-linked ranking with big platforms (github, twitter, ...) dropped."""
    domains = list(settings.common_domains_list if domains is None else domains)
    overfetch = overfetch or settings.COMMON_DOMAIN_OVERFETCH
    ranked = get_most_linked(db, limit * overfetch)
    return [r for r in ranked if not is_common_domain(r.feed.url, domains)][:max(limit, 0)]


def today_utc() -> date:
    return utcnow().date()


def latest_snapshot_pair(db: Session) -> Optional[Tuple[date, date]]:
    """(current, previous) = the two most recent snapshot dates, if there are two."""
    dates = get_snapshot_dates(db)
    if len(dates) < 2:
        return None
    return dates[0], dates[1]


def get_latest_rising(
    db: Session, entity_type: str, limit: int
) -> Optional[Tuple[date, date, List[RisingMention]]]:
    """Rising mentions across the latest snapshot pair, None with fewer than two snapshots."""
    pair = latest_snapshot_pair(db)
    if pair is None:
        return None
    current, previous = pair
    return current, previous, get_rising_mentions(db, entity_type, current, previous, limit)


def snapshot_today(db: Session, today: Optional[date] = None) -> Tuple[date, int]:
    day = today or today_utc()
    return day, take_snapshot(db, day)


def retention_cutoff(retention_days: Optional[int] = None, today: Optional[date] = None) -> date:
    days = settings.SNAPSHOT_RETENTION_DAYS if retention_days is None else retention_days
    return (today or today_utc()) - timedelta(days=days)


def prune_expired(
    db: Session, retention_days: Optional[int] = None, today: Optional[date] = None
) -> Tuple[date, int]:
    """Drop snapshots older than the retention window; returns (cutoff, rows deleted)."""
    cutoff = retention_cutoff(retention_days, today)
    return cutoff, prune_snapshots(db, cutoff)
