# feedgraph/api/routes/feeds.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from feedgraph.core.config import settings
from feedgraph.crud.feeds import add_feed, get_feed, get_feed_by_url
from feedgraph.crud.links import get_inbound_links, get_most_linked, get_new_feeds, get_outbound_links
from feedgraph.crud.mentions import get_mentions_by_feed
from feedgraph.db.session import get_db
from feedgraph.schemas.graph import FeedLinks, FeedOut, MentionOut, RankedFeed
from feedgraph.schemas.ingest import FeedCreate, FeedsImported
from feedgraph.services.ingest import register_feeds
from feedgraph.services.rankings import get_most_linked_filtered

router = APIRouter()


def _feed_or_404(db: Session, feed_id: int):
    feed = get_feed(db, feed_id)
    if feed is None:
        raise HTTPException(status_code=404, detail="feed not found")
    return feed


# POST /api/feeds  (an existing URL keeps its first title)
@router.post("/feeds", response_model=FeedOut)
def create_feed(payload: FeedCreate, db: Session = Depends(get_db)):
    if not payload.url.strip():
        raise HTTPException(status_code=400, detail="url is required")
    feed_id = add_feed(db, url=payload.url, title=payload.title)
    return get_feed(db, feed_id)


# POST /api/feeds/import  (bulk subscription import, best-effort)
@router.post("/feeds/import", response_model=FeedsImported)
def import_feeds(payload: List[FeedCreate], db: Session = Depends(get_db)):
    registered = register_feeds(db, [(f.url, f.title) for f in payload if f.url.strip()])
    return {"requested": len(payload), "registered": registered}


# GET /api/feeds/lookup?url=...
@router.get("/feeds/lookup", response_model=FeedOut)
def lookup_feed(url: str = Query(...), db: Session = Depends(get_db)):
    feed = get_feed_by_url(db, url)
    if feed is None:
        raise HTTPException(status_code=404, detail=f"feed not found: {url}")
    return feed


# GET /api/feeds/{id}/links
@router.get("/feeds/{feed_id}/links", response_model=FeedLinks)
def feed_links(feed_id: int, db: Session = Depends(get_db)):
    feed = _feed_or_404(db, feed_id)
    return {
        "feed": feed,
        "inbound": get_inbound_links(db, feed_id),
        "outbound": get_outbound_links(db, feed_id),
    }


# GET /api/feeds/{id}/mentions
@router.get("/feeds/{feed_id}/mentions", response_model=list[MentionOut])
def feed_mentions(feed_id: int, db: Session = Depends(get_db)):
    _feed_or_404(db, feed_id)
    return get_mentions_by_feed(db, feed_id)


# GET /api/rankings/linked
@router.get("/rankings/linked", response_model=list[RankedFeed])
def rank_linked(
    limit: int = Query(settings.RANK_LIMIT, ge=1, le=1000),
    filter_common: bool = Query(False),
    db: Session = Depends(get_db),
):
    if filter_common:
        return get_most_linked_filtered(db, limit)
    return get_most_linked(db, limit)


# GET /api/rankings/new
@router.get("/rankings/new", response_model=list[RankedFeed])
def rank_new(
    days: int = Query(settings.NEW_FEED_DAYS, ge=1),
    limit: int = Query(settings.RANK_LIMIT, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return get_new_feeds(db, days, limit)
