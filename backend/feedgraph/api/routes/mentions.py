# feedgraph/api/routes/mentions.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from feedgraph.core.config import settings
from feedgraph.crud.mentions import get_most_mentioned
from feedgraph.crud.snapshots import get_rising_mentions
from feedgraph.db.session import get_db
from feedgraph.schemas.graph import RankedMention, RisingList
from feedgraph.services.rankings import get_latest_rising

router = APIRouter(prefix="/mentions")


# GET /api/mentions/top
@router.get("/top", response_model=list[RankedMention])
def top_mentions(
    entity_type: str = Query(settings.DEFAULT_ENTITY_TYPE),
    limit: int = Query(settings.MENTION_LIMIT, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    return get_most_mentioned(db, entity_type.upper(), limit)


# GET /api/mentions/rising
@router.get("/rising", response_model=RisingList)
def rising_mentions(
    entity_type: str = Query(settings.DEFAULT_ENTITY_TYPE),
    limit: int = Query(settings.MENTION_LIMIT, ge=1, le=1000),
    current: Optional[date] = Query(None),
    previous: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Explicit `current` + `previous` compare those dates (live counts stand
    in for a missing current snapshot). Without them the two most recent
    snapshots are compared.
    """
    etype = entity_type.upper()
    if current is not None and previous is not None:
        items = get_rising_mentions(db, etype, current, previous, limit)
        return {"current": current, "previous": previous, "items": items}
    if current is not None or previous is not None:
        raise HTTPException(status_code=400, detail="pass both current and previous, or neither")

    latest = get_latest_rising(db, etype, limit)
    if latest is None:
        raise HTTPException(status_code=409, detail="need at least 2 snapshots for velocity")
    cur, prev, items = latest
    return {"current": cur, "previous": prev, "items": items}
