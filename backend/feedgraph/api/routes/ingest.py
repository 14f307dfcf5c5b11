# feedgraph/api/routes/ingest.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from feedgraph.db.session import get_db
from feedgraph.schemas.ingest import IngestStats, ParsedFeed
from feedgraph.services.ingest import ingest_feeds

router = APIRouter()


# POST /api/ingest  (body: feeds already parsed by the fetch/extract side)
@router.post("/ingest", response_model=IngestStats)
def ingest(
    payload: List[ParsedFeed],
    entity_type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return ingest_feeds(db, payload, entity_type=entity_type.upper() if entity_type else None)
