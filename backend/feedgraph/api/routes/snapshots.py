# feedgraph/api/routes/snapshots.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from feedgraph.crud.snapshots import get_snapshot_dates, prune_snapshots
from feedgraph.db.session import get_db
from feedgraph.schemas.graph import SnapshotDates, SnapshotPruned, SnapshotTaken
from feedgraph.services.rankings import prune_expired, snapshot_today

router = APIRouter(prefix="/snapshots")


@router.post("", response_model=SnapshotTaken)
def create_snapshot(snapshot_date: Optional[date] = Query(None), db: Session = Depends(get_db)):
    day, rows = snapshot_today(db, snapshot_date)
    return {"snapshot_date": day, "rows": rows}


@router.get("", response_model=SnapshotDates)
def list_snapshots(db: Session = Depends(get_db)):
    return {"dates": get_snapshot_dates(db)}


@router.delete("", response_model=SnapshotPruned)
def delete_snapshots(before: Optional[date] = Query(None), db: Session = Depends(get_db)):
    """Prune by explicit date, or by the configured retention window."""
    if before is not None:
        return {"before": before, "deleted": prune_snapshots(db, before)}
    cutoff, deleted = prune_expired(db)
    return {"before": cutoff, "deleted": deleted}
