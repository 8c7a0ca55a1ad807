from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload
from ..deps import get_db
from .. import models
from ..schemas import QueueEntryCreate, QueueEntryUpdate, QueueEntryOut, QueueEntryWithCabinet, QueueMoveIn
from ..services import ordering

router = APIRouter(prefix="/queue", tags=["queue"])

@router.get("", response_model=List[QueueEntryWithCabinet])
def list_queue(db: Session = Depends(get_db)):
    return (
        db.query(models.QueueEntry)
        .options(joinedload(models.QueueEntry.cabinet))
        .order_by(models.QueueEntry.position.asc(), models.QueueEntry.id.asc())
        .all()
    )

@router.post("", response_model=QueueEntryOut, status_code=201)
def add_to_queue(data: QueueEntryCreate, db: Session = Depends(get_db)):
    return ordering.create_entry(db, data)

@router.patch("/{entry_id}", response_model=QueueEntryOut)
def update_entry(entry_id: int, data: QueueEntryUpdate, db: Session = Depends(get_db)):
    return ordering.update_players(db, entry_id, data.players)

@router.delete("/{entry_id}")
def remove_from_queue(entry_id: int, db: Session = Depends(get_db)):
    if not ordering.delete_entry(db, entry_id):
        # Not an error; it may have been removed from another screen.
        return {"ok": False, "message": "Queue entry not found"}
    return {"ok": True, "message": "Deleted"}

@router.post("/{entry_id}/cycle")
def cycle_entry(entry_id: int, db: Session = Depends(get_db)):
    """
    Finish the entry's turn: it goes to the back of its cabinet's queue.
    """
    entry = ordering.cycle_entry(db, entry_id)
    if not entry:
        return {"ok": False, "message": "Queue entry not found"}
    return {"ok": True, "message": "Cycled", "position": entry.position}

@router.post("/{entry_id}/move")
def move_entry(entry_id: int, data: QueueMoveIn, db: Session = Depends(get_db)):
    entry = ordering.move_entry(db, entry_id, data.target_cabinet_id)
    if not entry:
        return {"ok": False, "message": "Queue entry or target cabinet not found"}
    return {"ok": True, "message": "Moved", "cabinet_id": entry.cabinet_id, "position": entry.position}
