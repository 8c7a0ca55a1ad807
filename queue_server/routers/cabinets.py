import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload
from ..deps import get_db
from .. import models
from ..schemas import CabinetCreate, CabinetUpdate, CabinetOut, CabinetWithQueue, ReorderIn
from ..services import ordering

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cabinets", tags=["cabinets"])

@router.get("", response_model=List[CabinetWithQueue])
def list_cabinets(db: Session = Depends(get_db)):
    """
    Every cabinet with its queue items sorted front to back.
    The first item of each cabinet is its current session.
    """
    return (
        db.query(models.Cabinet)
        .options(selectinload(models.Cabinet.queue_items))
        .order_by(models.Cabinet.id.asc())
        .all()
    )

@router.post("", response_model=CabinetOut, status_code=201)
def create_cabinet(data: CabinetCreate, db: Session = Depends(get_db)):
    cabinet = models.Cabinet(name=data.name)
    db.add(cabinet)
    db.commit()
    db.refresh(cabinet)
    logger.info("Created cabinet %s (%s)", cabinet.id, cabinet.name)
    return cabinet

@router.put("/{cabinet_id}", response_model=CabinetOut)
def rename_cabinet(cabinet_id: int, data: CabinetUpdate, db: Session = Depends(get_db)):
    cabinet = db.get(models.Cabinet, cabinet_id)
    if not cabinet:
        raise HTTPException(status_code=404, detail="Cabinet not found")
    cabinet.name = data.name
    db.commit()
    db.refresh(cabinet)
    return cabinet

@router.delete("/{cabinet_id}")
def delete_cabinet(cabinet_id: int, db: Session = Depends(get_db)):
    """
    Remove a cabinet together with its whole queue.
    Deleting an id that is already gone is not an error.
    """
    cabinet = db.get(models.Cabinet, cabinet_id)
    if not cabinet:
        return {"ok": False, "message": "Cabinet not found"}
    cleared = len(cabinet.queue_items)
    db.delete(cabinet)
    db.commit()
    logger.info("Deleted cabinet %s and %d queued entries", cabinet_id, cleared)
    return {"ok": True, "message": "Deleted", "cleared": cleared}

@router.patch("/{cabinet_id}/reorder")
def reorder_queue(cabinet_id: int, data: ReorderIn, db: Session = Depends(get_db)):
    positions = ordering.reorder_entries(db, cabinet_id, data.new_order)
    return {"ok": True, "message": "Reordered", "positions": positions}
