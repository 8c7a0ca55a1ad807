"""
Position bookkeeping for cabinet queues.

Positions only carry relative order inside a cabinet: the smallest one is the
current session, the rest is the waiting queue. New and recycled entries are
appended at max(position) + 1, so gaps are expected and never compacted.
"""
import logging
from typing import Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models
from ..schemas import QueueEntryCreate

logger = logging.getLogger(__name__)


def next_position(db: Session, cabinet_id: int) -> int:
    current_max = (
        db.query(func.max(models.QueueEntry.position))
        .filter(models.QueueEntry.cabinet_id == cabinet_id)
        .scalar()
    )
    return (current_max or 0) + 1


def create_entry(db: Session, data: QueueEntryCreate) -> models.QueueEntry:
    cabinet = db.get(models.Cabinet, data.cabinet_id)
    if not cabinet:
        raise HTTPException(status_code=422, detail="Unknown cabinet_id")
    entry = models.QueueEntry(
        cabinet_id=cabinet.id,
        type=data.type,
        players=list(data.players),
        position=next_position(db, cabinet.id),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("Queued %s entry %s on cabinet %s at position %s", entry.type, entry.id, cabinet.id, entry.position)
    return entry


def cycle_entry(db: Session, entry_id: int) -> Optional[models.QueueEntry]:
    """Send an entry to the back of its own cabinet. Missing ids are a no-op."""
    entry = db.get(models.QueueEntry, entry_id)
    if not entry:
        logger.info("Cycle skipped, queue entry %s no longer exists", entry_id)
        return None
    entry.position = next_position(db, entry.cabinet_id)
    db.commit()
    logger.info("Cycled entry %s to position %s on cabinet %s", entry.id, entry.position, entry.cabinet_id)
    return entry


def move_entry(db: Session, entry_id: int, target_cabinet_id: Optional[int]) -> Optional[models.QueueEntry]:
    """Append an entry to another cabinet's queue. Missing entry or target is a no-op."""
    entry = db.get(models.QueueEntry, entry_id)
    target = db.get(models.Cabinet, target_cabinet_id) if target_cabinet_id else None
    if not entry or not target:
        logger.info("Move skipped for entry %s -> cabinet %s (missing entry or target)", entry_id, target_cabinet_id)
        return None
    source_id = entry.cabinet_id
    entry.position = next_position(db, target.id)
    entry.cabinet_id = target.id
    db.commit()
    logger.info("Moved entry %s from cabinet %s to cabinet %s at position %s", entry.id, source_id, target.id, entry.position)
    return entry


def reorder_entries(db: Session, cabinet_id: int, new_order: List[int]) -> Dict[int, int]:
    """
    Redistribute the positions already held by the named entries so that they
    follow ``new_order`` front to back.

    The sorted set of positions held by the named entries is handed out in
    the order the ids are listed. Entries that are not named keep their
    positions and nothing is renumbered. Every id must exist, otherwise the
    call fails before anything is written. Runs as one transaction with the
    named rows locked.

    Returns the resulting {entry_id: position} mapping.
    """
    try:
        items = (
            db.query(models.QueueEntry)
            .filter(models.QueueEntry.id.in_(set(new_order)))
            .with_for_update()
            .all()
        )
        by_id = {item.id: item for item in items}
        missing = sorted({item_id for item_id in new_order if item_id not in by_id})
        if missing:
            raise HTTPException(status_code=422, detail=f"Unknown queue entry id(s): {missing}")

        positions = sorted(item.position for item in items)
        for index, item_id in enumerate(new_order):
            if index < len(positions):
                by_id[item_id].position = positions[index]
        result = {item_id: item.position for item_id, item in by_id.items()}
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Reordered %d entries on cabinet %s", len(by_id), cabinet_id)
    return result


def update_players(db: Session, entry_id: int, players: List[str]) -> models.QueueEntry:
    entry = db.get(models.QueueEntry, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Queue entry not found")
    expected = models.PLAYERS_PER_TYPE.get(entry.type, len(players))
    if len(players) != expected:
        raise HTTPException(
            status_code=422,
            detail=f"A {entry.type} entry needs exactly {expected} player name(s)",
        )
    entry.players = list(players)
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, entry_id: int) -> bool:
    """Idempotent delete; returns whether a row was removed."""
    entry = db.get(models.QueueEntry, entry_id)
    if not entry:
        return False
    cabinet_id = entry.cabinet_id
    db.delete(entry)
    db.commit()
    logger.info("Removed queue entry %s from cabinet %s", entry_id, cabinet_id)
    return True
