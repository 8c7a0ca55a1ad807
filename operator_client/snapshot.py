from typing import Any, Dict, List, Optional, Tuple

Entry = Dict[str, Any]


def split_queue(items: Optional[List[Entry]]) -> Tuple[Optional[Entry], List[Entry]]:
    """(current session, waiting queue) for a cabinet's position-sorted items."""
    items = items or []
    if not items:
        return None, []
    return items[0], list(items[1:])


def move_waiting_item(waiting: List[Entry], from_index: int, to_index: int) -> List[Entry]:
    """Drag one waiting entry onto another slot; returns a new list."""
    reordered = list(waiting)
    dragged = reordered.pop(from_index)
    reordered.insert(to_index, dragged)
    return reordered


def entry_label(entry: Optional[Entry]) -> str:
    if not entry:
        return "(empty)"
    return " & ".join(entry.get("players") or [])
