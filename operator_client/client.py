"""
Operator-side client for the arcade queue API.

Holds the last cabinet snapshot, derives the current session and waiting
queue from it, and re-fetches the whole snapshot after every change other
than a drag reorder, which is applied locally first. `watch` keeps polling
it. Edit actions are only sent while the geofence gate allows editing.
"""
import argparse
import logging
import os
import time
from typing import Any, Callable, Dict, List, Optional

import requests
import yaml
from rich.logging import RichHandler

from .geofence import GeofenceGate, GeofenceResult
from .snapshot import entry_label, move_waiting_item, split_queue

logger = logging.getLogger(__name__)

CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")
HEALTH_TIMEOUT = 15
HEALTH_INTERVAL = 447  # seconds between database health checks while watching


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    with open(path) as f:
        return yaml.safe_load(f) or {}


def normalize_cabinets(data: Any) -> Optional[List[Dict[str, Any]]]:
    """
    Accept the shapes a cabinets endpoint may answer with: a bare list,
    {"data": [...]}, {"cabinets": [...]}, a single cabinet object, or any
    object holding a list. Returns None when nothing usable is found.
    """
    if isinstance(data, list):
        return data
    if not isinstance(data, dict):
        return None
    for key in ("data", "cabinets"):
        if isinstance(data.get(key), list):
            return data[key]
    if "id" in data and "name" in data:
        return [data]
    for value in data.values():
        if isinstance(value, list):
            return value
    return None


class QueueClient:
    def __init__(
        self,
        server: str = "http://127.0.0.1:8000",
        api_prefix: str = "",
        gate: Optional[GeofenceGate] = None,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = server.rstrip("/") + api_prefix
        self.gate = gate or GeofenceGate()
        self.timeout = timeout
        self.http = session or requests.Session()
        self.cabinets: List[Dict[str, Any]] = []
        self.selected_cabinet_id: Optional[int] = None
        self.can_edit = False
        self.location_status = "Checking location..."
        self.db_healthy: Optional[bool] = None

    # --- snapshot ---

    def fetch_cabinets(self) -> List[Dict[str, Any]]:
        try:
            resp = self.http.get(f"{self.base_url}/cabinets", timeout=self.timeout)
            resp.raise_for_status()
            parsed = normalize_cabinets(resp.json())
        except (requests.RequestException, ValueError):
            logger.exception("fetch_cabinets failed")
            self.cabinets = []
            return self.cabinets

        if parsed is None:
            logger.error("Unexpected cabinets payload, resetting snapshot")
            self.cabinets = []
            return self.cabinets

        self.cabinets = parsed
        if parsed and self.selected_cabinet_id is None:
            self.selected_cabinet_id = parsed[0].get("id")
        return self.cabinets

    @property
    def selected_cabinet(self) -> Optional[Dict[str, Any]]:
        for cab in self.cabinets:
            if cab.get("id") == self.selected_cabinet_id:
                return cab
        return None

    @property
    def current_session(self) -> Optional[Dict[str, Any]]:
        cab = self.selected_cabinet
        return split_queue(cab.get("queue_items") if cab else None)[0]

    @property
    def waiting_queue(self) -> List[Dict[str, Any]]:
        cab = self.selected_cabinet
        return split_queue(cab.get("queue_items") if cab else None)[1]

    # --- gate / health ---

    def check_location(self, lat: Optional[float], lon: Optional[float]) -> GeofenceResult:
        result = self.gate.check(lat, lon)
        self.can_edit = result.can_edit
        self.location_status = result.status
        logger.info(result.status)
        return result

    def check_health(self) -> bool:
        try:
            resp = self.http.get(f"{self.base_url}/health", timeout=HEALTH_TIMEOUT)
            resp.raise_for_status()
        except requests.RequestException:
            logger.exception("Health check failed")
            self.db_healthy = False
            return False
        self.db_healthy = True
        return True

    def watch(
        self,
        interval: float = 5.0,
        health_interval: float = HEALTH_INTERVAL,
        iterations: Optional[int] = None,
        on_refresh: Optional[Callable[[List[Dict[str, Any]]], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Keep the snapshot fresh: re-fetch every `interval` seconds and hand the
        cabinets to `on_refresh`. The database health check runs on the first
        pass and then every `health_interval` seconds. Runs until interrupted,
        or for `iterations` passes when given.
        """
        last_health: Optional[float] = None
        done = 0
        while iterations is None or done < iterations:
            now = clock()
            if last_health is None or now - last_health >= health_interval:
                if not self.check_health():
                    logger.warning("Database unreachable at %s", self.base_url)
                last_health = now
            cabinets = self.fetch_cabinets()
            if on_refresh is not None:
                on_refresh(cabinets)
            done += 1
            if iterations is None or done < iterations:
                sleep(interval)

    # --- mutations ---

    def _send(self, context: str, method: str, path: str, **kwargs) -> Optional[requests.Response]:
        if not self.can_edit:
            logger.warning("%s ignored: editing is disabled (%s)", context, self.location_status)
            return None
        try:
            resp = self.http.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.RequestException:
            logger.exception("%s failed, refreshing snapshot", context)
            self.fetch_cabinets()
            return None
        return resp

    def add_cabinet(self, name: str) -> bool:
        if not name.strip():
            return False
        if self._send("add_cabinet", "POST", "/cabinets", json={"name": name}) is None:
            return False
        self.fetch_cabinets()
        return True

    def rename_cabinet(self, cabinet_id: int, name: str) -> bool:
        if not name.strip():
            return False
        if self._send("rename_cabinet", "PUT", f"/cabinets/{cabinet_id}", json={"name": name}) is None:
            return False
        self.fetch_cabinets()
        return True

    def remove_cabinet(self, cabinet_id: int) -> bool:
        if self._send("remove_cabinet", "DELETE", f"/cabinets/{cabinet_id}") is None:
            return False
        if self.selected_cabinet_id == cabinet_id:
            self.selected_cabinet_id = None
        self.fetch_cabinets()
        return True

    def add_to_queue(self, entry_type: str, p1: str, p2: str = "") -> bool:
        if not p1.strip() or self.selected_cabinet_id is None:
            return False
        if entry_type == "duo" and not p2.strip():
            return False
        players = [p1] if entry_type == "solo" else [p1, p2]
        payload = {"type": entry_type, "players": players, "cabinet_id": self.selected_cabinet_id}
        if self._send("add_to_queue", "POST", "/queue", json=payload) is None:
            return False
        self.fetch_cabinets()
        return True

    def remove_from_queue(self, entry_id: int) -> bool:
        if self._send("remove_from_queue", "DELETE", f"/queue/{entry_id}") is None:
            return False
        self.fetch_cabinets()
        return True

    def update_group(self, entry_id: int, players: List[str]) -> bool:
        if self._send("update_group", "PATCH", f"/queue/{entry_id}", json={"players": players}) is None:
            return False
        self.fetch_cabinets()
        return True

    def finish_game(self) -> bool:
        """Cycle the current session to the back of the selected cabinet."""
        current = self.current_session
        if current is None:
            return False
        if self._send("finish_game", "POST", f"/queue/{current['id']}/cycle") is None:
            return False
        self.fetch_cabinets()
        return True

    def move_entry(self, entry_id: int, target_cabinet_id: int) -> bool:
        payload = {"target_cabinet_id": target_cabinet_id}
        if self._send("move_entry", "POST", f"/queue/{entry_id}/move", json=payload) is None:
            return False
        self.fetch_cabinets()
        return True

    def drag_reorder(self, from_index: int, to_index: int) -> bool:
        """
        Move a waiting entry and persist the new waiting order.
        The local snapshot is updated first and is not re-fetched on success;
        a failed request re-fetches it.
        """
        cab = self.selected_cabinet
        if not self.can_edit or cab is None or from_index == to_index:
            return False
        current, waiting = split_queue(cab.get("queue_items"))
        if not (0 <= from_index < len(waiting) and 0 <= to_index < len(waiting)):
            logger.warning("reorder ignored: index out of range (%s -> %s of %d)", from_index, to_index, len(waiting))
            return False
        reordered = move_waiting_item(waiting, from_index, to_index)
        cab["queue_items"] = ([current] if current else []) + reordered

        new_order = [item["id"] for item in reordered]
        path = f"/cabinets/{cab['id']}/reorder"
        return self._send("reorder", "PATCH", path, json={"new_order": new_order}) is not None


def _print_cabinet(cab: Dict[str, Any]) -> None:
    current, waiting = split_queue(cab.get("queue_items"))
    print(f"[{cab.get('id')}] {cab.get('name')}")
    print(f"  now playing: {entry_label(current)}")
    for idx, item in enumerate(waiting, start=1):
        print(f"  {idx}. {entry_label(item)} (#{item.get('id')})")


def main():
    logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[RichHandler(show_path=False)])
    cfg = load_config()

    ap = argparse.ArgumentParser(description="Arcade queue operator client")
    ap.add_argument("--server", default=cfg.get("server", "http://127.0.0.1:8000"))
    ap.add_argument("--api_prefix", default=cfg.get("api_prefix", ""))
    ap.add_argument("--lat", type=float, default=None)
    ap.add_argument("--lon", type=float, default=None)
    sub = ap.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show")
    show.add_argument("--cabinet", type=int, default=None)

    add = sub.add_parser("add")
    add.add_argument("--cabinet", type=int, required=True)
    add.add_argument("--type", choices=["solo", "duo"], default="solo")
    add.add_argument("players", nargs="+")

    finish = sub.add_parser("finish")
    finish.add_argument("--cabinet", type=int, required=True)

    remove = sub.add_parser("remove")
    remove.add_argument("entry_id", type=int)

    move = sub.add_parser("move")
    move.add_argument("entry_id", type=int)
    move.add_argument("target_cabinet_id", type=int)

    watch = sub.add_parser("watch")
    watch.add_argument("--cabinet", type=int, default=None)
    watch.add_argument("--interval", type=float, default=float(cfg.get("poll_interval", 5)))

    sub.add_parser("health")
    args = ap.parse_args()

    gate = GeofenceGate(
        venue_lat=float(cfg.get("venue_lat", GeofenceGate.venue_lat)),
        venue_lon=float(cfg.get("venue_lon", GeofenceGate.venue_lon)),
        max_distance_km=float(cfg.get("max_distance_km", GeofenceGate.max_distance_km)),
    )
    client = QueueClient(args.server, args.api_prefix, gate=gate, timeout=float(cfg.get("timeout", 10)))

    if args.command == "health":
        print("ok" if client.check_health() else "unreachable")
        return

    client.check_location(args.lat, args.lon)

    def show_cabinets(cabinets):
        for cab in cabinets:
            if args.cabinet is None or cab.get("id") == args.cabinet:
                _print_cabinet(cab)

    if args.command == "watch":
        try:
            client.watch(interval=args.interval, on_refresh=show_cabinets)
        except KeyboardInterrupt:
            pass
        return

    client.fetch_cabinets()

    if args.command == "show":
        show_cabinets(client.cabinets)
        return

    if args.command in ("add", "finish"):
        client.selected_cabinet_id = args.cabinet
    if args.command == "add":
        p1 = args.players[0]
        p2 = args.players[1] if len(args.players) > 1 else ""
        ok = client.add_to_queue(args.type, p1, p2)
    elif args.command == "finish":
        ok = client.finish_game()
    elif args.command == "remove":
        ok = client.remove_from_queue(args.entry_id)
    else:
        ok = client.move_entry(args.entry_id, args.target_cabinet_id)
    print("done" if ok else f"not applied: {client.location_status}")

if __name__ == "__main__":
    main()
