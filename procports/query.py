from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .config import CFG, validate_sort_key
from .models import NO_PID, SocketRecord

def primary_owner_pid(rec: SocketRecord) -> int:
    """Lowest owning pid; sort key only, never shown instead of the owner list."""
    if not rec.owners:
        return NO_PID
    return min(o.pid for o in rec.owners)

SORT_FUNCS: Dict[str, Callable[[SocketRecord], Tuple]] = {
    "port":  lambda r: (r.port, r.protocol),
    "pid":   lambda r: (primary_owner_pid(r), r.protocol),
    "proto": lambda r: (r.protocol, r.port),
}

def sort_records(records: Iterable[SocketRecord], sort_key: str = "port", reverse: bool = False) -> List[SocketRecord]:
    # reverse flips the whole stable result, ties included
    key = SORT_FUNCS[validate_sort_key(sort_key)]
    ordered = sorted(records, key=key)
    return ordered[::-1] if reverse else ordered

def name_matches(rec: SocketRecord, needle: Optional[str]) -> bool:
    if not needle:
        return True
    needle = needle.lower()
    return any(needle in (o.name or "").lower() for o in rec.owners)

def filter_records(records: Iterable[SocketRecord], port: Optional[int] = None,
                   name: Optional[str] = None) -> List[SocketRecord]:
    return [r for r in records
            if (port is None or r.port == port) and name_matches(r, name)]

def query(records: Iterable[SocketRecord], cfg: CFG) -> List[SocketRecord]:
    ordered = sort_records(records, cfg.sort_key, cfg.reverse)
    return filter_records(ordered, port=cfg.port, name=cfg.name)
