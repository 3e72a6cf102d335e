from __future__ import annotations
import logging
import os
import platform
from typing import List

from ..models import SocketRecord
from .linux import collect_tables, parse_table, TABLES
from .owners import resolve_owners, process_name
from . import generic

log = logging.getLogger(__name__)

def collect(listen_only: bool, proc_root: str | os.PathLike = "/proc") -> List[SocketRecord]:
    """One snapshot: socket tables first, then the owner scan."""
    if platform.system() == 'Linux' or os.path.isdir(os.path.join(proc_root, "net")):
        records = collect_tables(listen_only, proc_root)
        resolve_owners(records, proc_root)
        return records
    log.debug("no socket tables under %s, using psutil", proc_root)
    return generic.collect(listen_only)

__all__ = ["collect", "collect_tables", "parse_table", "resolve_owners", "process_name", "TABLES"]
