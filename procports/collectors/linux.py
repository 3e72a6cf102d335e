from __future__ import annotations
import logging
import os
from typing import Dict, List

from ..models import NO_INODE, PROTOCOLS, SocketRecord
from ..utils.net import decode_ipv4, decode_ipv6, decode_port

log = logging.getLogger(__name__)

LISTEN_STATE = "0A"

# protocol label -> file under <proc_root>/net, in report order
TABLES: Dict[str, str] = {p: p for p in PROTOCOLS}

def _safe_int(s: str, default: int = 0) -> int:
    try:
        return int(s)
    except ValueError:
        return default

def parse_line(line: str, protocol: str, listen_only: bool):
    """
    One row of /proc/net/{tcp,udp}[6]:
      sl  local_address rem_address   st tx_queue:rx_queue tr:tm->when retrnsmt   uid  timeout inode
      0: 00000000:0016 00000000:0000 0A 00000000:00000000 00:00000000 00000000     0        0 12345 ...
    Returns None for rows that are filtered out or malformed.
    """
    parts = line.split()
    if len(parts) < 4:
        return None
    if listen_only and parts[3] != LISTEN_STATE:
        return None

    local = parts[1]
    if ':' not in local:
        return None
    hex_addr, hex_port = local.split(':', 1)

    inode = _safe_int(parts[9], NO_INODE) if len(parts) > 9 else NO_INODE
    decode = decode_ipv6 if "6" in protocol else decode_ipv4
    return SocketRecord(
        protocol=protocol,
        local_address_raw=hex_addr,
        local_address=decode(hex_addr),
        port=decode_port(hex_port),
        inode=inode,
    )

def parse_table(source_path: str | os.PathLike, protocol: str, listen_only: bool) -> List[SocketRecord]:
    records: List[SocketRecord] = []
    try:
        with open(source_path, "r", encoding="ascii", errors="replace") as f:
            next(f, None)  # header
            for line in f:
                rec = parse_line(line, protocol, listen_only)
                if rec is not None:
                    records.append(rec)
    except OSError as e:
        log.debug("socket table %s unavailable: %s", source_path, e)
        return []
    return records

def collect_tables(listen_only: bool, proc_root: str | os.PathLike = "/proc") -> List[SocketRecord]:
    records: List[SocketRecord] = []
    for protocol, fname in TABLES.items():
        path = os.path.join(proc_root, "net", fname)
        found = parse_table(path, protocol, listen_only)
        log.debug("%s: %d socket(s) from %s", protocol, len(found), path)
        records.extend(found)
    return records
