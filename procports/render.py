from __future__ import annotations
from typing import Iterable, List

import orjson

from .models import SocketRecord

NO_OWNER_PID = "-"
NO_OWNER_NAME = "(no owner found)"
NO_MATCHES = "(no matching sockets)"

HEADER = ("PROTO", "ADDRESS", "PORT", "INODE", "PID", "PROCESS")
ROW_FMT = "{:<6} {:<39} {:>5} {:>10} {:>7}  {}"

def record_to_dict(rec: SocketRecord) -> dict:
    return {
        "protocol": rec.protocol,
        "port": rec.port,
        "localAddress": rec.local_address,
        "inode": rec.inode,
        "owners": [{"pid": o.pid, "name": o.name} for o in rec.owners],
    }

def dumps(obj) -> str:
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode()

def render_json(records: Iterable[SocketRecord]) -> str:
    return dumps([record_to_dict(r) for r in records])

def table_rows(records: Iterable[SocketRecord]) -> List[tuple]:
    """One row per owner; extra owners of a socket get continuation rows with blank socket columns."""
    rows: List[tuple] = []
    for r in records:
        sock = (r.protocol, r.local_address, str(r.port), str(r.inode))
        if not r.owners:
            rows.append(sock + (NO_OWNER_PID, NO_OWNER_NAME))
            continue
        for i, o in enumerate(r.owners):
            cols = sock if i == 0 else ("", "", "", "")
            rows.append(cols + (str(o.pid), o.name))
    return rows

def render_table(records: Iterable[SocketRecord]) -> str:
    lines = [ROW_FMT.format(*HEADER)]
    rows = table_rows(records)
    if not rows:
        lines.append(NO_MATCHES)
    lines.extend(ROW_FMT.format(*row) for row in rows)
    return "\n".join(lines)

def render(records: Iterable[SocketRecord], json_output: bool = False) -> str:
    return render_json(records) if json_output else render_table(records)
