from __future__ import annotations
import logging
import socket
from typing import Dict, List, Tuple

import psutil

from ..models import NO_INODE, Owner, SocketRecord
from ..utils.net import decode_ipv4, decode_ipv6, encode_ipv4, encode_ipv6
from .owners import NAME_MAX, UNKNOWN_NAME

log = logging.getLogger(__name__)

def _protocol(family: int, type_: int) -> str:
    base = "tcp" if type_ == socket.SOCK_STREAM else "udp"
    return base + ("6" if family == socket.AF_INET6 else "")

def _proc_name(pid: int) -> str:
    try:
        name = psutil.Process(pid).name()
    except psutil.Error:
        return UNKNOWN_NAME
    return name[:NAME_MAX] if name else UNKNOWN_NAME

def collect(listen_only: bool) -> List[SocketRecord]:
    """
    Fallback for hosts without /proc/net tables. psutil reports one entry per
    (socket, process), so entries sharing an endpoint are folded into one record.
    psutil does not expose inodes; records carry NO_INODE.
    """
    try:
        conns = psutil.net_connections(kind='inet')
    except psutil.AccessDenied as e:
        log.warning("[warn] socket list needs more privileges: %s", e)
        return []

    records: Dict[Tuple, SocketRecord] = {}
    names: Dict[int, str] = {}
    for c in conns:
        if listen_only and c.status != psutil.CONN_LISTEN:
            continue
        if not c.laddr:
            continue
        proto = _protocol(c.family, c.type)
        ip = c.laddr.ip if hasattr(c.laddr, 'ip') else c.laddr[0]
        port = c.laddr.port if hasattr(c.laddr, 'port') else c.laddr[1]
        key = (proto, ip, port, tuple(c.raddr) if c.raddr else (), c.status)

        rec = records.get(key)
        if rec is None:
            raw = encode_ipv6(ip) if "6" in proto else encode_ipv4(ip)
            decode = decode_ipv6 if "6" in proto else decode_ipv4
            rec = records[key] = SocketRecord(
                protocol=proto, local_address_raw=raw, local_address=decode(raw),
                port=port, inode=NO_INODE)
        if c.pid:
            if c.pid not in names:
                names[c.pid] = _proc_name(c.pid)
            rec.owners.append(Owner(pid=c.pid, name=names[c.pid]))
    return list(records.values())
