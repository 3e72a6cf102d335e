from __future__ import annotations
import logging
import os
import re
from typing import Dict, Iterable, Iterator, List, Optional

from ..models import NO_INODE, Owner, SocketRecord

log = logging.getLogger(__name__)

SOCKET_RE = re.compile(r"^socket:\[(?P<inode>\d+)\]$")
UNKNOWN_NAME = "?"
NAME_MAX = 255

def iter_pids(proc_root: str | os.PathLike = "/proc") -> Iterator[int]:
    try:
        with os.scandir(proc_root) as it:
            for entry in it:
                if entry.name.isdigit():
                    yield int(entry.name)
    except OSError as e:
        log.debug("cannot list %s: %s", proc_root, e)

def iter_socket_inodes(pid: int, proc_root: str | os.PathLike = "/proc") -> Iterator[int]:
    """Inodes of every socket the process holds open, one per descriptor."""
    fd_dir = os.path.join(proc_root, str(pid), "fd")
    try:
        with os.scandir(fd_dir) as it:
            entries = list(it)
    except OSError as e:
        # process gone or not ours to look at
        log.debug("pid %d: fd table unreadable: %s", pid, e)
        return
    for entry in entries:
        try:
            target = os.readlink(entry.path)
        except OSError:
            continue
        m = SOCKET_RE.match(target)
        if m:
            yield int(m.group("inode"))

def _read_text(path: str) -> Optional[str]:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError:
        return None

def process_name(pid: int, proc_root: str | os.PathLike = "/proc") -> str:
    """comm first, then the command line with NULs turned into spaces, else '?'."""
    base = os.path.join(proc_root, str(pid))

    comm = _read_text(os.path.join(base, "comm"))
    if comm:
        if comm.endswith("\n"):
            comm = comm[:-1]
        if comm:
            return comm[:NAME_MAX]

    cmdline = _read_text(os.path.join(base, "cmdline"))
    if cmdline:
        cmdline = cmdline.rstrip("\0").replace("\0", " ")
        if cmdline:
            return cmdline[:NAME_MAX]

    return UNKNOWN_NAME

def index_by_inode(records: Iterable[SocketRecord]) -> Dict[int, List[SocketRecord]]:
    by_inode: Dict[int, List[SocketRecord]] = {}
    for rec in records:
        if rec.inode == NO_INODE:
            continue
        by_inode.setdefault(rec.inode, []).append(rec)
    return by_inode

def resolve_owners(records: Iterable[SocketRecord], proc_root: str | os.PathLike = "/proc") -> None:
    """
    Attach Owner(pid, name) to every record whose inode shows up in some
    /proc/<pid>/fd. Owners are appended in scan order and not deduplicated: a
    process holding the same socket on two descriptors is listed twice.
    """
    by_inode = index_by_inode(records)
    if not by_inode:
        return

    names: Dict[int, str] = {}
    matched = 0
    for pid in iter_pids(proc_root):
        for inode in iter_socket_inodes(pid, proc_root):
            targets = by_inode.get(inode)
            if not targets:
                continue
            if pid not in names:
                names[pid] = process_name(pid, proc_root)
            for rec in targets:
                rec.owners.append(Owner(pid=pid, name=names[pid]))
                matched += 1
    log.debug("owner scan: %d match(es) across %d process(es)", matched, len(names))
