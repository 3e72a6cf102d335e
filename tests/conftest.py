from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, Optional

import pytest

from procports.models import Owner, SocketRecord

HEADER = ("  sl  local_address rem_address   st tx_queue rx_queue tr tm->when "
          "retrnsmt   uid  timeout inode\n")

def table_line(sl: int, local: str, state: str, inode: int, remote: str = "00000000:0000") -> str:
    return (f"   {sl}: {local} {remote} {state} 00000000:00000000 00:00000000 "
            f"00000000     0        0 {inode} 1 0000000000000000 100 0 0 10 0\n")

class FakeProc:
    """A throwaway procfs: net tables plus /<pid>/{fd,comm,cmdline}."""

    def __init__(self, root: Path):
        self.root = root
        (root / "net").mkdir(parents=True)

    def table(self, name: str, lines: Iterable[str], header: bool = True) -> Path:
        path = self.root / "net" / name
        path.write_text((HEADER if header else "") + "".join(lines))
        return path

    def process(self, pid: int, comm: Optional[str] = None, cmdline: Optional[str] = None,
                sockets: Iterable[int] = (), others: Iterable[str] = ()) -> Path:
        pdir = self.root / str(pid)
        fd = pdir / "fd"
        fd.mkdir(parents=True)
        if comm is not None:
            (pdir / "comm").write_text(comm)
        if cmdline is not None:
            (pdir / "cmdline").write_text(cmdline)
        n = 0
        for target in [f"socket:[{i}]" for i in sockets] + list(others):
            os.symlink(target, fd / str(n))
            n += 1
        return pdir

@pytest.fixture
def fake_proc(tmp_path) -> FakeProc:
    return FakeProc(tmp_path / "proc")

def rec(protocol: str = "tcp", port: int = 0, owners=(), inode: int = 0,
        address: str = "0.0.0.0", raw: str = "00000000") -> SocketRecord:
    return SocketRecord(protocol=protocol, local_address_raw=raw, local_address=address,
                        port=port, inode=inode,
                        owners=[Owner(pid=p, name=n) for p, n in owners])
