from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

PROTOCOLS = ("tcp", "tcp6", "udp", "udp6")

# Reserved sentinels: the kernel never hands out inode 0 for a socket and pid 0 is not a
# user process, so both mean "nothing here".
NO_INODE = 0
NO_PID = 0

@dataclass
class Owner:
    pid: int
    name: str = ""

@dataclass
class SocketRecord:
    protocol: str               # 'tcp', 'tcp6', 'udp', 'udp6'
    local_address_raw: str      # hex as found in /proc/net/*, e.g. '0100007F'
    local_address: str
    port: int
    inode: int = NO_INODE
    owners: List[Owner] = field(default_factory=list)
