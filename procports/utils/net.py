from __future__ import annotations
import socket, struct, ipaddress

NO_ADDRESS = "-"

def decode_port(hex_port: str) -> int:
    try:
        return int(hex_port, 16)
    except (TypeError, ValueError):
        return 0

def decode_ipv4(hex_addr: str) -> str:
    """
    /proc/net/tcp stores the address as a host-order u32 printed in hex, so on
    little-endian hosts '0100007F' is 127.0.0.1 (low byte first).
    """
    if not hex_addr:
        return NO_ADDRESS
    try:
        val = int(hex_addr, 16)
    except ValueError:
        return NO_ADDRESS
    return socket.inet_ntoa(struct.pack('<I', val & 0xFFFFFFFF))

def _hex_byte(pair: str) -> int:
    try:
        return int(pair, 16)
    except ValueError:
        return 0

def decode_ipv6(hex_addr: str) -> str:
    """
    32 hex digits, read as 16 bytes left to right. Short input is left-padded with
    zeros so truncated lines still decode.
    """
    if not hex_addr:
        return NO_ADDRESS
    digits = hex_addr.rjust(32, '0')[:32]
    raw = bytes(_hex_byte(digits[i:i + 2]) for i in range(0, 32, 2))
    return str(ipaddress.IPv6Address(raw))

def encode_port(port: int) -> str:
    return f"{port & 0xFFFF:04X}"

def encode_ipv4(ip: str) -> str:
    return "%08X" % struct.unpack('<I', socket.inet_aton(ip))[0]

def encode_ipv6(ip: str) -> str:
    return ipaddress.IPv6Address(ip.split('%', 1)[0]).packed.hex().upper()
