from __future__ import annotations
from dataclasses import dataclass, fields
import json
from typing import Any, Dict, Optional

import yaml

from .utils.path import to_abs_path

SORT_KEYS = ("port", "pid", "proto")
DEFAULT_LISTEN = "127.0.0.1:8765"

class ConfigError(ValueError):
    pass

@dataclass
class CFG:
    show_all: bool = False
    port: Optional[int] = None
    name: Optional[str] = None
    sort_key: str = "port"
    reverse: bool = False
    json_output: bool = False
    proc_root: str = "/proc"
    serve: bool = False
    listen: str = DEFAULT_LISTEN

    @property
    def listen_only(self) -> bool:
        return not self.show_all

def validate_sort_key(key: str) -> str:
    if key not in SORT_KEYS:
        raise ConfigError(f"unknown sort key {key!r} (expected one of: {', '.join(SORT_KEYS)})")
    return key

def parse_port(value: Any) -> Optional[int]:
    if value is None:
        return None
    # YAML/JSON hand over floats and bools; only ints and numeric strings are ports
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"invalid port {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid port {value!r}")
    if not 0 <= port <= 65535:
        raise ConfigError(f"port out of range: {port}")
    return port

def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("", "0", "false", "no", "off"):
            return False
    raise ConfigError(f"invalid boolean {value!r}")

def parse_listen(value: str) -> tuple[str, int]:
    host, sep, port = value.rpartition(':')
    if not sep or not host:
        raise ConfigError(f"invalid listen address {value!r} (expected HOST:PORT)")
    p = parse_port(port)
    if p is None:
        raise ConfigError(f"invalid listen address {value!r}")
    return host.strip('[]'), p

def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Defaults from a YAML (.yaml/.yml) or JSON file; keys are CFG field names."""
    if not path:
        return {}
    p = to_abs_path(path)
    if not p or not p.exists():
        raise ConfigError(f"config not found: {path}")
    try:
        txt = p.read_text(encoding="utf-8")
        if p.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(txt)
        else:
            data = json.loads(txt)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config {p}: {e}") from e
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {p} must contain a mapping")
    known = {f.name for f in fields(CFG)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"unknown config key(s) in {p}: {', '.join(unknown)}")
    return data

def build_cfg(values: Dict[str, Any]) -> CFG:
    cfg = CFG()
    for k, v in values.items():
        setattr(cfg, k, v)
    cfg.show_all = parse_bool(cfg.show_all)
    cfg.reverse = parse_bool(cfg.reverse)
    cfg.json_output = parse_bool(cfg.json_output)
    cfg.serve = parse_bool(cfg.serve)
    cfg.port = parse_port(cfg.port)
    cfg.name = str(cfg.name) if cfg.name not in (None, "") else None
    cfg.sort_key = validate_sort_key(str(cfg.sort_key))
    cfg.proc_root = str(cfg.proc_root)
    parse_listen(str(cfg.listen))
    return cfg

# CLI dest -> CFG field
ARG_FIELDS = {
    "all": "show_all",
    "port": "port",
    "name": "name",
    "sort": "sort_key",
    "reverse": "reverse",
    "json": "json_output",
    "proc_root": "proc_root",
    "serve": "serve",
    "listen": "listen",
}

def init_cfg_from_args(args) -> CFG:
    """Config file first, then whatever was given on the command line."""
    values = load_config_file(getattr(args, "config", None))
    for dest, fname in ARG_FIELDS.items():
        v = getattr(args, dest, None)
        if v is None:
            continue
        values[fname] = v
    return build_cfg(values)
