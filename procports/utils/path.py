from __future__ import annotations
import os
from pathlib import Path
from typing import Optional

def config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or "~/.config"
    return Path(base).expanduser() / "procports"

def to_abs_path(p: Optional[str | os.PathLike]) -> Optional[Path]:
    """A bare file name that is not in the working directory is looked up in config_dir()."""
    if not p:
        return None
    pp = Path(p).expanduser()
    if not pp.is_absolute() and not pp.exists() and len(pp.parts) == 1:
        pp = config_dir() / pp
    return pp.resolve()
