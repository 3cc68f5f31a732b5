"""Saving IR frames of collected aggregates as bitmaps in a fresh temp directory."""

from __future__ import annotations

import os
import sys
import tempfile
import time
from pathlib import Path
from typing import Optional

from tronkit.bmp import write_bmp

_ATTEMPTS = 32


def random_id(attempt: int) -> str:
    """A random hex identifier, falling back to process id, time and attempt."""
    try:
        value = int.from_bytes(os.urandom(8), "little")
        return f"{value:016x}"
    except (OSError, NotImplementedError):
        nanos = time.time_ns()
        return f"{os.getpid():x}-{nanos:x}-{attempt:x}"


def create_tmp_dir() -> Path:
    """Create a new uniquely named directory under the system temp directory."""
    base = Path(tempfile.gettempdir())
    for attempt in range(_ATTEMPTS):
        root = base / f"tron-{random_id(attempt)}"
        try:
            root.mkdir()
        except FileExistsError:
            continue
        return root
    raise FileExistsError("create unique collector temp persistence dir")


class Persistence:
    """Writes the IR frame of every consumed aggregate to ``root``."""

    def __init__(self, root=None) -> None:
        if root is None:
            root = create_tmp_dir()
            print(f"collector: IR persistence directory {root}", file=sys.stderr)
        self.root = Path(root)

    def consume(self, aggregate) -> Path:
        path = self.root / f"ir-{aggregate.ir.meta.id:010}.bmp"
        write_bmp(aggregate.ir, path)
        return path

    def __repr__(self) -> str:
        return f"Persistence(root={self.root!r})"


def _default_root() -> Optional[Path]:
    return None