from __future__ import annotations

import logging
import os
import shutil
import tempfile
import time
from typing import Optional

logger = logging.getLogger(__name__)


class BufferManager:
    """Per-run scratch directory under config/buffer/<timestamp>-<random>.

    Use as a context manager: the directory is removed on every exit path,
    including exceptions. Debug mode keeps it on disk for inspection.
    """

    def __init__(self, base_dir: Optional[str] = None, debug: bool = False) -> None:
        self.debug = bool(debug)
        if base_dir is None:
            root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
            base_dir = os.path.join(root, "config", "buffer")
        os.makedirs(base_dir, exist_ok=True)
        ts = time.strftime("%Y%m%d-%H%M%S")
        self.base_dir = tempfile.mkdtemp(prefix=f"{ts}-", dir=base_dir)

    def path(self, *parts: str) -> str:
        p = os.path.join(self.base_dir, *parts)
        os.makedirs(os.path.dirname(p), exist_ok=True)
        return p

    def write_bytes(self, name: str, data: bytes) -> str:
        p = self.path(name)
        with open(p, "wb") as f:
            f.write(data)
        return p

    def write_text(self, name: str, text: str) -> str:
        p = self.path(name)
        with open(p, "w", encoding="utf-8") as f:
            f.write(text)
        return p

    def cleanup(self) -> None:
        if self.debug:
            logger.info("Keeping buffer directory %s", self.base_dir)
            return
        shutil.rmtree(self.base_dir, ignore_errors=True)

    def __enter__(self) -> "BufferManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
