"""Logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_FILENAME = "topology.log"


def configure_logging(level: str, log_dir: Optional[Path] = None) -> None:
    """Configure console logging, plus a ``topology.log`` file when ``log_dir`` is given."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / LOG_FILENAME))

    logging.basicConfig(level=resolved, format=LOG_FORMAT, handlers=handlers, force=True)

    # httpx logs every request at INFO; keep that for debug runs only.
    logging.getLogger("httpx").setLevel(logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING)
