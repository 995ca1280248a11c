"""Write space hierarchies to timestamped JSON snapshots."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from facility_topology.spaces.hierarchy import hierarchy_to_payload
from facility_topology.spaces.models import Space


class JsonStore:
    """Stores built hierarchies under ``root`` as nested ``childSpaces`` trees."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    async def write(
        self,
        spaces: Iterable[Space],
        *,
        filename: str,
        subdir: str | None = None,
    ) -> Path:
        """Serialise ``spaces`` (root layer only; children nest inside) and return the written path."""
        target_dir = self.root / subdir if subdir else self.root
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        serialisable = {
            "generated_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "items": hierarchy_to_payload(spaces),
        }
        path.write_text(json.dumps(serialisable, indent=2))
        return path
