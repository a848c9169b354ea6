"""
Safe Destination Catalog

Loads the read-only catalog of shelters, hospitals, police and fire
stations from a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import TypeAdapter

from config import get_settings
from schemas.destination import DestinationKind, SafeDestination

logger = logging.getLogger(__name__)
settings = get_settings()

_catalog_adapter = TypeAdapter(List[SafeDestination])


class DestinationCatalogService:
    """Reads the destination catalog; the file is re-read on each call."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.destination_catalog_path)

    def list_destinations(
        self,
        kind: Optional[DestinationKind] = None,
        open_only: bool = False,
    ) -> List[SafeDestination]:
        destinations = self.load()
        if kind is not None:
            destinations = [d for d in destinations if d.kind == kind]
        if open_only:
            destinations = [d for d in destinations if d.is_open]
        return destinations

    def load(self) -> List[SafeDestination]:
        """Parse the catalog. A missing file is an empty catalog."""
        if not self.path.exists():
            logger.warning(f"Destination catalog not found at {self.path}")
            return []

        with self.path.open(encoding="utf-8") as fh:
            raw = json.load(fh)

        destinations = _catalog_adapter.validate_python(raw)
        logger.debug(f"Loaded {len(destinations)} destinations from {self.path}")
        return destinations
