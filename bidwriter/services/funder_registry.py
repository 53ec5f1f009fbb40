"""
Funder Registry Service
Loads read-only funder definitions (funders, schemes, required sections)
from JSON files.
"""
import json
import re
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from bidwriter.core.config import settings
from bidwriter.schemas.funders import Funder, FunderSummary

logger = structlog.get_logger(__name__)

# Funder ids double as file names, so keep them to a safe alphabet
FUNDER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class FunderRegistry:
    """Read-only access to funder definitions stored as one JSON file per funder."""

    def __init__(self, funders_dir: Optional[Path] = None):
        self.funders_dir = Path(funders_dir or settings.funders_dir)

    def _load_file(self, path: Path) -> Optional[Funder]:
        """Load and validate a funder file, returning None if it is unusable."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Funder.model_validate(data)
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning("Skipping unreadable funder file", path=str(path), error=str(e))
            return None

    def list_funders(self) -> List[FunderSummary]:
        """List all funders, sorted by name."""
        if not self.funders_dir.is_dir():
            logger.warning("Funders directory not found", path=str(self.funders_dir))
            return []

        summaries = []
        for path in sorted(self.funders_dir.glob("*.json")):
            funder = self._load_file(path)
            if funder is None:
                continue
            summaries.append(FunderSummary(
                id=funder.id,
                name=funder.name,
                full_name=funder.full_name,
                parent=funder.parent,
                schemes_count=len(funder.schemes),
                priorities=funder.priorities,
            ))

        summaries.sort(key=lambda summary: summary.name.lower())
        return summaries

    def get_funder(self, funder_id: str) -> Optional[Funder]:
        """Get a funder's full definition, or None if it does not exist."""
        if not funder_id or not FUNDER_ID_PATTERN.match(funder_id):
            logger.warning("Rejected invalid funder id", funder_id=funder_id)
            return None

        path = self.funders_dir / f"{funder_id}.json"
        if not path.is_file():
            return None
        return self._load_file(path)


# Singleton instance
funder_registry = FunderRegistry()


def get_funder_registry() -> FunderRegistry:
    """FastAPI dependency returning the shared registry."""
    return funder_registry
