"""Dataset metadata carried in the meta block of a rows.json export"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetMetadata:
    """Descriptive fields from meta.view"""
    dataset_id: Optional[str]
    name: Optional[str]
    attribution: Optional[str]
    rows_updated_at: Optional[datetime]

    @property
    def formatted_last_modified(self) -> str:
        if self.rows_updated_at is None:
            return "unknown"
        return self.rows_updated_at.strftime("%b %d, %Y")

    @classmethod
    def from_meta(cls, meta: Any) -> Optional["DatasetMetadata"]:
        """
        Build metadata from the top-level meta object.

        Returns None when the block is missing or not shaped like a view.
        """
        if not isinstance(meta, dict):
            return None
        view = meta.get("view")
        if not isinstance(view, dict):
            return None

        return cls(
            dataset_id=_optional_str(view.get("id")),
            name=_optional_str(view.get("name")),
            attribution=_optional_str(view.get("attribution")),
            rows_updated_at=_parse_epoch(view.get("rowsUpdatedAt")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.dataset_id,
            "name": self.name,
            "attribution": self.attribution,
            "rowsUpdatedAt": self.rows_updated_at.isoformat() if self.rows_updated_at else None,
            "lastModified": self.formatted_last_modified,
        }


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _parse_epoch(value: Any) -> Optional[datetime]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        logger.debug(f"Ignoring unusable rowsUpdatedAt {value!r}: {e}")
        return None
