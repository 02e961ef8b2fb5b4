"""Read DataSF rows.json exports into positional rows"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..errors import StructuralError, UnrepresentableValueError
from ..models.dynamic_value import decode_row
from ..models.metadata import DatasetMetadata
from ..transformers.row_extractor import DropReason, RawRow

logger = logging.getLogger(__name__)


@dataclass
class RawDataset:
    """Decoded rows of one export, plus rows rejected before normalization"""
    name: str
    rows: List[RawRow] = field(default_factory=list)
    rejected: Dict[DropReason, int] = field(default_factory=dict)
    metadata: Optional[DatasetMetadata] = None

    def reject(self, reason: DropReason):
        self.rejected[reason] = self.rejected.get(reason, 0) + 1


def read_document(document: Any, name: str) -> RawDataset:
    """
    Build a RawDataset from an already parsed JSON document.

    Raises StructuralError if the document is not an object with a data array.
    """
    if not isinstance(document, dict):
        raise StructuralError("top-level JSON value is not an object", dataset=name)

    data = document.get("data")
    if not isinstance(data, list):
        raise StructuralError("missing 'data' array", dataset=name)

    dataset = RawDataset(name=name, metadata=DatasetMetadata.from_meta(document.get("meta")))

    for raw_row in data:
        if not isinstance(raw_row, list):
            dataset.reject(DropReason.NOT_A_ROW)
            continue
        try:
            dataset.rows.append(decode_row(raw_row))
        except (UnrepresentableValueError, RecursionError) as e:
            logger.debug(f"{name}: skipping row with undecodable cell: {e}")
            dataset.reject(DropReason.UNREPRESENTABLE)

    logger.info(f"Read {len(dataset.rows)} rows from {name} dataset")
    return dataset


def read_dataset(buffer: Union[bytes, str], name: str) -> RawDataset:
    """Parse a rows.json buffer; raises StructuralError on invalid JSON"""
    try:
        document = json.loads(buffer)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StructuralError(f"invalid JSON: {e}", dataset=name) from e
    except RecursionError as e:
        raise StructuralError("JSON nested too deeply", dataset=name) from e
    return read_document(document, name)


def load_dataset_file(path: Path, name: str) -> RawDataset:
    """Read a rows.json export from disk; a missing file is a structural failure"""
    try:
        buffer = Path(path).read_bytes()
    except OSError as e:
        raise StructuralError(f"cannot read {path}: {e}", dataset=name) from e
    logger.info(f"Loaded {len(buffer):,} bytes of {name} data from {Path(path).name}")
    return read_dataset(buffer, name)
