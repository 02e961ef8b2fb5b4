"""Run both dataset normalizers and merge their records"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .errors import StructuralError
from .models.metadata import DatasetMetadata
from .models.parking_spot import ParkingSpot
from .readers.dataset_reader import RawDataset, read_dataset
from .transformers.metered import MeteredAggregator
from .transformers.row_extractor import NormalizationStats
from .transformers.unmetered import UnmeteredNormalizer

logger = logging.getLogger(__name__)

UNMETERED = "unmetered"
METERED = "metered"
NOT_SUPPLIED = "NOT_SUPPLIED"

Buffer = Union[bytes, str]


@dataclass
class DatasetReport:
    """Outcome of ingesting one dataset"""
    name: str
    available: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    stats: NormalizationStats = field(default_factory=NormalizationStats)
    metadata: Optional[DatasetMetadata] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "available": self.available,
            "error": self.error,
            "errorCode": self.error_code,
            "stats": self.stats.as_dict(),
            "metadata": self.metadata.to_dict() if self.metadata else None,
        }


@dataclass(frozen=True)
class IngestionResult:
    """
    The unified, read-only spot collection of one ingestion run.

    Unmetered spots come first in source row order, followed by metered
    spots in the order their space id was first seen.
    """
    spots: Tuple[ParkingSpot, ...]
    unmetered: DatasetReport
    metered: DatasetReport

    @property
    def metered_count(self) -> int:
        return sum(1 for spot in self.spots if spot.is_metered)

    @property
    def unmetered_count(self) -> int:
        return sum(1 for spot in self.spots if not spot.is_metered)

    @property
    def reports(self) -> Tuple[DatasetReport, DatasetReport]:
        return (self.unmetered, self.metered)


DatasetOutcome = Tuple[List[ParkingSpot], DatasetReport]


def _normalizer_for(name: str):
    if name == UNMETERED:
        return UnmeteredNormalizer()
    if name == METERED:
        return MeteredAggregator()
    raise ValueError(f"Unknown dataset: {name}")


def normalize_dataset(name: str, dataset: RawDataset) -> DatasetOutcome:
    """Normalize one decoded dataset"""
    result = _normalizer_for(name).normalize(dataset.rows)
    result.stats.merge_rejected(dataset.rejected)
    report = DatasetReport(
        name=name,
        available=True,
        stats=result.stats,
        metadata=dataset.metadata,
    )
    return result.spots, report


def process_dataset(name: str, load: Optional[Callable[[], RawDataset]]) -> DatasetOutcome:
    """
    Load and normalize one dataset.

    A structural failure marks the dataset unavailable instead of raising.
    """
    if load is None:
        logger.warning(f"No {name} dataset supplied")
        return [], DatasetReport(name=name, available=False, error="dataset not supplied",
                                 error_code=NOT_SUPPLIED)

    try:
        dataset = load()
    except StructuralError as e:
        logger.warning(f"{name.capitalize()} dataset unavailable: {e}")
        return [], DatasetReport(name=name, available=False, error=str(e), error_code=e.error_code)

    return normalize_dataset(name, dataset)


def combine(unmetered: DatasetOutcome, metered: DatasetOutcome) -> IngestionResult:
    """Concatenate unmetered then metered records"""
    unmetered_spots, unmetered_report = unmetered
    metered_spots, metered_report = metered
    result = IngestionResult(
        spots=tuple(unmetered_spots) + tuple(metered_spots),
        unmetered=unmetered_report,
        metered=metered_report,
    )
    logger.info(
        f"Total loaded: {len(result.spots)} parking spots "
        f"({result.metered_count} metered, {result.unmetered_count} unmetered)"
    )
    return result


def _buffer_loader(buffer: Optional[Buffer], name: str) -> Optional[Callable[[], RawDataset]]:
    if buffer is None:
        return None
    return lambda: read_dataset(buffer, name)


def ingest(unmetered_buffer: Optional[Buffer], metered_buffer: Optional[Buffer]) -> IngestionResult:
    """
    Ingest both rows.json buffers into one spot collection.

    Never raises for bad data: an unusable buffer is reported on its
    DatasetReport and the other dataset is still ingested.
    """
    return combine(
        process_dataset(UNMETERED, _buffer_loader(unmetered_buffer, UNMETERED)),
        process_dataset(METERED, _buffer_loader(metered_buffer, METERED)),
    )


def ingest_datasets(unmetered: Optional[RawDataset], metered: Optional[RawDataset]) -> IngestionResult:
    """Ingest datasets that were already read"""
    return combine(
        process_dataset(UNMETERED, (lambda: unmetered) if unmetered is not None else None),
        process_dataset(METERED, (lambda: metered) if metered is not None else None),
    )


def generate_app_data(result: IngestionResult) -> Dict[str, Any]:
    """
    Generate the export document consumed by the map app.
    """
    now = datetime.now(timezone.utc)
    return {
        "version": now.strftime("%Y%m%d"),
        "generated": now.strftime("%Y-%m-%dT%H:%M:%SZ"),
        "spots": [spot.to_dict() for spot in result.spots],
        "datasets": {report.name: report.as_dict() for report in result.reports},
        "stats": {
            "totalSpots": len(result.spots),
            "totalMetered": result.metered_count,
            "totalUnmetered": result.unmetered_count,
            "rowsDropped": sum(report.stats.rows_dropped for report in result.reports),
        },
    }
