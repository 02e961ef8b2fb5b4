"""Positional field extraction shared by both dataset normalizers"""
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..models.dynamic_value import DynamicValue
from ..models.parking_spot import Coordinate, ParkingSpot
from .geometry import parse_positional_coordinate, parse_wkt_point

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?\d+")

RawRow = List[DynamicValue]


class DropReason(Enum):
    """Why a raw row produced no record"""
    NOT_A_ROW = "not_a_row"
    UNREPRESENTABLE = "unrepresentable"
    SHORT_ROW = "short_row"
    MISSING_FIELD = "missing_field"
    INVALID_COORDINATE = "invalid_coordinate"
    RESERVED_ID = "reserved_id"


class RowDropped(Exception):
    """Raised inside a normalizer when a row cannot produce a record"""

    def __init__(self, reason: DropReason, detail: str = ""):
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)
        self.reason = reason
        self.detail = detail


@dataclass
class NormalizationStats:
    """Row accounting for one dataset"""
    rows_in: int = 0
    records_out: int = 0
    drops: Dict[DropReason, int] = field(default_factory=dict)

    def record_drop(self, reason: DropReason, count: int = 1):
        self.drops[reason] = self.drops.get(reason, 0) + count

    def merge_rejected(self, rejected: Mapping[DropReason, int]):
        """Fold in rows rejected before normalization (reader level)"""
        for reason, count in rejected.items():
            self.rows_in += count
            self.record_drop(reason, count)

    @property
    def rows_dropped(self) -> int:
        return sum(self.drops.values())

    def as_dict(self) -> Dict[str, Any]:
        return {
            "rows_in": self.rows_in,
            "records_out": self.records_out,
            "rows_dropped": self.rows_dropped,
            "drops": {reason.value: count for reason, count in self.drops.items()},
        }


@dataclass
class NormalizationResult:
    """Records emitted for one dataset plus the row accounting"""
    spots: List[ParkingSpot]
    stats: NormalizationStats


@dataclass(frozen=True)
class ColumnMap:
    """Named column positions and the minimum row length for one dataset"""
    min_length: int
    columns: Mapping[str, int]

    def index(self, name: str) -> int:
        return self.columns[name]


class RowExtractor:
    """
    Projects typed fields out of a positional row.

    Required lookups raise RowDropped; optional lookups return None.
    """

    def __init__(self, column_map: ColumnMap):
        self.column_map = column_map

    def check_arity(self, row: RawRow):
        if len(row) < self.column_map.min_length:
            raise RowDropped(
                DropReason.SHORT_ROW,
                f"{len(row)} columns, need {self.column_map.min_length}",
            )

    def value(self, row: RawRow, name: str) -> DynamicValue:
        index = self.column_map.index(name)
        if index >= len(row):
            raise RowDropped(DropReason.SHORT_ROW, f"no column {index} for {name}")
        return row[index]

    def optional_string(self, row: RawRow, name: str) -> Optional[str]:
        return self.value(row, name).as_string()

    def non_empty_string(self, row: RawRow, name: str) -> Optional[str]:
        text = self.optional_string(row, name)
        return text if text else None

    def required_string(self, row: RawRow, name: str) -> str:
        text = self.optional_string(row, name)
        if text is None:
            raise RowDropped(DropReason.MISSING_FIELD, name)
        return text

    def space_count(self, row: RawRow, name: str) -> Optional[int]:
        """Numeric string first, then a plain integer; non-positive counts are ignored"""
        value = self.value(row, name)
        count = None
        text = value.as_string()
        if text is not None:
            if INTEGER_PATTERN.fullmatch(text):
                count = int(text)
        else:
            count = value.as_int()
        if count is None or count <= 0:
            return None
        return count

    def wkt_coordinate(self, row: RawRow, name: str) -> Coordinate:
        text = self.optional_string(row, name)
        if text is None:
            raise RowDropped(DropReason.MISSING_FIELD, name)
        coordinate = parse_wkt_point(text)
        if coordinate is None:
            raise RowDropped(DropReason.INVALID_COORDINATE, f"{name}={text!r}")
        return coordinate

    def positional_coordinate(self, row: RawRow, name: str) -> Coordinate:
        values = self.value(row, name).as_sequence()
        if values is None:
            raise RowDropped(DropReason.MISSING_FIELD, name)
        coordinate = parse_positional_coordinate(values)
        if coordinate is None:
            raise RowDropped(DropReason.INVALID_COORDINATE, name)
        return coordinate


def log_stats(label: str, stats: NormalizationStats):
    logger.info(
        f"{label}: {stats.rows_in} rows -> {stats.records_out} records "
        f"({stats.rows_dropped} dropped)"
    )
    for reason, count in stats.drops.items():
        logger.debug(f"{label}: dropped {count} rows ({reason.value})")
