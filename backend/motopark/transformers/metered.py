"""Aggregate the metered motorcycle parking export into one spot per space id"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..models.parking_spot import (
    METERED_ID_PREFIX,
    METERED_LOCATION_LABEL,
    Coordinate,
    ParkingSpot,
)
from .row_extractor import (
    ColumnMap,
    DropReason,
    NormalizationResult,
    NormalizationStats,
    RawRow,
    RowDropped,
    RowExtractor,
    log_stats,
)

logger = logging.getLogger(__name__)

METERED_COLUMNS = ColumnMap(
    min_length=25,
    columns={
        "combined_address": 12,
        "rate_code": 19,      # MC1, MC2, MC3, MC5
        "neighborhood": 20,
        "street_number": 21,
        "street_name": 22,
        "space_id": 23,
        "location": 24,       # [null, "lat", "lon", null, false]
    },
)


@dataclass
class SpaceGroup:
    """Rows sharing a space id; the first row seen supplies every field but count"""
    street: str
    coordinate: Coordinate
    rate_code: Optional[str]
    neighborhood: Optional[str]
    count: int = 1


def compose_street(number: Optional[str], name: Optional[str], fallback: Optional[str]) -> Optional[str]:
    """Join street number and name, falling back to the combined address column"""
    if number and name:
        return f"{number} {name}"
    if name:
        return name
    if number:
        return number
    return fallback


class MeteredAggregator:
    """
    Groups metered rows by space id.

    The export has one row per individual meter space, so rows sharing an id
    only add to the group's count.
    """

    def __init__(self, column_map: ColumnMap = METERED_COLUMNS):
        self.extractor = RowExtractor(column_map)

    def accumulate_row(self, row: RawRow, groups: Dict[str, SpaceGroup]):
        """Add one row to groups or raise RowDropped"""
        x = self.extractor
        x.check_arity(row)

        space_id = x.non_empty_string(row, "space_id")
        if space_id is None:
            raise RowDropped(DropReason.MISSING_FIELD, "space_id")

        street = compose_street(
            x.non_empty_string(row, "street_number"),
            x.non_empty_string(row, "street_name"),
            x.non_empty_string(row, "combined_address"),
        )
        if street is None:
            raise RowDropped(DropReason.MISSING_FIELD, "street")

        rate_code = x.non_empty_string(row, "rate_code")
        neighborhood = x.non_empty_string(row, "neighborhood")
        coordinate = x.positional_coordinate(row, "location")

        existing = groups.get(space_id)
        if existing is not None:
            existing.count += 1
            return

        groups[space_id] = SpaceGroup(
            street=street,
            coordinate=coordinate,
            rate_code=rate_code,
            neighborhood=neighborhood,
        )

    def normalize(self, rows: Iterable[RawRow]) -> NormalizationResult:
        stats = NormalizationStats()
        # dict keeps insertion order, so groups come out in first-seen order
        groups: Dict[str, SpaceGroup] = {}

        for row in rows:
            stats.rows_in += 1
            try:
                self.accumulate_row(row, groups)
            except RowDropped as drop:
                logger.debug(f"Dropping metered row {stats.rows_in}: {drop}")
                stats.record_drop(drop.reason)

        spots = [
            ParkingSpot(
                id=f"{METERED_ID_PREFIX}{space_id}",
                street=group.street,
                location=METERED_LOCATION_LABEL,
                number_of_spaces=group.count,
                coordinate=group.coordinate,
                neighborhood=group.neighborhood,
                is_metered=True,
                rate_code=group.rate_code,
            )
            for space_id, group in groups.items()
        ]

        stats.records_out = len(spots)
        log_stats("Metered", stats)
        logger.info(f"Grouped {stats.rows_in - stats.rows_dropped} metered rows into {len(spots)} spaces")
        return NormalizationResult(spots=spots, stats=stats)
