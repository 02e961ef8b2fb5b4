"""Normalize the unmetered motorcycle parking export (one row, one spot)"""
import logging
from typing import Iterable

from ..models.parking_spot import METERED_ID_PREFIX, ParkingSpot
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

UNMETERED_COLUMNS = ColumnMap(
    min_length=20,
    columns={
        "street_name": 10,   # e.g. "STEINER ST"
        "full_address": 12,  # e.g. "1000 STEINER ST"
        "spaces": 13,
        "point": 17,         # WKT "POINT (lon lat)"
        "neighborhood": 19,
    },
)


class UnmeteredNormalizer:
    """
    Maps each unmetered row independently to zero or one ParkingSpot.

    The full address is the display street and the bare street name is the
    location label.
    """

    def __init__(self, column_map: ColumnMap = UNMETERED_COLUMNS):
        self.extractor = RowExtractor(column_map)

    def normalize_row(self, row: RawRow) -> ParkingSpot:
        """Build one spot or raise RowDropped"""
        x = self.extractor
        x.check_arity(row)

        street = x.required_string(row, "full_address")
        location = x.required_string(row, "street_name")
        number_of_spaces = x.space_count(row, "spaces")
        neighborhood = x.optional_string(row, "neighborhood")
        coordinate = x.wkt_coordinate(row, "point")

        spot_id = f"{street}-{location}"
        if spot_id.startswith(METERED_ID_PREFIX):
            raise RowDropped(DropReason.RESERVED_ID, spot_id)

        return ParkingSpot(
            id=spot_id,
            street=street,
            location=location,
            number_of_spaces=number_of_spaces,
            coordinate=coordinate,
            neighborhood=neighborhood,
            is_metered=False,
            rate_code=None,
        )

    def normalize(self, rows: Iterable[RawRow]) -> NormalizationResult:
        stats = NormalizationStats()
        spots = []

        for row in rows:
            stats.rows_in += 1
            try:
                spots.append(self.normalize_row(row))
            except RowDropped as drop:
                logger.debug(f"Dropping unmetered row {stats.rows_in}: {drop}")
                stats.record_drop(drop.reason)

        stats.records_out = len(spots)
        log_stats("Unmetered", stats)
        return NormalizationResult(spots=spots, stats=stats)
