"""Row normalizers for the SF motorcycle parking exports"""
from .geometry import parse_positional_coordinate, parse_wkt_point
from .metered import METERED_COLUMNS, MeteredAggregator, SpaceGroup
from .row_extractor import (
    ColumnMap,
    DropReason,
    NormalizationResult,
    NormalizationStats,
    RowDropped,
    RowExtractor,
)
from .unmetered import UNMETERED_COLUMNS, UnmeteredNormalizer

__all__ = [
    "ColumnMap",
    "DropReason",
    "METERED_COLUMNS",
    "MeteredAggregator",
    "NormalizationResult",
    "NormalizationStats",
    "RowDropped",
    "RowExtractor",
    "SpaceGroup",
    "UNMETERED_COLUMNS",
    "UnmeteredNormalizer",
    "parse_positional_coordinate",
    "parse_wkt_point",
]
