"""Coordinate extraction from the two source geometry encodings"""
import math
import re
from typing import Optional, Sequence

from ..models.dynamic_value import DynamicValue
from ..models.parking_spot import Coordinate

# Unmetered export: "POINT (-122.433569267 37.77868774)", longitude first
WKT_POINT_PATTERN = re.compile(r"POINT \(([+-]?\d+\.?\d*)\s+([+-]?\d+\.?\d*)\)")

# Metered export location cells hold plain decimal strings
DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def make_coordinate(latitude: float, longitude: float) -> Optional[Coordinate]:
    """Build a Coordinate, or None if either component is non-finite or out of range"""
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None
    if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
        return None
    return Coordinate(latitude=latitude, longitude=longitude)


def parse_decimal(text: Optional[str]) -> Optional[float]:
    """Parse a strict decimal literal; whitespace, nan and inf are rejected"""
    if text is None or not DECIMAL_PATTERN.fullmatch(text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_wkt_point(text: Optional[str]) -> Optional[Coordinate]:
    """
    Extract a coordinate from a WKT point string.

    Group 1 is longitude and group 2 is latitude, per WKT axis order.
    """
    if not text:
        return None
    match = WKT_POINT_PATTERN.search(text)
    if not match:
        return None
    longitude = parse_decimal(match.group(1))
    latitude = parse_decimal(match.group(2))
    if longitude is None or latitude is None:
        return None
    return make_coordinate(latitude, longitude)


def parse_positional_coordinate(values: Optional[Sequence[DynamicValue]]) -> Optional[Coordinate]:
    """
    Extract a coordinate from a location array such as
    [null, "37.798279", "-122.426623", null, false].

    Index 1 is latitude and index 2 is longitude (the reverse of WKT).
    """
    if values is None or len(values) <= 2:
        return None
    latitude = parse_decimal(values[1].as_string())
    longitude = parse_decimal(values[2].as_string())
    if latitude is None or longitude is None:
        return None
    return make_coordinate(latitude, longitude)
