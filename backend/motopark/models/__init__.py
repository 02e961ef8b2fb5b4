"""Data models for parking ingestion"""
from .dynamic_value import DynamicValue, ValueKind, decode, decode_row, encode
from .metadata import DatasetMetadata
from .parking_spot import Coordinate, ParkingSpot, RATE_DESCRIPTIONS, describe_rate

__all__ = [
    "Coordinate",
    "DatasetMetadata",
    "DynamicValue",
    "ParkingSpot",
    "RATE_DESCRIPTIONS",
    "ValueKind",
    "decode",
    "decode_row",
    "describe_rate",
    "encode",
]
