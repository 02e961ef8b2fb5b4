"""MotoPark SF: normalize San Francisco motorcycle parking datasets"""
from .errors import IngestionError, StructuralError, UnrepresentableValueError
from .ingestion import IngestionResult, DatasetReport, ingest, ingest_datasets
from .models import Coordinate, DynamicValue, ParkingSpot

__all__ = [
    "Coordinate",
    "DatasetReport",
    "DynamicValue",
    "IngestionError",
    "IngestionResult",
    "ParkingSpot",
    "StructuralError",
    "UnrepresentableValueError",
    "ingest",
    "ingest_datasets",
]
