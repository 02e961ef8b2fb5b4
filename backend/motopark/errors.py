"""Ingestion errors and failure typing"""
from typing import Optional


class IngestionError(Exception):
    """Base class for ingestion failures"""

    error_code = "INGESTION_ERROR"


class StructuralError(IngestionError):
    """Raised when a dataset buffer is not a usable rows.json document.

    The whole dataset is unavailable; the other dataset still loads.
    """

    error_code = "STRUCTURAL_ERROR"

    def __init__(self, message: str, dataset: Optional[str] = None):
        super().__init__(message)
        self.dataset = dataset

    def __str__(self) -> str:
        message = super().__str__()
        if self.dataset:
            return f"{self.dataset}: {message}"
        return message


class UnrepresentableValueError(IngestionError):
    """Raised when a JSON token matches no dynamic value kind"""

    error_code = "UNREPRESENTABLE"


class ConfigError(IngestionError):
    """Raised for invalid configuration values"""

    error_code = "CONFIG_ERROR"
