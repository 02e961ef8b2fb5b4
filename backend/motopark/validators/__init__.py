"""Validators for ingested parking data"""
from .data_validator import DataValidator, ValidationResult

__all__ = ["DataValidator", "ValidationResult"]
