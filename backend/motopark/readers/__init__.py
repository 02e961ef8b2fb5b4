"""Readers for the DataSF rows.json exports"""
from .dataset_reader import RawDataset, load_dataset_file, read_dataset, read_document

__all__ = ["RawDataset", "load_dataset_file", "read_dataset", "read_document"]
