"""
Repository interfaces package
"""
from .record_store import RecordStoreInterface

__all__ = [
    "RecordStoreInterface",
]
