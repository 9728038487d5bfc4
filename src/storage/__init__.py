"""Storage layer for extraction output files."""

from src.storage.event_writer import EventFileWriter, SaveResult

__all__ = ["EventFileWriter", "SaveResult"]
