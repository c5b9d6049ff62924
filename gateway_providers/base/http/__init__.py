"""HTTP-facing helpers: transport readers and response metadata."""

from .readers import HttpxStreamReader, IterableReader, ReadResult, TransportReader
from .response_metadata import extract_response_metadata

__all__ = [
    "HttpxStreamReader",
    "IterableReader",
    "ReadResult",
    "TransportReader",
    "extract_response_metadata",
]
