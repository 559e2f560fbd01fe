"""
In-memory OME metadata records and their OME-XML loader.

Key components:
- types: MetadataModel, Image, Pixels and Channel records
- loader: build a model from OME-XML and write corrections back
"""

from .loader import apply_metadata, create_metadata, parse_document, write_document
from .types import Channel, Image, MetadataModel, Pixels

__all__ = [
    "Channel",
    "Image",
    "MetadataModel",
    "Pixels",
    "apply_metadata",
    "create_metadata",
    "parse_document",
    "write_document",
]
