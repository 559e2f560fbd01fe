# omemeta/core/errors.py
from typing import Optional


class MetadataError(Exception):
    """Base class for all metadata errors raised by omemeta."""


class InvalidOrderSpecification(MetadataError, ValueError):
    """Raised when a dimension order string does not start with X then Y."""


class UnrecognizedVersionToken(MetadataError, ValueError):
    """Raised when no schema version token can be found in a document."""


class MetadataFormatError(MetadataError):
    """Raised when a document cannot be parsed into a metadata model."""


class UncorrectableMetadataState(MetadataError):
    """
    Raised when correction was requested but no repair can make an image valid.

    Args:
        image_index: Index of the offending image in its model
        reason: Human readable description of why correction is impossible
    """

    def __init__(self, image_index: Optional[int], reason: str):
        self.image_index = image_index
        self.reason = reason
        if image_index is None:
            message = reason
        else:
            message = f"Image #{image_index}: {reason}"
        super().__init__(message)
