"""
omemeta - Validate and correct OME image metadata.

This package checks that the channel layout of each image (SizeC, channel
count and per-channel SamplesPerPixel) is consistent, repairs it when
asked, and provides the identifier, dimension order and schema version
helpers used while populating metadata.
"""

from .core import (
    OME_XML_MODEL_VERSION,
    DimensionOrder,
    ImageState,
    InvalidOrderSpecification,
    MetadataError,
    MetadataFormatError,
    OutcomeStatus,
    UncorrectableMetadataState,
    UnrecognizedVersionToken,
    ValidationOutcome,
    classify,
    correct_image,
    correct_model,
    create_dimension_order,
    create_id,
    get_model_version,
    validate,
    validate_model,
)
from .metadata import MetadataModel, create_metadata

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OME_XML_MODEL_VERSION",
    "DimensionOrder",
    "ImageState",
    "InvalidOrderSpecification",
    "MetadataError",
    "MetadataFormatError",
    "MetadataModel",
    "OutcomeStatus",
    "UncorrectableMetadataState",
    "UnrecognizedVersionToken",
    "ValidationOutcome",
    "classify",
    "correct_image",
    "correct_model",
    "create_dimension_order",
    "create_id",
    "create_metadata",
    "get_model_version",
    "validate",
    "validate_model",
]
