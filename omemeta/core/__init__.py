"""
Core metadata utilities: identifiers, dimension orders, schema versions and
the channel consistency validator.
"""

from .base_model import DEFAULT_SAMPLES_PER_PIXEL, PixelsAccess
from .dimension_order import DimensionOrder, create_dimension_order
from .errors import (
    InvalidOrderSpecification,
    MetadataError,
    MetadataFormatError,
    UncorrectableMetadataState,
    UnrecognizedVersionToken,
)
from .identifiers import create_id
from .model_version import OME_XML_MODEL_VERSION, get_model_version
from .validator import (
    ImageState,
    OutcomeStatus,
    ValidationOutcome,
    classify,
    correct_image,
    correct_model,
    validate,
    validate_model,
)

__all__ = [
    "DEFAULT_SAMPLES_PER_PIXEL",
    "OME_XML_MODEL_VERSION",
    "DimensionOrder",
    "ImageState",
    "InvalidOrderSpecification",
    "MetadataError",
    "MetadataFormatError",
    "OutcomeStatus",
    "PixelsAccess",
    "UncorrectableMetadataState",
    "UnrecognizedVersionToken",
    "ValidationOutcome",
    "classify",
    "correct_image",
    "correct_model",
    "create_dimension_order",
    "create_id",
    "get_model_version",
    "validate",
    "validate_model",
]
