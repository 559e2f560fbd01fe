# omemeta/core/validator.py
"""
Consistency checks and automatic correction of per-image channel metadata.

An image is valid when it has at least one channel, every channel declares
SamplesPerPixel, and SizeC equals the total SamplesPerPixel over all
channels. Correction makes a single deterministic pass:

1. An image without channels gets SizeC channels of one sample each.
2. Trailing channels without SamplesPerPixel are dropped when there are more
   of them than samples left to distribute.
3. Channels without SamplesPerPixel share the remaining samples when they
   divide evenly, and get one sample each otherwise.
4. SizeC is overwritten with the channel total; channel data wins.

Only an image with neither channels nor a positive SizeC cannot be repaired.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .base_model import DEFAULT_SAMPLES_PER_PIXEL, PixelsAccess
from .errors import UncorrectableMetadataState

logger = logging.getLogger(__name__)


class ImageState(Enum):
    """Consistency state of an image, derived from its channel layout only."""

    VALID = "valid"
    CORRECTABLE = "correctable"
    FATAL = "fatal"


class OutcomeStatus(Enum):
    """Result of a correction attempt."""

    VALID = "valid"
    CORRECTED = "corrected"
    UNCORRECTABLE = "uncorrectable"


@dataclass(frozen=True)
class ValidationOutcome:
    """Outcome of correcting a single image."""

    status: OutcomeStatus
    image_index: int
    reason: Optional[str] = None
    changes: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if the image is valid, whether or not it had to be corrected."""
        return self.status is not OutcomeStatus.UNCORRECTABLE

    @property
    def was_corrected(self) -> bool:
        return self.status is OutcomeStatus.CORRECTED

    def raise_if_uncorrectable(self) -> None:
        """Raise UncorrectableMetadataState for an uncorrectable outcome."""
        if self.status is OutcomeStatus.UNCORRECTABLE:
            raise UncorrectableMetadataState(self.image_index, self.reason or "")


def _is_unspecified(samples: Optional[int]) -> bool:
    return samples is None or samples < 1


def _is_consistent(size_c: int, samples: NDArray[np.int_]) -> bool:
    return (
        samples.size > 0
        and bool(np.all(samples > 0))
        and int(samples.sum()) == size_c
    )


def _is_fatal(size_c: int, samples: NDArray[np.int_]) -> bool:
    return samples.size == 0 and size_c <= 0


def classify(image: PixelsAccess) -> ImageState:
    """Return the consistency state of an image without modifying it."""
    size_c = image.get_size_c()
    samples = image.samples_vector()
    if _is_consistent(size_c, samples):
        return ImageState.VALID
    if _is_fatal(size_c, samples):
        return ImageState.FATAL
    return ImageState.CORRECTABLE


def _append_channels(image: PixelsAccess, count: int) -> List[str]:
    for _ in range(count):
        image.add_channel()
    return [
        f"added {count} channel(s) with SamplesPerPixel={DEFAULT_SAMPLES_PER_PIXEL}"
    ]


def _trim_unspecified(image: PixelsAccess, size_c: int) -> List[str]:
    samples = image.samples_vector()
    unspecified = int(np.count_nonzero(samples == 0))
    deficit = size_c - int(samples.sum())

    changes = []
    while 0 < deficit < unspecified:
        last = image.get_channel_count() - 1
        if not _is_unspecified(image.get_samples_per_pixel(last)):
            break
        image.remove_last_channel()
        unspecified -= 1
        changes.append(f"removed trailing channel {last} without SamplesPerPixel")
    return changes


def _fill_unspecified(image: PixelsAccess, size_c: int) -> List[str]:
    samples = image.samples_vector()
    missing = np.flatnonzero(samples == 0)
    if missing.size == 0:
        return []

    deficit = size_c - int(samples.sum())
    if deficit >= missing.size and deficit % missing.size == 0:
        value = deficit // int(missing.size)
    else:
        value = DEFAULT_SAMPLES_PER_PIXEL

    for channel in missing:
        image.set_samples_per_pixel(int(channel), value)
    return [
        f"set SamplesPerPixel={value} on channel(s) "
        f"{', '.join(str(channel) for channel in missing)}"
    ]


def _reconcile_size(image: PixelsAccess) -> List[str]:
    size_c = image.get_size_c()
    total = int(image.samples_vector().sum())
    if total == size_c:
        return []
    image.set_size_c(total)
    return [f"changed SizeC from {size_c} to {total}"]


def correct_image(image: PixelsAccess) -> ValidationOutcome:
    """
    Make an image's channel metadata consistent, in place.

    Never raises for inconsistent metadata; an image that cannot be repaired
    is left untouched and reported with status UNCORRECTABLE.

    Args:
        image: Channel layout of the image to correct

    Returns:
        ValidationOutcome describing the state found and the changes made.
    """
    size_c = image.get_size_c()
    samples = image.samples_vector()

    if _is_consistent(size_c, samples):
        return ValidationOutcome(OutcomeStatus.VALID, image.index)

    if _is_fatal(size_c, samples):
        reason = (
            f"no channels and SizeC={size_c}; at least one channel is required "
            f"and there is nothing to rebuild it from"
        )
        logger.warning(f"Image #{image.index} cannot be corrected: {reason}")
        return ValidationOutcome(
            OutcomeStatus.UNCORRECTABLE, image.index, reason=reason
        )

    changes: List[str] = []
    if samples.size == 0:
        changes.extend(_append_channels(image, size_c))
    else:
        changes.extend(_trim_unspecified(image, size_c))
        changes.extend(_fill_unspecified(image, size_c))
    changes.extend(_reconcile_size(image))

    for change in changes:
        logger.info(f"Image #{image.index}: {change}")

    return ValidationOutcome(
        OutcomeStatus.CORRECTED, image.index, changes=tuple(changes)
    )


def validate(image: PixelsAccess, correct: bool = False) -> bool:
    """
    Check, and optionally correct, an image's channel metadata.

    Args:
        image: Channel layout of the image to check
        correct: If True, repair the image in place when it is inconsistent

    Returns:
        Whether the image is valid. Without correction this is a pure check
        that never modifies the image.

    Raises:
        UncorrectableMetadataState: If correct is True and the image cannot
            be repaired. The image is left unmodified.
    """
    if correct:
        correct_image(image).raise_if_uncorrectable()
    return _is_consistent(image.get_size_c(), image.samples_vector())


def validate_model(images: Iterable[PixelsAccess], correct: bool = False) -> bool:
    """
    Check, and optionally correct, every image of a model.

    With correction, images are processed in order and the first
    uncorrectable image raises; images before it stay corrected.
    """
    valid = True
    for image in images:
        valid = validate(image, correct) and valid
    return valid


def correct_model(images: Iterable[PixelsAccess]) -> List[ValidationOutcome]:
    """Correct every image of a model and collect the outcomes."""
    return [correct_image(image) for image in images]
