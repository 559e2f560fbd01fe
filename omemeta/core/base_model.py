# omemeta/core/base_model.py
from abc import ABC, abstractmethod
from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

# SamplesPerPixel given to channels created or completed by correction
DEFAULT_SAMPLES_PER_PIXEL = 1


class PixelsAccess(ABC):
    """
    Narrow view of one image's channel layout.

    This is everything the validator needs from a metadata model, so any
    model (in-memory records, a live XML document, a database row) can be
    validated and corrected by implementing these methods.
    """

    @property
    @abstractmethod
    def index(self) -> int:
        """Return the index of the image within its model."""
        pass

    @abstractmethod
    def get_size_c(self) -> int:
        """Return the declared size of the channel axis."""
        pass

    @abstractmethod
    def set_size_c(self, size_c: int) -> None:
        """Overwrite the declared size of the channel axis."""
        pass

    @abstractmethod
    def get_channel_count(self) -> int:
        """Return the number of channels currently present."""
        pass

    @abstractmethod
    def add_channel(self) -> None:
        """
        Append a channel with DEFAULT_SAMPLES_PER_PIXEL samples.

        Implementations are responsible for giving the channel an identifier.
        """
        pass

    @abstractmethod
    def remove_last_channel(self) -> None:
        """Remove the last channel."""
        pass

    @abstractmethod
    def get_samples_per_pixel(self, channel: int) -> Optional[int]:
        """Return a channel's SamplesPerPixel, or None if unspecified."""
        pass

    @abstractmethod
    def set_samples_per_pixel(self, channel: int, samples: int) -> None:
        """Set a channel's SamplesPerPixel."""
        pass

    def samples_vector(self) -> NDArray[np.int_]:
        """
        Return SamplesPerPixel for every channel as an array.

        Unspecified and non-positive values are reported as 0.
        """
        samples: List[int] = []
        for channel in range(self.get_channel_count()):
            value = self.get_samples_per_pixel(channel)
            samples.append(value if value is not None and value > 0 else 0)
        return np.array(samples, dtype=np.int64)
