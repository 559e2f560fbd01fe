# omemeta/metadata/types.py
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from ..core.base_model import DEFAULT_SAMPLES_PER_PIXEL, PixelsAccess
from ..core.dimension_order import DimensionOrder, create_dimension_order
from ..core.identifiers import create_id


@dataclass
class Channel:
    """A single channel of an image."""

    id: str
    samples_per_pixel: Optional[int] = None
    name: Optional[str] = None

    @property
    def has_samples_per_pixel(self) -> bool:
        return self.samples_per_pixel is not None and self.samples_per_pixel >= 1


@dataclass
class Pixels:
    """Dimensional description of an image's pixel data."""

    id: str
    size_c: int
    dimension_order: DimensionOrder = DimensionOrder.XYZCT
    channels: List[Channel] = field(default_factory=list)

    @property
    def channel_count(self) -> int:
        return len(self.channels)


@dataclass
class Image(PixelsAccess):
    """
    An image and its pixels, addressed by its position in a MetadataModel.

    Implements PixelsAccess so it can be passed directly to the validator.
    """

    id: str
    pixels: Pixels
    name: Optional[str] = None
    _index: int = field(default=0, repr=False, compare=False)

    @property
    def index(self) -> int:
        return self._index

    @property
    def channels(self) -> List[Channel]:
        return self.pixels.channels

    def get_size_c(self) -> int:
        return self.pixels.size_c

    def set_size_c(self, size_c: int) -> None:
        self.pixels.size_c = size_c

    def get_channel_count(self) -> int:
        return self.pixels.channel_count

    def add_channel(self) -> None:
        channel_id = create_id("Channel", self._index, self.pixels.channel_count)
        self.pixels.channels.append(
            Channel(id=channel_id, samples_per_pixel=DEFAULT_SAMPLES_PER_PIXEL)
        )

    def remove_last_channel(self) -> None:
        if not self.pixels.channels:
            raise IndexError(f"Image #{self._index} has no channels to remove")
        self.pixels.channels.pop()

    def get_samples_per_pixel(self, channel: int) -> Optional[int]:
        return self.pixels.channels[channel].samples_per_pixel

    def set_samples_per_pixel(self, channel: int, samples: int) -> None:
        self.pixels.channels[channel].samples_per_pixel = samples


class MetadataModel:
    """
    Ordered collection of images.

    Images keep their insertion order; an image's index is its position.
    """

    def __init__(self, version: Optional[str] = None):
        self.version = version
        self._images: List[Image] = []

    def __iter__(self) -> Iterator[Image]:
        return iter(self._images)

    def __len__(self) -> int:
        return len(self._images)

    def __getitem__(self, index: int) -> Image:
        return self._images[index]

    @property
    def images(self) -> List[Image]:
        return list(self._images)

    @property
    def image_count(self) -> int:
        return len(self._images)

    def add_image(
        self,
        size_c: int,
        dimension_order: Union[DimensionOrder, str] = DimensionOrder.XYZCT,
        image_id: Optional[str] = None,
        pixels_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Image:
        """
        Append a new image without channels.

        Args:
            size_c: Declared size of the channel axis
            dimension_order: Canonical order or a partial order string
            image_id: Image identifier; generated when omitted
            pixels_id: Pixels identifier; generated when omitted
            name: Optional image name

        Returns:
            The new Image.
        """
        index = len(self._images)
        if not isinstance(dimension_order, DimensionOrder):
            dimension_order = create_dimension_order(dimension_order)

        pixels = Pixels(
            id=pixels_id or create_id("Pixels", index),
            size_c=size_c,
            dimension_order=dimension_order,
        )
        image = Image(
            id=image_id or create_id("Image", index),
            pixels=pixels,
            name=name,
            _index=index,
        )
        self._images.append(image)
        return image

    def add_channel(
        self,
        image_index: int,
        samples_per_pixel: Optional[int] = None,
        channel_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> Channel:
        """Append a channel to an image; SamplesPerPixel may be left unspecified."""
        image = self._images[image_index]
        channel = Channel(
            id=channel_id or create_id("Channel", image_index, image.get_channel_count()),
            samples_per_pixel=samples_per_pixel,
            name=name,
        )
        image.channels.append(channel)
        return channel
