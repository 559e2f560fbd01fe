"""
Common test fixtures for omemeta tests.
"""

import tempfile
from pathlib import Path

import pytest

from omemeta.metadata.types import MetadataModel

# Root directory of the tests
TEST_DIR = Path(__file__).parent.resolve()
# Test data directory
DATA_DIR = TEST_DIR / "data"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def data_dir():
    """Directory holding the OME-XML test documents."""
    return DATA_DIR


def build_image(size_c, samples, model=None):
    """
    Add an image to a model.

    Args:
        size_c: Declared SizeC
        samples: SamplesPerPixel per channel; None leaves a channel unspecified
        model: Model to add to; a new one is created when omitted

    Returns:
        The new Image.
    """
    model = model if model is not None else MetadataModel()
    image = model.add_image(size_c=size_c)
    for value in samples:
        model.add_channel(image.index, samples_per_pixel=value)
    return image


def _channel_state(image):
    return (
        image.get_size_c(),
        image.get_channel_count(),
        [image.get_samples_per_pixel(c) for c in range(image.get_channel_count())],
    )


@pytest.fixture
def make_image():
    """Factory fixture building a standalone image from SizeC and samples."""
    return build_image


@pytest.fixture
def channel_state():
    """Return a function giving (SizeC, channel count, SamplesPerPixel list)."""
    return _channel_state


@pytest.fixture
def sample_xml():
    """A single-image 2013-06 OME-XML document as text."""
    return (DATA_DIR / "2013-06" / "multi-channel-z-series-time-series.ome.xml").read_text()
