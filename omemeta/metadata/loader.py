# omemeta/metadata/loader.py
import logging
from pathlib import Path
from typing import IO, List, Optional, Union

from lxml import etree

from ..core.dimension_order import AXES, DimensionOrder, create_dimension_order
from ..core.errors import MetadataFormatError, UnrecognizedVersionToken
from ..core.model_version import get_model_version
from .types import MetadataModel

logger = logging.getLogger(__name__)

Source = Union[str, bytes, Path, IO, etree._Element, etree._ElementTree]

# Pixels children that must follow Channel elements in document order
_AFTER_CHANNELS = {"BinData", "TiffData", "MetadataOnly", "Plane"}


def _localname(element: etree._Element) -> str:
    return etree.QName(element).localname


def _children(element: etree._Element, name: str) -> List[etree._Element]:
    return [
        child
        for child in element
        if isinstance(child.tag, str) and _localname(child) == name
    ]


def _images(root: etree._Element) -> List[etree._Element]:
    return _children(root, "Image")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False, no_network=True, remove_blank_text=True
    )


def parse_document(source: Union[str, bytes, Path, IO]) -> etree._ElementTree:
    """
    Parse an OME-XML document.

    Args:
        source: A path, an open file, or the XML text itself. Strings that
            look like XML (start with "<") are parsed as text.

    Returns:
        The parsed lxml element tree.

    Raises:
        MetadataFormatError: If the document is not well-formed XML.
    """
    try:
        if isinstance(source, bytes):
            return etree.ElementTree(etree.fromstring(source, parser=_parser()))
        if isinstance(source, str) and source.lstrip().startswith("<"):
            text = source.lstrip().encode("utf-8")
            root = etree.fromstring(text, parser=_parser())
            return etree.ElementTree(root)
        if isinstance(source, (str, Path)):
            return etree.parse(str(source), parser=_parser())
        return etree.parse(source, parser=_parser())
    except etree.XMLSyntaxError as e:
        raise MetadataFormatError(f"Malformed OME-XML document: {e}") from e
    except OSError as e:
        raise MetadataFormatError(f"Unable to read OME-XML document: {e}") from e


def _as_root(source: Source) -> etree._Element:
    if isinstance(source, etree._ElementTree):
        return source.getroot()
    if isinstance(source, etree._Element):
        return source
    return parse_document(source).getroot()


def _parse_int(value: Optional[str], what: str) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring malformed {what} '{value}'")
        return None


def _dimension_order(value: str, image_index: int) -> DimensionOrder:
    # Letter case is normalized; anything that is not an axis letter is rejected
    normalized = value.strip().upper()
    unknown = sorted(set(normalized) - set(AXES))
    if unknown:
        raise MetadataFormatError(
            f"Image #{image_index} has invalid DimensionOrder '{value}': "
            f"unknown axis {', '.join(unknown)}"
        )
    return create_dimension_order(normalized)


def create_metadata(source: Source) -> MetadataModel:
    """
    Build a MetadataModel from an OME-XML document.

    Elements are matched by local name, so documents of any schema version
    are accepted. Missing identifiers are generated, a missing or partial
    DimensionOrder is resolved to a canonical one regardless of letter case,
    a missing SizeC loads as
    0 and a missing or non-positive SamplesPerPixel loads as unspecified.

    Args:
        source: Path, file object, XML text or an already parsed document

    Returns:
        The populated MetadataModel.

    Raises:
        MetadataFormatError: If the document cannot be parsed, an Image
            has no Pixels or a DimensionOrder holds non-axis characters.
        InvalidOrderSpecification: If a DimensionOrder does not start with X, Y.
    """
    root = _as_root(source)

    try:
        version: Optional[str] = get_model_version(root)
    except UnrecognizedVersionToken:
        logger.debug("Document declares no OME schema version")
        version = None

    model = MetadataModel(version=version)
    for image_index, image_element in enumerate(_images(root)):
        pixels_elements = _children(image_element, "Pixels")
        if not pixels_elements:
            raise MetadataFormatError(f"Image #{image_index} has no Pixels element")
        pixels_element = pixels_elements[0]

        size_c = _parse_int(pixels_element.get("SizeC"), "SizeC")
        image = model.add_image(
            size_c=size_c if size_c is not None else 0,
            dimension_order=_dimension_order(
                pixels_element.get("DimensionOrder", ""), image_index
            ),
            image_id=image_element.get("ID"),
            pixels_id=pixels_element.get("ID"),
            name=image_element.get("Name"),
        )

        for channel_element in _children(pixels_element, "Channel"):
            samples = _parse_int(
                channel_element.get("SamplesPerPixel"), "SamplesPerPixel"
            )
            if samples is not None and samples < 1:
                samples = None
            model.add_channel(
                image_index,
                samples_per_pixel=samples,
                channel_id=channel_element.get("ID"),
                name=channel_element.get("Name"),
            )

        logger.debug(
            f"Loaded {image.id}: SizeC={image.get_size_c()}, "
            f"{image.get_channel_count()} channel(s)"
        )

    logger.info(f"Loaded {model.image_count} image(s), schema version {version}")
    return model


def apply_metadata(
    document: Union[etree._Element, etree._ElementTree], model: MetadataModel
) -> None:
    """
    Write a model's channel layout back into the document it was loaded from.

    Updates SizeC, adds or removes Channel elements so each Pixels element
    holds the model's channels, and sets each channel's SamplesPerPixel.
    """
    root = _as_root(document)
    image_elements = _images(root)
    if len(image_elements) != model.image_count:
        raise MetadataFormatError(
            f"Document has {len(image_elements)} image(s) but the model has "
            f"{model.image_count}"
        )

    for image, image_element in zip(model, image_elements):
        pixels_element = _children(image_element, "Pixels")[0]
        pixels_element.set("SizeC", str(image.get_size_c()))
        pixels_element.set("DimensionOrder", image.pixels.dimension_order.value)

        channel_elements = _children(pixels_element, "Channel")
        for surplus in channel_elements[len(image.channels):]:
            pixels_element.remove(surplus)
        channel_elements = channel_elements[: len(image.channels)]

        namespace = etree.QName(pixels_element).namespace
        tag = f"{{{namespace}}}Channel" if namespace else "Channel"
        for _ in range(len(channel_elements), len(image.channels)):
            element = etree.Element(tag)
            pixels_element.insert(
                _channel_insert_position(pixels_element), element
            )
            channel_elements.append(element)

        for channel, element in zip(image.channels, channel_elements):
            element.set("ID", channel.id)
            if channel.samples_per_pixel is None:
                element.attrib.pop("SamplesPerPixel", None)
            else:
                element.set("SamplesPerPixel", str(channel.samples_per_pixel))


def _channel_insert_position(pixels_element: etree._Element) -> int:
    for position, child in enumerate(pixels_element):
        if isinstance(child.tag, str) and _localname(child) in _AFTER_CHANNELS:
            return position
    return len(pixels_element)


def write_document(
    document: Union[etree._Element, etree._ElementTree], path: Union[str, Path]
) -> None:
    """Serialize a document to disk as pretty-printed UTF-8 XML."""
    if isinstance(document, etree._ElementTree):
        tree = document
    else:
        tree = etree.ElementTree(document)
    tree.write(str(path), xml_declaration=True, encoding="UTF-8", pretty_print=True)
    logger.info(f"Wrote OME-XML document to {path}")
