# omemeta/core/model_version.py
import logging
import re
from typing import Iterator, Optional, Union

from lxml import etree

from .errors import UnrecognizedVersionToken

logger = logging.getLogger(__name__)

# Schema version this package targets when writing metadata
OME_XML_MODEL_VERSION = "2016-06"

XSI_SCHEMA_LOCATION = "{http://www.w3.org/2001/XMLSchema-instance}schemaLocation"
_VERSION_PATTERN = re.compile(r"/Schemas/OME/(\d{4}-\d{2})(?:/|\s|$)")

DocumentSource = Union[str, bytes, etree._Element, etree._ElementTree]


def _candidate_uris(root: etree._Element) -> Iterator[str]:
    """Yield namespace URIs in the order they are trusted."""
    qname = etree.QName(root)
    if qname.namespace:
        yield qname.namespace

    schema_location = root.get(XSI_SCHEMA_LOCATION)
    if schema_location:
        yield from schema_location.split()

    for uri in root.nsmap.values():
        if uri:
            yield uri


def _version_from_document(root: etree._Element) -> str:
    for uri in _candidate_uris(root):
        match = _VERSION_PATTERN.search(uri)
        if match:
            return match.group(1)

    raise UnrecognizedVersionToken(
        f"No OME schema version found in namespace or schemaLocation of "
        f"<{etree.QName(root).localname}>"
    )


def _parse_text(text: Union[str, bytes]) -> etree._Element:
    if isinstance(text, str):
        text = text.encode("utf-8")
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        return etree.fromstring(text, parser=parser)
    except etree.XMLSyntaxError as e:
        raise UnrecognizedVersionToken(
            f"Unable to read schema version from malformed document: {e}"
        ) from e


def get_model_version(source: Optional[DocumentSource] = None) -> str:
    """
    Get the OME schema version of a document.

    Args:
        source: Raw XML text, or an already parsed lxml element or tree. When
            omitted, the version targeted by this package is returned.

    Returns:
        Version token such as "2013-06".

    Raises:
        UnrecognizedVersionToken: If the document declares no OME schema
            version.
    """
    if source is None:
        return OME_XML_MODEL_VERSION

    if isinstance(source, (str, bytes)):
        root = _parse_text(source)
    elif isinstance(source, etree._ElementTree):
        root = source.getroot()
    elif isinstance(source, etree._Element):
        root = source
    else:
        raise TypeError(
            f"Expected XML text or an lxml document, got {type(source).__name__}"
        )

    version = _version_from_document(root)
    logger.debug(f"Detected OME schema version {version}")
    return version
