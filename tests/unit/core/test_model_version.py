# tests/unit/core/test_model_version.py
import pytest
from lxml import etree

from omemeta.core.errors import UnrecognizedVersionToken
from omemeta.core.model_version import OME_XML_MODEL_VERSION, get_model_version


class TestGetModelVersion:
    """Test schema version detection."""

    def test_current_model_version(self):
        assert get_model_version() == OME_XML_MODEL_VERSION
        assert get_model_version() == "2016-06"

    def test_version_from_string(self, data_dir):
        xml = (data_dir / "2012-06" / "multi-channel-z-series-time-series.ome.xml").read_text()
        assert get_model_version(xml) == "2012-06"

    def test_version_from_bytes(self, data_dir):
        xml = (data_dir / "2012-06" / "multi-channel-z-series-time-series.ome.xml").read_bytes()
        assert get_model_version(xml) == "2012-06"

    def test_version_from_document(self, data_dir):
        path = data_dir / "2013-06" / "multi-channel-z-series-time-series.ome.xml"
        document = etree.parse(str(path))
        assert get_model_version(document) == "2013-06"
        assert get_model_version(document.getroot()) == "2013-06"

    def test_string_and_document_agree(self, sample_xml):
        root = etree.fromstring(sample_xml.encode("utf-8"))
        assert get_model_version(sample_xml) == get_model_version(root)

    def test_version_from_schema_location(self):
        xml = (
            '<OME xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
            'xsi:schemaLocation="http://www.openmicroscopy.org/Schemas/OME/2015-01 '
            'http://www.openmicroscopy.org/Schemas/OME/2015-01/ome.xsd"/>'
        )
        assert get_model_version(xml) == "2015-01"

    def test_version_from_prefixed_namespace(self):
        xml = '<ome:OME xmlns:ome="http://www.openmicroscopy.org/Schemas/OME/2011-06"/>'
        assert get_model_version(xml) == "2011-06"

    def test_no_version(self):
        with pytest.raises(UnrecognizedVersionToken):
            get_model_version("<OME/>")

    def test_foreign_namespace(self):
        with pytest.raises(UnrecognizedVersionToken):
            get_model_version('<root xmlns="http://example.com/schema/2013-06"/>')

    def test_malformed_text(self):
        with pytest.raises(UnrecognizedVersionToken):
            get_model_version("<OME")

    def test_unsupported_source_type(self):
        with pytest.raises(TypeError):
            get_model_version(42)
