from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path
from xml.etree import ElementTree as ET

import pytest

from ddex_ern.exceptions import MessageWriteError, SerializationError
from ddex_ern.infrastructure.io.xml_utils import (
    decode_datetime,
    encode_datetime,
    prefixed,
    render_tree,
    set_attr,
    sub_text,
    sub_texts,
    write_document,
    xml_safe,
)


class TestDatetimeCodec:
    def test_utc_uses_z_suffix(self):
        value = datetime(2023, 12, 17, 10, 30, 0, tzinfo=UTC)
        assert encode_datetime(value) == "2023-12-17T10:30:00Z"

    def test_naive_is_treated_as_utc(self):
        assert encode_datetime(datetime(2023, 12, 17, 10, 30)) == "2023-12-17T10:30:00Z"

    def test_offset_is_kept(self):
        value = datetime(2023, 12, 17, 10, 30, tzinfo=timezone(timedelta(hours=2)))
        assert encode_datetime(value) == "2023-12-17T10:30:00+02:00"

    def test_microseconds_dropped(self):
        value = datetime(2023, 12, 17, 10, 30, 0, 123456, tzinfo=UTC)
        assert encode_datetime(value) == "2023-12-17T10:30:00Z"

    def test_none_encodes_to_none(self):
        assert encode_datetime(None) is None

    def test_decode(self):
        decoded = decode_datetime("2023-12-17T10:30:00Z")
        assert decoded == datetime(2023, 12, 17, 10, 30, tzinfo=UTC)

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_absent_decodes_to_none(self, text):
        assert decode_datetime(text) is None


class TestElementHelpers:
    def test_prefixed(self):
        assert prefixed("ern", "NewReleaseMessage") == "ern:NewReleaseMessage"

    def test_sub_text_skips_empty(self):
        parent = ET.Element("Parent")
        assert sub_text(parent, "A", None) is None
        assert sub_text(parent, "B", "") is None
        assert len(parent) == 0

    def test_sub_text_stringifies(self):
        parent = ET.Element("Parent")
        child = sub_text(parent, "Year", 2023)
        assert child is not None
        assert child.text == "2023"

    def test_sub_texts_preserves_order(self):
        parent = ET.Element("Parent")
        sub_texts(parent, "UseType", ["Stream", "", "Download"])
        assert [child.text for child in parent] == ["Stream", "Download"]

    def test_set_attr(self):
        element = ET.Element("E")
        set_attr(element, "IsDefault", True)
        set_attr(element, "IsApproximate", False)
        set_attr(element, "Missing", None)
        set_attr(element, "Blank", "")
        set_attr(element, "SequenceNumber", 1)

        assert element.attrib == {"IsDefault": "true", "SequenceNumber": "1"}

    def test_xml_safe_replaces_illegal_characters(self):
        assert xml_safe("bad\x0btitle\x00") == "bad\ufffdtitle\ufffd"
        assert xml_safe("tab\tnew\nline\r") == "tab\tnew\nline\r"
        assert xml_safe("\U0001f3b5 caf\u00e9") == "\U0001f3b5 caf\u00e9"

    def test_sub_text_and_set_attr_sanitize(self):
        parent = ET.Element("Parent")
        set_attr(parent, "Namespace", "NS\x1f")
        sub_text(parent, "TitleText", "bad\x0btitle")

        parsed = ET.fromstring(render_tree(parent))

        assert parsed.get("Namespace") == "NS\ufffd"
        assert parsed.findtext("TitleText") == "bad\ufffdtitle"


class TestRendering:
    def test_render_tree_indents_without_declaration(self):
        root = ET.Element("Root")
        sub_text(root, "Child", "x")

        rendered = render_tree(root).decode("utf-8")

        assert not rendered.startswith("<?xml")
        assert rendered == "<Root>\n    <Child>x</Child>\n</Root>"

    def test_render_tree_wraps_serialization_errors(self):
        root = ET.Element("Root")
        ET.SubElement(root, "Year").text = 2023

        with pytest.raises(SerializationError, match="failed to marshal XML"):
            render_tree(root)

    def test_write_document_prepends_declaration(self, tmp_path: Path):
        output = tmp_path / "nested" / "message.xml"

        size = write_document(output, b"<Root />")

        data = output.read_bytes()
        assert data == b'<?xml version="1.0" encoding="UTF-8"?>\n<Root />'
        assert size == len(data)

    def test_write_document_wraps_os_errors(self, tmp_path: Path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(MessageWriteError, match="failed to write file") as excinfo:
            write_document(blocker / "message.xml", b"<Root />")

        assert isinstance(excinfo.value.__cause__, OSError)
