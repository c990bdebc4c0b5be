from datetime import UTC, datetime
from pathlib import Path
import re
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element

from ...constants import Defaults, XMLNamespaces
from ...exceptions import MessageWriteError, SerializationError

# Characters outside the XML 1.0 Char production.
_INVALID_XML_CHARS = re.compile("[^\t\n\r\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def xml_safe(text: str) -> str:
    """Replace characters XML 1.0 cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", text)


def prefixed(prefix: str, name: str) -> str:
    return f"{prefix}:{name}"


def encode_datetime(value: datetime | None) -> str | None:
    """Render a timestamp in RFC 3339 form; ``None`` means the element is omitted."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def decode_datetime(text: str | None) -> datetime | None:
    """Inverse of :func:`encode_datetime`; absent or blank text decodes to ``None``."""
    if text is None or not text.strip():
        return None
    return datetime.fromisoformat(text.strip())


def sub_text(parent: Element, name: str, value: object | None) -> Element | None:
    """Append ``<name>value</name>`` unless the value is ``None`` or empty."""
    if value is None or value == "":
        return None
    child = ET.SubElement(parent, name)
    child.text = xml_safe(value if isinstance(value, str) else str(value))
    return child


def sub_texts(parent: Element, name: str, values: list[str]) -> None:
    for value in values:
        sub_text(parent, name, value)


def set_attr(element: Element, name: str, value: object | None) -> None:
    if value is None or value == "" or value is False:
        return
    if value is True:
        element.set(name, "true")
    else:
        element.set(name, xml_safe(str(value)))


def render_tree(root: Element) -> bytes:
    try:
        ET.indent(root, space=Defaults.INDENT)
        return ET.tostring(root, encoding="utf-8", xml_declaration=False)
    except (TypeError, ValueError) as exc:
        raise SerializationError("failed to marshal XML") from exc


def write_document(output: Path, payload: bytes) -> int:
    data = XMLNamespaces.XML_DECLARATION.encode("utf-8") + payload
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(data)
    except OSError as exc:
        raise MessageWriteError("failed to write file") from exc
    return len(data)
