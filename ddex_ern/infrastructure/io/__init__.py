"""XML rendering and file output shared by the ERN 3.8 and 4.3 writers."""

from .xml_utils import (
    decode_datetime,
    encode_datetime,
    render_tree,
    write_document,
)

__all__ = [
    "decode_datetime",
    "encode_datetime",
    "render_tree",
    "write_document",
]
