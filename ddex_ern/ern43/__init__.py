"""DDEX ERN 4.3 message model, builder and writer.

Keep this package's public surface minimal; import the model types from
``ddex_ern.ern43.models``.
"""

from .builder import (
    Builder,
    DealBuilder,
    ImageBuilder,
    ReleaseBuilder,
    ReleaseDealBuilder,
    ResourceGroupBuilder,
    SoundRecordingBuilder,
    TextBuilder,
    VideoBuilder,
    new_builder,
)
from .constants import ERN_NS, SCHEMA_LOCATION, SCHEMA_VERSION
from .models import NewReleaseMessage
from .validation import validate_message
from .xml_writer import build_message_tree, serialize_message, write_message_file

__all__ = [
    "ERN_NS",
    "SCHEMA_LOCATION",
    "SCHEMA_VERSION",
    "Builder",
    "DealBuilder",
    "ImageBuilder",
    "NewReleaseMessage",
    "ReleaseBuilder",
    "ReleaseDealBuilder",
    "ResourceGroupBuilder",
    "SoundRecordingBuilder",
    "TextBuilder",
    "VideoBuilder",
    "build_message_tree",
    "new_builder",
    "serialize_message",
    "validate_message",
    "write_message_file",
]
