"""DDEX ERN 3.8 (``ern/382``) message model, builder and writer.

Keep this package's public surface minimal; import the model types from
``ddex_ern.ern38.models``.
"""

from .builder import (
    Builder,
    CollectionBuilder,
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
from .constants import ERN_NS, MESSAGE_SCHEMA_VERSION_ID, SCHEMA_LOCATION, SCHEMA_VERSION
from .models import NewReleaseMessage
from .validation import validate_message
from .xml_writer import build_message_tree, serialize_message, write_message_file

__all__ = [
    "ERN_NS",
    "MESSAGE_SCHEMA_VERSION_ID",
    "SCHEMA_LOCATION",
    "SCHEMA_VERSION",
    "Builder",
    "CollectionBuilder",
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
