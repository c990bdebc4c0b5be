"""DDEX ERN message builder.

This package models DDEX Electronic Release Notification messages and
serializes them to XML for delivery to digital service providers.

Features:
- ERN 3.8 (territory-scoped) model, fluent builder and XML writer
- ERN 4.3 (party-list) model, fluent builder and XML writer
- Shallow message validation for both schema versions
- UPC/EAN/ISRC/ISWC/DPID checks and ISO 8601 duration helpers
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("ddex-ern")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

# Core exports
from ddex_ern import ern38, ern43
from ddex_ern.config import BuilderConfig, ConfigLoader
from ddex_ern.exceptions import (
    DDEXError,
    MessageValidationError,
    MessageWriteError,
    SerializationError,
)
from ddex_ern.identifiers import (
    format_duration,
    parse_duration,
    validate_dpid,
    validate_ean,
    validate_isrc,
    validate_iswc,
    validate_upc,
)

__all__ = [
    "__version__",
    # Schema versions
    "ern38",
    "ern43",
    # Configuration
    "BuilderConfig",
    "ConfigLoader",
    # Errors
    "DDEXError",
    "MessageValidationError",
    "MessageWriteError",
    "SerializationError",
    # Identifiers
    "format_duration",
    "parse_duration",
    "validate_dpid",
    "validate_ean",
    "validate_isrc",
    "validate_iswc",
    "validate_upc",
]
