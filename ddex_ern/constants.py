from typing import ClassVar


class Defaults:
    LANGUAGE_CODE = "en"
    TERRITORY = "Worldwide"
    RELEASE_PROFILE_VERSION_ID = "Video"
    PARTY_ID_NAMESPACE = "DPID"
    RIGHTS_CONTROLLER_ROLE = "RightsController"
    DELEGATED_USE_TYPE = "UserMakeAvailableUserProvided"
    INDENT = "    "
    CONFIG_FILE = "ddex_ern.toml"


class MessageControlTypes:
    TEST = "TestMessage"
    LIVE = "LiveMessage"
    ALL: ClassVar[tuple[str, ...]] = (TEST, LIVE)


class UpdateIndicators:
    ORIGINAL = "OriginalMessage"
    UPDATE = "UpdateMessage"
    ALL: ClassVar[tuple[str, ...]] = (ORIGINAL, UPDATE)


class WellKnownRecipients:
    YOUTUBE_DPID = "PADPIDA2013020802I"
    YOUTUBE_NAME = "YouTube"
    YOUTUBE_CONTENT_ID_DPID = "PADPIDA2015120100H"
    YOUTUBE_CONTENT_ID_NAME = "YouTube_ContentID"


class Patterns:
    DIGITS_12 = r"\d{12}"
    DIGITS_13 = r"\d{13}"
    ISRC = r"[A-Z]{2}[A-Z0-9]{3}\d{7}"
    ISWC = r"T\d{10}"
    DPID = r"[A-Z0-9]+"
    DURATION = r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?"


class XMLNamespaces:
    XSI = "http://www.w3.org/2001/XMLSchema-instance"
    XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
