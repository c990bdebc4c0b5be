from ddex_ern.constants import XMLNamespaces

SCHEMA_VERSION = "4.3"
ERN_NS = "http://ddex.net/xml/ern/43"
XSI_NS = XMLNamespaces.XSI
SCHEMA_LOCATION = "http://ddex.net/xml/ern/43 http://ddex.net/xml/ern/43/release-notification.xsd"
ROOT_PREFIX = "ern"
ROOT_NAME = "NewReleaseMessage"
VIDEO_DELIVERY_FILE_TYPE = "VideoFile"
