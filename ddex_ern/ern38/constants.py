from ddex_ern.constants import XMLNamespaces

SCHEMA_VERSION = "3.8"
MESSAGE_SCHEMA_VERSION_ID = "ern/382"
ERN_NS = "http://ddex.net/xml/ern/382"
XSI_NS = XMLNamespaces.XSI
SCHEMA_LOCATION = "http://ddex.net/xml/ern/382 http://ddex.net/xml/ern/382/release-notification.xsd"
ROOT_PREFIX = "ern"
ROOT_NAME = "NewReleaseMessage"
DISPLAY_TITLE_TYPE = "DisplayTitle"
