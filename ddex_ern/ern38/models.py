"""ERN 3.8 message model.

Every composite is a plain mutable dataclass. Repeatable DDEX elements are
lists (empty means "not emitted") and optional ones are ``None``. The XML
writer decides element names and ordering; field names here follow the DDEX
element they render to.

In ERN 3.8 nearly all descriptive metadata lives in ``*DetailsByTerritory``
sections. Each section carries either ``territory_codes`` or
``excluded_territory_codes``, never both.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .constants import (
    ERN_NS,
    MESSAGE_SCHEMA_VERSION_ID,
    SCHEMA_LOCATION,
    XSI_NS,
)


@dataclass(slots=True)
class PartyId:
    value: str
    namespace: str | None = None


@dataclass(slots=True)
class PartyName:
    full_name: str
    full_name_indexed: str | None = None
    language_and_script_code: str | None = None


@dataclass(slots=True)
class MessagingParty:
    party_ids: list[PartyId] = field(default_factory=list)
    party_names: list[PartyName] = field(default_factory=list)
    trading_name: str | None = None


@dataclass(slots=True)
class MessageAuditTrailEvent:
    messaging_party: MessagingParty
    date_time: datetime | None = None


@dataclass(slots=True)
class MessageHeader:
    message_thread_id: str = ""
    message_id: str = ""
    message_file_name: str | None = None
    message_sender: MessagingParty | None = None
    sent_on_behalf_of: MessagingParty | None = None
    message_recipients: list[MessagingParty] = field(default_factory=list)
    message_created_date_time: datetime | None = None
    message_audit_trail: list[MessageAuditTrailEvent] = field(default_factory=list)
    comment: str | None = None
    message_control_type: str | None = None


@dataclass(slots=True)
class LocalizedText:
    """Text with an optional ``LanguageAndScriptCode`` attribute."""

    value: str
    language_and_script_code: str | None = None


@dataclass(slots=True)
class ProprietaryId:
    namespace: str
    value: str


@dataclass(slots=True)
class ResourceId:
    isrc: str | None = None
    isan: str | None = None
    proprietary_ids: list[ProprietaryId] = field(default_factory=list)


@dataclass(slots=True)
class ReferenceTitle:
    title_text: str
    sub_title: str | None = None


@dataclass(slots=True)
class Title:
    title_text: str
    sub_title: str | None = None
    title_type: str | None = None
    language_and_script_code: str | None = None


@dataclass(slots=True)
class DisplayArtist:
    party_name: PartyName
    artist_roles: list[str] = field(default_factory=list)
    party_ids: list[PartyId] = field(default_factory=list)
    sequence_number: int | None = None


@dataclass(slots=True)
class ResourceContributor:
    party_name: PartyName
    roles: list[str] = field(default_factory=list)
    party_ids: list[PartyId] = field(default_factory=list)
    sequence_number: int | None = None


@dataclass(slots=True)
class IndirectResourceContributor:
    party_name: PartyName
    roles: list[str] = field(default_factory=list)


@dataclass(slots=True)
class DelegatedUsageRights:
    use_types: list[str] = field(default_factory=list)
    territories_of_rights_delegation: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RightsController:
    party_name: PartyName
    party_ids: list[PartyId] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    right_share_percentage: str | None = None
    delegated_usage_rights: list[DelegatedUsageRights] = field(default_factory=list)


@dataclass(slots=True)
class PLine:
    p_line_text: str
    year: int | None = None


@dataclass(slots=True)
class CLine:
    c_line_text: str
    year: int | None = None


@dataclass(slots=True)
class Genre:
    genre_text: str
    sub_genre: str | None = None


@dataclass(slots=True)
class EventDate:
    value: str
    is_approximate: bool = False
    territory_code: str | None = None


@dataclass(slots=True)
class File:
    file_name: str
    file_path: str | None = None


@dataclass(slots=True)
class TechnicalDetails:
    """``Technical<Kind>Details``; the writer picks the element name per resource kind."""

    technical_resource_details_reference: str
    codec_type: str | None = None
    image_height: int | None = None
    image_width: int | None = None
    file: File | None = None


@dataclass(slots=True)
class AvRating:
    rating_text: str
    rating_agency: str
    rating_agency_namespace: str | None = None


@dataclass(slots=True)
class ResourceDetailsByTerritory:
    territory_codes: list[str] = field(default_factory=list)
    excluded_territory_codes: list[str] = field(default_factory=list)
    titles: list[Title] = field(default_factory=list)
    display_artist_names: list[LocalizedText] = field(default_factory=list)
    display_artists: list[DisplayArtist] = field(default_factory=list)
    resource_contributors: list[ResourceContributor] = field(default_factory=list)
    indirect_resource_contributors: list[IndirectResourceContributor] = field(
        default_factory=list
    )
    rights_controllers: list[RightsController] = field(default_factory=list)
    label_names: list[LocalizedText] = field(default_factory=list)
    p_lines: list[PLine] = field(default_factory=list)
    c_lines: list[CLine] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)
    parental_warning_types: list[str] = field(default_factory=list)
    keywords: list[LocalizedText] = field(default_factory=list)
    synopsis: LocalizedText | None = None
    technical_details: list[TechnicalDetails] = field(default_factory=list)


@dataclass(slots=True)
class Video:
    resource_reference: str
    video_type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    reference_title: ReferenceTitle | None = None
    duration: str | None = None
    creation_date: EventDate | None = None
    details_by_territory: list[ResourceDetailsByTerritory] = field(default_factory=list)


@dataclass(slots=True)
class SoundRecording:
    resource_reference: str
    sound_recording_type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    reference_title: ReferenceTitle | None = None
    duration: str | None = None
    creation_date: EventDate | None = None
    details_by_territory: list[ResourceDetailsByTerritory] = field(default_factory=list)


@dataclass(slots=True)
class Image:
    resource_reference: str
    image_type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    creation_date: EventDate | None = None
    details_by_territory: list[ResourceDetailsByTerritory] = field(default_factory=list)


@dataclass(slots=True)
class Text:
    resource_reference: str
    text_type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    creation_date: EventDate | None = None
    details_by_territory: list[ResourceDetailsByTerritory] = field(default_factory=list)


@dataclass(slots=True)
class ResourceList:
    sound_recordings: list[SoundRecording] = field(default_factory=list)
    videos: list[Video] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    texts: list[Text] = field(default_factory=list)

    def resource_references(self) -> set[str]:
        resources: list[SoundRecording | Video | Image | Text] = [
            *self.sound_recordings,
            *self.videos,
            *self.images,
            *self.texts,
        ]
        return {resource.resource_reference for resource in resources}


@dataclass(slots=True)
class CollectionDetailsByTerritory:
    territory_codes: list[str] = field(default_factory=list)
    excluded_territory_codes: list[str] = field(default_factory=list)
    titles: list[Title] = field(default_factory=list)
    display_artist_names: list[LocalizedText] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)


@dataclass(slots=True)
class Collection:
    collection_reference: str
    collection_type: str | None = None
    collection_ids: list[ProprietaryId] = field(default_factory=list)
    titles: list[Title] = field(default_factory=list)
    details_by_territory: list[CollectionDetailsByTerritory] = field(
        default_factory=list
    )
    collection_resource_references: list[str] = field(default_factory=list)


@dataclass(slots=True)
class CollectionList:
    collections: list[Collection] = field(default_factory=list)


@dataclass(slots=True)
class ICPN:
    value: str
    is_ean: bool = False


@dataclass(slots=True)
class ReleaseId:
    grid: str | None = None
    isrc: str | None = None
    icpn: ICPN | None = None
    catalog_number: str | None = None
    proprietary_ids: list[ProprietaryId] = field(default_factory=list)

    def values(self) -> list[str]:
        found: list[str] = []
        if self.icpn is not None and self.icpn.value:
            found.append(self.icpn.value)
        if self.grid:
            found.append(self.grid)
        if self.isrc:
            found.append(self.isrc)
        return found


@dataclass(slots=True)
class ReleaseResourceReference:
    value: str
    release_resource_type: str | None = None


@dataclass(slots=True)
class RelatedRelease:
    release_relationship_type: str
    release_id: ReleaseId


@dataclass(slots=True)
class LinkedReleaseResourceReference:
    value: str
    link_description: str | None = None


@dataclass(slots=True)
class ResourceGroupContentItem:
    release_resource_reference: str
    sequence_number: int | None = None
    resource_type: str | None = None
    linked_release_resource_references: list[LinkedReleaseResourceReference] = field(
        default_factory=list
    )


@dataclass(slots=True)
class ResourceGroup:
    titles: list[Title] = field(default_factory=list)
    sequence_number: int | None = None
    content_items: list[ResourceGroupContentItem] = field(default_factory=list)


@dataclass(slots=True)
class ReleaseDetailsByTerritory:
    territory_codes: list[str] = field(default_factory=list)
    excluded_territory_codes: list[str] = field(default_factory=list)
    display_artist_names: list[LocalizedText] = field(default_factory=list)
    label_names: list[LocalizedText] = field(default_factory=list)
    titles: list[Title] = field(default_factory=list)
    display_artists: list[DisplayArtist] = field(default_factory=list)
    related_releases: list[RelatedRelease] = field(default_factory=list)
    parental_warning_types: list[str] = field(default_factory=list)
    av_ratings: list[AvRating] = field(default_factory=list)
    marketing_comment: LocalizedText | None = None
    resource_groups: list[ResourceGroup] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)
    p_lines: list[PLine] = field(default_factory=list)
    c_lines: list[CLine] = field(default_factory=list)
    original_release_date: EventDate | None = None
    release_date: EventDate | None = None
    keywords: list[LocalizedText] = field(default_factory=list)
    synopsis: LocalizedText | None = None


@dataclass(slots=True)
class Release:
    release_reference: str
    release_ids: list[ReleaseId] = field(default_factory=list)
    reference_title: ReferenceTitle | None = None
    release_resource_references: list[ReleaseResourceReference] = field(
        default_factory=list
    )
    release_types: list[str] = field(default_factory=list)
    details_by_territory: list[ReleaseDetailsByTerritory] = field(default_factory=list)
    duration: str | None = None
    p_lines: list[PLine] = field(default_factory=list)
    c_lines: list[CLine] = field(default_factory=list)
    global_release_date: EventDate | None = None
    global_original_release_date: EventDate | None = None


@dataclass(slots=True)
class ReleaseList:
    releases: list[Release] = field(default_factory=list)


@dataclass(slots=True)
class ValidityPeriod:
    start_date: str | None = None
    start_date_time: str | None = None
    end_date: str | None = None
    end_date_time: str | None = None


@dataclass(slots=True)
class Usage:
    use_types: list[str] = field(default_factory=list)


@dataclass(slots=True)
class DealTerms:
    commercial_model_types: list[str] = field(default_factory=list)
    usages: list[Usage] = field(default_factory=list)
    territory_codes: list[str] = field(default_factory=list)
    excluded_territory_codes: list[str] = field(default_factory=list)
    validity_periods: list[ValidityPeriod] = field(default_factory=list)
    rights_claim_policy_types: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Deal:
    deal_reference: str | None = None
    deal_terms: DealTerms | None = None


@dataclass(slots=True)
class ReleaseDeal:
    deal_release_reference: str
    deals: list[Deal] = field(default_factory=list)
    effective_date: str | None = None


@dataclass(slots=True)
class DealList:
    release_deals: list[ReleaseDeal] = field(default_factory=list)


@dataclass(slots=True)
class NewReleaseMessage:
    xmlns_ern: str = ERN_NS
    xmlns_xsi: str = XSI_NS
    xsi_schema_location: str = SCHEMA_LOCATION
    message_schema_version_id: str = MESSAGE_SCHEMA_VERSION_ID
    release_profile_version_id: str | None = None
    language_and_script_code: str | None = None
    message_header: MessageHeader | None = None
    update_indicator: str | None = None
    resource_list: ResourceList = field(default_factory=ResourceList)
    collection_list: CollectionList | None = None
    release_list: ReleaseList = field(default_factory=ReleaseList)
    deal_list: DealList = field(default_factory=DealList)

    def release_ids(self) -> list[str]:
        ids: list[str] = []
        for release in self.release_list.releases:
            for release_id in release.release_ids:
                ids.extend(release_id.values())
        return ids

    def main_release(self) -> Release | None:
        if self.release_list.releases:
            return self.release_list.releases[0]
        return None
