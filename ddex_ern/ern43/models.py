"""ERN 4.3 message model.

ERN 4 moves party identity into a message-level ``PartyList``; resources,
releases and deals point at parties through opaque ``*PartyReference``
strings. Descriptive fields sit directly on the resource or release and carry
an optional ``ApplicableTerritoryCode`` attribute instead of being nested in
territory sections.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .constants import ERN_NS, SCHEMA_LOCATION, XSI_NS


@dataclass(slots=True)
class ProprietaryId:
    namespace: str
    value: str


@dataclass(slots=True)
class PartyId:
    dpid: str | None = None
    isni: str | None = None
    ipi_name_number: str | None = None
    proprietary_ids: list[ProprietaryId] = field(default_factory=list)


@dataclass(slots=True)
class PartyName:
    full_name: str
    full_name_indexed: str | None = None


@dataclass(slots=True)
class Party:
    party_reference: str
    party_name: PartyName
    party_ids: list[PartyId] = field(default_factory=list)


@dataclass(slots=True)
class PartyList:
    parties: list[Party] = field(default_factory=list)

    def references(self) -> set[str]:
        return {party.party_reference for party in self.parties}


@dataclass(slots=True)
class MessagingParty:
    party_id: str
    full_name: str | None = None
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
    message_control_type: str | None = None


@dataclass(slots=True)
class TerritoryText:
    """Plain text element with optional language and territory attributes."""

    value: str
    language_and_script_code: str | None = None
    applicable_territory_code: str | None = None


@dataclass(slots=True)
class DisplayTitle:
    title_text: str
    sub_titles: list[str] = field(default_factory=list)
    language_and_script_code: str | None = None
    applicable_territory_code: str | None = None
    is_default: bool = False


@dataclass(slots=True)
class DisplayArtist:
    artist_party_reference: str
    display_artist_role: str
    artistic_roles: list[str] = field(default_factory=list)
    sequence_number: int | None = None


@dataclass(slots=True)
class Contributor:
    contributor_party_reference: str
    roles: list[str] = field(default_factory=list)
    sequence_number: int | None = None


@dataclass(slots=True)
class DelegatedUsageRights:
    use_types: list[str] = field(default_factory=list)
    territories_of_rights_delegation: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ResourceRightsController:
    rights_controller_party_reference: str
    rights_control_type: str | None = None
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
    applicable_territory_code: str | None = None


@dataclass(slots=True)
class EventDate:
    value: str
    is_approximate: bool = False
    applicable_territory_code: str | None = None


@dataclass(slots=True)
class AvRating:
    rating_text: str
    rating_agency: str
    rating_agency_namespace: str | None = None


@dataclass(slots=True)
class ResourceId:
    isrc: str | None = None
    proprietary_ids: list[ProprietaryId] = field(default_factory=list)


@dataclass(slots=True)
class DeliveryFile:
    type: str
    file_uri: str


@dataclass(slots=True)
class TechnicalDetails:
    technical_resource_details_reference: str
    delivery_files: list[DeliveryFile] = field(default_factory=list)
    file_uri: str | None = None
    codec_type: str | None = None
    image_height: int | None = None
    image_width: int | None = None


@dataclass(slots=True)
class VideoEdition:
    resource_ids: list[ResourceId] = field(default_factory=list)
    p_lines: list[PLine] = field(default_factory=list)
    technical_details: list[TechnicalDetails] = field(default_factory=list)


@dataclass(slots=True)
class Video:
    resource_reference: str
    type: str | None = None
    video_editions: list[VideoEdition] = field(default_factory=list)
    display_title_texts: list[TerritoryText] = field(default_factory=list)
    display_titles: list[DisplayTitle] = field(default_factory=list)
    display_artist_names: list[TerritoryText] = field(default_factory=list)
    display_artists: list[DisplayArtist] = field(default_factory=list)
    contributors: list[Contributor] = field(default_factory=list)
    resource_rights_controllers: list[ResourceRightsController] = field(
        default_factory=list
    )
    duration: str | None = None
    creation_date: EventDate | None = None
    parental_warning_types: list[TerritoryText] = field(default_factory=list)
    keywords: list[TerritoryText] = field(default_factory=list)

    def edition(self) -> VideoEdition:
        """The first edition, created on demand."""
        if not self.video_editions:
            self.video_editions.append(VideoEdition())
        return self.video_editions[0]


@dataclass(slots=True)
class SoundRecording:
    resource_reference: str
    type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    display_title_texts: list[TerritoryText] = field(default_factory=list)
    display_titles: list[DisplayTitle] = field(default_factory=list)
    display_artist_names: list[TerritoryText] = field(default_factory=list)
    display_artists: list[DisplayArtist] = field(default_factory=list)
    contributors: list[Contributor] = field(default_factory=list)
    resource_rights_controllers: list[ResourceRightsController] = field(
        default_factory=list
    )
    p_lines: list[PLine] = field(default_factory=list)
    duration: str | None = None
    creation_date: EventDate | None = None
    parental_warning_types: list[TerritoryText] = field(default_factory=list)
    technical_details: list[TechnicalDetails] = field(default_factory=list)
    keywords: list[TerritoryText] = field(default_factory=list)


@dataclass(slots=True)
class Image:
    resource_reference: str
    type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    parental_warning_types: list[TerritoryText] = field(default_factory=list)
    technical_details: list[TechnicalDetails] = field(default_factory=list)


@dataclass(slots=True)
class Text:
    resource_reference: str
    type: str | None = None
    resource_ids: list[ResourceId] = field(default_factory=list)
    display_title_texts: list[TerritoryText] = field(default_factory=list)


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
class ReleaseLabelReference:
    value: str
    applicable_territory_code: str | None = None


@dataclass(slots=True)
class RelatedResource:
    resource_relationship_type: str
    isrc: str | None = None
    isni: str | None = None


@dataclass(slots=True)
class LinkedReleaseResourceReference:
    value: str
    link_description: str | None = None


@dataclass(slots=True)
class ResourceGroupContentItem:
    release_resource_reference: str
    sequence_number: int | None = None
    linked_release_resource_references: list[LinkedReleaseResourceReference] = field(
        default_factory=list
    )


@dataclass(slots=True)
class ResourceGroup:
    additional_title: str | None = None
    sequence_number: int | None = None
    content_items: list[ResourceGroupContentItem] = field(default_factory=list)


@dataclass(slots=True)
class Release:
    release_reference: str
    release_type: str | None = None
    release_ids: list[ReleaseId] = field(default_factory=list)
    display_title_texts: list[TerritoryText] = field(default_factory=list)
    display_titles: list[DisplayTitle] = field(default_factory=list)
    display_artist_names: list[TerritoryText] = field(default_factory=list)
    display_artists: list[DisplayArtist] = field(default_factory=list)
    release_label_references: list[ReleaseLabelReference] = field(default_factory=list)
    p_lines: list[PLine] = field(default_factory=list)
    c_lines: list[CLine] = field(default_factory=list)
    duration: str | None = None
    genres: list[Genre] = field(default_factory=list)
    release_dates: list[EventDate] = field(default_factory=list)
    original_release_dates: list[EventDate] = field(default_factory=list)
    parental_warning_types: list[TerritoryText] = field(default_factory=list)
    av_ratings: list[AvRating] = field(default_factory=list)
    related_resources: list[RelatedResource] = field(default_factory=list)
    resource_groups: list[ResourceGroup] = field(default_factory=list)
    keywords: list[TerritoryText] = field(default_factory=list)
    synopses: list[TerritoryText] = field(default_factory=list)
    marketing_comments: list[TerritoryText] = field(default_factory=list)


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
class DealTerms:
    territory_codes: list[str] = field(default_factory=list)
    excluded_territory_codes: list[str] = field(default_factory=list)
    validity_periods: list[ValidityPeriod] = field(default_factory=list)
    commercial_model_types: list[str] = field(default_factory=list)
    use_types: list[str] = field(default_factory=list)
    rights_claim_policy_types: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Deal:
    deal_reference: str | None = None
    deal_terms: DealTerms | None = None


@dataclass(slots=True)
class ReleaseDeal:
    deal_release_reference: str
    deals: list[Deal] = field(default_factory=list)


@dataclass(slots=True)
class DealList:
    release_deals: list[ReleaseDeal] = field(default_factory=list)


@dataclass(slots=True)
class NewReleaseMessage:
    xmlns_ern: str = ERN_NS
    xmlns_xsi: str = XSI_NS
    xsi_schema_location: str = SCHEMA_LOCATION
    language_and_script_code: str | None = None
    avs_version_id: str | None = None
    message_header: MessageHeader | None = None
    party_list: PartyList = field(default_factory=PartyList)
    resource_list: ResourceList = field(default_factory=ResourceList)
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
