"""ERN 3.8 XML writer.

Converts a :class:`NewReleaseMessage` into an ElementTree and renders it. The
root element carries the ``ern`` prefix and the namespace declarations as
literal attributes; every child element is unqualified, which is what DDEX
recipients expect from a 3.8 feed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element

from ddex_ern.infrastructure.io.xml_utils import (
    encode_datetime,
    prefixed,
    render_tree,
    set_attr,
    sub_text,
    sub_texts,
    write_document,
)

from .constants import ROOT_NAME, ROOT_PREFIX
from .models import Image, SoundRecording, Text, Video

if TYPE_CHECKING:
    from pathlib import Path

    from .models import (
        AvRating,
        CLine,
        Collection,
        DealTerms,
        DisplayArtist,
        EventDate,
        Genre,
        LocalizedText,
        MessageHeader,
        MessagingParty,
        NewReleaseMessage,
        PartyId,
        PartyName,
        PLine,
        Release,
        ReleaseDetailsByTerritory,
        ReleaseId,
        ResourceDetailsByTerritory,
        ResourceGroup,
        ResourceId,
        TechnicalDetails,
        Title,
    )

    XmlElement: TypeAlias = Element[str]
else:
    XmlElement: TypeAlias = Element

# kind -> (element, id element, details element, technical element, codec element)
_RESOURCE_ELEMENTS: dict[type, tuple[str, str, str, str, str]] = {
    SoundRecording: (
        "SoundRecording",
        "SoundRecordingId",
        "SoundRecordingDetailsByTerritory",
        "TechnicalSoundRecordingDetails",
        "AudioCodecType",
    ),
    Video: (
        "Video",
        "VideoId",
        "VideoDetailsByTerritory",
        "TechnicalVideoDetails",
        "VideoCodecType",
    ),
    Image: (
        "Image",
        "ImageId",
        "ImageDetailsByTerritory",
        "TechnicalImageDetails",
        "ImageCodecType",
    ),
    Text: (
        "Text",
        "TextId",
        "TextDetailsByTerritory",
        "TechnicalTextDetails",
        "TextCodecType",
    ),
}


def serialize_message(message: NewReleaseMessage) -> bytes:
    """Render the message as indented UTF-8 XML without a declaration."""
    return render_tree(build_message_tree(message))


def write_message_file(message: NewReleaseMessage, output: Path) -> int:
    """Write the message with an XML declaration; returns the byte count."""
    return write_document(output, serialize_message(message))


def build_message_tree(message: NewReleaseMessage) -> XmlElement:
    root: XmlElement = ET.Element(prefixed(ROOT_PREFIX, ROOT_NAME))
    root.set(f"xmlns:{ROOT_PREFIX}", message.xmlns_ern)
    root.set("xmlns:xsi", message.xmlns_xsi)
    root.set("xsi:schemaLocation", message.xsi_schema_location)
    set_attr(root, "MessageSchemaVersionId", message.message_schema_version_id)
    set_attr(root, "ReleaseProfileVersionId", message.release_profile_version_id)
    set_attr(root, "LanguageAndScriptCode", message.language_and_script_code)

    if message.message_header is not None:
        _append_header(root, message.message_header)
    sub_text(root, "UpdateIndicator", message.update_indicator)

    resource_list = ET.SubElement(root, "ResourceList")
    resources: list[Video | SoundRecording | Image | Text] = [
        *message.resource_list.sound_recordings,
        *message.resource_list.videos,
        *message.resource_list.images,
        *message.resource_list.texts,
    ]
    for resource in resources:
        _append_resource(resource_list, resource)

    if message.collection_list is not None and message.collection_list.collections:
        collection_list = ET.SubElement(root, "CollectionList")
        for collection in message.collection_list.collections:
            _append_collection(collection_list, collection)

    release_list = ET.SubElement(root, "ReleaseList")
    for release in message.release_list.releases:
        _append_release(release_list, release)

    deal_list = ET.SubElement(root, "DealList")
    for release_deal in message.deal_list.release_deals:
        release_deal_el = ET.SubElement(deal_list, "ReleaseDeal")
        sub_text(release_deal_el, "DealReleaseReference", release_deal.deal_release_reference)
        for deal in release_deal.deals:
            deal_el = ET.SubElement(release_deal_el, "Deal")
            sub_text(deal_el, "DealReference", deal.deal_reference)
            if deal.deal_terms is not None:
                _append_deal_terms(deal_el, deal.deal_terms)
        sub_text(release_deal_el, "EffectiveDate", release_deal.effective_date)
    return root


def _append_header(parent: XmlElement, header: MessageHeader) -> None:
    header_el = ET.SubElement(parent, "MessageHeader")
    sub_text(header_el, "MessageThreadId", header.message_thread_id)
    sub_text(header_el, "MessageId", header.message_id)
    sub_text(header_el, "MessageFileName", header.message_file_name)
    if header.message_sender is not None:
        _append_messaging_party(header_el, "MessageSender", header.message_sender)
    if header.sent_on_behalf_of is not None:
        _append_messaging_party(header_el, "SentOnBehalfOf", header.sent_on_behalf_of)
    for recipient in header.message_recipients:
        _append_messaging_party(header_el, "MessageRecipient", recipient)
    sub_text(
        header_el,
        "MessageCreatedDateTime",
        encode_datetime(header.message_created_date_time),
    )
    if header.message_audit_trail:
        trail_el = ET.SubElement(header_el, "MessageAuditTrail")
        for event in header.message_audit_trail:
            event_el = ET.SubElement(trail_el, "MessageAuditTrailEvent")
            _append_messaging_party(
                event_el, "MessagingPartyDescriptor", event.messaging_party
            )
            sub_text(event_el, "DateTime", encode_datetime(event.date_time))
    sub_text(header_el, "Comment", header.comment)
    sub_text(header_el, "MessageControlType", header.message_control_type)


def _append_messaging_party(parent: XmlElement, name: str, party: MessagingParty) -> None:
    party_el = ET.SubElement(parent, name)
    for party_id in party.party_ids:
        _append_party_id(party_el, party_id)
    for party_name in party.party_names:
        _append_party_name(party_el, party_name)
    sub_text(party_el, "TradingName", party.trading_name)


def _append_party_id(parent: XmlElement, party_id: PartyId) -> None:
    element = sub_text(parent, "PartyId", party_id.value)
    if element is not None:
        set_attr(element, "Namespace", party_id.namespace)


def _append_party_name(parent: XmlElement, party_name: PartyName) -> None:
    name_el = ET.SubElement(parent, "PartyName")
    set_attr(name_el, "LanguageAndScriptCode", party_name.language_and_script_code)
    sub_text(name_el, "FullName", party_name.full_name)
    sub_text(name_el, "FullNameIndexed", party_name.full_name_indexed)


def _append_localized(parent: XmlElement, name: str, text: LocalizedText | None) -> None:
    if text is None:
        return
    element = sub_text(parent, name, text.value)
    if element is not None:
        set_attr(element, "LanguageAndScriptCode", text.language_and_script_code)


def _append_event_date(parent: XmlElement, name: str, date: EventDate | None) -> None:
    if date is None:
        return
    element = sub_text(parent, name, date.value)
    if element is not None:
        set_attr(element, "IsApproximate", date.is_approximate)
        set_attr(element, "TerritoryCode", date.territory_code)


def _append_title(parent: XmlElement, title: Title) -> None:
    title_el = ET.SubElement(parent, "Title")
    set_attr(title_el, "LanguageAndScriptCode", title.language_and_script_code)
    set_attr(title_el, "TitleType", title.title_type)
    sub_text(title_el, "TitleText", title.title_text)
    sub_text(title_el, "SubTitle", title.sub_title)


def _append_reference_title(parent: XmlElement, title_text: str, sub_title: str | None) -> None:
    title_el = ET.SubElement(parent, "ReferenceTitle")
    sub_text(title_el, "TitleText", title_text)
    sub_text(title_el, "SubTitle", sub_title)


def _append_display_artist(parent: XmlElement, artist: DisplayArtist) -> None:
    artist_el = ET.SubElement(parent, "DisplayArtist")
    set_attr(artist_el, "SequenceNumber", artist.sequence_number)
    for party_id in artist.party_ids:
        _append_party_id(artist_el, party_id)
    _append_party_name(artist_el, artist.party_name)
    sub_texts(artist_el, "ArtistRole", artist.artist_roles)


def _append_p_line(parent: XmlElement, line: PLine) -> None:
    line_el = ET.SubElement(parent, "PLine")
    sub_text(line_el, "Year", line.year)
    sub_text(line_el, "PLineText", line.p_line_text)


def _append_c_line(parent: XmlElement, line: CLine) -> None:
    line_el = ET.SubElement(parent, "CLine")
    sub_text(line_el, "Year", line.year)
    sub_text(line_el, "CLineText", line.c_line_text)


def _append_genre(parent: XmlElement, genre: Genre) -> None:
    genre_el = ET.SubElement(parent, "Genre")
    sub_text(genre_el, "GenreText", genre.genre_text)
    sub_text(genre_el, "SubGenre", genre.sub_genre)


def _append_av_rating(parent: XmlElement, rating: AvRating) -> None:
    rating_el = ET.SubElement(parent, "AvRating")
    sub_text(rating_el, "RatingText", rating.rating_text)
    agency_el = sub_text(rating_el, "RatingAgency", rating.rating_agency)
    if agency_el is not None:
        set_attr(agency_el, "Namespace", rating.rating_agency_namespace)


def _append_territories(parent: XmlElement, codes: list[str], excluded: list[str]) -> None:
    sub_texts(parent, "TerritoryCode", codes)
    sub_texts(parent, "ExcludedTerritoryCode", excluded)


def _append_resource_id(parent: XmlElement, name: str, resource_id: ResourceId) -> None:
    id_el = ET.SubElement(parent, name)
    sub_text(id_el, "ISRC", resource_id.isrc)
    sub_text(id_el, "ISAN", resource_id.isan)
    for proprietary_id in resource_id.proprietary_ids:
        element = sub_text(id_el, "ProprietaryId", proprietary_id.value)
        if element is not None:
            set_attr(element, "Namespace", proprietary_id.namespace)


def _append_resource(parent: XmlElement, resource: Video | SoundRecording | Image | Text) -> None:
    name, id_name, details_name, technical_name, codec_name = _RESOURCE_ELEMENTS[
        type(resource)
    ]
    resource_el = ET.SubElement(parent, name)
    match resource:
        case SoundRecording():
            sub_text(resource_el, "SoundRecordingType", resource.sound_recording_type)
        case Video():
            sub_text(resource_el, "VideoType", resource.video_type)
        case Image():
            sub_text(resource_el, "ImageType", resource.image_type)
        case Text():
            sub_text(resource_el, "TextType", resource.text_type)
    for resource_id in resource.resource_ids:
        _append_resource_id(resource_el, id_name, resource_id)
    sub_text(resource_el, "ResourceReference", resource.resource_reference)
    if isinstance(resource, (Video, SoundRecording)):
        if resource.reference_title is not None:
            _append_reference_title(
                resource_el,
                resource.reference_title.title_text,
                resource.reference_title.sub_title,
            )
        sub_text(resource_el, "Duration", resource.duration)
    _append_event_date(resource_el, "CreationDate", resource.creation_date)
    for section in resource.details_by_territory:
        _append_resource_details(resource_el, details_name, technical_name, codec_name, section)


def _append_resource_details(
    parent: XmlElement,
    name: str,
    technical_name: str,
    codec_name: str,
    section: ResourceDetailsByTerritory,
) -> None:
    details_el = ET.SubElement(parent, name)
    _append_territories(details_el, section.territory_codes, section.excluded_territory_codes)
    for title in section.titles:
        _append_title(details_el, title)
    for artist in section.display_artists:
        _append_display_artist(details_el, artist)
    for contributor in section.resource_contributors:
        contributor_el = ET.SubElement(details_el, "ResourceContributor")
        set_attr(contributor_el, "SequenceNumber", contributor.sequence_number)
        for party_id in contributor.party_ids:
            _append_party_id(contributor_el, party_id)
        _append_party_name(contributor_el, contributor.party_name)
        sub_texts(contributor_el, "ResourceContributorRole", contributor.roles)
    for indirect in section.indirect_resource_contributors:
        indirect_el = ET.SubElement(details_el, "IndirectResourceContributor")
        _append_party_name(indirect_el, indirect.party_name)
        sub_texts(indirect_el, "IndirectResourceContributorRole", indirect.roles)
    for artist_name in section.display_artist_names:
        _append_localized(details_el, "DisplayArtistName", artist_name)
    for label_name in section.label_names:
        _append_localized(details_el, "LabelName", label_name)
    for controller in section.rights_controllers:
        controller_el = ET.SubElement(details_el, "RightsController")
        for party_id in controller.party_ids:
            _append_party_id(controller_el, party_id)
        _append_party_name(controller_el, controller.party_name)
        sub_texts(controller_el, "RightsControllerRole", controller.roles)
        sub_text(controller_el, "RightSharePercentage", controller.right_share_percentage)
        for delegated in controller.delegated_usage_rights:
            delegated_el = ET.SubElement(controller_el, "DelegatedUsageRights")
            sub_texts(delegated_el, "UseType", delegated.use_types)
            sub_texts(
                delegated_el,
                "TerritoryOfRightsDelegation",
                delegated.territories_of_rights_delegation,
            )
    for line in section.p_lines:
        _append_p_line(details_el, line)
    for c_line in section.c_lines:
        _append_c_line(details_el, c_line)
    for genre in section.genres:
        _append_genre(details_el, genre)
    sub_texts(details_el, "ParentalWarningType", section.parental_warning_types)
    for technical in section.technical_details:
        _append_technical_details(details_el, technical_name, codec_name, technical)
    for keywords in section.keywords:
        _append_localized(details_el, "Keywords", keywords)
    _append_localized(details_el, "Synopsis", section.synopsis)


def _append_technical_details(
    parent: XmlElement, name: str, codec_name: str, technical: TechnicalDetails
) -> None:
    technical_el = ET.SubElement(parent, name)
    sub_text(
        technical_el,
        "TechnicalResourceDetailsReference",
        technical.technical_resource_details_reference,
    )
    sub_text(technical_el, codec_name, technical.codec_type)
    sub_text(technical_el, "ImageHeight", technical.image_height)
    sub_text(technical_el, "ImageWidth", technical.image_width)
    if technical.file is not None:
        file_el = ET.SubElement(technical_el, "File")
        sub_text(file_el, "FileName", technical.file.file_name)
        sub_text(file_el, "FilePath", technical.file.file_path)


def _append_collection(parent: XmlElement, collection: Collection) -> None:
    collection_el = ET.SubElement(parent, "Collection")
    for proprietary_id in collection.collection_ids:
        id_el = ET.SubElement(collection_el, "CollectionId")
        element = sub_text(id_el, "ProprietaryId", proprietary_id.value)
        if element is not None:
            set_attr(element, "Namespace", proprietary_id.namespace)
    sub_text(collection_el, "CollectionType", collection.collection_type)
    for title in collection.titles:
        _append_title(collection_el, title)
    sub_text(collection_el, "CollectionReference", collection.collection_reference)
    if collection.collection_resource_references:
        refs_el = ET.SubElement(collection_el, "CollectionResourceReferenceList")
        for resource_ref in collection.collection_resource_references:
            ref_el = ET.SubElement(refs_el, "CollectionResourceReference")
            sub_text(ref_el, "CollectionResourceReference", resource_ref)
    for section in collection.details_by_territory:
        details_el = ET.SubElement(collection_el, "CollectionDetailsByTerritory")
        _append_territories(
            details_el, section.territory_codes, section.excluded_territory_codes
        )
        for artist_name in section.display_artist_names:
            _append_localized(details_el, "DisplayArtistName", artist_name)
        for title in section.titles:
            _append_title(details_el, title)
        for genre in section.genres:
            _append_genre(details_el, genre)


def _append_release_id(parent: XmlElement, release_id: ReleaseId) -> None:
    id_el = ET.SubElement(parent, "ReleaseId")
    sub_text(id_el, "GRid", release_id.grid)
    sub_text(id_el, "ISRC", release_id.isrc)
    if release_id.icpn is not None:
        icpn_el = sub_text(id_el, "ICPN", release_id.icpn.value)
        if icpn_el is not None:
            icpn_el.set("IsEan", "true" if release_id.icpn.is_ean else "false")
    sub_text(id_el, "CatalogNumber", release_id.catalog_number)
    for proprietary_id in release_id.proprietary_ids:
        element = sub_text(id_el, "ProprietaryId", proprietary_id.value)
        if element is not None:
            set_attr(element, "Namespace", proprietary_id.namespace)


def _append_release(parent: XmlElement, release: Release) -> None:
    release_el = ET.SubElement(parent, "Release")
    for release_id in release.release_ids:
        _append_release_id(release_el, release_id)
    sub_text(release_el, "ReleaseReference", release.release_reference)
    if release.reference_title is not None:
        _append_reference_title(
            release_el,
            release.reference_title.title_text,
            release.reference_title.sub_title,
        )
    if release.release_resource_references:
        refs_el = ET.SubElement(release_el, "ReleaseResourceReferenceList")
        for resource_ref in release.release_resource_references:
            ref_el = sub_text(refs_el, "ReleaseResourceReference", resource_ref.value)
            if ref_el is not None:
                set_attr(ref_el, "ReleaseResourceType", resource_ref.release_resource_type)
    sub_texts(release_el, "ReleaseType", release.release_types)
    for section in release.details_by_territory:
        _append_release_details(release_el, section)
    sub_text(release_el, "Duration", release.duration)
    for line in release.p_lines:
        _append_p_line(release_el, line)
    for c_line in release.c_lines:
        _append_c_line(release_el, c_line)
    _append_event_date(release_el, "GlobalReleaseDate", release.global_release_date)
    _append_event_date(
        release_el, "GlobalOriginalReleaseDate", release.global_original_release_date
    )


def _append_release_details(parent: XmlElement, section: ReleaseDetailsByTerritory) -> None:
    details_el = ET.SubElement(parent, "ReleaseDetailsByTerritory")
    _append_territories(details_el, section.territory_codes, section.excluded_territory_codes)
    for artist_name in section.display_artist_names:
        _append_localized(details_el, "DisplayArtistName", artist_name)
    for label_name in section.label_names:
        _append_localized(details_el, "LabelName", label_name)
    for title in section.titles:
        _append_title(details_el, title)
    for artist in section.display_artists:
        _append_display_artist(details_el, artist)
    for related in section.related_releases:
        related_el = ET.SubElement(details_el, "RelatedRelease")
        _append_release_id(related_el, related.release_id)
        sub_text(related_el, "ReleaseRelationshipType", related.release_relationship_type)
    sub_texts(details_el, "ParentalWarningType", section.parental_warning_types)
    for rating in section.av_ratings:
        _append_av_rating(details_el, rating)
    _append_localized(details_el, "MarketingComment", section.marketing_comment)
    for group in section.resource_groups:
        _append_resource_group(details_el, group)
    for genre in section.genres:
        _append_genre(details_el, genre)
    for line in section.p_lines:
        _append_p_line(details_el, line)
    for c_line in section.c_lines:
        _append_c_line(details_el, c_line)
    _append_event_date(details_el, "OriginalReleaseDate", section.original_release_date)
    _append_event_date(details_el, "ReleaseDate", section.release_date)
    for keywords in section.keywords:
        _append_localized(details_el, "Keywords", keywords)
    _append_localized(details_el, "Synopsis", section.synopsis)


def _append_resource_group(parent: XmlElement, group: ResourceGroup) -> None:
    group_el = ET.SubElement(parent, "ResourceGroup")
    for title in group.titles:
        _append_title(group_el, title)
    sub_text(group_el, "SequenceNumber", group.sequence_number)
    for item in group.content_items:
        item_el = ET.SubElement(group_el, "ResourceGroupContentItem")
        sub_text(item_el, "SequenceNumber", item.sequence_number)
        sub_text(item_el, "ResourceType", item.resource_type)
        sub_text(item_el, "ReleaseResourceReference", item.release_resource_reference)
        for linked in item.linked_release_resource_references:
            linked_el = sub_text(item_el, "LinkedReleaseResourceReference", linked.value)
            if linked_el is not None:
                set_attr(linked_el, "LinkDescription", linked.link_description)


def _append_deal_terms(parent: XmlElement, terms: DealTerms) -> None:
    terms_el = ET.SubElement(parent, "DealTerms")
    sub_texts(terms_el, "CommercialModelType", terms.commercial_model_types)
    for usage in terms.usages:
        usage_el = ET.SubElement(terms_el, "Usage")
        sub_texts(usage_el, "UseType", usage.use_types)
    _append_territories(terms_el, terms.territory_codes, terms.excluded_territory_codes)
    for period in terms.validity_periods:
        period_el = ET.SubElement(terms_el, "ValidityPeriod")
        sub_text(period_el, "StartDate", period.start_date)
        sub_text(period_el, "StartDateTime", period.start_date_time)
        sub_text(period_el, "EndDate", period.end_date)
        sub_text(period_el, "EndDateTime", period.end_date_time)
    if terms.rights_claim_policy_types:
        policy_el = ET.SubElement(terms_el, "RightsClaimPolicy")
        sub_texts(policy_el, "RightsClaimPolicyType", terms.rights_claim_policy_types)
