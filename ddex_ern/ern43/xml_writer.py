"""ERN 4.3 XML writer."""

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

if TYPE_CHECKING:
    from pathlib import Path

    from .models import (
        CLine,
        Contributor,
        DealTerms,
        DisplayArtist,
        DisplayTitle,
        EventDate,
        Image,
        MessageHeader,
        MessagingParty,
        NewReleaseMessage,
        Party,
        PLine,
        Release,
        ResourceId,
        ResourceRightsController,
        SoundRecording,
        TechnicalDetails,
        TerritoryText,
        Text,
        Video,
    )

    XmlElement: TypeAlias = Element[str]
else:
    XmlElement: TypeAlias = Element


def serialize_message(message: NewReleaseMessage) -> bytes:
    return render_tree(build_message_tree(message))


def write_message_file(message: NewReleaseMessage, output: Path) -> int:
    return write_document(output, serialize_message(message))


def build_message_tree(message: NewReleaseMessage) -> XmlElement:
    root: XmlElement = ET.Element(prefixed(ROOT_PREFIX, ROOT_NAME))
    root.set(f"xmlns:{ROOT_PREFIX}", message.xmlns_ern)
    root.set("xmlns:xsi", message.xmlns_xsi)
    root.set("xsi:schemaLocation", message.xsi_schema_location)
    set_attr(root, "LanguageAndScriptCode", message.language_and_script_code)
    set_attr(root, "AvsVersionId", message.avs_version_id)

    if message.message_header is not None:
        _append_header(root, message.message_header)

    party_list = ET.SubElement(root, "PartyList")
    for party in message.party_list.parties:
        _append_party(party_list, party)

    resource_list = ET.SubElement(root, "ResourceList")
    for recording in message.resource_list.sound_recordings:
        _append_sound_recording(resource_list, recording)
    for video in message.resource_list.videos:
        _append_video(resource_list, video)
    for image in message.resource_list.images:
        _append_image(resource_list, image)
    for text in message.resource_list.texts:
        _append_text(resource_list, text)

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
    sub_text(header_el, "MessageControlType", header.message_control_type)


def _append_messaging_party(parent: XmlElement, name: str, party: MessagingParty) -> None:
    party_el = ET.SubElement(parent, name)
    sub_text(party_el, "PartyId", party.party_id)
    if party.full_name:
        name_el = ET.SubElement(party_el, "PartyName")
        sub_text(name_el, "FullName", party.full_name)
    sub_text(party_el, "TradingName", party.trading_name)


def _append_party(parent: XmlElement, party: Party) -> None:
    party_el = ET.SubElement(parent, "Party")
    sub_text(party_el, "PartyReference", party.party_reference)
    for party_id in party.party_ids:
        id_el = ET.SubElement(party_el, "PartyId")
        sub_text(id_el, "ISNI", party_id.isni)
        sub_text(id_el, "DPID", party_id.dpid)
        sub_text(id_el, "IpiNameNumber", party_id.ipi_name_number)
        for proprietary_id in party_id.proprietary_ids:
            element = sub_text(id_el, "ProprietaryId", proprietary_id.value)
            if element is not None:
                set_attr(element, "Namespace", proprietary_id.namespace)
    name_el = ET.SubElement(party_el, "PartyName")
    sub_text(name_el, "FullName", party.party_name.full_name)
    sub_text(name_el, "FullNameIndexed", party.party_name.full_name_indexed)


def _append_territory_text(parent: XmlElement, name: str, text: TerritoryText) -> None:
    element = sub_text(parent, name, text.value)
    if element is not None:
        set_attr(element, "LanguageAndScriptCode", text.language_and_script_code)
        set_attr(element, "ApplicableTerritoryCode", text.applicable_territory_code)


def _append_territory_texts(parent: XmlElement, name: str, texts: list[TerritoryText]) -> None:
    for text in texts:
        _append_territory_text(parent, name, text)


def _append_display_title(parent: XmlElement, title: DisplayTitle) -> None:
    title_el = ET.SubElement(parent, "DisplayTitle")
    set_attr(title_el, "LanguageAndScriptCode", title.language_and_script_code)
    set_attr(title_el, "ApplicableTerritoryCode", title.applicable_territory_code)
    set_attr(title_el, "IsDefault", title.is_default)
    sub_text(title_el, "TitleText", title.title_text)
    sub_texts(title_el, "SubTitle", title.sub_titles)


def _append_display_artist(parent: XmlElement, artist: DisplayArtist) -> None:
    artist_el = ET.SubElement(parent, "DisplayArtist")
    set_attr(artist_el, "SequenceNumber", artist.sequence_number)
    sub_text(artist_el, "ArtistPartyReference", artist.artist_party_reference)
    sub_text(artist_el, "DisplayArtistRole", artist.display_artist_role)
    sub_texts(artist_el, "ArtisticRole", artist.artistic_roles)


def _append_contributor(parent: XmlElement, contributor: Contributor) -> None:
    contributor_el = ET.SubElement(parent, "Contributor")
    set_attr(contributor_el, "SequenceNumber", contributor.sequence_number)
    sub_text(contributor_el, "ContributorPartyReference", contributor.contributor_party_reference)
    sub_texts(contributor_el, "Role", contributor.roles)


def _append_rights_controller(parent: XmlElement, controller: ResourceRightsController) -> None:
    controller_el = ET.SubElement(parent, "ResourceRightsController")
    sub_text(
        controller_el,
        "RightsControllerPartyReference",
        controller.rights_controller_party_reference,
    )
    sub_text(controller_el, "RightsControlType", controller.rights_control_type)
    sub_text(controller_el, "RightSharePercentage", controller.right_share_percentage)
    for delegated in controller.delegated_usage_rights:
        delegated_el = ET.SubElement(controller_el, "DelegatedUsageRights")
        sub_texts(delegated_el, "UseType", delegated.use_types)
        sub_texts(
            delegated_el,
            "TerritoryOfRightsDelegation",
            delegated.territories_of_rights_delegation,
        )


def _append_p_line(parent: XmlElement, line: PLine) -> None:
    line_el = ET.SubElement(parent, "PLine")
    sub_text(line_el, "Year", line.year)
    sub_text(line_el, "PLineText", line.p_line_text)


def _append_c_line(parent: XmlElement, line: CLine) -> None:
    line_el = ET.SubElement(parent, "CLine")
    sub_text(line_el, "Year", line.year)
    sub_text(line_el, "CLineText", line.c_line_text)


def _append_event_date(parent: XmlElement, name: str, date: EventDate | None) -> None:
    if date is None:
        return
    element = sub_text(parent, name, date.value)
    if element is not None:
        set_attr(element, "IsApproximate", date.is_approximate)
        set_attr(element, "ApplicableTerritoryCode", date.applicable_territory_code)


def _append_resource_id(parent: XmlElement, resource_id: ResourceId) -> None:
    id_el = ET.SubElement(parent, "ResourceId")
    sub_text(id_el, "ISRC", resource_id.isrc)
    for proprietary_id in resource_id.proprietary_ids:
        element = sub_text(id_el, "ProprietaryId", proprietary_id.value)
        if element is not None:
            set_attr(element, "Namespace", proprietary_id.namespace)


def _append_technical_details(
    parent: XmlElement, technical: TechnicalDetails, codec_name: str
) -> None:
    technical_el = ET.SubElement(parent, "TechnicalDetails")
    sub_text(
        technical_el,
        "TechnicalResourceDetailsReference",
        technical.technical_resource_details_reference,
    )
    for delivery_file in technical.delivery_files:
        delivery_el = ET.SubElement(technical_el, "DeliveryFile")
        sub_text(delivery_el, "Type", delivery_file.type)
        file_el = ET.SubElement(delivery_el, "File")
        sub_text(file_el, "URI", delivery_file.file_uri)
    sub_text(technical_el, codec_name, technical.codec_type)
    sub_text(technical_el, "ImageHeight", technical.image_height)
    sub_text(technical_el, "ImageWidth", technical.image_width)
    if technical.file_uri:
        file_el = ET.SubElement(technical_el, "File")
        sub_text(file_el, "URI", technical.file_uri)


def _append_video(parent: XmlElement, video: Video) -> None:
    video_el = ET.SubElement(parent, "Video")
    sub_text(video_el, "ResourceReference", video.resource_reference)
    sub_text(video_el, "Type", video.type)
    for edition in video.video_editions:
        edition_el = ET.SubElement(video_el, "VideoEdition")
        for resource_id in edition.resource_ids:
            _append_resource_id(edition_el, resource_id)
        for line in edition.p_lines:
            _append_p_line(edition_el, line)
        for technical in edition.technical_details:
            _append_technical_details(edition_el, technical, "VideoCodecType")
    _append_territory_texts(video_el, "DisplayTitleText", video.display_title_texts)
    for title in video.display_titles:
        _append_display_title(video_el, title)
    _append_territory_texts(video_el, "DisplayArtistName", video.display_artist_names)
    for artist in video.display_artists:
        _append_display_artist(video_el, artist)
    for contributor in video.contributors:
        _append_contributor(video_el, contributor)
    for controller in video.resource_rights_controllers:
        _append_rights_controller(video_el, controller)
    sub_text(video_el, "Duration", video.duration)
    _append_event_date(video_el, "CreationDate", video.creation_date)
    _append_territory_texts(video_el, "ParentalWarningType", video.parental_warning_types)
    _append_territory_texts(video_el, "Keywords", video.keywords)


def _append_sound_recording(parent: XmlElement, recording: SoundRecording) -> None:
    recording_el = ET.SubElement(parent, "SoundRecording")
    sub_text(recording_el, "ResourceReference", recording.resource_reference)
    sub_text(recording_el, "Type", recording.type)
    for resource_id in recording.resource_ids:
        _append_resource_id(recording_el, resource_id)
    _append_territory_texts(recording_el, "DisplayTitleText", recording.display_title_texts)
    for title in recording.display_titles:
        _append_display_title(recording_el, title)
    _append_territory_texts(recording_el, "DisplayArtistName", recording.display_artist_names)
    for artist in recording.display_artists:
        _append_display_artist(recording_el, artist)
    for contributor in recording.contributors:
        _append_contributor(recording_el, contributor)
    for controller in recording.resource_rights_controllers:
        _append_rights_controller(recording_el, controller)
    for line in recording.p_lines:
        _append_p_line(recording_el, line)
    sub_text(recording_el, "Duration", recording.duration)
    _append_event_date(recording_el, "CreationDate", recording.creation_date)
    _append_territory_texts(
        recording_el, "ParentalWarningType", recording.parental_warning_types
    )
    for technical in recording.technical_details:
        _append_technical_details(recording_el, technical, "AudioCodecType")
    _append_territory_texts(recording_el, "Keywords", recording.keywords)


def _append_image(parent: XmlElement, image: Image) -> None:
    image_el = ET.SubElement(parent, "Image")
    sub_text(image_el, "ResourceReference", image.resource_reference)
    sub_text(image_el, "Type", image.type)
    for resource_id in image.resource_ids:
        _append_resource_id(image_el, resource_id)
    _append_territory_texts(image_el, "ParentalWarningType", image.parental_warning_types)
    for technical in image.technical_details:
        _append_technical_details(image_el, technical, "ImageCodecType")


def _append_text(parent: XmlElement, text: Text) -> None:
    text_el = ET.SubElement(parent, "Text")
    sub_text(text_el, "ResourceReference", text.resource_reference)
    sub_text(text_el, "Type", text.type)
    for resource_id in text.resource_ids:
        _append_resource_id(text_el, resource_id)
    _append_territory_texts(text_el, "DisplayTitleText", text.display_title_texts)


def _append_release(parent: XmlElement, release: Release) -> None:
    release_el = ET.SubElement(parent, "Release")
    sub_text(release_el, "ReleaseReference", release.release_reference)
    sub_text(release_el, "ReleaseType", release.release_type)
    for release_id in release.release_ids:
        id_el = ET.SubElement(release_el, "ReleaseId")
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
    _append_territory_texts(release_el, "DisplayTitleText", release.display_title_texts)
    for title in release.display_titles:
        _append_display_title(release_el, title)
    _append_territory_texts(release_el, "DisplayArtistName", release.display_artist_names)
    for artist in release.display_artists:
        _append_display_artist(release_el, artist)
    for label in release.release_label_references:
        label_el = sub_text(release_el, "ReleaseLabelReference", label.value)
        if label_el is not None:
            set_attr(label_el, "ApplicableTerritoryCode", label.applicable_territory_code)
    for line in release.p_lines:
        _append_p_line(release_el, line)
    for c_line in release.c_lines:
        _append_c_line(release_el, c_line)
    sub_text(release_el, "Duration", release.duration)
    for genre in release.genres:
        genre_el = ET.SubElement(release_el, "Genre")
        set_attr(genre_el, "ApplicableTerritoryCode", genre.applicable_territory_code)
        sub_text(genre_el, "GenreText", genre.genre_text)
        sub_text(genre_el, "SubGenre", genre.sub_genre)
    for date in release.release_dates:
        _append_event_date(release_el, "ReleaseDate", date)
    for date in release.original_release_dates:
        _append_event_date(release_el, "OriginalReleaseDate", date)
    _append_territory_texts(release_el, "ParentalWarningType", release.parental_warning_types)
    for rating in release.av_ratings:
        rating_el = ET.SubElement(release_el, "AvRating")
        sub_text(rating_el, "RatingText", rating.rating_text)
        agency_el = sub_text(rating_el, "RatingAgency", rating.rating_agency)
        if agency_el is not None:
            set_attr(agency_el, "Namespace", rating.rating_agency_namespace)
    for related in release.related_resources:
        related_el = ET.SubElement(release_el, "RelatedResource")
        sub_text(related_el, "ResourceRelationshipType", related.resource_relationship_type)
        id_el = ET.SubElement(related_el, "ResourceId")
        sub_text(id_el, "ISRC", related.isrc)
        sub_text(id_el, "ISNI", related.isni)
    for group in release.resource_groups:
        group_el = ET.SubElement(release_el, "ResourceGroup")
        if group.additional_title:
            title_el = ET.SubElement(group_el, "AdditionalTitle")
            sub_text(title_el, "TitleText", group.additional_title)
        sub_text(group_el, "SequenceNumber", group.sequence_number)
        for item in group.content_items:
            item_el = ET.SubElement(group_el, "ResourceGroupContentItem")
            sub_text(item_el, "SequenceNumber", item.sequence_number)
            sub_text(item_el, "ReleaseResourceReference", item.release_resource_reference)
            for linked in item.linked_release_resource_references:
                linked_el = sub_text(item_el, "LinkedReleaseResourceReference", linked.value)
                if linked_el is not None:
                    set_attr(linked_el, "LinkDescription", linked.link_description)
    _append_territory_texts(release_el, "Keywords", release.keywords)
    _append_territory_texts(release_el, "Synopsis", release.synopses)
    _append_territory_texts(release_el, "MarketingComment", release.marketing_comments)


def _append_deal_terms(parent: XmlElement, terms: DealTerms) -> None:
    terms_el = ET.SubElement(parent, "DealTerms")
    sub_texts(terms_el, "TerritoryCode", terms.territory_codes)
    sub_texts(terms_el, "ExcludedTerritoryCode", terms.excluded_territory_codes)
    for period in terms.validity_periods:
        period_el = ET.SubElement(terms_el, "ValidityPeriod")
        sub_text(period_el, "StartDate", period.start_date)
        sub_text(period_el, "StartDateTime", period.start_date_time)
        sub_text(period_el, "EndDate", period.end_date)
        sub_text(period_el, "EndDateTime", period.end_date_time)
    sub_texts(terms_el, "CommercialModelType", terms.commercial_model_types)
    sub_texts(terms_el, "UseType", terms.use_types)
    if terms.rights_claim_policy_types:
        policy_el = ET.SubElement(terms_el, "RightsClaimPolicy")
        sub_texts(policy_el, "RightsClaimPolicyType", terms.rights_claim_policy_types)
