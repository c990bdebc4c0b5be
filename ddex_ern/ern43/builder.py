"""Fluent construction API for ERN 4.3 messages.

Same append-and-index pattern as the 3.8 builder, without territory
sections: fields are set directly on the resource or release, and territory
scoping is an optional ``applicable_territory`` argument on the setters that
support it. Artists, labels and rights controllers are given as party
references; register the parties with :meth:`Builder.add_party`.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Generic, Self, TypeVar

from ddex_ern.config import BuilderConfig
from ddex_ern.constants import Defaults, WellKnownRecipients
from ddex_ern.identifiers import code_list
from ddex_ern.infrastructure.logging import NullLogger

from .constants import SCHEMA_VERSION, VIDEO_DELIVERY_FILE_TYPE
from .models import (
    ICPN,
    AvRating,
    CLine,
    Contributor,
    Deal,
    DealTerms,
    DelegatedUsageRights,
    DeliveryFile,
    DisplayArtist,
    DisplayTitle,
    EventDate,
    Genre,
    Image,
    LinkedReleaseResourceReference,
    MessageAuditTrailEvent,
    MessageHeader,
    MessagingParty,
    NewReleaseMessage,
    Party,
    PartyId,
    PartyName,
    PLine,
    ProprietaryId,
    RelatedResource,
    Release,
    ReleaseDeal,
    ReleaseId,
    ReleaseLabelReference,
    ResourceGroup,
    ResourceGroupContentItem,
    ResourceId,
    ResourceRightsController,
    SoundRecording,
    TechnicalDetails,
    TerritoryText,
    Text,
    ValidityPeriod,
    Video,
)
from .validation import validate_message
from .xml_writer import serialize_message, write_message_file

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ddex_ern.ports import LoggerPort

PerformanceT = TypeVar("PerformanceT", Video, SoundRecording)
ParentT = TypeVar("ParentT")


class Builder:
    def __init__(
        self,
        message: NewReleaseMessage | None = None,
        *,
        config: BuilderConfig | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        self.config = config or BuilderConfig()
        self.logger: LoggerPort = logger or NullLogger()
        self.message = message or NewReleaseMessage(
            language_and_script_code=self.config.language_code,
            avs_version_id=self.config.avs_version_id,
        )

    def set_header(
        self, message_id: str, thread_id: str, sender_id: str, sender_name: str
    ) -> Self:
        self.message.message_header = MessageHeader(
            message_thread_id=thread_id,
            message_id=message_id,
            message_sender=MessagingParty(party_id=sender_id, full_name=sender_name),
            message_created_date_time=datetime.now(UTC),
            message_control_type=self.config.message_control_type,
        )
        self.logger.debug(f"Header set for message {message_id}")
        return self

    def _header(self) -> MessageHeader:
        if self.message.message_header is None:
            self.message.message_header = MessageHeader()
        return self.message.message_header

    def add_recipient(self, party_id: str, name: str) -> Self:
        self._header().message_recipients.append(
            MessagingParty(party_id=party_id, full_name=name)
        )
        return self

    def add_youtube_recipient(self) -> Self:
        return self.add_recipient(
            WellKnownRecipients.YOUTUBE_DPID, WellKnownRecipients.YOUTUBE_NAME
        )

    def add_youtube_content_id_recipient(self) -> Self:
        return self.add_recipient(
            WellKnownRecipients.YOUTUBE_CONTENT_ID_DPID,
            WellKnownRecipients.YOUTUBE_CONTENT_ID_NAME,
        )

    def set_language(self, language_code: str) -> Self:
        self.message.language_and_script_code = language_code
        return self

    def set_avs_version(self, avs_version_id: str) -> Self:
        self.message.avs_version_id = avs_version_id or None
        return self

    def set_message_control_type(self, control_type: str) -> Self:
        self._header().message_control_type = control_type
        return self

    def add_audit_trail_event(
        self, party_id: str, name: str, when: datetime | None = None
    ) -> Self:
        self._header().message_audit_trail.append(
            MessageAuditTrailEvent(
                messaging_party=MessagingParty(party_id=party_id, full_name=name),
                date_time=when or datetime.now(UTC),
            )
        )
        return self

    def add_party(
        self,
        party_reference: str,
        name: str,
        indexed_name: str = "",
        *,
        dpid: str | None = None,
        isni: str | None = None,
    ) -> Self:
        party = Party(
            party_reference=party_reference,
            party_name=PartyName(full_name=name, full_name_indexed=indexed_name or None),
        )
        if dpid or isni:
            party.party_ids.append(PartyId(dpid=dpid, isni=isni))
        self.message.party_list.parties.append(party)
        self.logger.debug(f"Added party {party_reference}")
        return self

    def add_video(self, resource_ref: str, video_type: str = "") -> VideoBuilder:
        videos = self.message.resource_list.videos
        videos.append(Video(resource_reference=resource_ref, type=video_type or None))
        self.logger.debug(f"Added video {resource_ref}")
        return VideoBuilder(self, videos, len(videos) - 1)

    def add_sound_recording(
        self, resource_ref: str, sound_recording_type: str = ""
    ) -> SoundRecordingBuilder:
        recordings = self.message.resource_list.sound_recordings
        recordings.append(
            SoundRecording(
                resource_reference=resource_ref, type=sound_recording_type or None
            )
        )
        self.logger.debug(f"Added sound recording {resource_ref}")
        return SoundRecordingBuilder(self, recordings, len(recordings) - 1)

    def add_image(self, resource_ref: str, image_type: str = "") -> ImageBuilder:
        images = self.message.resource_list.images
        images.append(Image(resource_reference=resource_ref, type=image_type or None))
        self.logger.debug(f"Added image {resource_ref}")
        return ImageBuilder(self, images, len(images) - 1)

    def add_text(self, resource_ref: str, text_type: str = "") -> TextBuilder:
        texts = self.message.resource_list.texts
        texts.append(Text(resource_reference=resource_ref, type=text_type or None))
        self.logger.debug(f"Added text {resource_ref}")
        return TextBuilder(self, texts, len(texts) - 1)

    def add_release(self, release_ref: str, release_type: str = "") -> ReleaseBuilder:
        releases = self.message.release_list.releases
        releases.append(
            Release(release_reference=release_ref, release_type=release_type or None)
        )
        self.logger.debug(f"Added release {release_ref}")
        return ReleaseBuilder(self, releases, len(releases) - 1)

    def add_release_deal(self, release_ref: str) -> ReleaseDealBuilder:
        release_deals = self.message.deal_list.release_deals
        release_deals.append(ReleaseDeal(deal_release_reference=release_ref))
        self.logger.debug(f"Added release deal for {release_ref}")
        return ReleaseDealBuilder(self, release_deals, len(release_deals) - 1)

    def add_deal(self, release_ref: str) -> DealBuilder[Builder]:
        """Add a release deal holding a single deal and return that deal's builder."""
        release_deals = self.message.deal_list.release_deals
        release_deals.append(ReleaseDeal(deal_release_reference=release_ref, deals=[Deal()]))
        self.logger.debug(f"Added deal for {release_ref}")
        return DealBuilder(self, release_deals[-1].deals, 0)

    def build(self) -> NewReleaseMessage:
        return self.message

    def validate(self) -> None:
        validate_message(self.message)

    def serialize(self) -> bytes:
        return serialize_message(self.message)

    def write_file(self, output: Path) -> int:
        size = write_message_file(self.message, output)
        self.logger.success(f"Wrote ERN {SCHEMA_VERSION} message to {output} ({size:,} bytes)")
        return size


def new_builder(
    *, config: BuilderConfig | None = None, logger: LoggerPort | None = None
) -> Builder:
    return Builder(config=config, logger=logger)


def _territory_text(value: str, territory: str = "", language: str = "") -> TerritoryText:
    return TerritoryText(
        value=value,
        language_and_script_code=language or None,
        applicable_territory_code=territory or None,
    )


class _PerformanceBuilder(Generic[PerformanceT]):
    """Setters shared by video and sound recording resources."""

    def __init__(self, builder: Builder, resources: list[PerformanceT], index: int) -> None:
        self._builder = builder
        self._resources = resources
        self._index = index

    @property
    def resource(self) -> PerformanceT:
        return self._resources[self._index]

    def _resource_ids(self) -> list[ResourceId]:
        raise NotImplementedError

    def _p_lines(self) -> list[PLine]:
        raise NotImplementedError

    def with_isrc(self, isrc: str) -> Self:
        ids = self._resource_ids()
        if not ids:
            ids.append(ResourceId())
        ids[0].isrc = isrc
        return self

    def add_proprietary_id(self, namespace: str, value: str) -> Self:
        ids = self._resource_ids()
        if not ids:
            ids.append(ResourceId())
        ids[0].proprietary_ids.append(ProprietaryId(namespace=namespace, value=value))
        return self

    def with_title(self, title: str, subtitle: str = "") -> Self:
        """Set the default DisplayTitleText and DisplayTitle."""
        self.resource.display_title_texts.append(TerritoryText(value=title))
        self.resource.display_titles.append(
            DisplayTitle(
                title_text=title,
                sub_titles=[subtitle] if subtitle else [],
                is_default=True,
            )
        )
        return self

    def with_display_artist_name(self, artist_name: str, applicable_territory: str = "") -> Self:
        self.resource.display_artist_names.append(
            _territory_text(artist_name, applicable_territory)
        )
        return self

    def with_artist(self, party_ref: str, role: str, sequence: int | None = None) -> Self:
        self.resource.display_artists.append(
            DisplayArtist(
                artist_party_reference=party_ref,
                display_artist_role=role,
                sequence_number=sequence,
            )
        )
        return self

    def with_contributor(
        self, party_ref: str, roles: Iterable[str], sequence: int | None = None
    ) -> Self:
        self.resource.contributors.append(
            Contributor(
                contributor_party_reference=party_ref,
                roles=list(roles),
                sequence_number=sequence,
            )
        )
        return self

    def with_rights_controller(
        self,
        party_ref: str,
        percentage: float,
        territories: str | Iterable[str] | None = None,
    ) -> Self:
        territories = code_list(territories or []) or [self._builder.config.default_territory]
        self.resource.resource_rights_controllers.append(
            ResourceRightsController(
                rights_controller_party_reference=party_ref,
                rights_control_type=Defaults.RIGHTS_CONTROLLER_ROLE,
                right_share_percentage=f"{percentage:.2f}",
                delegated_usage_rights=[
                    DelegatedUsageRights(
                        use_types=[Defaults.DELEGATED_USE_TYPE],
                        territories_of_rights_delegation=territories,
                    )
                ],
            )
        )
        return self

    def with_duration(self, duration: str) -> Self:
        self.resource.duration = duration
        return self

    def with_creation_date(self, date: str, is_approximate: bool = False) -> Self:
        self.resource.creation_date = EventDate(value=date, is_approximate=is_approximate)
        return self

    def with_parental_warning(self, warning_type: str, applicable_territory: str = "") -> Self:
        self.resource.parental_warning_types.append(
            _territory_text(warning_type, applicable_territory)
        )
        return self

    def with_p_line(self, year: int | None, text: str) -> Self:
        self._p_lines().append(PLine(p_line_text=text, year=year))
        return self

    def add_keywords(self, *keywords: str) -> Self:
        return self.add_keywords_with_language("", *keywords)

    def add_keywords_with_language(self, language_code: str, *keywords: str) -> Self:
        for keyword in keywords:
            self.resource.keywords.append(_territory_text(keyword, language=language_code))
        return self

    def done(self) -> Builder:
        return self._builder


class VideoBuilder(_PerformanceBuilder[Video]):
    """Identifiers, P lines and technical details go into the first ``VideoEdition``."""

    @property
    def video(self) -> Video:
        return self.resource

    def _resource_ids(self) -> list[ResourceId]:
        return self.resource.edition().resource_ids

    def _p_lines(self) -> list[PLine]:
        return self.resource.edition().p_lines

    def with_technical_details(
        self,
        technical_ref: str,
        file_uri: str,
        delivery_file_type: str = VIDEO_DELIVERY_FILE_TYPE,
    ) -> Self:
        self.resource.edition().technical_details.append(
            TechnicalDetails(
                technical_resource_details_reference=technical_ref,
                delivery_files=[DeliveryFile(type=delivery_file_type, file_uri=file_uri)],
            )
        )
        return self


class SoundRecordingBuilder(_PerformanceBuilder[SoundRecording]):
    @property
    def sound_recording(self) -> SoundRecording:
        return self.resource

    def _resource_ids(self) -> list[ResourceId]:
        return self.resource.resource_ids

    def _p_lines(self) -> list[PLine]:
        return self.resource.p_lines

    def with_technical_details(
        self, technical_ref: str, file_uri: str, *, codec_type: str | None = None
    ) -> Self:
        self.resource.technical_details.append(
            TechnicalDetails(
                technical_resource_details_reference=technical_ref,
                file_uri=file_uri or None,
                codec_type=codec_type,
            )
        )
        return self


class ImageBuilder:
    def __init__(self, builder: Builder, images: list[Image], index: int) -> None:
        self._builder = builder
        self._images = images
        self._index = index

    @property
    def image(self) -> Image:
        return self._images[self._index]

    def with_proprietary_id(self, namespace: str, value: str) -> Self:
        """Replace the image identifiers with a single proprietary id."""
        self.image.resource_ids = [
            ResourceId(proprietary_ids=[ProprietaryId(namespace=namespace, value=value)])
        ]
        return self

    def with_parental_warning(self, warning_type: str, applicable_territory: str = "") -> Self:
        self.image.parental_warning_types.append(
            _territory_text(warning_type, applicable_territory)
        )
        return self

    def with_technical_details(
        self,
        technical_ref: str,
        file_uri: str,
        *,
        codec_type: str | None = None,
        height: int | None = None,
        width: int | None = None,
    ) -> Self:
        self.image.technical_details.append(
            TechnicalDetails(
                technical_resource_details_reference=technical_ref,
                file_uri=file_uri or None,
                codec_type=codec_type,
                image_height=height,
                image_width=width,
            )
        )
        return self

    def done(self) -> Builder:
        return self._builder


class TextBuilder:
    def __init__(self, builder: Builder, texts: list[Text], index: int) -> None:
        self._builder = builder
        self._texts = texts
        self._index = index

    @property
    def text(self) -> Text:
        return self._texts[self._index]

    def with_title(self, title: str, language_code: str = "") -> Self:
        self.text.display_title_texts.append(_territory_text(title, language=language_code))
        return self

    def add_proprietary_id(self, namespace: str, value: str) -> Self:
        self.text.resource_ids.append(
            ResourceId(proprietary_ids=[ProprietaryId(namespace=namespace, value=value)])
        )
        return self

    def done(self) -> Builder:
        return self._builder


class ReleaseBuilder:
    def __init__(self, builder: Builder, releases: list[Release], index: int) -> None:
        self._builder = builder
        self._releases = releases
        self._index = index

    @property
    def release(self) -> Release:
        return self._releases[self._index]

    def _release_id(self) -> ReleaseId:
        if not self.release.release_ids:
            self.release.release_ids.append(ReleaseId())
        return self.release.release_ids[0]

    def with_icpn(self, icpn: str) -> Self:
        # 13 digits is an EAN, 12 a UPC
        self._release_id().icpn = ICPN(value=icpn, is_ean=len(icpn) == 13)
        return self

    def with_upc(self, upc: str) -> Self:
        self._release_id().icpn = ICPN(value=upc, is_ean=False)
        return self

    def with_ean(self, ean: str) -> Self:
        self._release_id().icpn = ICPN(value=ean, is_ean=True)
        return self

    def with_grid(self, grid: str) -> Self:
        self._release_id().grid = grid
        return self

    def with_isrc(self, isrc: str) -> Self:
        self._release_id().isrc = isrc
        return self

    def with_catalog_number(self, catalog_number: str) -> Self:
        self._release_id().catalog_number = catalog_number
        return self

    def add_proprietary_id(self, namespace: str, value: str) -> Self:
        self._release_id().proprietary_ids.append(
            ProprietaryId(namespace=namespace, value=value)
        )
        return self

    def with_title(self, title: str, subtitle: str = "") -> Self:
        self.release.display_title_texts.append(TerritoryText(value=title))
        self.release.display_titles.append(
            DisplayTitle(
                title_text=title,
                sub_titles=[subtitle] if subtitle else [],
                is_default=True,
            )
        )
        return self

    def with_display_artist_name(self, artist_name: str, applicable_territory: str = "") -> Self:
        self.release.display_artist_names.append(
            _territory_text(artist_name, applicable_territory)
        )
        return self

    def with_artist(self, party_ref: str, role: str, sequence: int | None = None) -> Self:
        self.release.display_artists.append(
            DisplayArtist(
                artist_party_reference=party_ref,
                display_artist_role=role,
                sequence_number=sequence,
            )
        )
        return self

    def with_label(self, party_ref: str, applicable_territory: str = "") -> Self:
        self.release.release_label_references.append(
            ReleaseLabelReference(
                value=party_ref, applicable_territory_code=applicable_territory or None
            )
        )
        return self

    def with_p_line(self, year: int | None, text: str) -> Self:
        self.release.p_lines.append(PLine(p_line_text=text, year=year))
        return self

    def with_c_line(self, year: int | None, text: str) -> Self:
        self.release.c_lines.append(CLine(c_line_text=text, year=year))
        return self

    def with_duration(self, duration: str) -> Self:
        self.release.duration = duration
        return self

    def with_release_date(self, date: str, applicable_territory: str = "") -> Self:
        self.release.release_dates.append(
            EventDate(value=date, applicable_territory_code=applicable_territory or None)
        )
        return self

    def with_original_release_date(self, date: str, applicable_territory: str = "") -> Self:
        self.release.original_release_dates.append(
            EventDate(value=date, applicable_territory_code=applicable_territory or None)
        )
        return self

    def with_genre(self, genre_text: str, applicable_territory: str = "") -> Self:
        return self.with_genre_and_sub_genre(genre_text, "", applicable_territory)

    def with_genre_and_sub_genre(
        self, genre_text: str, sub_genre: str, applicable_territory: str = ""
    ) -> Self:
        self.release.genres.append(
            Genre(
                genre_text=genre_text,
                sub_genre=sub_genre or None,
                applicable_territory_code=applicable_territory or None,
            )
        )
        return self

    def with_parental_warning(self, warning_type: str, applicable_territory: str = "") -> Self:
        self.release.parental_warning_types.append(
            _territory_text(warning_type, applicable_territory)
        )
        return self

    def with_av_rating(self, rating_text: str, rating_agency: str) -> Self:
        self.release.av_ratings.append(
            AvRating(rating_text=rating_text, rating_agency=rating_agency)
        )
        return self

    def with_made_for_kids(self) -> Self:
        return self.with_av_rating("MadeForKids", "UserDefined")

    def with_keywords(self, keywords: str, language_code: str = "") -> Self:
        self.release.keywords.append(_territory_text(keywords, language=language_code))
        return self

    def with_synopsis(self, synopsis: str, language_code: str = "") -> Self:
        self.release.synopses.append(_territory_text(synopsis, language=language_code))
        return self

    def with_marketing_comment(self, comment: str, language_code: str = "") -> Self:
        self.release.marketing_comments.append(
            _territory_text(comment, language=language_code)
        )
        return self

    def add_related_resource(self, relationship_type: str, isrc: str) -> Self:
        self.release.related_resources.append(
            RelatedResource(resource_relationship_type=relationship_type, isrc=isrc)
        )
        return self

    def add_resource_group(
        self, title_text: str = "", sequence_number: int | None = None
    ) -> ResourceGroupBuilder:
        groups = self.release.resource_groups
        groups.append(
            ResourceGroup(
                additional_title=title_text or None, sequence_number=sequence_number
            )
        )
        return ResourceGroupBuilder(self, groups, len(groups) - 1)

    def done(self) -> Builder:
        return self._builder


class ResourceGroupBuilder:
    def __init__(
        self, release_builder: ReleaseBuilder, groups: list[ResourceGroup], index: int
    ) -> None:
        self._release_builder = release_builder
        self._groups = groups
        self._index = index

    @property
    def group(self) -> ResourceGroup:
        return self._groups[self._index]

    def add_content_item(self, sequence_number: int | None, resource_ref: str) -> Self:
        self.group.content_items.append(
            ResourceGroupContentItem(
                release_resource_reference=resource_ref, sequence_number=sequence_number
            )
        )
        return self

    def add_linked_resource(self, link_description: str, resource_ref: str) -> Self:
        """Link a secondary resource to the most recently added content item.

        Does nothing when the group has no content item yet.
        """
        if self.group.content_items:
            self.group.content_items[-1].linked_release_resource_references.append(
                LinkedReleaseResourceReference(
                    value=resource_ref, link_description=link_description or None
                )
            )
        return self

    def done(self) -> ReleaseBuilder:
        return self._release_builder


class ReleaseDealBuilder:
    def __init__(
        self, builder: Builder, release_deals: list[ReleaseDeal], index: int
    ) -> None:
        self._builder = builder
        self._release_deals = release_deals
        self._index = index

    @property
    def release_deal(self) -> ReleaseDeal:
        return self._release_deals[self._index]

    def add_deal(self, deal_reference: str = "") -> DealBuilder[ReleaseDealBuilder]:
        deals = self.release_deal.deals
        deals.append(Deal(deal_reference=deal_reference or None))
        return DealBuilder(self, deals, len(deals) - 1)

    def done(self) -> Builder:
        return self._builder


class DealBuilder(Generic[ParentT]):
    """Deal terms setters; ``done`` returns whichever builder created the deal."""

    def __init__(self, parent: ParentT, deals: list[Deal], index: int) -> None:
        self._parent = parent
        self._deals = deals
        self._index = index

    @property
    def deal(self) -> Deal:
        return self._deals[self._index]

    def _terms(self) -> DealTerms:
        if self.deal.deal_terms is None:
            self.deal.deal_terms = DealTerms()
        return self.deal.deal_terms

    def with_territory(self, territory_code: str) -> Self:
        self._terms().territory_codes.append(territory_code)
        return self

    def with_territories(self, territory_codes: str | Iterable[str]) -> Self:
        self._terms().territory_codes.extend(code_list(territory_codes))
        return self

    def with_excluded_territories(self, territory_codes: str | Iterable[str]) -> Self:
        self._terms().excluded_territory_codes.extend(code_list(territory_codes))
        return self

    def with_validity_period(self, start_date: str, end_date: str = "") -> Self:
        self._terms().validity_periods.append(
            ValidityPeriod(start_date=start_date, end_date=end_date or None)
        )
        return self

    def with_validity_period_datetime(
        self, start_date_time: str, end_date_time: str = ""
    ) -> Self:
        self._terms().validity_periods.append(
            ValidityPeriod(
                start_date_time=start_date_time, end_date_time=end_date_time or None
            )
        )
        return self

    def with_commercial_model(self, model_type: str) -> Self:
        self._terms().commercial_model_types.append(model_type)
        return self

    def with_use_type(self, use_type: str) -> Self:
        self._terms().use_types.append(use_type)
        return self

    def with_rights_claim_policy(self, policy_type: str) -> Self:
        self._terms().rights_claim_policy_types.append(policy_type)
        return self

    def done(self) -> ParentT:
        return self._parent
