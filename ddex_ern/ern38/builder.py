"""Fluent construction API for ERN 3.8 messages.

``Builder`` owns the message tree. Every ``add_*`` call appends a new entity
to its parent list and returns a sub-builder that keeps the list plus the
slot index, so later calls mutate the stored entity in place rather than a
copy.

Sub-builders must be used in create-then-finish order: reordering or removing
entries in a list that a live sub-builder points into is not supported.

Most descriptive metadata in ERN 3.8 is scoped to a territory section.
``with_territory`` focuses an existing section whose *first* territory code
matches, or appends a new one. Any territory-scoped call made before a
section is focused creates a default ``Worldwide`` section.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, ClassVar, Generic, Self, TypeVar

from ddex_ern.config import BuilderConfig
from ddex_ern.constants import Defaults, UpdateIndicators, WellKnownRecipients
from ddex_ern.identifiers import code_list
from ddex_ern.infrastructure.logging import NullLogger

from .constants import DISPLAY_TITLE_TYPE, SCHEMA_VERSION
from .models import (
    ICPN,
    AvRating,
    CLine,
    Collection,
    CollectionDetailsByTerritory,
    CollectionList,
    Deal,
    DealTerms,
    DelegatedUsageRights,
    DisplayArtist,
    EventDate,
    File,
    Genre,
    Image,
    IndirectResourceContributor,
    LinkedReleaseResourceReference,
    LocalizedText,
    MessageAuditTrailEvent,
    MessageHeader,
    MessagingParty,
    NewReleaseMessage,
    PartyId,
    PartyName,
    PLine,
    ProprietaryId,
    ReferenceTitle,
    RelatedRelease,
    Release,
    ReleaseDeal,
    ReleaseDetailsByTerritory,
    ReleaseId,
    ReleaseResourceReference,
    ResourceContributor,
    ResourceDetailsByTerritory,
    ResourceGroup,
    ResourceGroupContentItem,
    ResourceId,
    RightsController,
    SoundRecording,
    TechnicalDetails,
    Text,
    Title,
    Usage,
    ValidityPeriod,
    Video,
)
from .validation import validate_message
from .xml_writer import serialize_message, write_message_file

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from ddex_ern.ports import LoggerPort

SectionT = TypeVar(
    "SectionT",
    ResourceDetailsByTerritory,
    ReleaseDetailsByTerritory,
    CollectionDetailsByTerritory,
)
ResourceT = TypeVar("ResourceT", Video, SoundRecording, Image, Text)


def _messaging_party(party_id: str, name: str) -> MessagingParty:
    return MessagingParty(
        party_ids=[PartyId(value=party_id, namespace=Defaults.PARTY_ID_NAMESPACE)],
        party_names=[PartyName(full_name=name)],
    )


def _split_file_uri(file_uri: str) -> File:
    path, sep, name = file_uri.rpartition("/")
    if not sep:
        return File(file_name=file_uri)
    return File(file_name=name, file_path=f"{path}/")


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
            release_profile_version_id=self.config.release_profile_version_id,
            language_and_script_code=self.config.language_code,
        )

    def set_header(
        self, message_id: str, thread_id: str, sender_id: str, sender_name: str
    ) -> Self:
        """Replace the header with a single sender and a fresh creation timestamp."""
        self.message.message_header = MessageHeader(
            message_thread_id=thread_id,
            message_id=message_id,
            message_sender=_messaging_party(sender_id, sender_name),
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
        self._header().message_recipients.append(_messaging_party(party_id, name))
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

    def set_release_profile(self, profile_version_id: str) -> Self:
        self.message.release_profile_version_id = profile_version_id
        return self

    def set_update_indicator(self, indicator: str) -> Self:
        # Deprecated element in 3.8, kept for recipients that still read it.
        if indicator not in UpdateIndicators.ALL:
            raise ValueError(
                f"update indicator must be one of {', '.join(UpdateIndicators.ALL)}, "
                f"got {indicator}"
            )
        self.message.update_indicator = indicator
        return self

    def set_message_control_type(self, control_type: str) -> Self:
        self._header().message_control_type = control_type
        return self

    def set_comment(self, comment: str) -> Self:
        self._header().comment = comment
        return self

    def add_audit_trail_event(
        self, party_id: str, name: str, when: datetime | None = None
    ) -> Self:
        self._header().message_audit_trail.append(
            MessageAuditTrailEvent(
                messaging_party=_messaging_party(party_id, name),
                date_time=when or datetime.now(UTC),
            )
        )
        return self

    def add_video(self, resource_ref: str, video_type: str = "") -> VideoBuilder:
        videos = self.message.resource_list.videos
        videos.append(Video(resource_reference=resource_ref, video_type=video_type or None))
        self.logger.debug(f"Added video {resource_ref}")
        return VideoBuilder(self, videos, len(videos) - 1)

    def add_sound_recording(
        self, resource_ref: str, sound_recording_type: str = ""
    ) -> SoundRecordingBuilder:
        recordings = self.message.resource_list.sound_recordings
        recordings.append(
            SoundRecording(
                resource_reference=resource_ref,
                sound_recording_type=sound_recording_type or None,
            )
        )
        self.logger.debug(f"Added sound recording {resource_ref}")
        return SoundRecordingBuilder(self, recordings, len(recordings) - 1)

    def add_image(self, resource_ref: str, image_type: str = "") -> ImageBuilder:
        images = self.message.resource_list.images
        images.append(Image(resource_reference=resource_ref, image_type=image_type or None))
        self.logger.debug(f"Added image {resource_ref}")
        return ImageBuilder(self, images, len(images) - 1)

    def add_text(self, resource_ref: str, text_type: str = "") -> TextBuilder:
        texts = self.message.resource_list.texts
        texts.append(Text(resource_reference=resource_ref, text_type=text_type or None))
        self.logger.debug(f"Added text {resource_ref}")
        return TextBuilder(self, texts, len(texts) - 1)

    def add_collection(
        self, collection_ref: str, collection_type: str = ""
    ) -> CollectionBuilder:
        if self.message.collection_list is None:
            self.message.collection_list = CollectionList()
        collections = self.message.collection_list.collections
        collections.append(
            Collection(
                collection_reference=collection_ref,
                collection_type=collection_type or None,
            )
        )
        self.logger.debug(f"Added collection {collection_ref}")
        return CollectionBuilder(self, collections, len(collections) - 1)

    def add_release(self, release_ref: str, release_type: str = "") -> ReleaseBuilder:
        releases = self.message.release_list.releases
        release = Release(release_reference=release_ref)
        if release_type:
            release.release_types.append(release_type)
        releases.append(release)
        self.logger.debug(f"Added release {release_ref}")
        return ReleaseBuilder(self, releases, len(releases) - 1)

    def add_release_deal(self, release_ref: str) -> ReleaseDealBuilder:
        release_deals = self.message.deal_list.release_deals
        release_deals.append(ReleaseDeal(deal_release_reference=release_ref))
        self.logger.debug(f"Added release deal for {release_ref}")
        return ReleaseDealBuilder(self, release_deals, len(release_deals) - 1)

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


class _TerritoryScopedBuilder(Generic[SectionT]):
    """Shared focus handling for sub-builders writing into territory sections."""

    section_type: ClassVar[type]

    def __init__(self, builder: Builder) -> None:
        self._builder = builder
        self._territory_index: int | None = None

    def _sections(self) -> list[SectionT]:
        raise NotImplementedError

    def _focus(self, codes: str | Iterable[str], *, excluded: bool) -> int:
        codes = code_list(codes)
        if not codes:
            raise ValueError("at least one territory code is required")
        sections = self._sections()
        for index, section in enumerate(sections):
            existing = (
                section.excluded_territory_codes if excluded else section.territory_codes
            )
            # Only the first code is compared.
            if existing and existing[0] == codes[0]:
                self._territory_index = index
                return index
        section = self.section_type()
        if excluded:
            section.excluded_territory_codes = codes
        else:
            section.territory_codes = codes
        sections.append(section)
        self._territory_index = len(sections) - 1
        return self._territory_index

    def _territory(self) -> SectionT:
        index = self._territory_index
        if index is None:
            default = self._builder.config.default_territory
            self._builder.logger.verbose(f"No territory selected, using {default}")
            index = self._focus([default], excluded=False)
        return self._sections()[index]

    def _language(self, language_code: str) -> str:
        return language_code or self._builder.config.default_language

    def with_territory(self, territory_codes: str | Iterable[str]) -> Self:
        self._focus(territory_codes, excluded=False)
        return self

    def with_excluded_territories(self, territory_codes: str | Iterable[str]) -> Self:
        self._focus(territory_codes, excluded=True)
        return self


class _ResourceBuilder(_TerritoryScopedBuilder[ResourceDetailsByTerritory], Generic[ResourceT]):
    section_type = ResourceDetailsByTerritory

    def __init__(self, builder: Builder, resources: list[ResourceT], index: int) -> None:
        super().__init__(builder)
        self._resources = resources
        self._index = index

    @property
    def resource(self) -> ResourceT:
        return self._resources[self._index]

    def _sections(self) -> list[ResourceDetailsByTerritory]:
        return self.resource.details_by_territory

    def with_title(self, title: str, subtitle: str = "") -> Self:
        self._territory().titles.append(
            Title(
                title_text=title,
                sub_title=subtitle or None,
                title_type=DISPLAY_TITLE_TYPE,
            )
        )
        return self

    def add_proprietary_id(self, namespace: str, value: str) -> Self:
        self.resource.resource_ids.append(
            ResourceId(proprietary_ids=[ProprietaryId(namespace=namespace, value=value)])
        )
        return self

    def with_creation_date(self, date: str, is_approximate: bool = False) -> Self:
        self.resource.creation_date = EventDate(value=date, is_approximate=is_approximate)
        return self

    def with_parental_warning(self, warning_type: str) -> Self:
        self._territory().parental_warning_types.append(warning_type)
        return self

    def with_c_line(self, year: int | None, text: str) -> Self:
        self._territory().c_lines.append(CLine(c_line_text=text, year=year))
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
        self._territory().technical_details.append(
            TechnicalDetails(
                technical_resource_details_reference=technical_ref,
                codec_type=codec_type,
                image_height=height,
                image_width=width,
                file=_split_file_uri(file_uri) if file_uri else None,
            )
        )
        return self

    def add_keywords(self, *keywords: str) -> Self:
        return self.add_keywords_with_language("", *keywords)

    def add_keywords_with_language(self, language_code: str, *keywords: str) -> Self:
        section = self._territory()
        for keyword in keywords:
            section.keywords.append(
                LocalizedText(value=keyword, language_and_script_code=language_code or None)
            )
        return self

    def done(self) -> Builder:
        return self._builder


class _PerformanceBuilder(_ResourceBuilder[ResourceT]):
    """Setters shared by video and sound recording resources."""

    def with_title(self, title: str, subtitle: str = "") -> Self:
        """Add a territory display title; the first one also fills ReferenceTitle."""
        if self.resource.reference_title is None:
            self.resource.reference_title = ReferenceTitle(
                title_text=title, sub_title=subtitle or None
            )
        return super().with_title(title, subtitle)

    def with_reference_title(self, title: str, subtitle: str = "") -> Self:
        self.resource.reference_title = ReferenceTitle(
            title_text=title, sub_title=subtitle or None
        )
        return self

    def with_isrc(self, isrc: str) -> Self:
        self.resource.resource_ids.append(ResourceId(isrc=isrc))
        return self

    def with_display_artist_name(self, artist_name: str, language_code: str = "") -> Self:
        self._territory().display_artist_names.append(
            LocalizedText(
                value=artist_name,
                language_and_script_code=self._language(language_code),
            )
        )
        return self

    def with_artist(
        self,
        name: str,
        role: str,
        sequence: int | None = None,
        *,
        party_id: str | None = None,
    ) -> Self:
        section = self._territory()
        if not name:
            return self
        section.display_artists.append(
            DisplayArtist(
                party_name=PartyName(full_name=name),
                artist_roles=[role] if role else [],
                party_ids=[PartyId(value=party_id)] if party_id else [],
                sequence_number=sequence,
            )
        )
        return self

    def with_contributor(
        self, name: str, roles: Iterable[str], sequence: int | None = None
    ) -> Self:
        roles = list(roles)
        section = self._territory()
        if not name or not roles:
            return self
        section.resource_contributors.append(
            ResourceContributor(
                party_name=PartyName(full_name=name),
                roles=roles,
                sequence_number=sequence,
            )
        )
        return self

    def with_indirect_contributor(self, name: str, roles: Iterable[str]) -> Self:
        roles = list(roles)
        section = self._territory()
        if not name or not roles:
            return self
        section.indirect_resource_contributors.append(
            IndirectResourceContributor(party_name=PartyName(full_name=name), roles=roles)
        )
        return self

    def with_rights_controller(
        self,
        name: str,
        percentage: float,
        territories: str | Iterable[str] | None = None,
        *,
        party_id: str | None = None,
    ) -> Self:
        territories = code_list(territories or []) or [self._builder.config.default_territory]
        self._territory().rights_controllers.append(
            RightsController(
                party_name=PartyName(full_name=name),
                party_ids=[PartyId(value=party_id)] if party_id else [],
                roles=[Defaults.RIGHTS_CONTROLLER_ROLE],
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

    def with_p_line(self, year: int | None, text: str) -> Self:
        self._territory().p_lines.append(PLine(p_line_text=text, year=year))
        return self

    def with_label_name(self, label_name: str, language_code: str = "") -> Self:
        self._territory().label_names.append(
            LocalizedText(
                value=label_name,
                language_and_script_code=self._language(language_code),
            )
        )
        return self

    def with_genre(self, genre_text: str, sub_genre: str = "") -> Self:
        self._territory().genres.append(
            Genre(genre_text=genre_text, sub_genre=sub_genre or None)
        )
        return self

    def with_synopsis(self, synopsis: str, language_code: str = "") -> Self:
        self._territory().synopsis = LocalizedText(
            value=synopsis, language_and_script_code=language_code or None
        )
        return self


class VideoBuilder(_PerformanceBuilder[Video]):
    @property
    def video(self) -> Video:
        return self.resource


class SoundRecordingBuilder(_PerformanceBuilder[SoundRecording]):
    @property
    def sound_recording(self) -> SoundRecording:
        return self.resource


class ImageBuilder(_ResourceBuilder[Image]):
    @property
    def image(self) -> Image:
        return self.resource

    def with_proprietary_id(self, namespace: str, value: str) -> Self:
        """Replace the image identifiers with a single proprietary id."""
        self.resource.resource_ids = [
            ResourceId(proprietary_ids=[ProprietaryId(namespace=namespace, value=value)])
        ]
        return self


class TextBuilder(_ResourceBuilder[Text]):
    @property
    def text(self) -> Text:
        return self.resource


class CollectionBuilder(_TerritoryScopedBuilder[CollectionDetailsByTerritory]):
    section_type = CollectionDetailsByTerritory

    def __init__(self, builder: Builder, collections: list[Collection], index: int) -> None:
        super().__init__(builder)
        self._collections = collections
        self._index = index

    @property
    def collection(self) -> Collection:
        return self._collections[self._index]

    def _sections(self) -> list[CollectionDetailsByTerritory]:
        return self.collection.details_by_territory

    def with_title(self, title: str, subtitle: str = "") -> Self:
        self.collection.titles.append(
            Title(title_text=title, sub_title=subtitle or None)
        )
        return self

    def add_proprietary_id(self, namespace: str, value: str) -> Self:
        self.collection.collection_ids.append(
            ProprietaryId(namespace=namespace, value=value)
        )
        return self

    def with_display_title(self, title: str, subtitle: str = "") -> Self:
        self._territory().titles.append(
            Title(
                title_text=title,
                sub_title=subtitle or None,
                title_type=DISPLAY_TITLE_TYPE,
            )
        )
        return self

    def with_display_artist_name(self, artist_name: str, language_code: str = "") -> Self:
        self._territory().display_artist_names.append(
            LocalizedText(
                value=artist_name,
                language_and_script_code=self._language(language_code),
            )
        )
        return self

    def with_genre(self, genre_text: str, sub_genre: str = "") -> Self:
        self._territory().genres.append(
            Genre(genre_text=genre_text, sub_genre=sub_genre or None)
        )
        return self

    def add_resource_reference(self, resource_ref: str) -> Self:
        self.collection.collection_resource_references.append(resource_ref)
        return self

    def done(self) -> Builder:
        return self._builder


class ReleaseBuilder(_TerritoryScopedBuilder[ReleaseDetailsByTerritory]):
    section_type = ReleaseDetailsByTerritory

    def __init__(self, builder: Builder, releases: list[Release], index: int) -> None:
        super().__init__(builder)
        self._releases = releases
        self._index = index

    @property
    def release(self) -> Release:
        return self._releases[self._index]

    def _sections(self) -> list[ReleaseDetailsByTerritory]:
        return self.release.details_by_territory

    def with_title(self, title: str, subtitle: str = "") -> Self:
        """Set the release ReferenceTitle (required by ERN 3.8)."""
        self.release.reference_title = ReferenceTitle(
            title_text=title, sub_title=subtitle or None
        )
        return self

    def with_display_title(self, title: str, subtitle: str = "") -> Self:
        self._territory().titles.append(
            Title(
                title_text=title,
                sub_title=subtitle or None,
                title_type=DISPLAY_TITLE_TYPE,
            )
        )
        return self

    def with_release_type(self, release_type: str) -> Self:
        self.release.release_types.append(release_type)
        return self

    def with_icpn(self, icpn: str) -> Self:
        # 13 digits is an EAN, 12 a UPC
        return self._add_release_id(ReleaseId(icpn=ICPN(value=icpn, is_ean=len(icpn) == 13)))

    def with_upc(self, upc: str) -> Self:
        return self._add_release_id(ReleaseId(icpn=ICPN(value=upc, is_ean=False)))

    def with_ean(self, ean: str) -> Self:
        return self._add_release_id(ReleaseId(icpn=ICPN(value=ean, is_ean=True)))

    def with_isrc(self, isrc: str) -> Self:
        return self._add_release_id(ReleaseId(isrc=isrc))

    def with_grid(self, grid: str) -> Self:
        return self._add_release_id(ReleaseId(grid=grid))

    def with_catalog_number(self, catalog_number: str) -> Self:
        return self._add_release_id(ReleaseId(catalog_number=catalog_number))

    def _add_release_id(self, release_id: ReleaseId) -> Self:
        self.release.release_ids.append(release_id)
        return self

    def add_proprietary_id(self, namespace: str, value: str) -> Self:
        """Attach a proprietary id to the first ReleaseId, creating it if needed."""
        if not self.release.release_ids:
            self.release.release_ids.append(ReleaseId())
        self.release.release_ids[0].proprietary_ids.append(
            ProprietaryId(namespace=namespace, value=value)
        )
        return self

    def add_release_resource_reference(
        self, resource_ref: str, resource_type: str = ""
    ) -> Self:
        self.release.release_resource_references.append(
            ReleaseResourceReference(
                value=resource_ref, release_resource_type=resource_type or None
            )
        )
        return self

    def with_display_artist_name(self, artist_name: str, language_code: str = "") -> Self:
        self._territory().display_artist_names.append(
            LocalizedText(
                value=artist_name,
                language_and_script_code=self._language(language_code),
            )
        )
        return self

    def with_artist(
        self,
        name: str,
        role: str,
        sequence: int | None = None,
        *,
        party_id: str | None = None,
    ) -> Self:
        section = self._territory()
        if not name:
            return self
        section.display_artists.append(
            DisplayArtist(
                party_name=PartyName(full_name=name),
                artist_roles=[role] if role else [],
                party_ids=[PartyId(value=party_id)] if party_id else [],
                sequence_number=sequence,
            )
        )
        return self

    def with_label(self, label_name: str, language_code: str = "") -> Self:
        self._territory().label_names.append(
            LocalizedText(
                value=label_name,
                language_and_script_code=self._language(language_code),
            )
        )
        return self

    def with_p_line(self, year: int | None, text: str) -> Self:
        self.release.p_lines.append(PLine(p_line_text=text, year=year))
        return self

    def with_territory_p_line(self, year: int | None, text: str) -> Self:
        self._territory().p_lines.append(PLine(p_line_text=text, year=year))
        return self

    def with_c_line(self, year: int | None, text: str) -> Self:
        self.release.c_lines.append(CLine(c_line_text=text, year=year))
        return self

    def with_territory_c_line(self, year: int | None, text: str) -> Self:
        self._territory().c_lines.append(CLine(c_line_text=text, year=year))
        return self

    def with_duration(self, duration: str) -> Self:
        self.release.duration = duration
        return self

    def with_release_date(self, date: str) -> Self:
        self._territory().release_date = EventDate(value=date)
        return self

    def with_original_release_date(self, date: str) -> Self:
        self._territory().original_release_date = EventDate(value=date)
        return self

    def with_global_release_date(self, date: str) -> Self:
        self.release.global_release_date = EventDate(value=date)
        return self

    def with_global_original_release_date(self, date: str) -> Self:
        self.release.global_original_release_date = EventDate(value=date)
        return self

    def with_genre(self, genre_text: str) -> Self:
        self._territory().genres.append(Genre(genre_text=genre_text))
        return self

    def with_genre_and_sub_genre(self, genre_text: str, sub_genre: str) -> Self:
        self._territory().genres.append(
            Genre(genre_text=genre_text, sub_genre=sub_genre or None)
        )
        return self

    def with_parental_warning(self, warning_type: str) -> Self:
        self._territory().parental_warning_types.append(warning_type)
        return self

    def with_av_rating(self, rating_text: str, rating_agency: str) -> Self:
        self._territory().av_ratings.append(
            AvRating(rating_text=rating_text, rating_agency=rating_agency)
        )
        return self

    def with_made_for_kids(self) -> Self:
        return self.with_av_rating("MadeForKids", "UserDefined")

    def with_marketing_comment(self, comment: str, language_code: str = "") -> Self:
        self._territory().marketing_comment = LocalizedText(
            value=comment, language_and_script_code=self._language(language_code)
        )
        return self

    def with_keywords(self, keywords: str, language_code: str = "") -> Self:
        self._territory().keywords.append(
            LocalizedText(
                value=keywords, language_and_script_code=self._language(language_code)
            )
        )
        return self

    def with_synopsis(self, synopsis: str, language_code: str = "") -> Self:
        self._territory().synopsis = LocalizedText(
            value=synopsis, language_and_script_code=self._language(language_code)
        )
        return self

    def add_related_release(self, relationship_type: str, release_id: ReleaseId) -> Self:
        self._territory().related_releases.append(
            RelatedRelease(release_relationship_type=relationship_type, release_id=release_id)
        )
        return self

    def add_resource_group(
        self, title_text: str = "", sequence_number: int | None = None
    ) -> ResourceGroupBuilder:
        groups = self._territory().resource_groups
        group = ResourceGroup(sequence_number=sequence_number)
        if title_text:
            group.titles.append(Title(title_text=title_text))
        groups.append(group)
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

    def add_content_item(
        self, sequence_number: int | None, resource_ref: str, resource_type: str = ""
    ) -> Self:
        self.group.content_items.append(
            ResourceGroupContentItem(
                release_resource_reference=resource_ref,
                sequence_number=sequence_number,
                resource_type=resource_type or None,
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

    def add_deal(self, deal_reference: str = "") -> DealBuilder:
        deals = self.release_deal.deals
        deals.append(Deal(deal_reference=deal_reference or None))
        return DealBuilder(self, deals, len(deals) - 1)

    def with_effective_date(self, date: str) -> Self:
        self.release_deal.effective_date = date
        return self

    def done(self) -> Builder:
        return self._builder


class DealBuilder:
    def __init__(
        self, release_deal_builder: ReleaseDealBuilder, deals: list[Deal], index: int
    ) -> None:
        self._release_deal_builder = release_deal_builder
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
        terms = self._terms()
        if not terms.usages:
            terms.usages.append(Usage())
        terms.usages[0].use_types.append(use_type)
        return self

    def with_rights_claim_policy(self, policy_type: str) -> Self:
        self._terms().rights_claim_policy_types.append(policy_type)
        return self

    def done(self) -> ReleaseDealBuilder:
        return self._release_deal_builder
