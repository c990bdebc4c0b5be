"""Unit tests for the ERN 4.3 fluent builder."""

import pytest

from ddex_ern import ern43
from ddex_ern.config import BuilderConfig


@pytest.fixture
def builder() -> ern43.Builder:
    return ern43.new_builder()


class TestMessage:
    def test_defaults_from_config(self):
        builder = ern43.new_builder(
            config=BuilderConfig(language_code="fr", avs_version_id="3")
        )

        assert builder.message.language_and_script_code == "fr"
        assert builder.message.avs_version_id == "3"
        assert builder.message.xmlns_ern == "http://ddex.net/xml/ern/43"

    def test_set_avs_version(self, builder):
        builder.set_avs_version("5")
        assert builder.message.avs_version_id == "5"

        builder.set_avs_version("")
        assert builder.message.avs_version_id is None

    def test_set_header(self, builder):
        builder.set_header("MSG1", "THR1", "PADPIDA0000000001X", "Example Records")

        header = builder.message.message_header
        assert header.message_id == "MSG1"
        assert header.message_sender.party_id == "PADPIDA0000000001X"
        assert header.message_sender.full_name == "Example Records"

    def test_add_recipient_creates_header(self, builder):
        builder.add_youtube_content_id_recipient()

        recipient = builder.message.message_header.message_recipients[0]
        assert recipient.party_id == "PADPIDA2015120100H"
        assert recipient.full_name == "YouTube_ContentID"

    def test_add_party(self, builder):
        builder.add_party("PJohnDoe", "John Doe", "Doe, John")
        builder.add_party("PACME", "ACME", dpid="PADPIDA0000000001X")

        parties = builder.message.party_list.parties
        assert parties[0].party_name.full_name_indexed == "Doe, John"
        assert parties[0].party_ids == []
        assert parties[1].party_name.full_name_indexed is None
        assert parties[1].party_ids[0].dpid == "PADPIDA0000000001X"
        assert builder.message.party_list.references() == {"PJohnDoe", "PACME"}


class TestVideoBuilder:
    def test_edition_holds_ids_and_technical_details(self, builder):
        (
            builder.add_video("A1", "ShortFormMusicalWorkVideo")
            .with_isrc("QZ6GL1732999")
            .add_proprietary_id("YOUTUBE:CHANNEL_ID", "UC123")
            .with_p_line(2023, "(P) 2023 Example Records")
            .with_technical_details("T1", "vid.mpg")
        )

        video = builder.message.resource_list.videos[0]
        assert len(video.video_editions) == 1
        edition = video.video_editions[0]
        assert len(edition.resource_ids) == 1
        assert edition.resource_ids[0].isrc == "QZ6GL1732999"
        assert edition.resource_ids[0].proprietary_ids[0].value == "UC123"
        assert edition.p_lines[0].year == 2023
        delivery = edition.technical_details[0].delivery_files[0]
        assert delivery.type == "VideoFile"
        assert delivery.file_uri == "vid.mpg"

    def test_title_sets_text_and_default_display_title(self, builder):
        builder.add_video("A1").with_title("Title", "Sub")

        video = builder.message.resource_list.videos[0]
        assert video.display_title_texts[0].value == "Title"
        assert video.display_titles[0].is_default is True
        assert video.display_titles[0].sub_titles == ["Sub"]

    def test_artists_are_party_references(self, builder):
        (
            builder.add_video("A1")
            .with_display_artist_name("John Doe", "US")
            .with_artist("PJohnDoe", "MainArtist", 1)
            .with_contributor("PJane", ["Producer", "Mixer"], 2)
        )

        video = builder.message.resource_list.videos[0]
        assert video.display_artist_names[0].applicable_territory_code == "US"
        assert video.display_artists[0].artist_party_reference == "PJohnDoe"
        assert video.display_artists[0].display_artist_role == "MainArtist"
        assert video.contributors[0].roles == ["Producer", "Mixer"]

    def test_rights_controller_defaults_territory(self):
        builder = ern43.new_builder(config=BuilderConfig(default_territory="US"))
        builder.add_video("A1").with_rights_controller("PACME", 50.5)

        controller = builder.message.resource_list.videos[0].resource_rights_controllers[0]
        assert controller.rights_controller_party_reference == "PACME"
        assert controller.rights_control_type == "RightsController"
        assert controller.right_share_percentage == "50.50"
        assert controller.delegated_usage_rights[0].territories_of_rights_delegation == ["US"]

    def test_parental_warning_with_territory(self, builder):
        builder.add_video("A1").with_parental_warning("Explicit", "US")

        warning = builder.message.resource_list.videos[0].parental_warning_types[0]
        assert warning.value == "Explicit"
        assert warning.applicable_territory_code == "US"


class TestOtherResources:
    def test_sound_recording_ids_on_resource(self, builder):
        (
            builder.add_sound_recording("A1", "MusicalWorkSoundRecording")
            .with_isrc("USRC17607839")
            .with_p_line(2020, "(P) 2020")
            .with_technical_details("T1", "audio.flac", codec_type="FLAC")
        )

        recording = builder.message.resource_list.sound_recordings[0]
        assert recording.resource_ids[0].isrc == "USRC17607839"
        assert recording.p_lines[0].p_line_text == "(P) 2020"
        assert recording.technical_details[0].file_uri == "audio.flac"
        assert recording.technical_details[0].codec_type == "FLAC"

    def test_image(self, builder):
        (
            builder.add_image("A2", "FrontCoverImage")
            .with_proprietary_id("NS", "one")
            .with_proprietary_id("NS", "two")
            .with_technical_details("T2", "cover.jpg", codec_type="JPEG", height=600, width=600)
            .done()
        )

        image = builder.message.resource_list.images[0]
        assert len(image.resource_ids) == 1
        assert image.resource_ids[0].proprietary_ids[0].value == "two"
        assert image.technical_details[0].image_width == 600

    def test_text(self, builder):
        assert builder.add_text("A3", "LyricText").with_title("Lyrics", "en").done() is builder

        text = builder.message.resource_list.texts[0]
        assert text.type == "LyricText"
        assert text.display_title_texts[0].language_and_script_code == "en"


class TestReleaseBuilder:
    def test_identifiers_share_one_release_id(self, builder):
        (
            builder.add_release("R1", "Album")
            .with_icpn("2023121700021")
            .with_grid("A1-2425G-ABC1234002-M")
            .with_catalog_number("CAT-1")
            .add_proprietary_id("NS", "P1")
        )

        release = builder.message.release_list.releases[0]
        assert release.release_type == "Album"
        assert len(release.release_ids) == 1
        release_id = release.release_ids[0]
        assert release_id.icpn.is_ean is True
        assert release_id.grid == "A1-2425G-ABC1234002-M"
        assert release_id.catalog_number == "CAT-1"
        assert release_id.proprietary_ids[0].value == "P1"

    def test_upc(self, builder):
        builder.add_release("R1").with_upc("036000291452")
        assert builder.message.release_list.releases[0].release_ids[0].icpn.is_ean is False

    def test_label_and_genres(self, builder):
        (
            builder.add_release("R1")
            .with_label("PACME", "Worldwide")
            .with_genre("Pop")
            .with_genre_and_sub_genre("Pop", "Synthpop", "US")
        )

        release = builder.message.release_list.releases[0]
        assert release.release_label_references[0].value == "PACME"
        assert release.release_label_references[0].applicable_territory_code == "Worldwide"
        assert release.genres[0].sub_genre is None
        assert release.genres[0].applicable_territory_code is None
        assert release.genres[1].sub_genre == "Synthpop"
        assert release.genres[1].applicable_territory_code == "US"

    def test_dates_are_lists(self, builder):
        (
            builder.add_release("R1")
            .with_release_date("2023-12-01")
            .with_release_date("2023-12-08", "JP")
            .with_original_release_date("2020-01-01")
        )

        release = builder.message.release_list.releases[0]
        assert [d.value for d in release.release_dates] == ["2023-12-01", "2023-12-08"]
        assert release.release_dates[1].applicable_territory_code == "JP"
        assert release.original_release_dates[0].value == "2020-01-01"

    def test_text_fields(self, builder):
        (
            builder.add_release("R1")
            .with_keywords("pop, synth")
            .with_synopsis("A song", "en")
            .with_marketing_comment("Out now")
            .with_made_for_kids()
        )

        release = builder.message.release_list.releases[0]
        assert release.keywords[0].value == "pop, synth"
        assert release.synopses[0].language_and_script_code == "en"
        assert release.marketing_comments[0].value == "Out now"
        assert release.av_ratings[0].rating_text == "MadeForKids"

    def test_related_resource(self, builder):
        builder.add_release("R1").add_related_resource("HasContentFrom", "US1111111111")

        related = builder.message.release_list.releases[0].related_resources[0]
        assert related.resource_relationship_type == "HasContentFrom"
        assert related.isrc == "US1111111111"

    def test_resource_group(self, builder):
        (
            builder.add_release("R1")
            .add_resource_group("Component 1", 1)
            .add_linked_resource("Ignored", "A0")
            .add_content_item(1, "A1")
            .add_linked_resource("VideoScreenCapture", "A2")
            .done()
            .done()
        )

        group = builder.message.release_list.releases[0].resource_groups[0]
        assert group.additional_title == "Component 1"
        assert len(group.content_items) == 1
        item = group.content_items[0]
        assert item.release_resource_reference == "A1"
        assert [link.value for link in item.linked_release_resource_references] == ["A2"]


class TestDeals:
    def test_add_deal_creates_single_deal(self, builder):
        deal_builder = builder.add_deal("R1")

        release_deals = builder.message.deal_list.release_deals
        assert len(release_deals) == 1
        assert release_deals[0].deal_release_reference == "R1"
        assert len(release_deals[0].deals) == 1
        assert deal_builder.deal is release_deals[0].deals[0]
        assert deal_builder.done() is builder

    def test_use_types_are_flat(self, builder):
        (
            builder.add_deal("R1")
            .with_use_type("NonInteractiveStream")
            .with_use_type("OnDemandStream")
            .with_commercial_model("SubscriptionModel")
            .with_territories(["Worldwide"])
            .with_excluded_territories(["CU"])
            .with_validity_period_datetime("2023-12-01T00:00:00", "2024-12-01T00:00:00")
        )

        terms = builder.message.deal_list.release_deals[0].deals[0].deal_terms
        assert terms.use_types == ["NonInteractiveStream", "OnDemandStream"]
        assert terms.commercial_model_types == ["SubscriptionModel"]
        assert terms.excluded_territory_codes == ["CU"]
        assert terms.validity_periods[0].end_date_time == "2024-12-01T00:00:00"

    def test_release_deal_builder(self, builder):
        release_deal_builder = builder.add_release_deal("R1")
        deal_builder = release_deal_builder.add_deal("D1").with_territory("US")

        assert deal_builder.done() is release_deal_builder
        assert release_deal_builder.done() is builder
        deal = builder.message.deal_list.release_deals[0].deals[0]
        assert deal.deal_reference == "D1"
        assert deal.deal_terms.territory_codes == ["US"]

    def test_bare_territory_string_is_one_code(self, builder):
        builder.add_deal("R1").with_territories("US").with_excluded_territories("CU")

        terms = builder.message.deal_list.release_deals[0].deals[0].deal_terms
        assert terms.territory_codes == ["US"]
        assert terms.excluded_territory_codes == ["CU"]
