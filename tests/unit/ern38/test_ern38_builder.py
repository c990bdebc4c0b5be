"""Unit tests for the ERN 3.8 fluent builder."""

from datetime import UTC, datetime
from io import StringIO

import pytest
from rich.console import Console

from ddex_ern import ern38
from ddex_ern.config import BuilderConfig
from ddex_ern.constants import WellKnownRecipients
from ddex_ern.ern38.models import ReleaseId
from ddex_ern.infrastructure.logging import ConsoleLogger, LogLevel


@pytest.fixture
def builder() -> ern38.Builder:
    return ern38.new_builder()


class TestHeader:
    def test_set_header(self, builder):
        builder.set_header("MSG1", "THR1", "PADPIDA0000000001X", "Example Records")

        header = builder.build().message_header
        assert header is not None
        assert header.message_id == "MSG1"
        assert header.message_thread_id == "THR1"
        assert header.message_sender is not None
        assert header.message_sender.party_ids[0].value == "PADPIDA0000000001X"
        assert header.message_sender.party_ids[0].namespace == "DPID"
        assert header.message_sender.party_names[0].full_name == "Example Records"
        assert header.message_created_date_time is not None
        assert header.message_created_date_time.tzinfo is not None
        assert header.message_control_type is None

    def test_control_type_from_config(self):
        builder = ern38.new_builder(config=BuilderConfig(message_control_type="TestMessage"))
        builder.set_header("MSG1", "THR1", "PADPIDA0000000001X", "Example Records")

        assert builder.message.message_header.message_control_type == "TestMessage"

    def test_add_recipient_creates_header(self, builder):
        builder.add_recipient("PADPIDA0000000002X", "Store")

        header = builder.message.message_header
        assert header is not None
        assert header.message_id == ""
        assert header.message_recipients[0].party_names[0].full_name == "Store"

    def test_youtube_recipients(self, builder):
        builder.add_youtube_recipient().add_youtube_content_id_recipient()

        recipients = builder.message.message_header.message_recipients
        assert [r.party_ids[0].value for r in recipients] == [
            WellKnownRecipients.YOUTUBE_DPID,
            WellKnownRecipients.YOUTUBE_CONTENT_ID_DPID,
        ]
        assert [r.party_names[0].full_name for r in recipients] == [
            "YouTube",
            "YouTube_ContentID",
        ]

    def test_message_attributes_from_config(self):
        builder = ern38.new_builder(
            config=BuilderConfig(language_code="fr", release_profile_version_id="Audio")
        )

        assert builder.message.language_and_script_code == "fr"
        assert builder.message.release_profile_version_id == "Audio"

    def test_message_setters(self, builder):
        builder.set_language("de").set_release_profile("CommonReleaseTypes")
        builder.set_message_control_type("LiveMessage").set_comment("resend")

        assert builder.message.language_and_script_code == "de"
        assert builder.message.release_profile_version_id == "CommonReleaseTypes"
        assert builder.message.message_header.message_control_type == "LiveMessage"
        assert builder.message.message_header.comment == "resend"

    def test_update_indicator(self, builder):
        builder.set_update_indicator("OriginalMessage")
        assert builder.message.update_indicator == "OriginalMessage"

        with pytest.raises(ValueError, match="update indicator"):
            builder.set_update_indicator("Sometimes")

    def test_audit_trail(self, builder):
        when = datetime(2023, 12, 1, tzinfo=UTC)
        builder.add_audit_trail_event("PADPIDA0000000003X", "Aggregator", when)

        event = builder.message.message_header.message_audit_trail[0]
        assert event.messaging_party.party_ids[0].value == "PADPIDA0000000003X"
        assert event.date_time == when


class TestResourceBuilders:
    def test_sub_builder_mutates_stored_video(self, builder):
        video_builder = builder.add_video("A1", "ShortFormMusicalWorkVideo")
        video_builder.with_isrc("QZ6GL1732999").with_duration("PT3M10S")

        stored = builder.message.resource_list.videos[0]
        assert stored is video_builder.video
        assert stored.video_type == "ShortFormMusicalWorkVideo"
        assert stored.resource_ids[0].isrc == "QZ6GL1732999"
        assert stored.duration == "PT3M10S"

    def test_done_returns_root_builder(self, builder):
        assert builder.add_video("A1").done() is builder
        assert builder.add_image("A2").done() is builder
        assert builder.add_text("A3").done() is builder
        assert builder.add_sound_recording("A4").done() is builder

    def test_territory_scoped_call_creates_default_section(self, builder):
        builder.add_video("A1").with_title("Title", "Sub")

        sections = builder.message.resource_list.videos[0].details_by_territory
        assert len(sections) == 1
        assert sections[0].territory_codes == ["Worldwide"]
        assert sections[0].titles[0].title_type == "DisplayTitle"
        assert sections[0].titles[0].sub_title == "Sub"

    def test_default_territory_from_config(self):
        builder = ern38.new_builder(config=BuilderConfig(default_territory="US"))
        builder.add_video("A1").with_parental_warning("NotExplicit")

        section = builder.message.resource_list.videos[0].details_by_territory[0]
        assert section.territory_codes == ["US"]

    def test_with_territory_focuses_matching_section(self, builder):
        (
            builder.add_video("A1")
            .with_territory(["US", "CA"])
            .with_title("US title")
            .with_territory(["GB"])
            .with_title("GB title")
            .with_territory(["US", "MX"])
            .with_title("Second US title")
        )

        sections = builder.message.resource_list.videos[0].details_by_territory
        assert [s.territory_codes for s in sections] == [["US", "CA"], ["GB"]]
        assert [t.title_text for t in sections[0].titles] == ["US title", "Second US title"]

    def test_excluded_territories_get_their_own_section(self, builder):
        builder.add_video("A1").with_excluded_territories(["CN"]).with_title("T")

        section = builder.message.resource_list.videos[0].details_by_territory[0]
        assert section.territory_codes == []
        assert section.excluded_territory_codes == ["CN"]

    def test_empty_territory_list_rejected(self, builder):
        with pytest.raises(ValueError, match="territory code"):
            builder.add_video("A1").with_territory([])

    def test_first_title_fills_reference_title(self, builder):
        builder.add_video("A1").with_title("First").with_title("Second")

        video = builder.message.resource_list.videos[0]
        assert video.reference_title is not None
        assert video.reference_title.title_text == "First"

    def test_display_artist_name_uses_default_language(self, builder):
        builder.add_video("A1").with_display_artist_name("John Doe")

        section = builder.message.resource_list.videos[0].details_by_territory[0]
        assert section.display_artist_names[0].language_and_script_code == "en"

    def test_empty_artist_name_ignored(self, builder):
        builder.add_video("A1").with_artist("", "MainArtist")
        assert builder.message.resource_list.videos[0].details_by_territory[0].display_artists == []

    def test_contributor_without_roles_ignored(self, builder):
        builder.add_sound_recording("A1").with_contributor("Jane", [])
        section = builder.message.resource_list.sound_recordings[0].details_by_territory[0]
        assert section.resource_contributors == []

    def test_indirect_contributor_without_name_still_creates_section(self, builder):
        builder.add_sound_recording("A1").with_indirect_contributor("", ["Composer"])

        sections = builder.message.resource_list.sound_recordings[0].details_by_territory
        assert [s.territory_codes for s in sections] == [["Worldwide"]]
        assert sections[0].indirect_resource_contributors == []

    def test_bare_territory_string_is_one_code(self, builder):
        builder.add_video("A1").with_territory("US").with_excluded_territories("CU")

        sections = builder.message.resource_list.videos[0].details_by_territory
        assert sections[0].territory_codes == ["US"]
        assert sections[1].excluded_territory_codes == ["CU"]

    def test_rights_controller_accepts_bare_territory(self, builder):
        builder.add_video("A1").with_rights_controller("Label", 100, "US")

        section = builder.message.resource_list.videos[0].details_by_territory[0]
        delegated = section.rights_controllers[0].delegated_usage_rights[0]
        assert delegated.territories_of_rights_delegation == ["US"]

    def test_rights_controller(self, builder):
        builder.add_video("A1").with_rights_controller("Label", 100, ["Worldwide"])

        section = builder.message.resource_list.videos[0].details_by_territory[0]
        controller = section.rights_controllers[0]
        assert controller.right_share_percentage == "100.00"
        assert controller.roles == ["RightsController"]
        assert controller.delegated_usage_rights[0].use_types == [
            "UserMakeAvailableUserProvided"
        ]
        assert controller.delegated_usage_rights[0].territories_of_rights_delegation == [
            "Worldwide"
        ]

    def test_technical_details_split_file_uri(self, builder):
        builder.add_video("A1").with_technical_details("T1", "media/videos/vid.mpg")
        builder.add_image("A2").with_technical_details("T2", "cap.jpg", height=720, width=1280)

        video_tech = builder.message.resource_list.videos[0].details_by_territory[0]
        image_tech = builder.message.resource_list.images[0].details_by_territory[0]
        assert video_tech.technical_details[0].file.file_name == "vid.mpg"
        assert video_tech.technical_details[0].file.file_path == "media/videos/"
        assert image_tech.technical_details[0].file.file_name == "cap.jpg"
        assert image_tech.technical_details[0].file.file_path is None
        assert image_tech.technical_details[0].image_height == 720

    def test_image_proprietary_id_replaces(self, builder):
        image = builder.add_image("A2")
        image.with_proprietary_id("NS1", "first").with_proprietary_id("NS2", "second")

        ids = builder.message.resource_list.images[0].resource_ids
        assert len(ids) == 1
        assert ids[0].proprietary_ids[0].value == "second"

    def test_keywords_with_language(self, builder):
        builder.add_video("A1").add_keywords("pop", "rock").add_keywords_with_language(
            "fr", "chanson"
        )

        keywords = builder.message.resource_list.videos[0].details_by_territory[0].keywords
        assert [(k.value, k.language_and_script_code) for k in keywords] == [
            ("pop", None),
            ("rock", None),
            ("chanson", "fr"),
        ]


class TestCollectionBuilder:
    def test_collection_list_created_on_demand(self, builder):
        assert builder.message.collection_list is None

        (
            builder.add_collection("X1", "AudioVisualCollection")
            .with_title("Collection")
            .with_display_title("Shown")
            .add_resource_reference("A1")
            .done()
        )

        collection = builder.message.collection_list.collections[0]
        assert collection.collection_type == "AudioVisualCollection"
        assert collection.titles[0].title_text == "Collection"
        assert collection.details_by_territory[0].titles[0].title_text == "Shown"
        assert collection.collection_resource_references == ["A1"]

    def test_add_collection_logs(self):
        output = StringIO()
        logger = ConsoleLogger(console=Console(file=output, width=200), verbosity=LogLevel.DEBUG)

        ern38.new_builder(logger=logger).add_collection("X1")

        assert "Added collection X1" in output.getvalue()


class TestReleaseBuilder:
    def test_empty_artist_name_still_creates_section(self, builder):
        builder.add_release("R1").with_artist("", "MainArtist")

        sections = builder.message.release_list.releases[0].details_by_territory
        assert [s.territory_codes for s in sections] == [["Worldwide"]]
        assert sections[0].display_artists == []

    def test_release_type_and_title(self, builder):
        builder.add_release("R1", "VideoSingle").with_title("Ref", "Sub")

        release = builder.message.release_list.releases[0]
        assert release.release_types == ["VideoSingle"]
        assert release.reference_title.title_text == "Ref"
        assert release.details_by_territory == []

    @pytest.mark.parametrize(
        ("icpn", "is_ean"), [("2023121700021", True), ("036000291452", False)]
    )
    def test_icpn_ean_flag(self, builder, icpn, is_ean):
        builder.add_release("R1").with_icpn(icpn)

        release_id = builder.message.release_list.releases[0].release_ids[0]
        assert release_id.icpn.value == icpn
        assert release_id.icpn.is_ean is is_ean

    def test_upc_and_ean(self, builder):
        builder.add_release("R1").with_upc("036000291452").with_ean("4006381333931")

        ids = builder.message.release_list.releases[0].release_ids
        assert [i.icpn.is_ean for i in ids] == [False, True]

    def test_proprietary_id_goes_into_first_release_id(self, builder):
        builder.add_release("R1").add_proprietary_id("NS", "P1")
        release = builder.message.release_list.releases[0]
        assert len(release.release_ids) == 1
        assert release.release_ids[0].proprietary_ids[0].value == "P1"

        builder.add_release("R2").with_grid("A1-2425G-ABC1234002-M").add_proprietary_id(
            "NS", "P2"
        )
        second = builder.message.release_list.releases[1]
        assert len(second.release_ids) == 1
        assert second.release_ids[0].grid == "A1-2425G-ABC1234002-M"
        assert second.release_ids[0].proprietary_ids[0].value == "P2"

    def test_global_and_territory_lines(self, builder):
        (
            builder.add_release("R1")
            .with_p_line(2023, "(P) global")
            .with_territory_p_line(2023, "(P) territory")
            .with_c_line(2023, "(C) global")
            .with_territory_c_line(None, "(C) territory")
        )

        release = builder.message.release_list.releases[0]
        assert [line.p_line_text for line in release.p_lines] == ["(P) global"]
        assert [line.c_line_text for line in release.c_lines] == ["(C) global"]
        section = release.details_by_territory[0]
        assert section.p_lines[0].p_line_text == "(P) territory"
        assert section.c_lines[0].year is None

    def test_dates(self, builder):
        (
            builder.add_release("R1")
            .with_release_date("2023-12-01")
            .with_original_release_date("2020-01-01")
            .with_global_release_date("2023-12-02")
            .with_global_original_release_date("2020-01-02")
        )

        release = builder.message.release_list.releases[0]
        assert release.details_by_territory[0].release_date.value == "2023-12-01"
        assert release.details_by_territory[0].original_release_date.value == "2020-01-01"
        assert release.global_release_date.value == "2023-12-02"
        assert release.global_original_release_date.value == "2020-01-02"

    def test_made_for_kids(self, builder):
        builder.add_release("R1").with_made_for_kids()

        rating = builder.message.release_list.releases[0].details_by_territory[0].av_ratings[0]
        assert rating.rating_text == "MadeForKids"
        assert rating.rating_agency == "UserDefined"

    def test_related_release(self, builder):
        builder.add_release("R1").add_related_release("IsParentRelease", ReleaseId(grid="G1"))

        related = builder.message.release_list.releases[0].details_by_territory[0]
        assert related.related_releases[0].release_id.grid == "G1"

    def test_resource_group(self, builder):
        release_builder = builder.add_release("R1")
        group_builder = (
            release_builder.add_resource_group("Component 1", 1)
            .add_content_item(1, "A1", "Video")
            .add_linked_resource("VideoScreenCapture", "A2")
        )
        assert group_builder.done() is release_builder

        group = builder.message.release_list.releases[0].details_by_territory[0].resource_groups[0]
        assert group.titles[0].title_text == "Component 1"
        assert group.sequence_number == 1
        item = group.content_items[0]
        assert item.release_resource_reference == "A1"
        assert item.resource_type == "Video"
        assert item.linked_release_resource_references[0].value == "A2"
        assert item.linked_release_resource_references[0].link_description == (
            "VideoScreenCapture"
        )

    def test_linked_resource_without_content_item_is_ignored(self, builder):
        builder.add_release("R1").add_resource_group().add_linked_resource("Cover", "A2")

        group = builder.message.release_list.releases[0].details_by_territory[0].resource_groups[0]
        assert group.content_items == []
        assert group.titles == []


class TestDealBuilders:
    def test_deal_terms_created_lazily(self, builder):
        deal_builder = builder.add_release_deal("R1").add_deal("D1")
        assert deal_builder.deal.deal_terms is None

        deal_builder.with_territory("US")
        assert deal_builder.deal.deal_terms.territory_codes == ["US"]

    def test_bare_territory_string_is_one_code(self, builder):
        deal_builder = builder.add_release_deal("R1").add_deal("D1")
        deal_builder.with_territories("US").with_excluded_territories("CU")

        terms = deal_builder.deal.deal_terms
        assert terms.territory_codes == ["US"]
        assert terms.excluded_territory_codes == ["CU"]

    def test_use_types_share_one_usage(self, builder):
        (
            builder.add_release_deal("R1")
            .add_deal()
            .with_use_type("NonInteractiveStream")
            .with_use_type("OnDemandStream")
        )

        terms = builder.message.deal_list.release_deals[0].deals[0].deal_terms
        assert len(terms.usages) == 1
        assert terms.usages[0].use_types == ["NonInteractiveStream", "OnDemandStream"]

    def test_full_deal(self, builder):
        release_deal_builder = builder.add_release_deal("R1")
        (
            release_deal_builder.add_deal()
            .with_territories(["US", "CA"])
            .with_excluded_territories(["CU"])
            .with_validity_period("2023-12-01", "2024-12-01")
            .with_validity_period_datetime("2023-12-01T00:00:00")
            .with_commercial_model("SubscriptionModel")
            .with_rights_claim_policy("Monetize")
            .done()
            .with_effective_date("2023-11-30")
            .done()
        )

        release_deal = builder.message.deal_list.release_deals[0]
        assert release_deal.deal_release_reference == "R1"
        assert release_deal.effective_date == "2023-11-30"
        terms = release_deal.deals[0].deal_terms
        assert terms.territory_codes == ["US", "CA"]
        assert terms.excluded_territory_codes == ["CU"]
        assert terms.validity_periods[0].end_date == "2024-12-01"
        assert terms.validity_periods[1].start_date_time == "2023-12-01T00:00:00"
        assert terms.validity_periods[1].end_date_time is None
        assert terms.commercial_model_types == ["SubscriptionModel"]
        assert terms.rights_claim_policy_types == ["Monetize"]

    def test_deal_done_returns_release_deal_builder(self, builder):
        release_deal_builder = builder.add_release_deal("R1")
        assert release_deal_builder.add_deal().done() is release_deal_builder
        assert release_deal_builder.done() is builder


class TestMessageHelpers:
    def test_release_ids_and_main_release(self, builder):
        assert builder.message.main_release() is None

        builder.add_release("R1").with_icpn("036000291452").with_grid("G1")
        builder.add_release("R2").with_isrc("USRC17607839")

        assert builder.message.main_release().release_reference == "R1"
        assert builder.message.release_ids() == ["036000291452", "G1", "USRC17607839"]
