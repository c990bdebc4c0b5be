"""Unit tests for ERN 4.3 message checks."""

import pytest

from ddex_ern import ern43
from ddex_ern.exceptions import MessageValidationError


def minimal() -> ern43.Builder:
    builder = ern43.new_builder()
    builder.set_header("MSG1", "THR1", "PADPIDA0000000001X", "Example Records")
    builder.add_youtube_recipient()
    builder.add_party("PJohnDoe", "John Doe")
    builder.add_party("PACME", "Example Records")
    (
        builder.add_video("A1")
        .with_artist("PJohnDoe", "MainArtist", 1)
        .with_rights_controller("PACME", 100.0)
        .done()
    )
    (
        builder.add_release("R1", "VideoSingle")
        .with_artist("PJohnDoe", "MainArtist", 1)
        .with_label("PACME")
        .add_resource_group()
        .add_content_item(1, "A1")
        .done()
        .done()
    )
    builder.add_deal("R1").with_territory("Worldwide")
    return builder


class TestValidateMessage:
    def test_minimal_message_is_valid(self):
        minimal().validate()

    def test_missing_header(self):
        with pytest.raises(MessageValidationError, match="MessageHeader is required"):
            ern43.new_builder().validate()

    def test_missing_sender(self):
        builder = minimal()
        builder.message.message_header.message_sender = None
        with pytest.raises(MessageValidationError, match="MessageSender is required"):
            builder.validate()

    def test_missing_recipient(self):
        builder = minimal()
        builder.message.message_header.message_recipients.clear()
        with pytest.raises(MessageValidationError, match="MessageRecipient"):
            builder.validate()

    def test_no_deals_names_the_release(self):
        builder = ern43.new_builder()
        builder.set_header("MSG1", "THR1", "PADPIDA0000000001X", "Example Records")
        builder.add_youtube_recipient()
        builder.add_release("R1")

        with pytest.raises(
            MessageValidationError, match="no deal found for release reference: R1"
        ) as excinfo:
            builder.validate()

        assert excinfo.value.reference == "R1"

    def test_release_deal_without_deal(self):
        builder = minimal()
        builder.add_release_deal("R1")
        with pytest.raises(MessageValidationError, match="has no Deal"):
            builder.validate()

    def test_release_without_deal(self):
        builder = minimal()
        builder.add_release("R2")
        with pytest.raises(MessageValidationError) as excinfo:
            builder.validate()
        assert excinfo.value.reference == "R2"

    def test_unknown_resource_in_group(self):
        builder = minimal()
        builder.add_release("R2").add_resource_group().add_content_item(1, "A9")
        builder.add_deal("R2")

        with pytest.raises(MessageValidationError, match="unknown resource reference: A9"):
            builder.validate()

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda b: b.add_video("A2").with_artist("PNobody", "MainArtist"),
            lambda b: b.add_sound_recording("A2").with_contributor("PNobody", ["Producer"]),
            lambda b: b.add_video("A2").with_rights_controller("PNobody", 50),
        ],
        ids=["display-artist", "contributor", "rights-controller"],
    )
    def test_unknown_resource_party(self, mutate):
        builder = minimal()
        mutate(builder)

        with pytest.raises(
            MessageValidationError, match="unknown party reference: PNobody"
        ) as excinfo:
            builder.validate()

        assert excinfo.value.reference == "A2"

    def test_unknown_release_label(self):
        builder = minimal()
        builder.add_release("R2").with_label("PMissingLabel")
        builder.add_deal("R2")

        with pytest.raises(MessageValidationError, match="PMissingLabel") as excinfo:
            builder.validate()

        assert excinfo.value.reference == "R2"

    def test_unknown_release_artist(self):
        builder = minimal()
        builder.add_release("R2").with_artist("PNobody", "MainArtist")
        builder.add_deal("R2")

        with pytest.raises(MessageValidationError, match="PNobody"):
            builder.validate()
