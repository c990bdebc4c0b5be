"""Example command - write a YouTube video-single message.

Thin adapter over the builders: loads the runtime config, builds the sample
message for the selected schema version, optionally validates it and writes
the file.
"""

from pathlib import Path

import click
from rich.console import Console

from ... import ern38, ern43
from ...config import BuilderConfig, ConfigLoader
from ...exceptions import DDEXError
from ...identifiers import generate_message_id
from ...infrastructure.logging import ConsoleLogger

console = Console()

SENDER_DPID = "PADPIDA0000000001X"
SENDER_NAME = "Example Records"


def build_video_single_38(
    message_id: str, *, config: BuilderConfig, logger: ConsoleLogger
) -> ern38.Builder:
    builder = ern38.new_builder(config=config, logger=logger)
    builder.set_header(message_id, message_id, SENDER_DPID, SENDER_NAME)
    builder.add_youtube_recipient()

    (
        builder.add_video("A1", "ShortFormMusicalWorkVideo")
        .with_isrc("QZ6GL1732999")
        .with_title("Video display title", "Video subtitle")
        .with_display_artist_name("John Doe")
        .with_artist("John Doe", "MainArtist", 1)
        .with_rights_controller(SENDER_NAME, 100.0, ["Worldwide"])
        .with_duration("PT3M10S")
        .with_creation_date("2023-01-01", is_approximate=True)
        .with_parental_warning("NoAdviceAvailable")
        .with_p_line(2023, "(P) 2023 Example Records")
        .with_technical_details("T1", "vid.mpg")
        .add_keywords("music video", "pop", "john doe")
        .add_proprietary_id("YOUTUBE:CHANNEL_ID", "UCQ0qe7vLz7uE_-sdtM9WB_w")
        .done()
    )
    (
        builder.add_image("A2", "VideoScreenCapture")
        .with_proprietary_id(SENDER_DPID, "VidCapPID")
        .with_parental_warning("NotExplicit")
        .with_technical_details("T3", "vidCap.jpg")
        .done()
    )
    (
        builder.add_release("R0", "VideoSingle")
        .with_icpn("2023121700021")
        .with_title("Video display title", "Video")
        .with_display_title("Video display title", "Video")
        .with_display_artist_name("John Doe")
        .with_artist("John Doe", "MainArtist", 1)
        .with_label(SENDER_NAME)
        .with_p_line(2023, "(P) 2023 Example Records")
        .with_c_line(2023, "(C) 2023 Example Records")
        .with_duration("PT3M10S")
        .with_genre_and_sub_genre("Pop", "Synthpop")
        .with_parental_warning("NoAdviceAvailable")
        .add_release_resource_reference("A1", "PrimaryResource")
        .add_release_resource_reference("A2", "SecondaryResource")
        .add_resource_group("Component 1", 1)
        .add_content_item(1, "A1", "Video")
        .add_linked_resource("VideoScreenCapture", "A2")
        .done()
        .done()
    )
    (
        builder.add_release_deal("R0")
        .add_deal()
        .with_territories(["Worldwide"])
        .with_validity_period("2023-12-01")
        .with_commercial_model("SubscriptionModel")
        .with_commercial_model("AdvertisementSupportedModel")
        .with_use_type("NonInteractiveStream")
        .with_use_type("OnDemandStream")
        .done()
        .done()
    )
    return builder


def build_video_single_43(
    message_id: str, *, config: BuilderConfig, logger: ConsoleLogger
) -> ern43.Builder:
    builder = ern43.new_builder(config=config, logger=logger)
    builder.set_header(message_id, message_id, SENDER_DPID, SENDER_NAME)
    builder.add_youtube_recipient()
    builder.add_party("PJohnDoe", "John Doe", "Doe, John")
    builder.add_party("PACME", SENDER_NAME)

    (
        builder.add_video("A1", "ShortFormMusicalWorkVideo")
        .with_isrc("QZ6GL1732999")
        .with_title("Video display title", "Video subtitle")
        .with_display_artist_name("John Doe")
        .with_artist("PJohnDoe", "MainArtist", 1)
        .with_rights_controller("PACME", 100.0, ["Worldwide"])
        .with_duration("PT3M10S")
        .with_creation_date("2023-01-01", is_approximate=True)
        .with_parental_warning("NoAdviceAvailable")
        .with_p_line(2023, "(P) 2023 Example Records")
        .with_technical_details("T1", "vid.mpg")
        .add_keywords("music video", "pop", "john doe")
        .add_proprietary_id("YOUTUBE:CHANNEL_ID", "UCQ0qe7vLz7uE_-sdtM9WB_w")
        .done()
    )
    (
        builder.add_image("A2", "VideoScreenCapture")
        .with_proprietary_id(SENDER_DPID, "VidCapPID")
        .with_parental_warning("NotExplicit")
        .with_technical_details("T3", "vidCap.jpg")
        .done()
    )
    (
        builder.add_release("R0", "VideoSingle")
        .with_icpn("2023121700021")
        .with_title("Video display title", "Video")
        .with_display_artist_name("John Doe")
        .with_artist("PJohnDoe", "MainArtist", 1)
        .with_label("PACME", "Worldwide")
        .with_p_line(2023, "(P) 2023 Example Records")
        .with_c_line(2023, "(C) 2023 Example Records")
        .with_duration("PT3M10S")
        .with_genre_and_sub_genre("Pop", "Synthpop", "Worldwide")
        .with_parental_warning("NoAdviceAvailable")
        .add_related_resource("HasContentFrom", "US1111111111")
        .add_resource_group("Component 1", 1)
        .add_content_item(1, "A1")
        .add_linked_resource("VideoScreenCapture", "A2")
        .done()
        .done()
    )
    (
        builder.add_deal("R0")
        .with_territories(["Worldwide"])
        .with_validity_period("2023-12-01")
        .with_commercial_model("SubscriptionModel")
        .with_commercial_model("AdvertisementSupportedModel")
        .with_use_type("NonInteractiveStream")
        .with_use_type("OnDemandStream")
        .with_use_type("Stream")
        .done()
    )
    return builder


@click.command()
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--version",
    "schema_version",
    type=click.Choice([ern38.SCHEMA_VERSION, ern43.SCHEMA_VERSION]),
    default=ern38.SCHEMA_VERSION,
    show_default=True,
    help="ERN schema version to generate",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a ddex_ern.toml config file (default: ./ddex_ern.toml)",
)
@click.option("--message-id", help="Message and thread id (default: generated)")
@click.option(
    "--validate/--no-validate",
    default=True,
    show_default=True,
    help="Run the message checks before writing",
)
@click.option(
    "-v", "--verbose", count=True, help="Increase verbosity level (e.g., -v, -vv)"
)
def example_command(
    output: Path,
    schema_version: str,
    config_file: Path | None,
    message_id: str | None,
    validate: bool,
    verbose: int,
) -> None:
    """Write an example video-single NewReleaseMessage to OUTPUT.

    Examples:

    \b
        ddex-ern example video_single.xml
        ddex-ern example --version 4.3 out/video_single_43.xml
    """
    config = ConfigLoader.load(config_file=config_file)
    logger = ConsoleLogger(console, verbose)
    message_id = message_id or generate_message_id()
    logger.set_context(
        message_id=message_id, schema_version=schema_version, operation="example"
    )

    builder: ern38.Builder | ern43.Builder
    if schema_version == ern43.SCHEMA_VERSION:
        builder = build_video_single_43(message_id, config=config, logger=logger)
    else:
        builder = build_video_single_38(message_id, config=config, logger=logger)

    try:
        if validate:
            builder.validate()
        size = builder.write_file(output)
        logger.record_message_written(output, size)
    except DDEXError as exc:
        logger.error(str(exc))
        raise click.ClickException(str(exc)) from exc
    finally:
        logger.log_final_stats()
        logger.clear_context()
