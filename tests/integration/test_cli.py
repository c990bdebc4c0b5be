"""Integration tests for CLI commands.

This module contains end-to-end tests for the CLI, from command invocation
to the XML file written on disk.
"""

from pathlib import Path
from xml.etree import ElementTree as ET

from click.testing import CliRunner
import pytest

from ddex_ern.cli import app


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.mark.integration
class TestExampleCommand:
    """Integration tests for the example command."""

    def test_example_help(self, runner):
        result = runner.invoke(app, ["example", "--help"])

        assert result.exit_code == 0
        assert "OUTPUT" in result.output
        assert "--version" in result.output
        assert "--no-validate" in result.output

    def test_example_38(self, runner, tmp_path: Path):
        output = tmp_path / "out" / "video_single.xml"

        result = runner.invoke(app, ["example", str(output), "--message-id", "MSG_TEST"])

        assert result.exit_code == 0, result.output
        assert "Files written: 1" in result.output
        data = output.read_bytes()
        assert data.startswith(b'<?xml version="1.0" encoding="UTF-8"?>\n')
        root = ET.fromstring(data)
        assert root.tag == "{http://ddex.net/xml/ern/382}NewReleaseMessage"
        assert root.findtext("MessageHeader/MessageId") == "MSG_TEST"
        assert root.findtext("MessageHeader/MessageThreadId") == "MSG_TEST"
        assert root.findtext("MessageHeader/MessageRecipient/PartyId") == "PADPIDA2013020802I"
        assert root.findtext("ResourceList/Video/VideoId/ISRC") == "QZ6GL1732999"
        assert root.findtext("ReleaseList/Release/ReleaseId/ICPN") == "2023121700021"
        assert root.findtext("DealList/ReleaseDeal/DealReleaseReference") == "R0"

    def test_example_43(self, runner, tmp_path: Path):
        output = tmp_path / "video_single_43.xml"

        result = runner.invoke(app, ["example", "--version", "4.3", str(output)])

        assert result.exit_code == 0, result.output
        root = ET.fromstring(output.read_bytes())
        assert root.tag == "{http://ddex.net/xml/ern/43}NewReleaseMessage"
        assert root.findtext("MessageHeader/MessageId").startswith("MSG_")
        parties = [p.findtext("PartyReference") for p in root.findall("PartyList/Party")]
        assert parties == ["PJohnDoe", "PACME"]
        assert root.findtext("ResourceList/Video/VideoEdition/ResourceId/ISRC") == (
            "QZ6GL1732999"
        )
        use_types = [e.text for e in root.findall("DealList/ReleaseDeal/Deal/DealTerms/UseType")]
        assert use_types == ["NonInteractiveStream", "OnDemandStream", "Stream"]

    def test_example_uses_config_file(self, runner, tmp_path: Path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text(
            '[message]\nmessage_control_type = "TestMessage"\n\n[defaults]\nterritory = "US"\n'
        )
        output = tmp_path / "configured.xml"

        result = runner.invoke(app, ["example", str(output), "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        root = ET.fromstring(output.read_bytes())
        assert root.findtext("MessageHeader/MessageControlType") == "TestMessage"
        assert root.findtext("ResourceList/Video/VideoDetailsByTerritory/TerritoryCode") == "US"

    def test_example_picks_up_default_config(self, runner, tmp_path: Path):
        (tmp_path / "ddex_ern.toml").write_text('[message]\nlanguage_code = "fr"\n')
        output = tmp_path / "default_config.xml"

        result = runner.invoke(app, ["example", str(output)])

        assert result.exit_code == 0, result.output
        assert ET.fromstring(output.read_bytes()).get("LanguageAndScriptCode") == "fr"

    def test_example_verbose_output(self, runner, tmp_path: Path):
        output = tmp_path / "verbose.xml"

        result = runner.invoke(app, ["example", str(output), "-vv", "--no-validate"])

        assert result.exit_code == 0, result.output
        assert "Recorded verbose.xml" in result.output
        assert "Added video A1" in result.output

    def test_example_write_failure(self, runner, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        result = runner.invoke(app, ["example", str(blocker / "message.xml")])

        assert result.exit_code == 1
        assert "failed to write file" in result.output
        assert "Errors: 1" in result.output

    def test_example_rejects_unknown_version(self, runner, tmp_path: Path):
        result = runner.invoke(app, ["example", str(tmp_path / "x.xml"), "--version", "4.1"])

        assert result.exit_code == 2


@pytest.mark.integration
class TestCheckIdCommand:
    """Integration tests for the check-id command."""

    @pytest.mark.parametrize(
        ("kind", "value"),
        [
            ("upc", "036000291452"),
            ("EAN", "4006381333931"),
            ("isrc", "US-RC1-76-07839"),
            ("iswc", "T-034.524.680-1"),
            ("dpid", "PADPIDA2013020802I"),
        ],
    )
    def test_valid_identifier(self, runner, kind, value):
        result = runner.invoke(app, ["check-id", kind, value])

        assert result.exit_code == 0
        assert f"is a valid {kind.upper()}" in result.output

    def test_invalid_identifier(self, runner):
        result = runner.invoke(app, ["check-id", "upc", "036000291453"])

        assert result.exit_code == 1
        assert "is not a valid UPC" in result.output

    def test_unknown_kind(self, runner):
        result = runner.invoke(app, ["check-id", "isbn", "123"])

        assert result.exit_code == 2
