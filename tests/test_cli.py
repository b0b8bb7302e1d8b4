"""Tests for the command line interface."""

import json
from collections.abc import Generator
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mintpipe.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def keep_test_logging() -> Generator[None, None, None]:
    """Leave the test logging configuration in place."""
    with patch("mintpipe.cli.configure_logging"):
        yield


@pytest.fixture
def image_folder(tmp_path):
    folder = tmp_path / "images"
    folder.mkdir()
    for stem in ("kage", "shuriken", "tobi"):
        (folder / f"{stem}.png").write_bytes(f"png-{stem}".encode())
    return folder


class TestUploadCommand:
    """Test cases for the upload command."""

    def test_uploads_folder_to_memory_backend(self, runner, image_folder, tmp_path):
        output = tmp_path / "catalog.json"

        result = runner.invoke(
            cli,
            ["upload", str(image_folder), "--backend", "memory", "--concurrency", "2", "-o", str(output)],
        )

        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if "\t" in line]
        assert [line.split("\t")[0] for line in lines] == ["0", "1", "2"]
        references = json.loads(output.read_text())
        assert len(references) == 3
        assert all(ref.startswith("mem://") for ref in references)

    def test_fails_without_pinata_credentials(self, runner, image_folder):
        result = runner.invoke(cli, ["upload", str(image_folder)])

        assert result.exit_code == 1
        assert "Content store not configured" in result.output

    def test_fails_for_missing_folder(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["upload", str(tmp_path / "missing"), "--backend", "memory"]
        )

        assert result.exit_code == 1
        assert "Asset folder not found" in result.output

    def test_uses_configured_images_location(self, runner, image_folder, monkeypatch):
        monkeypatch.setenv("IMAGES_LOCATION", str(image_folder))

        result = runner.invoke(cli, ["upload", "--backend", "memory"])

        assert result.exit_code == 0, result.output
        assert result.output.count("mem://") == 3


class TestMintCommand:
    """Test cases for the mint command."""

    @pytest.fixture
    def catalog_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(["ipfs://A", "ipfs://B", "ipfs://C"]))
        return path

    def test_mints_with_fixed_random_value(self, runner, catalog_file):
        result = runner.invoke(
            cli,
            ["mint", str(catalog_file), "--requester", "alice", "--stake", "0.02", "--random-value", "7"],
        )

        assert result.exit_code == 0, result.output
        assert "Request issued:" in result.output
        assert "Selected index 1: ipfs://B" in result.output
        assert "Token id: 0" in result.output

    def test_rejects_insufficient_stake(self, runner, catalog_file):
        result = runner.invoke(
            cli, ["mint", str(catalog_file), "--requester", "alice", "--stake", "0.001"]
        )

        assert result.exit_code == 1
        assert "below the minimum" in result.output

    def test_rejects_nan_stake(self, runner, catalog_file):
        result = runner.invoke(
            cli, ["mint", str(catalog_file), "--requester", "alice", "--stake", "nan"]
        )

        assert result.exit_code == 1
        assert "below the minimum" in result.output

    def test_rejects_malformed_catalog(self, runner, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"not": "a list"}))

        result = runner.invoke(
            cli, ["mint", str(path), "--requester", "alice", "--stake", "1"]
        )

        assert result.exit_code == 1
        assert "JSON list" in result.output

    def test_rejects_empty_catalog(self, runner, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("[]")

        result = runner.invoke(
            cli, ["mint", str(path), "--requester", "alice", "--stake", "1"]
        )

        assert result.exit_code == 1
        assert "empty catalog" in result.output
