"""
CLI Tests
=========

Tests for the playas command-line tool using Click's CliRunner.
"""

import pytest
from click.testing import CliRunner

from playas_sdk import __version__
from playas_sdk.cli.playas import main


@pytest.fixture
def runner(monkeypatch) -> CliRunner:
    for var in ("PLAYAS_PLACEHOLDER_SYMBOL", "PLAYAS_LOG_LEVEL", "PLAYAS_OUTPUT_SUFFIX"):
        monkeypatch.delenv(var, raising=False)
    return CliRunner()


@pytest.fixture
def files(tmp_path, manifest: str, zobj: bytes):
    """Manifest and zobj written to a temporary directory."""
    manifest_path = tmp_path / "adult.txt"
    zobj_path = tmp_path / "adult.zobj"
    manifest_path.write_text(manifest)
    zobj_path.write_bytes(zobj)
    return manifest_path, zobj_path


class TestMain:
    """Tests for the command group."""

    def test_help(self, runner: CliRunner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("build", "dictionary", "table", "trailer", "hierarchy"):
            assert command in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestBuildCommand:
    """Tests for 'playas build'."""

    def test_build(self, runner: CliRunner, files, tmp_path):
        manifest_path, zobj_path = files
        output = tmp_path / "out.zobj"

        result = runner.invoke(main, ["build", str(manifest_path), str(zobj_path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert "alias table 0x1C of 0x80 bytes at 0x380" in result.output
        data = output.read_bytes()
        assert len(data) == 0x408
        assert data[0x380:0x388] == bytes.fromhex("DE01000006000150")

    def test_default_output(self, runner: CliRunner, files, tmp_path):
        manifest_path, zobj_path = files
        result = runner.invoke(main, ["build", str(manifest_path), str(zobj_path)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "adult.patched.zobj").exists()

    def test_build_error(self, runner: CliRunner, tmp_path, make_manifest, zobj: bytes):
        manifest_path = tmp_path / "bad.txt"
        zobj_path = tmp_path / "adult.zobj"
        manifest_path.write_text(make_manifest("A: CallList(NOPE);"))
        zobj_path.write_bytes(zobj)

        result = runner.invoke(main, ["build", str(manifest_path), str(zobj_path)])

        assert result.exit_code == 1
        assert "dictionary entry not found: NOPE" in result.output
        assert not (tmp_path / "adult.patched.zobj").exists()

    def test_missing_input(self, runner: CliRunner, tmp_path):
        result = runner.invoke(main, ["build", str(tmp_path / "a.txt"), str(tmp_path / "a.zobj")])
        assert result.exit_code == 2


class TestInspectCommands:
    """Tests for the dictionary, table, trailer and hierarchy commands."""

    def test_dictionary(self, runner: CliRunner, files):
        result = runner.invoke(main, ["dictionary", *map(str, files)])
        assert result.exit_code == 0, result.output
        assert "EXTERNAL" in result.output
        assert "DL_DF_COMMAND" in result.output
        assert "0x00000400" in result.output

    def test_table(self, runner: CliRunner, files):
        result = runner.invoke(main, ["table", *map(str, files)])
        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[0] == "00000380: DE 01 00 00 06 00 01 50"
        assert lines[1] == "00000388: DE 01 00 00 06 00 04 00"
        assert len(lines) == 4

    def test_trailer(self, runner: CliRunner, files):
        result = runner.invoke(main, ["trailer", str(files[1])])
        assert result.exit_code == 0, result.output
        assert "0x00000200  Sheathed Sword" in result.output
        assert "2 display list(s)" in result.output

    def test_hierarchy(self, runner: CliRunner, files):
        result = runner.invoke(main, ["hierarchy", str(files[1])])
        assert result.exit_code == 0, result.output
        assert "0x00000360" in result.output
        assert "06 00 03 00 15 00 00 00 12 00 00 00" in result.output

    def test_trailer_missing(self, runner: CliRunner, tmp_path):
        path = tmp_path / "plain.zobj"
        path.write_bytes(bytes(16))
        result = runner.invoke(main, ["trailer", str(path)])
        assert result.exit_code == 1
