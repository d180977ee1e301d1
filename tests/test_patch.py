"""
Patch Builder Unit Tests
========================

End-to-end tests for building a patched zobj from a manifest.

Test Categories
---------------
1. Build: pool contents, placeholder, accessors
2. Files: from_files() and write()
3. Failures: every failure leaves no patch behind
4. Config: placeholder override and environment
"""

import pytest

from playas_sdk import AliasPatch, BuildConfig, build_patch, compose_zobj
from playas_sdk.errors import (
    DuplicateSymbolError,
    ErrorKind,
    PlayAsError,
    PoolOverflowError,
    StructureNotFoundError,
    UndefinedSymbolError,
)

from conftest import BODY_SIZE, HEADER_BYTES, HEADER_OFFSET, POOL_OFFSET, POOL_SIZE


EXPECTED_TABLE = bytes.fromhex(
    "DE01000006000150"      # ALIAS_HAND: branch to LUT_HAND
    "DE01000006000400"      # ALIAS_SHIELD: bank object -> placeholder
) + HEADER_BYTES


# =============================================================================
# Build Tests
# =============================================================================

class TestBuild:
    """Tests for a successful build."""

    def test_alias_table(self, manifest: str, zobj: bytes):
        patch = build_patch(manifest, zobj, "link.zobj")
        assert patch.alias_table == EXPECTED_TABLE
        assert patch.pool_offset == POOL_OFFSET
        assert patch.pool_size == POOL_SIZE

    def test_output_layout(self, manifest: str, zobj: bytes):
        """Test that only the pool region and the tail change."""
        patch = build_patch(manifest, zobj, "link.zobj")
        output = patch.zobj
        end = POOL_OFFSET + len(EXPECTED_TABLE)

        assert len(output) == BODY_SIZE + 8
        assert output[:POOL_OFFSET] == zobj[:POOL_OFFSET]
        assert output[POOL_OFFSET:end] == EXPECTED_TABLE
        assert output[end:BODY_SIZE] == zobj[end:BODY_SIZE]
        assert output[BODY_SIZE:] == bytes.fromhex("DF00000000000000")
        assert b"!PlayAsManifest" not in output

    def test_accessors(self, manifest: str, zobj: bytes):
        patch = build_patch(manifest, zobj, "link.zobj")
        assert patch.hierarchy_header == HEADER_BYTES
        assert patch.hierarchy.offset == HEADER_OFFSET
        assert list(patch.trailer) == ["Sheathed Sword", "Fist"]

    def test_dictionary(self, manifest: str, zobj: bytes):
        """Test the final dictionary holds every symbol source."""
        offsets = build_patch(manifest, zobj, "link.zobj").dictionary.offsets()
        assert offsets == {
            "LUT_ZERO": 0,
            "LUT_HAND": 0x150,
            "DL_SWORD": 0x200,
            "DL_SHIELD": None,
            "DL_DF_COMMAND": BODY_SIZE,
            "ALIAS_HAND": 0x380,
            "ALIAS_SHIELD": 0x388,
        }

    def test_deterministic(self, manifest: str, zobj: bytes):
        first = build_patch(manifest, zobj, "link.zobj")
        second = build_patch(manifest.encode("utf-8"), zobj, "link.zobj")
        assert first.zobj == second.zobj

    def test_compose(self):
        assert compose_zobj(bytes(8), b"\x01\x02", 6) == bytes(6) + b"\x01\x02"

    def test_compose_past_end(self):
        with pytest.raises(PoolOverflowError):
            compose_zobj(bytes(8), b"\x01\x02", 7)


# =============================================================================
# File Tests
# =============================================================================

class TestFiles:
    """Tests for building from and writing to disk."""

    def test_from_files(self, tmp_path, manifest: str, zobj: bytes):
        manifest_path = tmp_path / "adult.txt"
        zobj_path = tmp_path / "adult.zobj"
        manifest_path.write_text(manifest)
        zobj_path.write_bytes(zobj)

        patch = AliasPatch.from_files(manifest_path, zobj_path)
        assert patch.name == "adult.zobj"

        output = tmp_path / "adult.patched.zobj"
        patch.write(output)
        assert output.read_bytes() == patch.zobj

    def test_error_names_manifest(self, tmp_path, make_manifest, zobj: bytes):
        manifest_path = tmp_path / "adult.txt"
        zobj_path = tmp_path / "adult.zobj"
        manifest_path.write_text(make_manifest("A: CallList(NOPE);"))
        zobj_path.write_bytes(zobj)

        with pytest.raises(UndefinedSymbolError) as exc_info:
            AliasPatch.from_files(str(manifest_path), str(zobj_path))
        assert str(exc_info.value).startswith("adult.txt:5: error:")

    def test_missing_file(self, tmp_path, zobj: bytes):
        with pytest.raises(FileNotFoundError):
            AliasPatch.from_files(tmp_path / "missing.txt", tmp_path / "missing.zobj")


# =============================================================================
# Failure Tests
# =============================================================================

class TestFailures:
    """Tests for build failures."""

    def test_missing_trailer(self, manifest: str, make_body):
        with pytest.raises(StructureNotFoundError) as exc_info:
            build_patch(manifest, bytes(make_body()), "plain.zobj")
        assert "PlayAs manifest not found" in str(exc_info.value)

    def test_missing_hierarchy(self, manifest: str, make_zobj):
        with pytest.raises(StructureNotFoundError) as exc_info:
            build_patch(manifest, make_zobj(with_hierarchy=False), "flat.zobj")
        assert "flat.zobj" in str(exc_info.value)

    def test_duplicate_label(self, make_manifest, zobj: bytes):
        text = make_manifest("A: PopMatrix(1);\nA: PopMatrix(1);")
        with pytest.raises(DuplicateSymbolError):
            build_patch(text, zobj, "link.zobj")

    def test_pool_too_small(self, make_manifest, zobj: bytes):
        text = make_manifest("A: CallList(LUT_HAND);", header="=0x380,0x10")
        with pytest.raises(PoolOverflowError) as exc_info:
            build_patch(text, zobj, "link.zobj")
        assert "exceeds max OBJECT POOL size" in str(exc_info.value)

    def test_pool_past_end_of_zobj(self, make_manifest, zobj: bytes):
        """Test a pool declared too close to the end of the asset."""
        text = make_manifest("A: CallList(LUT_HAND);", header="=0x3F8,0x80")
        with pytest.raises(PoolOverflowError) as exc_info:
            build_patch(text, zobj, "link.zobj")
        assert exc_info.value.kind is ErrorKind.CAPACITY

    def test_every_failure_is_a_playas_error(self, make_manifest, zobj: bytes):
        for pool in ("A: Jump(1);", "A: PopMatrix(x);", "A: CallList(A", "CallList(A);"):
            with pytest.raises(PlayAsError):
                build_patch(make_manifest(pool), zobj, "link.zobj")


# =============================================================================
# Configuration Tests
# =============================================================================

class TestConfig:
    """Tests for BuildConfig."""

    def test_defaults(self):
        config = BuildConfig()
        assert config.placeholder_symbol == "DL_DF_COMMAND"
        assert config.output_suffix == ".patched.zobj"

    def test_placeholder_override(self, manifest: str, zobj: bytes):
        config = BuildConfig(placeholder_symbol="DF_END")
        patch = build_patch(manifest, zobj, "link.zobj", config=config)
        assert patch.alias_table == EXPECTED_TABLE
        assert "DL_DF_COMMAND" not in patch.dictionary
        assert patch.dictionary.resolve("DF_END") == BODY_SIZE

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PLAYAS_PLACEHOLDER_SYMBOL", "DF_END")
        monkeypatch.setenv("PLAYAS_LOG_LEVEL", "debug")
        monkeypatch.setenv("PLAYAS_OUTPUT_SUFFIX", ".out")
        config = BuildConfig.from_env()
        assert config.placeholder_symbol == "DF_END"
        assert config.log_level == "DEBUG"
        assert config.output_suffix == ".out"

    def test_from_env_ignores_unknown_level(self, monkeypatch):
        monkeypatch.delenv("PLAYAS_PLACEHOLDER_SYMBOL", raising=False)
        monkeypatch.setenv("PLAYAS_LOG_LEVEL", "LOUD")
        config = BuildConfig.from_env()
        assert config.log_level == "WARNING"
        assert config.placeholder_symbol == "DL_DF_COMMAND"
