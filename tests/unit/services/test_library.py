"""
Tests unitaires de la lecture de la bibliotheque video.
"""

from pathlib import Path

import pytest

from src.core.exceptions import ConfigError
from src.services.library import extract_codes_from_library, find_video_file


def _touch(directory: Path, *names: str) -> None:
    for name in names:
        (directory / name).write_bytes(b"")


class TestExtractCodes:
    """Tests pour extract_codes_from_library."""

    def test_codes_from_video_files(self, library_dir: Path) -> None:
        _touch(
            library_dir,
            "SDDM-943 Un titre.mp4",
            "ABP-123.mkv",
            "ABP-123 cd2.mkv",
            "notes.txt",
            ".hidden.mp4",
        )
        (library_dir / "sub").mkdir()
        _touch(library_dir / "sub", "XYZ-001.mp4")

        assert extract_codes_from_library(library_dir) == ["ABP-123", "SDDM-943"]

    def test_extension_is_case_insensitive(self, library_dir: Path) -> None:
        _touch(library_dir, "ABC-001.MP4")
        assert extract_codes_from_library(library_dir) == ["ABC-001"]

    def test_missing_library(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            extract_codes_from_library(tmp_path / "absent")


class TestFindVideoFile:
    """Tests pour find_video_file."""

    def test_match_ignores_case(self, library_dir: Path) -> None:
        _touch(library_dir, "abc-001 titre.mp4")
        assert find_video_file(library_dir, "ABC-001") == str(library_dir / "abc-001 titre.mp4")

    def test_no_match(self, library_dir: Path) -> None:
        assert find_video_file(library_dir, "ABC-001") == ""
        assert find_video_file(None, "ABC-001") == ""
