"""Unit tests for version management."""
import pytest

from emoji_pipeline import __version__
from emoji_pipeline.version import (
    get_version,
    is_supported_emoji_version,
    EMOJI_VERSIONS,
    LATEST_EMOJI_VERSION,
    PIPELINE_VERSION,
)


class TestGetVersion:
    """Tests for get_version function."""

    def test_returns_current_version(self):
        """Should return current version constant."""
        assert get_version() == PIPELINE_VERSION

    def test_package_version_matches(self):
        """The package exports the same version."""
        assert __version__ == PIPELINE_VERSION


class TestEmojiVersions:
    """Tests for emoji version helpers."""

    def test_latest_is_last(self):
        """The latest version is the newest published one."""
        assert LATEST_EMOJI_VERSION == max(EMOJI_VERSIONS)

    @pytest.mark.parametrize('version', [1, 12.1, '13.1', '15', 15.0])
    def test_supported(self, version):
        """Published versions are accepted as numbers or strings."""
        assert is_supported_emoji_version(version)

    @pytest.mark.parametrize('version', [6, '16', 'latest', None, True])
    def test_unsupported(self, version):
        """Unpublished versions and non-numbers are rejected."""
        assert not is_supported_emoji_version(version)
