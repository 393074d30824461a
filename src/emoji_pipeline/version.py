"""
Single source of truth for pipeline and emoji versions.

Emoji versions are the release numbers of Unicode Emoji
that the published datasets are cut against. All version references should
import from here.
"""

from typing import Tuple, Union

PIPELINE_VERSION = "1.0.0"

EMOJI_VERSIONS: Tuple[Union[int, float], ...] = (1, 2, 3, 4, 5, 11, 12, 12.1, 13, 13.1, 14, 15)

LATEST_EMOJI_VERSION = EMOJI_VERSIONS[-1]


def get_version() -> str:
    """Get current pipeline version."""
    return PIPELINE_VERSION


def is_supported_emoji_version(version) -> bool:
    """
    Check that a dataset is published for the given emoji version.

    Args:
        version: Emoji version as a number or numeric string

    Returns:
        True if a dataset exists for it, False otherwise
    """
    if isinstance(version, bool):
        return False
    try:
        return float(version) in EMOJI_VERSIONS
    except (TypeError, ValueError):
        return False
