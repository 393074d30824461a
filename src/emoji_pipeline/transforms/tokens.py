"""Search token and shortcode derivation for single emoji."""
import logging
import re
from typing import List

from ..models import Dataset, Emoji

logger = logging.getLogger(__name__)

NAME_SEPARATOR = re.compile(r'[-_\s]+')


def _collect_tokens(emoji: Emoji) -> List[str]:
    """
    Gather lower-cased tokens in search order.

    Only the name is split; the id, keywords and emoticons stay whole.
    """
    tokens = [emoji.id.lower()]
    if emoji.name:
        tokens.extend(part.lower() for part in NAME_SEPARATOR.split(emoji.name))
    tokens.extend(keyword.lower() for keyword in emoji.keywords or [])
    tokens.extend(emoticon.lower() for emoticon in emoji.emoticons or [])
    return [token for token in tokens if token and token.strip()]


def build_search_tokens(emoji: Emoji, dataset: Dataset) -> None:
    """
    Build `emoji.search` once and register the emoji in the lookup tables.

    Sets `shortcodes` on every skin, claims unclaimed emoticons in
    `dataset.emoticons` and maps every native character in
    `dataset.natives`. Does nothing if the emoji already has tokens.

    Args:
        emoji: Emoji to index
        dataset: Dataset owning the emoticon and native lookup tables
    """
    if emoji.search:
        return

    if dataset.emoticons is None:
        dataset.emoticons = {}
    if dataset.natives is None:
        dataset.natives = {}

    emoji.search = ',' + ','.join(_collect_tokens(emoji))

    for emoticon in emoji.emoticons or []:
        # First emoji to claim an emoticon keeps it
        if emoticon in dataset.emoticons:
            continue
        dataset.emoticons[emoticon] = emoji.id

    skin_index = 0
    for skin in emoji.skins:
        if skin is None:
            logger.debug(f"Skipping empty skin on '{emoji.id}'")
            continue
        skin_index += 1

        if skin.native:
            dataset.natives[skin.native] = emoji.id
            emoji.search += f',{skin.native}'

        tone = '' if skin_index == 1 else f':skin-tone-{skin_index}:'
        skin.shortcodes = f':{emoji.id}:{tone}'
