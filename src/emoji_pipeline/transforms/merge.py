"""Custom category merging and category restriction."""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import Category, Dataset, Emoji, I18n

logger = logging.getLogger(__name__)

DEFAULT_CUSTOM_NAME = 'Custom'


def merge_custom(custom: Sequence[Mapping[str, Any]], dataset: Dataset, i18n: Optional[I18n]) -> List[Category]:
    """
    Append user-supplied categories and their emoji to the dataset.

    Each entry is category-shaped: optional `id`, `name` and `icon`, plus
    `emojis`, a list of full emoji objects. Entries without emoji are
    skipped. Ids default to `custom_<position+1>`, names to the localized
    "custom" label. An entry without an icon points `target` at the
    preceding custom category (or at that category's own target). Only a
    preceding entry that was actually merged counts: when the entry just
    before was skipped for having no emoji, no target is linked, even
    though the emoji-mart picker would still point at the skipped entry.

    Emoji are written into `dataset.emojis`, replacing any emoji with the
    same id, and the category keeps only the deduplicated id list.

    Args:
        custom: Category-shaped mappings in display order
        dataset: Dataset to merge into
        i18n: Locale bundle supplying the default category name

    Returns:
        The categories appended to the dataset
    """
    label = (i18n.category_name('custom') if i18n else None) or DEFAULT_CUSTOM_NAME

    merged: Dict[int, Category] = {}
    for position, entry in enumerate(custom):
        if not entry or not entry.get('emojis'):
            logger.debug(f"Skipping custom category at position {position}: no emojis")
            continue

        category = Category(
            id=entry.get('id') or f'custom_{position + 1}',
            name=entry.get('name') or label,
            icon=entry.get('icon'),
            target=entry.get('target'),
        )

        previous = merged.get(position - 1)
        if previous is not None and not category.icon:
            category.target = previous.target or previous.id

        ids = []
        for raw in entry['emojis']:
            if not raw:
                continue
            try:
                emoji = Emoji.coerce(raw)
            except KeyError:
                logger.debug(f"Skipping custom emoji without id in '{category.id}'")
                continue

            # Later objects win in the shared table; membership stays unique
            dataset.emojis[emoji.id] = emoji
            if emoji.id not in ids:
                ids.append(emoji.id)

        category.emojis = ids
        dataset.categories.append(category)
        merged[position] = category

    logger.debug(f"Merged {len(merged)} custom categories")
    return list(merged.values())


def restrict_categories(dataset: Dataset, category_ids: Sequence[str]) -> None:
    """Keep only the requested categories, ordered as requested."""
    order: Dict[str, int] = {}
    for index, category_id in enumerate(category_ids):
        order.setdefault(category_id, index)

    kept = [c for c in dataset.categories if c.id in order]
    dataset.categories = sorted(kept, key=lambda c: order[c.id])
