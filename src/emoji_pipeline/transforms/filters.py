"""Per-category emoji filtering by version support and flag safety."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Union

from ..helpers import SAFE_FLAGS
from ..models import FLAGS_CATEGORY, FREQUENT_CATEGORY, Category, Dataset
from .tokens import build_search_tokens

logger = logging.getLogger(__name__)


@dataclass
class FilterOptions:
    """
    Policy for one filtering pass.

    `latest_version` and `no_country_flags` are only set when the active
    set renders natively.
    """
    latest_version: Optional[Union[int, float]] = None
    no_country_flags: bool = False
    safe_flags: FrozenSet[str] = SAFE_FLAGS
    category_icons: Dict[str, Any] = field(default_factory=dict)
    frequent_ids: List[str] = field(default_factory=list)


def _rejection_reason(emoji_id: str, category: Category, dataset: Dataset,
                      options: FilterOptions) -> Optional[str]:
    emoji = dataset.emojis.get(emoji_id)
    if emoji is None:
        return 'unknown emoji'

    if options.latest_version and emoji.version and emoji.version > options.latest_version:
        return f'version {emoji.version} above native support {options.latest_version}'

    if options.no_country_flags and category.id == FLAGS_CATEGORY:
        if emoji_id not in options.safe_flags:
            return 'country flag'

    return None


def filter_category(category: Category, dataset: Dataset, options: FilterOptions) -> bool:
    """
    Drop unsupported emoji from a category and build tokens for the survivors.

    Emoji are visited from last to first so lookup-table claims follow the
    same order on every pass. The category's id list is replaced, never
    edited while being walked.

    Args:
        category: Category to filter
        dataset: Dataset the category belongs to
        options: Filtering policy for this pass

    Returns:
        True if search tokens were built for at least one emoji
    """
    if category.id == FREQUENT_CATEGORY:
        category.emojis = list(options.frequent_ids)

    icon = options.category_icons.get(category.id)
    if icon and not category.icon:
        category.icon = icon

    rebuilt = False
    retained = []
    for emoji_id in reversed(category.emojis):
        reason = _rejection_reason(emoji_id, category, dataset, options)
        if reason:
            logger.debug(f"Removing '{emoji_id}' from '{category.id}': {reason}")
            continue

        emoji = dataset.emojis[emoji_id]
        if not emoji.search:
            build_search_tokens(emoji, dataset)
            rebuilt = True
        retained.append(emoji_id)

    retained.reverse()
    category.emojis = retained
    return rebuilt


def filter_categories(dataset: Dataset, options: FilterOptions) -> bool:
    """
    Filter every category, last to first, and drop the ones left empty.

    Returns:
        True if any search tokens were built during the pass
    """
    rebuilt = False
    kept = []
    for category in reversed(dataset.categories):
        if filter_category(category, dataset, options):
            rebuilt = True

        if not category.emojis:
            logger.debug(f"Dropping empty category '{category.id}'")
            continue
        kept.append(category)

    kept.reverse()
    dataset.categories = kept
    return rebuilt
