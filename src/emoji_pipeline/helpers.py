"""Collaborators of the dataset initializer: frequency store, native support, safe flags, search index."""
import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import Dataset
from .props import PICKER_PROPS, get_prop
from .version import LATEST_EMOJI_VERSION

logger = logging.getLogger(__name__)

DEFAULT_FREQUENT = [
    '+1',
    'grinning',
    'kissing_heart',
    'heart_eyes',
    'laughing',
    'stuck_out_tongue_winking_eye',
    'sweat_smile',
    'joy',
    'scream',
    'disappointed',
    'unamused',
    'weary',
    'sob',
    'sunglasses',
    'heart',
]

# Flags that are not country flags render on every platform that renders flags at all
SAFE_FLAGS = frozenset([
    'checkered_flag',
    'crossed_flags',
    'pirate_flag',
    'rainbow-flag',
    'transgender_flag',
    'triangular_flag_on_post',
    'waving_black_flag',
    'waving_white_flag',
])


class FrequentlyUsed:
    """Counts picked emoji ids and ranks them for the `frequent` category."""

    def __init__(self, store_path: Optional[str] = None):
        self.store_path = store_path
        self._counts: Optional[Dict[str, int]] = None
        self._last: Optional[str] = None

    def _load(self) -> Dict[str, int]:
        if self._counts is not None:
            return self._counts

        self._counts = {}
        if self.store_path and os.path.exists(self.store_path):
            with open(self.store_path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
            self._counts = dict(stored.get('frequently') or {})
            self._last = stored.get('last')
        return self._counts

    def _save(self) -> None:
        if not self.store_path:
            return
        with open(self.store_path, 'w', encoding='utf-8') as f:
            json.dump({'frequently': self._counts, 'last': self._last}, f, ensure_ascii=False)

    def add(self, emoji_id: str) -> None:
        """Record one pick of `emoji_id`."""
        counts = self._load()
        counts[emoji_id] = counts.get(emoji_id, 0) + 1
        self._last = emoji_id
        self._save()

    def get(self, config: Optional[Mapping[str, Any]] = None) -> List[str]:
        """
        Return the ranked ids to show in the `frequent` category.

        Args:
            config: Picker options; `max_frequent_rows` and `per_line` size the list

        Returns:
            Emoji ids, most picked first
        """
        max_frequent_rows = get_prop('max_frequent_rows', config, PICKER_PROPS)
        per_line = get_prop('per_line', config, PICKER_PROPS)
        if not max_frequent_rows:
            return []

        counts = self._load()
        if not counts:
            for index, emoji_id in enumerate(DEFAULT_FREQUENT[:int(per_line)]):
                counts[emoji_id] = int(per_line) - index
            self._save()

        limit = int(max_frequent_rows * per_line)
        ranked = sorted(counts, key=lambda emoji_id: (-counts[emoji_id], emoji_id))

        if len(ranked) > limit:
            removed = ranked[limit:]
            ranked = ranked[:limit]
            for emoji_id in removed:
                if emoji_id != self._last:
                    del counts[emoji_id]

            if self._last and ranked and self._last not in ranked:
                del counts[ranked[-1]]
                ranked[-1] = self._last

            self._save()

        return ranked


class NativeSupport:
    """
    Native rendering capabilities of the host.

    There is no renderer to probe, so the version ceiling and the country
    flag policy come from configuration.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None):
        self.settings = settings or {}
        self._cache: Dict[str, Any] = {}

    def latest_version(self):
        if 'latest_version' not in self._cache:
            self._cache['latest_version'] = self.settings.get('native_version') or LATEST_EMOJI_VERSION
            logger.debug(f"Native emoji support ceiling: {self._cache['latest_version']}")
        return self._cache['latest_version']

    def no_country_flags(self) -> bool:
        if 'no_country_flags' not in self._cache:
            self._cache['no_country_flags'] = bool(self.settings.get('no_country_flags', False))
        return self._cache['no_country_flags']


class SearchIndex:
    """Holds the search substrate built from emoji tokens; invalidated when tokens change."""

    def __init__(self):
        self.generation = 0
        self._pool: Optional[List[Tuple[str, str]]] = None

    def reset(self) -> None:
        self._pool = None
        self.generation += 1
        logger.debug(f"Search index reset (generation {self.generation})")

    def pool(self, dataset: Dataset) -> List[Tuple[str, str]]:
        """Return `(search, emoji_id)` pairs for every emoji with built tokens."""
        if self._pool is None:
            self._pool = [
                (emoji.search, emoji.id)
                for emoji in dataset.emojis.values()
                if emoji.search
            ]
        return self._pool
