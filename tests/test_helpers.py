"""Unit tests for initializer collaborators."""
import json
import pytest

from emoji_pipeline.helpers import (
    DEFAULT_FREQUENT,
    SAFE_FLAGS,
    FrequentlyUsed,
    NativeSupport,
    SearchIndex,
)
from emoji_pipeline.models import Dataset, Emoji


class TestFrequentlyUsed:
    """Tests for FrequentlyUsed."""

    def test_seeded_with_defaults(self):
        """An empty store starts with the first row of defaults."""
        frequent = FrequentlyUsed()

        assert frequent.get() == DEFAULT_FREQUENT[:9]

    def test_disabled_rows(self):
        """Zero frequent rows means no frequent emoji."""
        assert FrequentlyUsed().get({'max_frequent_rows': 0}) == []

    def test_ranked_by_count(self):
        """Most picked emoji come first."""
        frequent = FrequentlyUsed()
        for emoji_id in ['a', 'b', 'b', 'c', 'c', 'c']:
            frequent.add(emoji_id)

        assert frequent.get() == ['c', 'b', 'a']

    def test_ties_sorted_by_id(self):
        """Equal counts fall back to id order."""
        frequent = FrequentlyUsed()
        for emoji_id in ['zebra', 'apple']:
            frequent.add(emoji_id)

        assert frequent.get() == ['apple', 'zebra']

    def test_capped_with_last_pick_kept(self):
        """The list is capped but the latest pick always shows."""
        frequent = FrequentlyUsed()
        for emoji_id in ['a', 'a', 'b', 'b', 'c']:
            frequent.add(emoji_id)

        assert frequent.get({'max_frequent_rows': 1, 'per_line': 2}) == ['a', 'c']

    def test_capped_forgets_overflow(self):
        """Ids beyond the cap are forgotten."""
        frequent = FrequentlyUsed()
        for emoji_id in ['a', 'a', 'b', 'b', 'c', 'a']:
            frequent.add(emoji_id)

        assert frequent.get({'max_frequent_rows': 1, 'per_line': 2}) == ['a', 'b']
        assert frequent.get() == ['a', 'b']

    def test_persisted_store(self, tmp_path):
        """Counts survive across instances sharing a store file."""
        store = tmp_path / 'frequent.json'
        FrequentlyUsed(str(store)).add('heart')
        FrequentlyUsed(str(store)).add('heart')

        stored = json.loads(store.read_text(encoding='utf-8'))
        assert stored == {'frequently': {'heart': 2}, 'last': 'heart'}
        assert FrequentlyUsed(str(store)).get() == ['heart']


class TestNativeSupport:
    """Tests for NativeSupport."""

    def test_configured_ceiling(self):
        """The ceiling comes from settings."""
        assert NativeSupport({'native_version': 13.1}).latest_version() == 13.1

    def test_default_ceiling(self):
        """Without settings the latest emoji version is assumed."""
        assert NativeSupport().latest_version() == 15

    def test_country_flag_policy(self):
        """The flag policy comes from settings and defaults to off."""
        assert NativeSupport({'no_country_flags': True}).no_country_flags() is True
        assert NativeSupport().no_country_flags() is False

    def test_cached(self):
        """Answers are computed once per instance."""
        settings = {'native_version': 11}
        support = NativeSupport(settings)
        support.latest_version()
        settings['native_version'] = 14

        assert support.latest_version() == 11


class TestSafeFlags:
    """Tests for the safe flag list."""

    def test_contains_no_country_flags(self):
        """Only non-country flags are listed."""
        assert 'checkered_flag' in SAFE_FLAGS
        assert 'flag-us' not in SAFE_FLAGS


class TestSearchIndex:
    """Tests for SearchIndex."""

    def test_pool_built_from_tokens(self):
        """The pool pairs search strings with ids for indexed emoji."""
        dataset = Dataset(emojis={
            'grin': Emoji(id='grin', search=',grin'),
            'raw': Emoji(id='raw'),
        })

        assert SearchIndex().pool(dataset) == [(',grin', 'grin')]

    def test_reset_drops_pool(self):
        """Reset forces a rebuild and bumps the generation."""
        dataset = Dataset(emojis={'grin': Emoji(id='grin', search=',grin')})
        index = SearchIndex()
        index.pool(dataset)
        dataset.emojis['wave'] = Emoji(id='wave', search=',wave')

        assert len(index.pool(dataset)) == 1
        index.reset()
        assert len(index.pool(dataset)) == 2
        assert index.generation == 1
