"""Pytest configuration and shared fixtures."""
import asyncio
import sys
import os
import pytest
from unittest.mock import MagicMock

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from emoji_pipeline.helpers import FrequentlyUsed, SearchIndex
from emoji_pipeline.initializer import EmojiSession
from emoji_pipeline.utils import DEFAULT_DATA_URL, DEFAULT_I18N_URL


# ============================================================================
# Common test fixtures
# ============================================================================

@pytest.fixture
def sample_data():
    """Small dataset in the published JSON shape."""
    return {
        'categories': [
            {'id': 'people', 'emojis': ['grin', 'smiley', 'wave', 'ghost_id']},
            {'id': 'nature', 'emojis': ['newbie']},
            {'id': 'flags', 'emojis': ['US', 'XY', 'checkered_flag']},
            {'id': 'symbols', 'emojis': ['heart']},
        ],
        'emojis': {
            'grin': {
                'id': 'grin',
                'name': 'Grinning Face',
                'keywords': ['smile', 'happy'],
                'emoticons': [':D'],
                'version': 1,
                'skins': [{'unified': '1f600', 'native': '😀', 'x': 32, 'y': 20}],
            },
            'smiley': {
                'id': 'smiley',
                'name': 'Smiling Face with Open Mouth',
                'keywords': ['happy'],
                'emoticons': [':)', ':D'],
                'version': 1,
                'skins': [{'unified': '1f603', 'native': '😃'}],
            },
            'wave': {
                'id': 'wave',
                'name': 'Waving Hand',
                'keywords': ['hello'],
                'version': 1,
                'skins': [
                    {'unified': '1f44b', 'native': '👋'},
                    {'unified': '1f44b-1f3fb', 'native': '👋🏻'},
                    {'unified': '1f44b-1f3fc', 'native': '👋🏼'},
                ],
            },
            'newbie': {
                'id': 'newbie',
                'name': 'Squared New',
                'version': 9,
                'skins': [{'unified': '1f195', 'native': '🆕'}],
            },
            'US': {'id': 'US', 'name': 'United States Flag', 'version': 2, 'skins': [{'native': '🇺🇸'}]},
            'XY': {'id': 'XY', 'name': 'Unknown Flag', 'version': 2, 'skins': [{'native': '🏳'}]},
            'checkered_flag': {
                'id': 'checkered_flag',
                'name': 'Chequered Flag',
                'version': 1,
                'skins': [{'native': '🏁'}],
            },
            'heart': {
                'id': 'heart',
                'name': 'Red Heart',
                'emoticons': ['<3'],
                'version': 1,
                'skins': [{'unified': '2764-fe0f', 'native': '❤️'}],
            },
        },
        'aliases': {'grinning_face': 'grin', 'hello': 'wave', 'ghost': 'missing'},
        'sheet': {'cols': 61, 'rows': 61},
    }


@pytest.fixture
def sample_settings():
    """Validated settings as returned by validate_config."""
    return {
        'data_url': DEFAULT_DATA_URL,
        'i18n_url': DEFAULT_I18N_URL,
        'fetch_timeout': 5.0,
        'native_version': 15,
        'no_country_flags': False,
        'frequent_store': None,
        'log_level': 'INFO',
    }


@pytest.fixture
def make_session(sample_settings):
    """Factory for sessions with mocked frequency store and search index."""
    def factory(frequent=None, **overrides):
        settings = dict(sample_settings)
        settings.update(overrides.pop('settings', {}))
        frequently_used = MagicMock(spec=FrequentlyUsed)
        frequently_used.get.return_value = list(frequent or [])
        return EmojiSession(
            settings,
            frequently_used=frequently_used,
            search_index=overrides.pop('search_index', MagicMock(spec=SearchIndex)),
            **overrides,
        )
    return factory


@pytest.fixture
def run_init():
    """Run session.init(config) to completion on a fresh event loop."""
    def runner(session, config=None):
        async def scenario():
            await session.init(config)
        asyncio.run(scenario())
        return session
    return runner
