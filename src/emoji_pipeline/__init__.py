"""Emoji dataset normalization for picker UIs."""
from .initializer import EmojiSession, InitStage, get_session, init
from .models import Category, Dataset, Emoji, I18n, SkinVariation
from .version import PIPELINE_VERSION as __version__

__all__ = [
    'EmojiSession',
    'InitStage',
    'get_session',
    'init',
    'Category',
    'Dataset',
    'Emoji',
    'I18n',
    'SkinVariation',
    '__version__',
]
