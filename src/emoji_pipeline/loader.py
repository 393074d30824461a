"""Dataset and locale acquisition: supplied values, loader callables and HTTP fetches."""
import inspect
import json
import logging
from importlib import resources
from typing import Any, Dict

import requests

from .version import PIPELINE_VERSION

logger = logging.getLogger(__name__)

USER_AGENT = f'EmojiDataPipeline/{PIPELINE_VERSION} Python/requests'


async def resolve_source(source: Any) -> Any:
    """
    Turn a supplied value or zero-argument loader into a value.

    Loaders may be plain callables or return awaitables. Falsy results
    come back as None so the caller can fall through to the next source.
    """
    if callable(source):
        source = source()
    if inspect.isawaitable(source):
        source = await source
    return source or None


def fetch_json(url: str, timeout: float = 30) -> Any:
    """
    Fetch and parse a JSON document.

    Args:
        url: Document URL
        timeout: Request timeout in seconds

    Returns:
        Parsed JSON value

    Raises:
        requests.RequestException: On connection errors and non-2xx responses
        ValueError: If the body is not valid JSON
    """
    logger.info(f"Fetching {url}")
    try:
        response = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        logger.error(f"Failed to fetch {url}: {e}")
        raise


def read_json(path: str) -> Any:
    """Read a local JSON document."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def dataset_url(template: str, emoji_version, emoji_set: str) -> str:
    return template.format(version=emoji_version, set=emoji_set)


def i18n_url(template: str, locale: str) -> str:
    return template.format(locale=locale)


def load_bundled_i18n(locale: str = 'en') -> Dict[str, Any]:
    """Load a locale bundle shipped with the package."""
    bundle = resources.files(__package__).joinpath('assets').joinpath('i18n').joinpath(f'{locale}.json')
    return json.loads(bundle.read_text(encoding='utf-8'))
