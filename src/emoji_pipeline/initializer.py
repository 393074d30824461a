"""
One-time dataset and locale initialization shared by every caller of a session.

The first configured call loads the dataset and locale bundle; every call
made before that load completes receives the same completion future, and
calls made afterwards receive it already resolved. Later configured calls
re-run normalization against the loaded dataset.
"""
import asyncio
import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Set

from .helpers import SAFE_FLAGS, FrequentlyUsed, NativeSupport, SearchIndex
from .loader import dataset_url, fetch_json, i18n_url, load_bundled_i18n, resolve_source
from .models import FREQUENT_CATEGORY, Category, Dataset, I18n
from .props import PICKER_PROPS, get_props
from .transforms.filters import FilterOptions, filter_categories
from .transforms.merge import merge_custom, restrict_categories
from .utils import DEFAULT_DATA_URL, DEFAULT_I18N_URL, validate_config

logger = logging.getLogger(__name__)


class InitStage(Enum):
    NOT_STARTED = 'not_started'
    LOADING = 'loading'
    READY = 'ready'


@dataclass
class InitializationState:
    """Everything a session keeps between initialization calls."""
    stage: InitStage = InitStage.NOT_STARTED
    signal: Optional[asyncio.Future] = None
    data: Optional[Dataset] = None
    i18n: Optional[I18n] = None
    builtin_categories: List[Category] = field(default_factory=list)


class EmojiSession:
    """
    Owns the loaded dataset, locale bundle and collaborators for one picker host.

    Collaborators default to the implementations in `helpers`; pass your
    own to change how frequent emoji, native support or search invalidation
    behave.
    """

    def __init__(self, settings: Optional[Mapping[str, Any]] = None,
                 frequently_used: Optional[FrequentlyUsed] = None,
                 native_support: Optional[NativeSupport] = None,
                 safe_flags=None,
                 search_index: Optional[SearchIndex] = None):
        self.settings = dict(settings) if settings is not None else validate_config()
        self.frequently_used = frequently_used or FrequentlyUsed(self.settings.get('frequent_store'))
        self.native_support = native_support or NativeSupport(self.settings)
        self.safe_flags = frozenset(safe_flags) if safe_flags is not None else SAFE_FLAGS
        self.search_index = search_index or SearchIndex()
        self.state = InitializationState()
        self._lock: Optional[asyncio.Lock] = None
        self._pending: Set[asyncio.Task] = set()

    @property
    def data(self) -> Optional[Dataset]:
        return self.state.data

    @property
    def i18n(self) -> Optional[I18n]:
        return self.state.i18n

    def init(self, config: Optional[Mapping[str, Any]] = None) -> asyncio.Future:
        """
        Start (or join) initialization and return the shared completion future.

        Must be called from a running event loop. Without `config` this only
        hands back the future. With `config` a normalization pass is run:
        immediately when everything is loaded and no other pass is queued,
        otherwise as a task serialized behind earlier passes.

        Args:
            config: Picker options (emoji_version, set, locale, data, i18n,
                custom, categories, category_icons, no_country_flags, ...)

        Returns:
            Future resolved once the first pass completes; it carries the
            exception of a failed load instead
        """
        signal = self._ensure_signal()
        if not config:
            return signal

        in_flight = any(not task.done() for task in self._pending)
        if self.state.stage is InitStage.READY and not in_flight:
            self._normalize(config, reset=True)
            return signal

        task = asyncio.ensure_future(self._initialize(config))
        self._pending.add(task)
        task.add_done_callback(self._on_pass_done)
        return signal

    def _ensure_signal(self) -> asyncio.Future:
        loop = asyncio.get_running_loop()
        signal = self.state.signal
        stale = (
            signal is None
            or signal.get_loop() is not loop
            or signal.cancelled()
            or (signal.done() and signal.exception() is not None)
            or (signal.done() and self.state.stage is not InitStage.READY)
        )
        if stale:
            if signal is not None and signal.get_loop() is not loop:
                self._lock = None
            signal = loop.create_future()
            if self.state.stage is InitStage.READY:
                signal.set_result(None)
            self.state.signal = signal
        return signal

    def _on_pass_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if not task.cancelled():
            # Already delivered through the signal by _initialize
            task.exception()

    async def _initialize(self, config: Mapping[str, Any]) -> None:
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            try:
                await self._run_pass(config)
            except Exception as e:
                # Fail the waiters before the next queued pass can take the lock
                logger.error(f"Emoji data initialization failed: {e}")
                signal = self.state.signal
                if signal is not None and not signal.done():
                    signal.set_exception(e)
                raise

    async def _run_pass(self, config: Mapping[str, Any]) -> None:
        if self.state.stage is InitStage.NOT_STARTED:
            self.state.stage = InitStage.LOADING

        options = self._resolve_options(config)
        reset = self.state.data is not None
        if not reset:
            self.state.data = await self._load_dataset(config, options)
            self.state.builtin_categories = [
                replace(c, emojis=list(c.emojis)) for c in self.state.data.categories if not c.name
            ]

        if self.state.i18n is None:
            self.state.i18n = await self._load_i18n(config, options)

        self._normalize(config, reset=reset, options=options)

    @staticmethod
    def _resolve_options(config: Mapping[str, Any]) -> Dict[str, Any]:
        """Picker options for a pass; source selectors are taken as given and only defaulted when absent."""
        options = get_props(config, PICKER_PROPS)
        for name in ('emoji_version', 'set', 'locale'):
            options[name] = config.get(name) or PICKER_PROPS[name].value
        return options

    async def _load_dataset(self, config: Mapping[str, Any], options: Dict[str, Any]) -> Dataset:
        raw = await resolve_source(config.get('data'))
        if raw is None:
            url = dataset_url(self.settings.get('data_url', DEFAULT_DATA_URL), options['emoji_version'], options['set'])
            raw = await asyncio.to_thread(fetch_json, url, self.settings.get('fetch_timeout', 30))

        data = raw if isinstance(raw, Dataset) else Dataset.from_dict(raw)
        data.emoticons = {}
        data.natives = {}
        data.categories.insert(0, Category(id=FREQUENT_CATEGORY, emojis=[]))

        for alias, emoji_id in data.aliases.items():
            emoji = data.emojis.get(emoji_id)
            if emoji is None:
                logger.debug(f"Alias '{alias}' points at missing emoji '{emoji_id}'")
                continue
            if alias not in emoji.aliases:
                emoji.aliases.append(alias)

        logger.info(f"Loaded emoji dataset: {len(data.emojis)} emojis in {len(data.categories)} categories")
        return data

    async def _load_i18n(self, config: Mapping[str, Any], options: Dict[str, Any]) -> I18n:
        raw = await resolve_source(config.get('i18n'))
        if raw is None:
            if options['locale'] == 'en':
                raw = load_bundled_i18n('en')
            else:
                url = i18n_url(self.settings.get('i18n_url', DEFAULT_I18N_URL), options['locale'])
                raw = await asyncio.to_thread(fetch_json, url, self.settings.get('fetch_timeout', 30))

        logger.info(f"Loaded locale bundle '{options['locale']}'")
        return raw if isinstance(raw, I18n) else I18n.from_dict(raw)

    def _normalize(self, config: Mapping[str, Any], reset: bool,
                   options: Optional[Dict[str, Any]] = None) -> None:
        """Synchronous part of a pass: merge, restrict, filter, invalidate, release."""
        options = options or self._resolve_options(config)
        data = self.state.data

        if reset:
            data.categories = [replace(c, emojis=list(c.emojis)) for c in self.state.builtin_categories]

        if config.get('custom'):
            merge_custom(config['custom'], data, self.state.i18n)

        if config.get('categories'):
            restrict_categories(data, config['categories'])

        latest_version = None
        no_country_flags = False
        if options['set'] == 'native':
            latest_version = self.native_support.latest_version()
            no_country_flags = options['no_country_flags'] or self.native_support.no_country_flags()

        has_frequent = any(c.id == FREQUENT_CATEGORY for c in data.categories)
        filter_options = FilterOptions(
            latest_version=latest_version,
            no_country_flags=no_country_flags,
            safe_flags=self.safe_flags,
            category_icons=dict(config.get('category_icons') or {}),
            frequent_ids=self.frequently_used.get(config) if has_frequent else [],
        )

        if filter_categories(data, filter_options):
            self.search_index.reset()

        self.state.stage = InitStage.READY
        logger.info(f"Emoji data ready: {len(data.categories)} categories")

        # A signal still holding an earlier pass's failure is swapped for a resolved one
        signal = self._ensure_signal()
        if not signal.done():
            signal.set_result(None)


_default_session: Optional[EmojiSession] = None


def get_session() -> EmojiSession:
    """Return the process-wide session, creating it on first use."""
    global _default_session
    if _default_session is None:
        _default_session = EmojiSession()
    return _default_session


def init(config: Optional[Mapping[str, Any]] = None) -> asyncio.Future:
    """Initialize the process-wide session; see `EmojiSession.init`."""
    return get_session().init(config)
