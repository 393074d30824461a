"""Data model for emoji datasets and locale bundles."""
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

FREQUENT_CATEGORY = 'frequent'
FLAGS_CATEGORY = 'flags'


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


@dataclass
class SkinVariation:
    """One rendering variant of an emoji; index 0 of `Emoji.skins` is the default tone."""
    unified: Optional[str] = None
    native: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    src: Optional[str] = None
    shortcodes: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'SkinVariation':
        return cls(
            unified=raw.get('unified'),
            native=raw.get('native'),
            x=raw.get('x'),
            y=raw.get('y'),
            src=raw.get('src'),
            shortcodes=raw.get('shortcodes'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'unified': self.unified,
            'native': self.native,
            'x': self.x,
            'y': self.y,
            'src': self.src,
            'shortcodes': self.shortcodes,
        })


@dataclass
class Emoji:
    """
    One emoji concept with its metadata and skin-tone variants.

    `search` stays None until search tokens are built; once set it is never
    recomputed for the lifetime of the object.
    """
    id: str
    name: str = ''
    aliases: List[str] = field(default_factory=list)
    emoticons: Optional[List[str]] = None
    keywords: Optional[List[str]] = None
    skins: List[Optional[SkinVariation]] = field(default_factory=list)
    version: Optional[Union[int, float]] = None
    search: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], emoji_id: Optional[str] = None) -> 'Emoji':
        """
        Build an emoji from its JSON form.

        Args:
            raw: Emoji mapping as published in the dataset
            emoji_id: Key the emoji is stored under, used when `raw` has no id

        Returns:
            Emoji instance

        Raises:
            KeyError: If neither `raw` nor `emoji_id` supply an id
        """
        skins = []
        for skin in raw.get('skins') or []:
            if isinstance(skin, SkinVariation) or skin is None:
                skins.append(skin)
            else:
                skins.append(SkinVariation.from_dict(skin))

        emoji_id = raw.get('id') or emoji_id
        if not emoji_id:
            raise KeyError('id')

        return cls(
            id=emoji_id,
            name=raw.get('name') or '',
            aliases=list(raw.get('aliases') or []),
            emoticons=list(raw['emoticons']) if raw.get('emoticons') else None,
            keywords=list(raw['keywords']) if raw.get('keywords') else None,
            skins=skins,
            version=raw.get('version'),
            search=raw.get('search'),
        )

    @classmethod
    def coerce(cls, value: Union['Emoji', Dict[str, Any]]) -> 'Emoji':
        return value if isinstance(value, cls) else cls.from_dict(value)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'name': self.name,
            'aliases': list(self.aliases),
            'emoticons': self.emoticons,
            'keywords': self.keywords,
            'skins': [skin.to_dict() if skin else None for skin in self.skins],
            'version': self.version,
            'search': self.search,
        })


@dataclass
class Category:
    """
    An ordered group of emoji ids shown together.

    Built-in categories carry no `name`; custom categories always do.
    `target` is the id of an earlier custom category whose icon this one
    inherits.
    """
    id: str
    emojis: List[str] = field(default_factory=list)
    name: Optional[str] = None
    icon: Optional[Any] = None
    target: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'Category':
        return cls(
            id=raw['id'],
            emojis=list(raw.get('emojis') or []),
            name=raw.get('name'),
            icon=raw.get('icon'),
            target=raw.get('target'),
        )

    @property
    def is_custom(self) -> bool:
        return bool(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'name': self.name,
            'icon': self.icon,
            'target': self.target,
            'emojis': list(self.emojis),
        })


@dataclass
class Dataset:
    """
    Root of the normalized emoji catalog.

    `emoticons` and `natives` are absent (None) on a freshly parsed dataset
    and always present once the dataset has been initialized.
    """
    categories: List[Category] = field(default_factory=list)
    emojis: Dict[str, Emoji] = field(default_factory=dict)
    aliases: Dict[str, str] = field(default_factory=dict)
    sheet: Dict[str, Any] = field(default_factory=dict)
    emoticons: Optional[Dict[str, str]] = None
    natives: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'Dataset':
        emojis = {}
        for emoji_id, emoji in (raw.get('emojis') or {}).items():
            if not emoji:
                logger.debug(f"Skipping empty emoji entry '{emoji_id}'")
                continue
            emojis[emoji_id] = emoji if isinstance(emoji, Emoji) else Emoji.from_dict(emoji, emoji_id)

        return cls(
            categories=[Category.from_dict(c) for c in raw.get('categories') or []],
            emojis=emojis,
            aliases=dict(raw.get('aliases') or {}),
            sheet=dict(raw.get('sheet') or {}),
            emoticons=raw.get('emoticons'),
            natives=raw.get('natives'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'categories': [c.to_dict() for c in self.categories],
            'emojis': {emoji_id: e.to_dict() for emoji_id, e in self.emojis.items()},
            'aliases': dict(self.aliases),
            'sheet': dict(self.sheet),
            'emoticons': self.emoticons,
            'natives': self.natives,
        })


@dataclass
class I18n:
    """Localized UI strings for one locale."""
    categories: Dict[str, str] = field(default_factory=dict)
    skins: Dict[str, str] = field(default_factory=dict)
    search: str = ''
    search_no_results_1: str = ''
    search_no_results_2: str = ''
    pick: str = ''
    add_custom: str = ''
    rtl: bool = False

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> 'I18n':
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            logger.debug(f"Ignoring unknown locale keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in raw.items() if k in known})

    def category_name(self, category_id: str) -> Optional[str]:
        return self.categories.get(category_id)
