"""Option resolution against a declarative table of typed defaults."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from .version import EMOJI_VERSIONS, LATEST_EMOJI_VERSION

logger = logging.getLogger(__name__)


def _to_number(value: Any):
    """Coerce a numeric string to int when integral, else float; None when not numeric."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class RawProp:
    """Default with no coercion; only a missing value falls back."""
    value: Any = None

    def coerce(self, value: Any) -> Any:
        return value

    def accepts(self, value: Any) -> bool:
        return True


@dataclass(frozen=True)
class BoolProp(RawProp):
    value: bool = False

    def coerce(self, value: Any) -> Any:
        if isinstance(value, bool):
            return value
        # Attributes arrive as strings; only the literal "false" turns a flag off
        return value != 'false'


@dataclass(frozen=True)
class NumberProp(RawProp):
    value: Any = 0

    def coerce(self, value: Any) -> Any:
        return _to_number(value)


@dataclass(frozen=True)
class EnumProp(RawProp):
    choices: Tuple[Any, ...] = ()

    def coerce(self, value: Any) -> Any:
        if isinstance(self.value, bool):
            return BoolProp.coerce(self, value)
        if isinstance(self.value, (int, float)):
            return _to_number(value)
        if isinstance(self.value, str) and not isinstance(value, str):
            return str(value)
        return value

    def accepts(self, value: Any) -> bool:
        return value in self.choices


PICKER_PROPS: Dict[str, RawProp] = {
    'emoji_version': EnumProp(value=LATEST_EMOJI_VERSION, choices=EMOJI_VERSIONS),
    'set': EnumProp(value='native', choices=('native', 'apple', 'facebook', 'google', 'twitter')),
    'locale': EnumProp(value='en', choices=(
        'en', 'ar', 'be', 'cs', 'de', 'es', 'fa', 'fi', 'fr', 'hi', 'it',
        'ja', 'ko', 'nl', 'pl', 'pt', 'ru', 'sa', 'tr', 'uk', 'vi', 'zh',
    )),
    'skin': EnumProp(value=1, choices=(1, 2, 3, 4, 5, 6)),
    'max_frequent_rows': NumberProp(value=4),
    'per_line': NumberProp(value=9),
    'no_country_flags': BoolProp(value=False),
}


def get_prop(name: str, props: Optional[Mapping[str, Any]], defaults: Mapping[str, RawProp],
             element: Optional[Mapping[str, str]] = None) -> Any:
    """
    Resolve one option from supplied props, a host element and the defaults table.

    A non-empty attribute on the host element wins over `props`. Options
    without a table entry are returned as given. Otherwise the raw value is
    coerced to the default's type, and a missing or out-of-choices result
    falls back to the declared default.

    Args:
        name: Option name
        props: Options supplied by the caller
        defaults: Table of typed defaults, e.g. PICKER_PROPS
        element: Attributes of the host element, if any

    Returns:
        Resolved option value
    """
    props = props or {}
    descriptor = defaults.get(name)

    value = element.get(name) if element else None
    if not value:
        value = props.get(name)

    if descriptor is None:
        return value

    if value is not None:
        value = descriptor.coerce(value)

    if value is None or not descriptor.accepts(value):
        if value is not None:
            logger.debug(f"Option '{name}' value {value!r} not allowed, using default {descriptor.value!r}")
        value = descriptor.value

    return value


def get_props(props: Optional[Mapping[str, Any]], defaults: Mapping[str, RawProp],
              element: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Resolve every option named in the defaults table."""
    return {name: get_prop(name, props, defaults, element) for name in defaults}
