import enum
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union


KeySetting = Union[str, bool, None]

_FIELD_NAMES = {
    "cookieKey": "cookie_key",
    "headerKey": "header_key",
    "urlKey": "url_key",
    "tokenType": "token_type",
}

_DISABLED_VALUES = {"false", "off", "no"}


class KeyChoice(enum.Enum):
    """How a key option resolves: switched off, custom name, or the default."""

    DISABLED = "disabled"
    CUSTOM = "custom"
    DEFAULT = "default"


@dataclass
class ExtractOptions:
    url_key: KeySetting = None
    header_key: KeySetting = None
    cookie_key: KeySetting = None
    token_type: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "ExtractOptions":
        """Build options from a camelCase (or snake_case) mapping.

        Unknown keys are ignored.
        """

        if not mapping:
            return cls()

        values: Dict[str, Any] = {}
        known = {f.name for f in fields(cls)}
        for key, value in mapping.items():
            name = _FIELD_NAMES.get(key, key)
            if name in known:
                values[name] = value
        return cls(**values)

    def as_mapping(self) -> Dict[str, Any]:
        """Return the camelCase mapping form, leaving out unset fields."""

        out: Dict[str, Any] = {}
        for key, name in _FIELD_NAMES.items():
            value = getattr(self, name)
            if value is not None:
                out[key] = value
        return out

    def load_from_env(self, prefix: str = "JWT_EXTRACT_") -> None:
        """Load configuration overrides from environment variables.

        Supported variables (with default prefix JWT_EXTRACT_):
            - JWT_EXTRACT_URL_KEY
            - JWT_EXTRACT_HEADER_KEY
            - JWT_EXTRACT_COOKIE_KEY
            - JWT_EXTRACT_TOKEN_TYPE

        For the key variables, ``false``/``off``/``no`` disable the source.
        """

        for attr in ("url_key", "header_key", "cookie_key"):
            raw = os.getenv(f"{prefix}{attr.upper()}")
            if not raw:
                continue
            raw = raw.strip()
            if raw.lower() in _DISABLED_VALUES:
                setattr(self, attr, False)
            elif raw:
                setattr(self, attr, raw)

        token_type = os.getenv(f"{prefix}TOKEN_TYPE")
        if token_type and token_type.strip():
            self.token_type = token_type.strip()


OptionsLike = Union[ExtractOptions, Mapping[str, Any], None]


def as_options_mapping(options: OptionsLike) -> Mapping[str, Any]:
    if options is None:
        return {}
    if isinstance(options, ExtractOptions):
        return options.as_mapping()
    return options


def classify_key(options: OptionsLike, field: str) -> KeyChoice:
    value = as_options_mapping(options).get(field)
    if value is False:
        return KeyChoice.DISABLED
    if isinstance(value, str):
        return KeyChoice.CUSTOM
    return KeyChoice.DEFAULT


def resolve_key(options: OptionsLike, field: str, default: str) -> Union[str, bool]:
    """Return the key name to look up for ``field``, or ``False`` if disabled.

    A string option is used as-is, ``False`` switches the source off, and
    anything else falls back to ``default``.
    """

    choice = classify_key(options, field)
    if choice is KeyChoice.DISABLED:
        return False
    if choice is KeyChoice.CUSTOM:
        return as_options_mapping(options)[field]
    return default


extract_options = ExtractOptions()
