from importlib import import_module

from .config import ExtractOptions, extract_options

__all__ = [
    "ExtractOptions",
    "extract_options",
    "KeyChoice",
    "classify_key",
    "resolve_key",
    "parse_cookie",
    "extract_token",
    "normalize_token",
    "require_token",
    "ExtractError",
    "MissingTokenError",
    "config",
    "cookies",
    "http",
]

_SUBMODULES = ("config", "cookies", "http")


def __getattr__(name: str):
    if name in _SUBMODULES:
        return import_module(f"{__name__}.{name}")

    # Resolve top-level exports lazily by searching known submodules.
    for module_name in _SUBMODULES:
        module = import_module(f"{__name__}.{module_name}")
        try:
            return getattr(module, name)
        except AttributeError:
            continue

    raise AttributeError(name)


def __dir__():
    return sorted(set(globals().keys()) | set(__all__))
