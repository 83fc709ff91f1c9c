import logging
import re
from typing import Any, Mapping, Optional

from .config import OptionsLike, as_options_mapping, resolve_key
from .cookies import parse_cookie

logger = logging.getLogger(__name__)


_BEARER_RE = re.compile("bearer", re.IGNORECASE)


class ExtractError(Exception):
    """Base class for token extraction errors."""


class MissingTokenError(ExtractError, LookupError):
    """Raised when a request carries no usable token."""


def _request_part(request: Any, name: str) -> Optional[Mapping[str, Any]]:
    if request is None:
        return None
    # Attributes win: aiohttp and starlette requests are also mappings.
    if hasattr(request, name):
        return getattr(request, name)
    if isinstance(request, Mapping):
        return request.get(name)
    return None


def _get_header(headers: Mapping[str, Any], name: str) -> Optional[Any]:
    """Get a header value, falling back to a case-insensitive scan."""

    value = headers.get(name)
    if value is not None:
        return value

    target = name.lower()
    for k, v in headers.items():
        if str(k).lower() == target:
            return v
    return None


def _get_query_value(query: Mapping[str, Any], name: str) -> Optional[Any]:
    value = query.get(name)
    # parse_qs style: {"token": ["abc"]}
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _match_token_type(value: str, token_type: str) -> Optional[str]:
    pattern = re.compile(re.escape(token_type) + r"\s+([^$]+)", re.IGNORECASE)
    match = pattern.search(value)
    if match is None:
        return None
    return match.group(1)


def normalize_token(candidate: Optional[str]) -> Optional[str]:
    """Strip every ``Bearer`` (any case) and every space from a candidate.

    Returns None for a missing or empty candidate.
    """

    if not candidate:
        return None
    return _BEARER_RE.sub("", str(candidate)).replace(" ", "")


def extract_token(request: Any, options: OptionsLike = None) -> Optional[str]:
    """Extract a token from a request's query string, headers or cookies.

    Sources are tried in order (query parameter, header, cookie) and the
    first one that is enabled and present on the request decides the
    result. With ``tokenType`` set, a header that does not carry that
    scheme yields None without looking at cookies.

    Args:
        request: A mapping or object exposing ``query`` and ``headers``.
        options: Mapping with ``urlKey``/``headerKey``/``cookieKey``
            (name or False) and ``tokenType``, or an ``ExtractOptions``.

    Returns:
        The normalized token, or None if no token was found.
    """

    opts = as_options_mapping(options)
    url_key = resolve_key(opts, "urlKey", "token")
    header_key = resolve_key(opts, "headerKey", "authorization")
    cookie_key = resolve_key(opts, "cookieKey", "token")

    query = _request_part(request, "query") if url_key else None
    query_value = _get_query_value(query, url_key) if query else None
    if query_value:
        logger.debug("Token taken from query parameter %r", url_key)
        return normalize_token(query_value)

    headers = _request_part(request, "headers")
    if not headers:
        logger.debug("No token source present on request")
        return None

    header_value = _get_header(headers, header_key) if header_key else None
    if header_value:
        token_type = opts.get("tokenType")
        if not isinstance(token_type, str):
            logger.debug("Token taken from header %r", header_key)
            return normalize_token(header_value)
        candidate = _match_token_type(str(header_value), token_type)
        if candidate is None:
            logger.debug("Header %r does not use token type %r", header_key, token_type)
        return normalize_token(candidate)

    cookie_header = _get_header(headers, "cookie") if cookie_key else None
    if cookie_header:
        candidate = parse_cookie(cookie_header).get(cookie_key)
        logger.debug("Token looked up in cookie %r (found=%s)", cookie_key, bool(candidate))
        return normalize_token(candidate)

    logger.debug("No token source present on request")
    return None


def require_token(request: Any, options: OptionsLike = None) -> str:
    """Like ``extract_token`` but raise ``MissingTokenError`` when no token is found."""

    token = extract_token(request, options)
    if not token:
        raise MissingTokenError("Missing or invalid authentication token")
    return token
