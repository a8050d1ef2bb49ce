"""URL assembly for RestClient requests."""

from __future__ import annotations

import re
from typing import Mapping
from urllib.parse import quote, urlencode, urlsplit

from urllib3.exceptions import LocationParseError
from urllib3.util import parse_url

from .errors import InvalidUrlError

# RFC 3986 URI-reference characters, with percent escapes kept whole.
_URI_REFERENCE = re.compile(
    r"(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|%[0-9A-Fa-f]{2})*"
)


def validate_url(url: str) -> str:
    """Return ``url`` unchanged if it parses as a URI reference.

    Raises:
        InvalidUrlError: on illegal characters, malformed percent escapes,
            brackets outside the authority, or a bad port.
    """
    if _URI_REFERENCE.fullmatch(url) is None:
        raise InvalidUrlError(url, "illegal character or percent escape")
    try:
        parse_url(url)
        parts = urlsplit(url)
    except (LocationParseError, ValueError) as exc:
        raise InvalidUrlError(url, str(exc)) from exc
    outside_authority = parts.path + parts.query + parts.fragment
    if "[" in outside_authority or "]" in outside_authority:
        raise InvalidUrlError(url, "brackets are only allowed in the host")
    return url


def with_query(url: str, params: Mapping[str, str]) -> str:
    """Replace the query component of ``url`` with ``params``.

    An empty mapping removes the query. The fragment, if any, is kept.
    """
    head, hash_mark, fragment = url.partition("#")
    head = head.partition("?")[0]
    query = urlencode(list(params.items()), quote_via=quote)
    if query:
        head = f"{head}?{query}"
    return f"{head}{hash_mark}{fragment}"


def build_url(
    base_url: str,
    base_path: str,
    *,
    resource_id: str | None = None,
    suffix: str | None = None,
    params: Mapping[str, str] | None = None,
) -> str:
    """Assemble ``base_url/base_path[/resource_id][suffix][?params]``.

    The suffix is appended verbatim; callers supply their own separator.
    """
    url = f"{base_url}/{base_path}"
    if resource_id is not None:
        url += f"/{resource_id}"
    if suffix is not None:
        url += suffix
    validate_url(url)
    if params is not None:
        url = validate_url(with_query(url, params))
    return url
