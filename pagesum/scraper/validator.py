"""Absolute-URL validation performed before any browser is launched."""

from __future__ import annotations

from pydantic import AnyUrl, TypeAdapter, ValidationError

from pagesum.errors import InvalidUrlError

_URL_ADAPTER = TypeAdapter(AnyUrl)


def validate_url(raw: str) -> str:
    """Return the normalised form of *raw* if it is an absolute URL.

    An absolute URL needs both a scheme and a host; nothing touches the
    network here.

    Raises:
        InvalidUrlError: If *raw* does not parse or has no host.
    """
    try:
        url = _URL_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise InvalidUrlError(f"not an absolute URL: {raw!r}") from exc

    if not url.scheme or not url.host:
        raise InvalidUrlError(f"URL has no host: {raw!r}")
    return str(url)


def is_valid_url(raw: str) -> bool:
    """Return ``True`` if :func:`validate_url` would accept *raw*."""
    try:
        validate_url(raw)
    except InvalidUrlError:
        return False
    return True
