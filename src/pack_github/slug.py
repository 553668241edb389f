"""Turn user input into an ``owner/repo`` slug."""

import re

from .exceptions import InvalidArgumentError

GITHUB_URL_PATTERN = re.compile(r"^https?://(?:www\.)?github\.com/([^/]+/[^/]+)")


def resolve_slug(text: str | None) -> str:
    """Resolve a GitHub repository URL or slug to a slug.

    URLs pointing at github.com yield their ``owner/repo`` segment and any
    trailing path (``/releases``, ``/tree/main``...) is dropped. Anything
    else is taken as a slug verbatim; malformed slugs are only discovered
    when GitHub rejects them.

    Args:
        text: Raw user input

    Returns:
        Slug string

    Raises:
        InvalidArgumentError: If input is empty

    Example:
        >>> resolve_slug("https://www.github.com/foo/bar/releases")
        'foo/bar'
        >>> resolve_slug("foo/bar")
        'foo/bar'
    """
    if not text:
        raise InvalidArgumentError("You must specify a GitHub repository URL.")

    match = GITHUB_URL_PATTERN.match(text)
    if match:
        return match.group(1)
    return text


def is_valid_slug(slug: str) -> bool:
    """Check slug has two non-empty segments around a single ``/``."""
    owner, sep, name = slug.partition("/")
    return bool(sep and owner and name and "/" not in name)
