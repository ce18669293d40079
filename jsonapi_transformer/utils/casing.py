"""Property and type name transforms."""

from __future__ import annotations

import re

_WORD_START = re.compile(r"(.)([A-Z][a-z]+)")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_NAMESPACE_SEPARATORS = re.compile(r"[\\.]")


def camel_to_underscore(name: str) -> str:
    """Convert ``camelCase`` to ``snake_case``; acronyms stay one word (``HTMLPage`` -> ``html_page``)."""
    return _LOWER_UPPER.sub(r"\1_\2", _WORD_START.sub(r"\1_\2", name)).lower()


def namespace_as_key(type_name: str) -> str:
    """Reduce a namespaced type name to a flat JSON object key.

    ``Acme\\Blog\\BlogPost`` and ``acme.blog.BlogPost`` both become
    ``blog_post``. Names without separators are only re-cased.
    """
    return camel_to_underscore(_NAMESPACE_SEPARATORS.split(type_name)[-1])
