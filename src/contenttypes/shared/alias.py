"""
Alias helpers.

Type aliases double as XML element names in the legacy export DTD, so they must be
reduced to tokens an XML parser accepts.
"""

from __future__ import annotations

import re

# Characters allowed anywhere in a safe alias; "-" and "_" are folded away below
_ALLOWED = re.compile(r"[A-Za-z0-9_.\-]+")
_SEPARATORS = re.compile(r"[-_]+")


def to_safe_alias(alias: str | None) -> str | None:
    """Convert an alias to a camel-case token usable as an XML element name.

    ``-`` and ``_`` are treated as word separators (``news-item`` -> ``newsItem``) and
    the first character is lower-cased. Returns None when the alias has no safe
    form: empty, containing whitespace or other punctuation, starting with a digit
    or ``.``, or starting with the reserved ``xml`` prefix.
    """
    if alias is None:
        return None
    candidate = alias.strip()
    if not candidate or not _ALLOWED.fullmatch(candidate):
        return None

    words = [w for w in _SEPARATORS.split(candidate) if w]
    if not words:
        return None
    token = words[0][0].lower() + words[0][1:] + "".join(w[0].upper() + w[1:] for w in words[1:])

    if token[0].isdigit() or token[0] == "." or token.lower().startswith("xml"):
        return None
    return token
