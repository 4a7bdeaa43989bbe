"""Place-name normalisation used as the join key between CSV rows and boundaries."""

from __future__ import annotations

import re
import unicodedata

_NON_KEY_RE = re.compile(r"[^a-z0-9]")


def normalize_key(text: object) -> str:
    """Return the canonical ASCII key for a place name.

    Accents are decomposed (NFD) and dropped together with every character
    outside ``a-z0-9``; no separator is inserted. ``"São Paulo"`` and
    ``"sao-paulo"`` both become ``"saopaulo"``.
    """
    if text is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(text).strip()).lower()
    return _NON_KEY_RE.sub("", decomposed)
