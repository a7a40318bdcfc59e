"""Normalisation of content words into grid-ready letters."""

from __future__ import annotations

import re
import unicodedata

WORD_RE = re.compile(r"[^A-Z]")


def clean_word(text: str) -> str:
    """Return the uppercase ASCII letters of ``text``.

    Accents are folded (``"Dŏ"`` becomes ``"DO"``); spaces, hyphens and any
    other non-letters are dropped so multi-word terms such as ``"Ap Chagi"``
    become a single grid entry.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return WORD_RE.sub("", stripped.upper())


__all__ = ["clean_word"]
