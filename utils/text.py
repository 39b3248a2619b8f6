"""
Text helpers shared by the memory map and the template substitution layer.

``split`` breaks action templates and utterance fragments into word-like
tokens so callers can scan them for entity names.
"""
from __future__ import annotations

import re

# Whitespace runs plus . , ! ? act as separators and are dropped.
TOKEN_DELIMITERS = re.compile(r"[\s.,!?]+")


def split(text: str) -> list[str]:
    """Split text into tokens. Empty tokens from adjacent delimiters are dropped."""
    if not text:
        return []
    return [token for token in TOKEN_DELIMITERS.split(text) if token]
