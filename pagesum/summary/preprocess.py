"""Token bounding applied to extracted text before it enters a prompt.

A *token* here is a run of non-whitespace characters, where whitespace means
the ASCII set only (space, tab, LF, FF, CR).  Unicode spaces such as U+00A0
stay inside tokens.
"""

from __future__ import annotations

import re

_ASCII_WHITESPACE = re.compile(r"[ \t\n\x0c\r]+")

DEFAULT_MAX_TOKENS = 3000


def _tokens(text: str) -> list[str]:
    return [tok for tok in _ASCII_WHITESPACE.split(text) if tok]


def count_tokens(text: str) -> int:
    """Return the number of ASCII-whitespace-delimited tokens in *text*."""
    return len(_tokens(text))


def bound_text(text: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
    """Keep the first *max_tokens* tokens of *text*, joined by single spaces.

    Args:
        text: Raw extracted text.
        max_tokens: Upper bound on the number of tokens kept.

    Returns:
        The bounded string.  Blank input yields ``""``.
    """
    return " ".join(_tokens(text)[: max(0, max_tokens)])
