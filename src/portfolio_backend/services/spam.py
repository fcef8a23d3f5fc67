# src/portfolio_backend/services/spam.py
"""Keyword and link-count spam heuristics for contact submissions."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Final

SPAM_KEYWORDS: Final[tuple[str, ...]] = ("viagra", "casino", "lottery", "crypto", "bitcoin")
MAX_LINKS: Final[int] = 2

_URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"https?://\S+")


def count_links(text: str) -> int:
    """Return the number of URL-like substrings in ``text``."""
    return len(_URL_PATTERN.findall(text))


def is_spam(
    message: str | None,
    email: str | None,
    keywords: Iterable[str] = SPAM_KEYWORDS,
) -> bool:
    """Return True if the submission looks like spam.

    A submission is spam when the message or email contains a denylisted
    keyword (case-insensitive), or when the message carries more than
    ``MAX_LINKS`` links. False positives are acceptable.
    """
    lower_message = (message or "").lower()
    lower_email = (email or "").lower()

    for keyword in keywords:
        keyword = keyword.lower()
        if keyword in lower_message or keyword in lower_email:
            return True

    return count_links(message or "") > MAX_LINKS
