"""
Text metrics used by the compliance checker.
"""

import math
import re
from typing import Iterable, Optional

# Academic text averages roughly this many words per page
WORDS_PER_PAGE = 300


def count_words(text: Optional[str]) -> int:
    """Count whitespace-separated words."""
    if not text:
        return 0
    return len(text.split())


def estimate_pages(text: Optional[str]) -> int:
    """Estimate page count from word count."""
    return math.ceil(count_words(text) / WORDS_PER_PAGE)


def count_whole_word(text: Optional[str], word: str, ignore_case: bool = False) -> int:
    """Count whole-word occurrences of ``word``."""
    if not text:
        return 0
    # ASCII word boundaries, so accented letters count as boundaries
    flags = re.ASCII | (re.IGNORECASE if ignore_case else 0)
    return len(re.findall(rf"\b{re.escape(word)}\b", text, flags))


def count_terms(text: Optional[str], terms: Iterable[str]) -> int:
    """Combined case-insensitive whole-word count of several terms."""
    return sum(count_whole_word(text, term, ignore_case=True) for term in terms)
