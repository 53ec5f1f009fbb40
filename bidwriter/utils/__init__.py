"""
Utility modules for BidWriter.
"""

from bidwriter.utils.numbers import (
    coerce_number,
    number_or_default,
    parse_number,
    round_currency,
    sum_currency,
)
from bidwriter.utils.text import count_terms, count_whole_word, count_words, estimate_pages

__all__ = [
    "coerce_number",
    "count_terms",
    "count_whole_word",
    "count_words",
    "estimate_pages",
    "number_or_default",
    "parse_number",
    "round_currency",
    "sum_currency",
]
