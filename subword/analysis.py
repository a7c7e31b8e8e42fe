"""
Vocabulary analysis helpers: how text breaks into tokens and what the learned
vocabulary looks like.
"""

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from .pretokenize import strip_end_of_word
from .vocab import Vocabulary

CATEGORIES = ("special", "letter", "number", "symbol", "subword", "mixed")


def token_breakdown(vocabulary: Vocabulary, ids: Sequence[int]) -> List[Tuple[int, str]]:
    return [(i, vocabulary.id_to_token(i)) for i in ids]


def compression_ratio(text: str, ids: Sequence[int]) -> float:
    """Characters per token; 0.0 when there are no tokens."""
    if not ids:
        return 0.0
    return len(text) / len(ids)


def length_distribution(vocabulary: Vocabulary) -> Dict[int, int]:
    """Token length in codepoints (end-of-word marker not counted) -> number of tokens."""
    counts = Counter()
    for i, tok in enumerate(vocabulary.tokens):
        if vocabulary.is_special(i):
            continue
        counts[len(strip_end_of_word(tok))] += 1
    return dict(sorted(counts.items()))


def categorize(token: str) -> str:
    text = strip_end_of_word(token)
    if len(text) == 1:
        if text.isalpha():
            return "letter"
        if text.isnumeric():
            return "number"
        return "symbol"
    if text.isalpha():
        return "subword"
    return "mixed"


def token_categories(vocabulary: Vocabulary) -> Counter:
    counts = Counter()
    for i, tok in enumerate(vocabulary.tokens):
        counts["special" if vocabulary.is_special(i) else categorize(tok)] += 1
    return counts
