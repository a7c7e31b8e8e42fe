"""
Pre-tokenizer
=============

Splits raw text into word-like units and each unit into its initial symbols.

    "Hello, world!" -> ["Hello", ",", "world", "!"]
    "low"           -> ["l", "o", "w</w>"]

The end-of-word marker rides on the last symbol of every word so that no
merge can ever join two words.
"""

from collections import Counter
from typing import Dict, List

import regex as re

END_OF_WORD = "</w>"     # sentinel so merges don't cross words
WORD_SEPARATOR = " "     # what decode() puts back between words

# letters/marks/digits (plus connector punctuation) | punctuation & symbol runs | anything else
WORD_PATTERN = r"[\p{L}\p{M}\p{N}\p{Pc}]+|[\p{P}\p{S}]+|\S"
_compiled_pattern = re.compile(WORD_PATTERN)


def split_words(text: str) -> List[str]:
    return _compiled_pattern.findall(text)


def word_to_symbols(word: str) -> List[str]:
    symbols = list(word)
    if symbols:
        symbols[-1] += END_OF_WORD
    return symbols


def pretokenize(text: str) -> List[List[str]]:
    """Words of `text`, each as a list of single-codepoint symbols."""
    return [word_to_symbols(w) for w in split_words(text)]


def count_words(text: str) -> Dict[str, int]:
    """Word -> occurrence count, keys in first-seen order."""
    return dict(Counter(split_words(text)))


def normalize(text: str) -> str:
    """Canonical form of `text` that decode(encode(text)) reproduces."""
    return WORD_SEPARATOR.join(split_words(text))


def strip_end_of_word(symbol: str) -> str:
    if symbol.endswith(END_OF_WORD):
        return symbol[: -len(END_OF_WORD)]
    return symbol
