"""
Encoder / Decoder
=================

encode(): per word, repeatedly merge the adjacent pair with the lowest rank
(earliest learned) until no pair in the word has a rank, then map symbols to
ids. Symbols the vocabulary has never seen become <unk>.

decode(): ids back to symbols, end-of-word markers back to spaces.

Both take the Vocabulary explicitly and keep all state local, so any number
of calls may share one vocabulary concurrently.
"""

import operator
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence

from .errors import UnknownTokenIdError
from .pretokenize import END_OF_WORD, WORD_SEPARATOR, split_words, word_to_symbols
from .vocab import Vocabulary

UNK_PLACEHOLDER = "\ufffd"  # U+FFFD REPLACEMENT CHARACTER


def _merge_pair(symbols: List[str], a: str, b: str) -> List[str]:
    """Replace all non-overlapping occurrences of (a, b) by a+b."""
    out: List[str] = []
    i = 0
    while i < len(symbols):
        if i < len(symbols) - 1 and symbols[i] == a and symbols[i + 1] == b:
            out.append(a + b)
            i += 2
        else:
            out.append(symbols[i])
            i += 1
    return out


def encode_word(vocabulary: Vocabulary, word: str) -> List[str]:
    """Greedy BPE on a single word: lowest-rank pair first until nothing applies."""
    symbols = word_to_symbols(word)
    ranks = vocabulary.ranks
    if not ranks:
        return symbols
    while len(symbols) >= 2:
        best_pair = None
        best_rank = None
        for pair in zip(symbols, symbols[1:]):
            r = ranks.get(pair)
            if r is not None and (best_rank is None or r < best_rank):
                best_pair = pair
                best_rank = r
        if best_pair is None:
            break
        symbols = _merge_pair(symbols, *best_pair)
    return symbols


def encode(vocabulary: Vocabulary, text: str, add_special_tokens: bool = True,
           max_len: Optional[int] = None) -> List[int]:
    """
    Convert text to token ids. Never raises on input text.

    Example: encode(vocab, "", True) -> [bos_id, eos_id]
    """
    unk = vocabulary.unk_id
    ids: List[int] = []
    for word in split_words(text):
        for sym in encode_word(vocabulary, word):
            tid = vocabulary.token_to_id(sym)
            ids.append(unk if tid is None else tid)
    if add_special_tokens:
        ids = [vocabulary.bos_id] + ids + [vocabulary.eos_id]
    if max_len is not None:
        ids = ids[:max_len]
    return ids


def encode_batch(vocabulary: Vocabulary, texts: Sequence[str], add_special_tokens: bool = True,
                 num_workers: Optional[int] = None) -> List[List[int]]:
    """Encode independent texts on a thread pool; results keep the input order."""
    if num_workers == 1 or len(texts) <= 1:
        return [encode(vocabulary, t, add_special_tokens) for t in texts]
    with ThreadPoolExecutor(max_workers=num_workers) as pool:
        return list(pool.map(lambda t: encode(vocabulary, t, add_special_tokens), texts))


def _check_id(vocabulary: Vocabulary, token_id) -> int:
    try:
        index = operator.index(token_id)  # accepts numpy/torch integer scalars
    except TypeError:
        raise UnknownTokenIdError(token_id, len(vocabulary)) from None
    if not 0 <= index < len(vocabulary):
        raise UnknownTokenIdError(token_id, len(vocabulary))
    return index


def decode(vocabulary: Vocabulary, ids: Iterable[int]) -> str:
    """
    Convert token ids back to text. pad/bos/eos produce nothing, <unk> produces
    UNK_PLACEHOLDER. Raises UnknownTokenIdError for ids outside the vocabulary.
    """
    skip = {vocabulary.pad_id, vocabulary.bos_id, vocabulary.eos_id}
    words: List[str] = []
    cur: List[str] = []
    for token_id in ids:
        token_id = _check_id(vocabulary, token_id)
        if token_id in skip:
            continue
        if token_id == vocabulary.unk_id:
            cur.append(UNK_PLACEHOLDER)
            continue
        sym = vocabulary.id_to_token(token_id)
        if sym.endswith(END_OF_WORD):
            cur.append(sym[:-len(END_OF_WORD)])
            words.append("".join(cur))
            cur = []
        else:
            cur.append(sym)
    if cur:
        words.append("".join(cur))
    return WORD_SEPARATOR.join(words)


def decode_batch(vocabulary: Vocabulary, batch: Iterable[Iterable[int]]) -> List[str]:
    return [decode(vocabulary, ids) for ids in batch]
