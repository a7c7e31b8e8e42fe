"""
Vocabulary
==========

Immutable symbol <-> id mapping produced by the merge learner.

Id layout:
1. special tokens, fixed order (pad=0, unk=1, bos=2, eos=3)
2. base alphabet symbols in first-seen order
3. merged symbols in rank order

Saved as JSON; the position of a merge in "merges" is its rank.
"""

import json
import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .config import BPEConfig, SpecialTokens
from .errors import InvalidVocabularyError
from .learner import MergeRule, learn_merges
from .pairs import WordEntry
from .pretokenize import count_words, split_words, word_to_symbols

logger = logging.getLogger(__name__)

FORMAT_VERSION = "bpe.v1"
SPECIAL_NAMES = ("pad", "unk", "bos", "eos")


class Vocabulary:
    """Read-only after construction; safe to share across threads."""

    def __init__(self,
                 tokens: Sequence[str],
                 merges: Sequence[MergeRule],
                 special_tokens: SpecialTokens = SpecialTokens(),
                 num_base: Optional[int] = None):
        tokens = tuple(tokens)
        specials = special_tokens.as_list()
        if list(tokens[:len(specials)]) != specials:
            raise InvalidVocabularyError(f"ids 0..{len(specials) - 1} must be {specials}")
        token_to_id: Dict[str, int] = {}
        for i, tok in enumerate(tokens):
            if tok in token_to_id:
                raise InvalidVocabularyError(f"duplicate symbol {tok!r} at id {i}")
            token_to_id[tok] = i

        self.special_tokens = special_tokens
        self._tokens = tokens
        self._token_to_id = MappingProxyType(token_to_id)
        self._merges = tuple(merges)
        self._ranks = MappingProxyType({m.pair: m.rank for m in self._merges})
        max_base = len(tokens) - len(specials)
        if num_base is None:
            num_base = max_base
        elif isinstance(num_base, bool) or not isinstance(num_base, int) or not 0 <= num_base <= max_base:
            raise InvalidVocabularyError(f"num_base must be an int in [0, {max_base}], got {num_base!r}")
        self._num_base = num_base

        self.pad_id, self.unk_id, self.bos_id, self.eos_id = range(len(specials))

    @classmethod
    def build(cls, alphabet: Sequence[str], merges: Sequence[MergeRule],
              special_tokens: SpecialTokens = SpecialTokens()) -> "Vocabulary":
        tokens: List[str] = list(special_tokens.as_list())
        seen = set(tokens)
        for sym in alphabet:
            if sym not in seen:
                seen.add(sym)
                tokens.append(sym)
        num_base = len(tokens) - len(special_tokens)
        for rule in merges:
            # ("ab","c") and ("a","bc") both spell "abc"; keep the first id
            if rule.merged not in seen:
                seen.add(rule.merged)
                tokens.append(rule.merged)
        return cls(tokens, merges, special_tokens, num_base=num_base)

    # ------------- lookups -------------

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, symbol) -> bool:
        return symbol in self._token_to_id

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vocabulary):
            return NotImplemented
        return (self._tokens == other._tokens and self._merges == other._merges
                and self.special_tokens == other.special_tokens)

    def __hash__(self) -> int:
        return hash((self._tokens, self._merges, self.special_tokens))

    def __repr__(self) -> str:
        return f"Vocabulary(size={len(self)}, merges={len(self._merges)})"

    @property
    def vocab_size(self) -> int:
        return len(self._tokens)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return self._tokens

    @property
    def merges(self) -> Tuple[MergeRule, ...]:
        return self._merges

    @property
    def ranks(self) -> Mapping[Tuple[str, str], int]:
        return self._ranks

    @property
    def base_alphabet(self) -> Tuple[str, ...]:
        start = len(self.special_tokens)
        return self._tokens[start:start + self._num_base]

    def token_to_id(self, symbol: str) -> Optional[int]:
        return self._token_to_id.get(symbol)

    def id_to_token(self, token_id: int) -> str:
        return self._tokens[token_id]

    def is_special(self, token_id: int) -> bool:
        return 0 <= token_id < len(self.special_tokens)

    def is_eos_token(self, token_id: int) -> bool:
        return token_id == self.eos_id

    # ------------- save / load -------------

    def to_dict(self) -> dict:
        return {
            "version": FORMAT_VERSION,
            "special_tokens": {name: i for i, name in enumerate(self.special_tokens.as_list())},
            "num_base": self._num_base,
            "vocab": [[tok, i] for i, tok in enumerate(self._tokens)],
            "merges": [[m.left, m.right] for m in self._merges],
        }

    @classmethod
    def from_dict(cls, obj: dict) -> "Vocabulary":
        try:
            version = obj["version"]
            if version != FORMAT_VERSION:
                raise InvalidVocabularyError(f"unsupported vocabulary version {version!r}")
            specials = sorted(obj["special_tokens"].items(), key=lambda kv: kv[1])
            if [i for _, i in specials] != list(range(len(SPECIAL_NAMES))):
                raise InvalidVocabularyError(f"special token ids must be 0..{len(SPECIAL_NAMES) - 1}")
            special_tokens = SpecialTokens(**dict(zip(SPECIAL_NAMES, (tok for tok, _ in specials))))

            entries = sorted(((str(tok), int(i)) for tok, i in obj["vocab"]), key=lambda kv: kv[1])
            if [i for _, i in entries] != list(range(len(entries))):
                raise InvalidVocabularyError("vocabulary ids must be dense and start at 0")
            merges = [MergeRule(str(a), str(b), rank) for rank, (a, b) in enumerate(obj["merges"])]
            num_base = obj.get("num_base")
        except InvalidVocabularyError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidVocabularyError(f"malformed vocabulary: {e}") from e

        vocab = cls([tok for tok, _ in entries], merges, special_tokens, num_base=num_base)
        missing = [m.merged for m in merges if m.merged not in vocab]
        if missing:
            raise InvalidVocabularyError(f"merged symbols missing from vocabulary: {missing[:5]}")
        return vocab

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def load(cls, path: str) -> "Vocabulary":
        with open(path, "r", encoding="utf-8") as f:
            try:
                obj = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidVocabularyError(f"{path} is not valid JSON: {e}") from e
        return cls.from_dict(obj)


WordFrequencies = Union[Mapping[str, int], Iterable[Tuple[str, int]]]


def _word_entries(word_frequencies: WordFrequencies) -> List[WordEntry]:
    items = word_frequencies.items() if isinstance(word_frequencies, Mapping) else word_frequencies
    totals: Dict[str, int] = {}
    for text, freq in items:
        # a key may hold punctuation or spaces; learn on the same units encode() sees
        for word in split_words(text):
            totals[word] = totals.get(word, 0) + int(freq)
    return [WordEntry(word_to_symbols(w), f) for w, f in totals.items()]


def build_vocabulary(word_frequencies: WordFrequencies,
                     target_vocab_size: int,
                     min_pair_frequency: int = 1,
                     *,
                     num_workers: int = 1,
                     show_progress: bool = False,
                     special_tokens: Optional[SpecialTokens] = None) -> Vocabulary:
    """
    Learn a BPE vocabulary from (word_text, frequency) pairs.

    Raises EmptyCorpusError, VocabSizeTooSmallError or InvalidConfigError.
    """
    special_tokens = special_tokens or SpecialTokens()
    BPEConfig(target_vocab_size=target_vocab_size,
              min_pair_frequency=min_pair_frequency,
              num_workers=num_workers).validate(len(special_tokens))

    entries = _word_entries(word_frequencies)
    alphabet, merges = learn_merges(entries, target_vocab_size,
                                    min_pair_frequency=min_pair_frequency,
                                    special_token_count=len(special_tokens),
                                    num_workers=num_workers,
                                    show_progress=show_progress)
    vocab = Vocabulary.build(alphabet, merges, special_tokens)
    logger.info("Built vocabulary: %d tokens, %d merges", len(vocab), len(merges))
    return vocab


def build_vocabulary_from_text(text: str, target_vocab_size: int, min_pair_frequency: int = 1,
                               **kwargs) -> Vocabulary:
    return build_vocabulary(count_words(text), target_vocab_size, min_pair_frequency, **kwargs)


def build_from_config(word_frequencies: WordFrequencies, config: BPEConfig) -> Vocabulary:
    return build_vocabulary(word_frequencies, config.target_vocab_size, config.min_pair_frequency,
                            num_workers=config.num_workers, show_progress=config.show_progress)
