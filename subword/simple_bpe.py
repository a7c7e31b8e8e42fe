import logging
from typing import Dict, List, Optional

from .codec import decode, encode
from .vocab import Vocabulary, build_vocabulary_from_text

logger = logging.getLogger(__name__)


class SimpleBPE:
    """Object wrapper around build_vocabulary / encode / decode holding one Vocabulary."""

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        self.vocabulary = vocabulary

    def _require(self) -> Vocabulary:
        if self.vocabulary is None:
            raise RuntimeError("tokenizer is not trained; call train() or load() first")
        return self.vocabulary

    @property
    def vocab(self) -> Dict[str, int]:
        v = self._require()
        return {tok: i for i, tok in enumerate(v.tokens)}

    @property
    def merges(self):
        return [m.pair for m in self._require().merges]

    @property
    def vocab_size(self) -> int:
        return len(self._require())

    def train(self, text, vocab_size=1000, min_freq=2, num_workers=1, show_progress=False):
        self.vocabulary = build_vocabulary_from_text(text, vocab_size, min_freq,
                                                     num_workers=num_workers,
                                                     show_progress=show_progress)
        return self

    def encode(self, text, add_special_bos_eos=True, max_len=None) -> List[int]:
        return encode(self._require(), text, add_special_tokens=add_special_bos_eos, max_len=max_len)

    def decode(self, ids) -> str:
        return decode(self._require(), ids)

    def is_eos_token(self, token_id) -> bool:
        return self._require().is_eos_token(token_id)

    def save(self, path):
        self._require().save(path)
        logger.info("Saved tokenizer to %s", path)

    @classmethod
    def load(cls, path):
        return cls(Vocabulary.load(path))
