"""
Tokenizer Configuration
=======================

Knobs recognised by the vocabulary builder and the encoder, plus the fixed
special-token set shared by every vocabulary.
"""

from dataclasses import dataclass

from .errors import InvalidConfigError, VocabSizeTooSmallError


@dataclass(frozen=True)
class SpecialTokens:
    pad: str = "<pad>"
    unk: str = "<unk>"
    bos: str = "<bos>"
    eos: str = "<eos>"

    def as_list(self):
        # order fixes the ids: pad=0, unk=1, bos=2, eos=3
        return [self.pad, self.unk, self.bos, self.eos]

    def __len__(self):
        return 4


@dataclass
class BPEConfig:
    """
    Configuration for BPE vocabulary learning.

    - target_vocab_size counts special tokens, base alphabet and merges
    - merges whose pair frequency is below min_pair_frequency are not learned
    - num_workers > 1 shards pair counting across threads
    """

    target_vocab_size: int = 1000
    min_pair_frequency: int = 1
    add_special_tokens: bool = True
    num_workers: int = 1
    show_progress: bool = False

    def validate(self, special_token_count: int = 4) -> "BPEConfig":
        if not isinstance(self.target_vocab_size, int):
            raise InvalidConfigError(f"target_vocab_size must be an int, got {self.target_vocab_size!r}")
        if self.target_vocab_size <= special_token_count:
            # no room for even one base symbol
            raise VocabSizeTooSmallError(self.target_vocab_size, special_token_count + 1)
        if not isinstance(self.min_pair_frequency, int) or self.min_pair_frequency < 1:
            raise InvalidConfigError(f"min_pair_frequency must be >= 1, got {self.min_pair_frequency!r}")
        if not isinstance(self.num_workers, int) or self.num_workers < 1:
            raise InvalidConfigError(f"num_workers must be >= 1, got {self.num_workers!r}")
        return self
