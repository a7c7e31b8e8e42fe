"""Exceptions raised by the subword tokenizer."""


class TokenizerError(Exception):
    """Base class for every tokenizer failure."""


class EmptyCorpusError(TokenizerError):
    """build_vocabulary() got no usable word entries."""


class VocabSizeTooSmallError(TokenizerError):
    def __init__(self, target_vocab_size: int, floor: int):
        self.target_vocab_size = target_vocab_size
        self.floor = floor
        super().__init__(
            f"target_vocab_size={target_vocab_size} is below the floor of {floor} "
            "(special tokens + base alphabet)"
        )


class UnknownTokenIdError(TokenizerError, IndexError):
    def __init__(self, token_id, vocab_size: int):
        self.token_id = token_id
        self.vocab_size = vocab_size
        super().__init__(f"token id {token_id!r} is outside [0, {vocab_size})")


class InvalidConfigError(TokenizerError, ValueError):
    pass


class InvalidVocabularyError(TokenizerError, ValueError):
    """A serialized vocabulary could not be read back."""
