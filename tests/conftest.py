import pytest

from subword.vocab import build_vocabulary

# classic BPE example corpus
WORDS = {"low": 5, "lower": 2, "newest": 6, "widest": 3}
BASE_ALPHABET = ["l", "o", "w</w>", "w", "e", "r</w>", "n", "s", "t</w>", "i", "d"]

SAMPLE_TEXT = (
    "the quick brown fox jumps over the lazy dog. "
    "the dog sleeps, the fox runs! quick quick brown dogs jump over lazy foxes."
)


@pytest.fixture
def words():
    return dict(WORDS)


@pytest.fixture
def small_vocab():
    # 4 specials + 11 base symbols + 3 merges
    return build_vocabulary(WORDS, 4 + len(BASE_ALPHABET) + 3, 1)


@pytest.fixture
def text_vocab():
    from subword.vocab import build_vocabulary_from_text
    return build_vocabulary_from_text(SAMPLE_TEXT, 80, 1)
