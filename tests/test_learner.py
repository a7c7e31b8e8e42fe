import pytest

from subword.errors import EmptyCorpusError, VocabSizeTooSmallError
from subword.learner import MergeRule, base_alphabet, learn_merges
from subword.pairs import WordEntry
from subword.pretokenize import word_to_symbols

from conftest import BASE_ALPHABET


def _entries(words):
    return [WordEntry(word_to_symbols(w), f) for w, f in words.items()]


def test_base_alphabet_first_seen_order(words):
    assert base_alphabet(_entries(words)) == BASE_ALPHABET


def test_first_merges(words):
    alphabet, merges = learn_merges(_entries(words), 4 + len(BASE_ALPHABET) + 3)
    assert alphabet == BASE_ALPHABET
    assert merges == [
        MergeRule("e", "s", 0),
        MergeRule("es", "t</w>", 1),
        MergeRule("l", "o", 2),
    ]


def test_entries_rewritten_in_place(words):
    entries = _entries(words)
    learn_merges(entries, 4 + len(BASE_ALPHABET) + 3)
    assert entries[0].symbols == ["lo", "w</w>"]
    assert entries[2].symbols == ["n", "e", "w", "est</w>"]
    assert [e.frequency for e in entries] == [5, 2, 6, 3]


def test_stops_at_min_pair_frequency(words):
    _, merges = learn_merges(_entries(words), 1000, min_pair_frequency=8)
    assert [m.pair for m in merges] == [("e", "s"), ("es", "t</w>")]


def test_stops_when_no_pairs_left():
    alphabet, merges = learn_merges([WordEntry(["a", "b</w>"], 3)], 100)
    assert merges == [MergeRule("a", "b</w>", 0)]
    assert alphabet == ["a", "b</w>"]


def test_exact_floor_learns_nothing(words):
    _, merges = learn_merges(_entries(words), 4 + len(BASE_ALPHABET))
    assert merges == []


def test_empty_corpus():
    with pytest.raises(EmptyCorpusError):
        learn_merges([], 100)
    with pytest.raises(EmptyCorpusError):
        learn_merges([WordEntry(["a</w>"], 0)], 100)


def test_vocab_size_too_small(words):
    with pytest.raises(VocabSizeTooSmallError) as exc:
        learn_merges(_entries(words), 10)
    assert exc.value.floor == 4 + len(BASE_ALPHABET)


def test_parallel_counting_gives_same_merges():
    words = {f"{w}{s}": (i % 5) + 1 for i, (w, s) in enumerate(
        (w, s) for w in ("low", "new", "wid", "slow", "fast") for s in ("", "er", "est", "ly", "ing"))}
    _, serial = learn_merges(_entries(words), 60)
    _, parallel = learn_merges(_entries(words), 60, num_workers=4)
    assert serial == parallel


def test_merge_rule_properties():
    rule = MergeRule("es", "t</w>", 1)
    assert rule.pair == ("es", "t</w>")
    assert rule.merged == "est</w>"
