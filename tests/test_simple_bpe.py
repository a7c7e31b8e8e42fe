import pytest

from subword.simple_bpe import SimpleBPE
from subword.pretokenize import normalize

from conftest import SAMPLE_TEXT


def test_train_encode_decode():
    tok = SimpleBPE().train(SAMPLE_TEXT, vocab_size=80, min_freq=2)
    ids = tok.encode("the lazy dog")
    assert ids[0] == tok.vocab["<bos>"] and ids[-1] == tok.vocab["<eos>"]
    assert tok.is_eos_token(ids[-1])
    assert tok.decode(ids) == "the lazy dog"
    assert tok.vocab_size == len(tok.vocab) <= 80
    assert all(isinstance(a, str) and isinstance(b, str) for a, b in tok.merges)


def test_save_load(tmp_path):
    tok = SimpleBPE().train(SAMPLE_TEXT, vocab_size=70, min_freq=1)
    path = tmp_path / "tok.json"
    tok.save(str(path))
    loaded = SimpleBPE.load(str(path))
    assert loaded.vocab == tok.vocab
    assert loaded.encode(SAMPLE_TEXT, add_special_bos_eos=False) == tok.encode(SAMPLE_TEXT, add_special_bos_eos=False)
    assert loaded.decode(loaded.encode(SAMPLE_TEXT)) == normalize(SAMPLE_TEXT)


def test_untrained_raises():
    with pytest.raises(RuntimeError):
        SimpleBPE().encode("hi")
