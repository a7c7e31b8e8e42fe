import json

from subword import inspect_bpe, train_bpe
from subword.vocab import Vocabulary

from conftest import SAMPLE_TEXT


def test_train_then_inspect(tmp_path, capsys):
    corpus = tmp_path / "corpus.txt"
    corpus.write_text(SAMPLE_TEXT, encoding="utf-8")
    out = tmp_path / "data" / "tokenizer.json"

    vocab = train_bpe.main(["--text", str(corpus), "--size", "70", "--min-freq", "2",
                            "--workers", "2", "--out", str(out)])
    assert out.exists()
    assert json.loads(out.read_text(encoding="utf-8"))["version"] == "bpe.v1"
    assert Vocabulary.load(str(out)) == vocab
    assert "Saved tokenizer" in capsys.readouterr().out

    inspect_bpe.main(["--tokenizer", str(out), "--text", "the quick dog"])
    printed = capsys.readouterr().out
    assert "back : 'the quick dog'" in printed
    assert "compression:" in printed
    assert "special: 4 tokens" in printed
