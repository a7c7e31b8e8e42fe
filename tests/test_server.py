import pytest
from fastapi.testclient import TestClient

from subword.codec import encode
from subword.fastapi_server import TOKENIZER_ENV, create_app


@pytest.fixture
def client(small_vocab):
    with TestClient(create_app(vocabulary=small_vocab)) as c:
        yield c


def test_encode(client, small_vocab):
    r = client.post("/encode", json={"text": "lowest"})
    assert r.status_code == 200
    assert r.json() == {"ids": encode(small_vocab, "lowest")}

    r = client.post("/encode", json={"text": "lowest", "add_special_tokens": False, "max_len": 2})
    assert r.json() == {"ids": [17, 7]}


def test_decode(client):
    assert client.post("/decode", json={"ids": [2, 17, 7, 16, 3]}).json() == {"text": "lowest"}


def test_decode_unknown_id_is_400(client):
    r = client.post("/decode", json={"ids": [999]})
    assert r.status_code == 400


def test_vocab_info(client):
    info = client.get("/vocab").json()
    assert info["vocab_size"] == 18
    assert info["num_merges"] == 3
    assert info["special_tokens"] == {"<pad>": 0, "<unk>": 1, "<bos>": 2, "<eos>": 3}


def test_loads_tokenizer_from_env(tmp_path, monkeypatch, small_vocab):
    path = tmp_path / "tokenizer.json"
    small_vocab.save(str(path))
    monkeypatch.setenv(TOKENIZER_ENV, str(path))
    with TestClient(create_app()) as c:
        assert c.get("/vocab").json()["vocab_size"] == len(small_vocab)
