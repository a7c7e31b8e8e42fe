import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel

from .codec import decode, encode
from .errors import UnknownTokenIdError
from .vocab import Vocabulary

logger = logging.getLogger(__name__)

DEFAULT_TOKENIZER = "data/tokenizer.json"
TOKENIZER_ENV = "SUBWORD_TOKENIZER"


class EncodeIn(BaseModel):
    text: str
    add_special_tokens: bool = True
    max_len: Optional[int] = None


class DecodeIn(BaseModel):
    ids: List[int]


def create_app(vocab_path: Optional[str] = None, vocabulary: Optional[Vocabulary] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.vocabulary is None:
            path = vocab_path or os.environ.get(TOKENIZER_ENV, DEFAULT_TOKENIZER)
            app.state.vocabulary = Vocabulary.load(path)
            logger.info("Loaded tokenizer from %s (vocab=%d)", path, len(app.state.vocabulary))
        yield

    app = FastAPI(title="Subword Tokenizer Server", lifespan=lifespan)
    app.state.vocabulary = vocabulary

    def _vocab(request: Request) -> Vocabulary:
        vocab = request.app.state.vocabulary
        if vocab is None:
            raise HTTPException(status_code=503, detail="tokenizer not loaded")
        return vocab

    @app.post("/encode")
    def encode_text(body: EncodeIn, request: Request):
        ids = encode(_vocab(request), body.text,
                     add_special_tokens=body.add_special_tokens, max_len=body.max_len)
        return {"ids": ids}

    @app.post("/decode")
    def decode_ids(body: DecodeIn, request: Request):
        try:
            return {"text": decode(_vocab(request), body.ids)}
        except UnknownTokenIdError as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.get("/vocab")
    def vocab_info(request: Request):
        vocab = _vocab(request)
        return {
            "vocab_size": len(vocab),
            "num_merges": len(vocab.merges),
            "special_tokens": {tok: i for i, tok in enumerate(vocab.special_tokens.as_list())},
        }

    return app


app = create_app()
