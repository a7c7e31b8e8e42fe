import argparse
import logging
from pathlib import Path

from .vocab import build_vocabulary_from_text


def main(argv=None):
    ap = argparse.ArgumentParser(description="Learn a BPE vocabulary from a text file.")
    ap.add_argument("--text", required=True)
    ap.add_argument("--size", type=int, default=1000)
    ap.add_argument("--min-freq", type=int, default=2)
    ap.add_argument("--workers", type=int, default=1)
    ap.add_argument("--progress", action="store_true")
    ap.add_argument("--out", required=True)
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    text = Path(args.text).read_text(encoding="utf-8")
    vocab = build_vocabulary_from_text(text, args.size, args.min_freq,
                                       num_workers=args.workers, show_progress=args.progress)
    Path(args.out).parent.mkdir(parents=True, exist_ok=True)
    vocab.save(args.out)
    print(f"Saved tokenizer to {args.out} (vocab={len(vocab)}, merges={len(vocab.merges)})")
    return vocab


if __name__ == "__main__":
    main()
