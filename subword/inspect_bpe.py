import argparse

from .analysis import compression_ratio, length_distribution, token_breakdown, token_categories
from .codec import decode, encode
from .vocab import Vocabulary


def main(argv=None):
    ap = argparse.ArgumentParser(description="Show how a trained vocabulary tokenizes text.")
    ap.add_argument("--tokenizer", required=True)
    ap.add_argument("--text", required=True)
    ap.add_argument("--no-special", action="store_true")
    args = ap.parse_args(argv)

    vocab = Vocabulary.load(args.tokenizer)
    ids = encode(vocab, args.text, add_special_tokens=not args.no_special)

    print(f"text : {args.text!r}")
    print(f"ids  : {ids}")
    for pos, (tid, tok) in enumerate(token_breakdown(vocab, ids)):
        print(f"  {pos}: {tid} -> {tok!r}")
    print(f"back : {decode(vocab, ids)!r}")
    print(f"compression: {len(args.text)} chars -> {len(ids)} tokens "
          f"(ratio {compression_ratio(args.text, ids):.2f}x)")

    print(f"\nvocab_size={len(vocab)} merges={len(vocab.merges)}")
    for length, count in length_distribution(vocab).items():
        pct = 100.0 * count / len(vocab)
        print(f"  {length} chars: {count:4d} tokens ({pct:5.1f}%) {'#' * int(pct / 2)}")
    for category, count in token_categories(vocab).most_common():
        print(f"  {category}: {count} tokens ({100.0 * count / len(vocab):.1f}%)")


if __name__ == "__main__":
    main()
