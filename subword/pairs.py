"""
Pair-Frequency Counter
======================

Counts adjacent symbol pairs over the word entries, weighted by each word's
corpus frequency. Counting is a read-only pass, so it can be sharded across
threads and summed back together.
"""

from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

Pair = Tuple[str, str]


@dataclass
class WordEntry:
    """One pre-tokenized word of the training corpus."""
    symbols: List[str]
    frequency: int

    def merge(self, pair: Pair, merged: str) -> None:
        """Replace all non-overlapping occurrences of `pair`, left to right, in place."""
        a, b = pair
        syms = self.symbols
        i = 0
        while i < len(syms) - 1:
            if syms[i] == a and syms[i + 1] == b:
                syms[i:i + 2] = [merged]
            i += 1


def count_pairs(entries: Iterable[WordEntry]) -> Counter:
    counts: Counter = Counter()
    for entry in entries:
        syms = entry.symbols
        if len(syms) < 2:
            continue
        for pair in zip(syms, syms[1:]):
            counts[pair] += entry.frequency
    return counts


def _shards(entries: Sequence[WordEntry], n: int) -> List[Sequence[WordEntry]]:
    size = -(-len(entries) // n)  # ceil
    return [entries[i:i + size] for i in range(0, len(entries), size)]


def count_pairs_parallel(entries: Sequence[WordEntry], num_workers: int = 1) -> Counter:
    """
    Same result as count_pairs(), computed over contiguous shards on a thread
    pool. Shard counters are summed in shard order.
    """
    if num_workers <= 1 or len(entries) < 2 * num_workers:
        return count_pairs(entries)
    shards = _shards(entries, num_workers)
    with ThreadPoolExecutor(max_workers=num_workers) as pool:
        partials = list(pool.map(count_pairs, shards))
    total: Counter = Counter()
    for part in partials:
        total.update(part)
    return total


def pair_sort_key(item: Tuple[Pair, int]):
    # frequency descending, then (left, right) text ascending
    (left, right), freq = item
    return (-freq, left, right)


def best_pair(counts: Counter) -> Optional[Tuple[Pair, int]]:
    """The highest-priority pair and its frequency, or None if there are no pairs."""
    if not counts:
        return None
    return min(counts.items(), key=pair_sort_key)
