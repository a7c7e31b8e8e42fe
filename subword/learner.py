"""
Merge Learner
=============

Greedy BPE training loop. Each iteration counts adjacent pairs, picks the
most frequent one (ties broken by the smaller (left, right) text), records it
as the next merge rule and rewrites every word entry.

Stops when:
1. special + base alphabet + learned merges reaches the target size
2. no adjacent pair is left
3. the best pair is rarer than min_pair_frequency
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from tqdm import tqdm

from .errors import EmptyCorpusError, VocabSizeTooSmallError
from .pairs import WordEntry, best_pair, count_pairs_parallel

logger = logging.getLogger(__name__)

LOG_EVERY = 100


@dataclass(frozen=True)
class MergeRule:
    left: str
    right: str
    rank: int

    @property
    def pair(self) -> Tuple[str, str]:
        return (self.left, self.right)

    @property
    def merged(self) -> str:
        return self.left + self.right


def base_alphabet(entries: Sequence[WordEntry]) -> List[str]:
    """Distinct symbols in first-seen order."""
    seen = {}
    for entry in entries:
        for sym in entry.symbols:
            if sym not in seen:
                seen[sym] = len(seen)
    return list(seen)


def learn_merges(entries: List[WordEntry],
                 target_vocab_size: int,
                 min_pair_frequency: int = 1,
                 special_token_count: int = 4,
                 num_workers: int = 1,
                 show_progress: bool = False) -> Tuple[List[str], List[MergeRule]]:
    """
    Learn merge rules from `entries`, rewriting their symbol lists in place.

    Returns (base_alphabet, merges) where merges are ordered by rank.
    """
    entries = [e for e in entries if e.symbols and e.frequency > 0]
    if not entries:
        raise EmptyCorpusError("no word entries to learn from")

    alphabet = base_alphabet(entries)
    floor = special_token_count + len(alphabet)
    if target_vocab_size < floor:
        raise VocabSizeTooSmallError(target_vocab_size, floor)

    budget = target_vocab_size - floor
    logger.info("Learning up to %d merges over %d unique words (base alphabet %d)",
                budget, len(entries), len(alphabet))

    merges: List[MergeRule] = []
    bar = tqdm(total=budget, desc="bpe merges", disable=not show_progress)
    try:
        while len(merges) < budget:
            counts = count_pairs_parallel(entries, num_workers)
            best = best_pair(counts)
            if best is None:
                logger.info("No pairs left after %d merges", len(merges))
                break
            pair, freq = best
            if freq < min_pair_frequency:
                logger.info("Best pair %r has frequency %d < %d, stopping after %d merges",
                            pair, freq, min_pair_frequency, len(merges))
                break

            rule = MergeRule(pair[0], pair[1], rank=len(merges))
            merges.append(rule)
            merged = rule.merged
            for entry in entries:
                entry.merge(pair, merged)

            bar.update(1)
            logger.debug("merge %d: %r -> %r (%d occurrences)", rule.rank, pair, merged, freq)
            if len(merges) % LOG_EVERY == 0:
                logger.info("  %d merges learned, vocabulary at %d", len(merges), floor + len(merges))
    finally:
        bar.close()

    logger.info("Learned %d merges; vocabulary size %d", len(merges), floor + len(merges))
    return alphabet, merges
