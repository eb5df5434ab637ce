"""Bookkeeping of free and assigned vocabulary words

The WordPool is the single piece of shared mutable state of the shortener.
Every mutation happens under one lock, so `assigned ⊆ vocabulary` and
`free ∪ assigned = vocabulary` hold at every observable moment.

Free words are kept in a list with a word -> position index. Taking a random
free word swaps it with the last element and pops it, so allocation,
exhaustion detection, release and reservation are all O(1) and allocation
never needs a "pick at random until unassigned" retry loop.

Example:
    >>> pool = WordPool(['otter', 'heron'])
    >>> word = pool.try_allocate()
    >>> word in ('otter', 'heron')
    True
    >>> pool.try_allocate() is not None
    True
    >>> pool.try_allocate() is None  # exhausted
    True
    >>> pool.release(word)
    >>> pool.free_count
    1
"""

import random
import threading
from collections.abc import Iterable

from beartype import beartype


class WordPool:
    """Thread-safe pool of vocabulary words

    Attributes:
        vocabulary (tuple[str, ...]):
            Every candidate word, in the order given at construction.

    Methods:
        try_allocate() -> str | None:
            Take a uniformly random free word and mark it assigned, atomically.
            None means the pool is exhausted.
        release(word: str) -> None:
            Mark a word free. No-op for a word that is already free.
        reserve(word: str) -> bool:
            Mark a specific word assigned. False if it already was.
    """

    def __init__(self, vocabulary: Iterable[str], rng: random.Random | None = None):
        """
        Args:
            vocabulary (Iterable[str]):
                Candidate words. Must be non-empty and free of duplicates.
            rng (random.Random | None):
                Source of randomness. Defaults to random.SystemRandom() so
                allocated words can't be predicted from earlier ones.

        Raises:
            ValueError:
                If the vocabulary is empty or contains duplicates.
        """
        self.vocabulary = tuple(vocabulary)
        if not self.vocabulary:
            raise ValueError('Vocabulary must contain at least one word.')
        if len(set(self.vocabulary)) != len(self.vocabulary):
            raise ValueError('Vocabulary must not contain duplicate words.')

        self._rng = rng if rng is not None else random.SystemRandom()
        self._lock = threading.Lock()
        self._free = list(self.vocabulary)
        self._positions = {word: i for i, word in enumerate(self._free)}
        self._members = frozenset(self.vocabulary)

    def __len__(self) -> int:
        return len(self.vocabulary)

    def __contains__(self, word: object) -> bool:
        return word in self._members

    @property
    def free_count(self) -> int:
        with self._lock:
            return len(self._free)

    @property
    def assigned_count(self) -> int:
        with self._lock:
            return len(self.vocabulary) - len(self._free)

    def is_assigned(self, word: str) -> bool:
        with self._lock:
            return word in self._members and word not in self._positions

    def try_allocate(self) -> str | None:
        with self._lock:
            if not self._free:
                return None
            word = self._free[self._rng.randrange(len(self._free))]
            self._take(word)
            return word

    @beartype
    def release(self, word: str) -> None:
        self._check_member(word)
        with self._lock:
            if word in self._positions:
                return
            self._positions[word] = len(self._free)
            self._free.append(word)

    @beartype
    def reserve(self, word: str) -> bool:
        self._check_member(word)
        with self._lock:
            if word not in self._positions:
                return False
            self._take(word)
            return True

    def _take(self, word: str) -> None:
        """Remove `word` from the free list. Caller must hold self._lock."""
        position = self._positions.pop(word)
        last = self._free.pop()
        if last != word:
            self._free[position] = last
            self._positions[last] = position

    def _check_member(self, word: str) -> None:
        if word not in self._members:
            raise ValueError(f"Word '{word}' is not part of the vocabulary.")
