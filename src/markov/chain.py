"""
Word-Level Markov Chain

This module implements the chain that maps fixed-length word sequences
(prefixes) to the words observed to follow them. It provides:

1. Incremental training from single words or whitespace-delimited streams
2. Text generation by a random walk over the learned prefixes
3. A line-oriented text format for saving and reloading a chain
4. Prefix lookup and validity queries

File format, one entry per line:

    <prefix word 1> ... <prefix word N> : <successor 1> ... <successor M>

The separator is exactly " : " and words are separated by single spaces.
Nothing is escaped, so words must not contain " : " or newlines. A chain
trained on the word ":" writes lines that read back with a different
prefix length; this is a limitation of the format.

Warning:
    Chains are not thread safe, and neither is the random source they share
    (see seeding.py).
"""

import logging
from itertools import islice
from typing import Dict, Iterator, List, Optional, Sequence, TextIO, Tuple

from .config import DEFAULT_PREFIX_LENGTH
from .seeding import DEFAULT_SEED_STATE, SeedState
from .tokenization import iter_words

logger = logging.getLogger(__name__)

Prefix = Tuple[str, ...]

SEPARATOR = " : "


class EmptyChainError(ValueError):
    """Raised when a prefix is requested from a chain with no entries."""


def _check_length(length) -> int:
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValueError(f"prefix length must be an integer, got {length!r}")
    if length < 1:
        raise ValueError(f"prefix length must be >= 1, got {length}")
    return length


class Chain:
    """
    A Markov chain text generator.

    The chain owns a private table from prefix to successor list. Successor
    lists keep duplicates, so a word seen twice after a prefix is twice as
    likely to be chosen. All prefixes in one chain have the same length.

    Usage:
        chain = Chain(prefix_length=2)
        with open("hamlet.txt") as f:
            chain.add_from(f, reset_prefix=True)
        chain.generate(sys.stdout, 50)
    """

    def __init__(self, prefix_length: int = DEFAULT_PREFIX_LENGTH,
                 seed_state: Optional[SeedState] = None):
        """
        Initialize an empty chain.

        Args:
            prefix_length: Number of words in each prefix
            seed_state: Random source; the process-wide one when omitted
        """
        self._prefix_length: Optional[int] = _check_length(prefix_length)
        self._table: Dict[Prefix, List[str]] = {}
        self._current: List[str] = []
        self._seeds = seed_state if seed_state is not None else DEFAULT_SEED_STATE

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, prefix) -> bool:
        return self.is_valid_prefix(prefix)

    def __repr__(self) -> str:
        return f"Chain(prefix_length={self._prefix_length}, entries={len(self._table)})"

    # Training

    def add(self, word: str) -> None:
        """
        Add a single word to the chain.

        Once the current prefix holds prefix_length words, the word is
        recorded as a successor of that prefix and the oldest word drops
        out. The word is then appended to the current prefix.

        Raises:
            ValueError: If the prefix length is unset (after reading a model
                with no usable lines)
        """
        if self._prefix_length is None:
            raise ValueError("prefix length is unset; read a model or set prefix_length first")

        if len(self._current) == self._prefix_length:
            self._table.setdefault(tuple(self._current), []).append(word)
            del self._current[0]
        self._current.append(word)

    def add_from(self, stream: TextIO, reset_prefix: bool = False) -> None:
        """
        Add every whitespace-delimited word read from a stream.

        Args:
            stream: Readable text stream
            reset_prefix: Clear the current prefix first, so the stream does
                not continue the context of whatever was added before it
        """
        if reset_prefix:
            self._current.clear()

        before = len(self._table)
        for word in iter_words(stream):
            self.add(word)
        logger.debug(f"Training added {len(self._table) - before} new prefixes")

    # Generation

    def generate(self, out: TextIO, nwords: int,
                 prefix: Optional[Sequence[str]] = None) -> List[str]:
        """
        Write randomly generated text to a stream.

        The walk starts at the given prefix, or at a random one when the
        prefix is omitted or not in the chain. Its words are written first,
        then successors are drawn one at a time. Generation stops after
        nwords words, or earlier when the last prefix_length words written
        were never seen as a prefix. Output ends with a newline.

        Args:
            out: Writable text stream
            nwords: Maximum number of words to write
            prefix: Optional starting prefix; never modified

        Returns:
            The words written, in order

        Raises:
            EmptyChainError: If the chain has no entries
            ValueError: If nwords is negative or not an integer
        """
        if isinstance(nwords, bool) or not isinstance(nwords, int) or nwords < 0:
            raise ValueError(f"nwords must be a non-negative integer, got {nwords!r}")

        if prefix is not None and self.is_valid_prefix(prefix):
            cursor = tuple(prefix)
        else:
            cursor = self.random_prefix()

        self._seeds.seed()
        self._current = list(cursor)

        words = list(cursor[:nwords])
        while len(words) < nwords:
            successors = self._table[cursor]
            word = successors[self._seeds.randbelow(len(successors))]
            words.append(word)

            candidate = cursor[1:] + (word,)
            if not self.is_valid_prefix(candidate):
                logger.debug(f"Walk reached unknown prefix after {len(words)} words")
                break
            cursor = candidate
            self._current = list(cursor)

        out.write(" ".join(words))
        out.write("\n")
        return words

    # Serialization

    def write(self, out: TextIO) -> None:
        """
        Write the chain in the text format described in the module docstring.

        One line is written per prefix; the chain is not modified.
        """
        for prefix, successors in self._table.items():
            out.write(" ".join(prefix) + SEPARATOR + " ".join(successors) + "\n")

    def read(self, stream: TextIO) -> None:
        """
        Replace the chain with one read from a stream written by write().

        The chain is cleared and its prefix length unset first. The first
        parsed line fixes the prefix length. Lines without the separator,
        and lines whose prefix has a different length, are skipped without
        error. Successors of a prefix that appears on several lines are
        accumulated. The current prefix ends up as the prefix of the last
        accepted line.

        If the stream fails part way through, the chain keeps whatever was
        read up to that point.
        """
        self._table.clear()
        self._current = []
        self._prefix_length = None

        accepted = skipped = 0
        for line in stream:
            if self._parse_line(line.rstrip("\r\n")):
                accepted += 1
            else:
                skipped += 1

        logger.debug(f"Read {accepted} lines into {len(self._table)} prefixes, skipped {skipped}")

    def _parse_line(self, line: str) -> bool:
        pos = line.find(SEPARATOR)
        if pos < 0:
            return False

        prefix = tuple(line[:pos].split(" "))
        if self._prefix_length is None:
            self._prefix_length = len(prefix)
        if len(prefix) != self._prefix_length:
            return False

        self._current = list(prefix)
        self._table.setdefault(prefix, []).extend(line[pos + len(SEPARATOR):].split(" "))
        return True

    # Prefix queries

    @property
    def current_prefix(self) -> Prefix:
        """The sliding window of most recent words (training or generation)."""
        return tuple(self._current)

    def set_current_prefix(self, prefix: Sequence[str]) -> Prefix:
        """
        Move the current prefix to a known prefix.

        Meant for subclasses, e.g. ones that read a different file format.
        Unknown prefixes are ignored.

        Returns:
            The current prefix after the call
        """
        if self.is_valid_prefix(prefix):
            self._current = list(prefix)
        return self.current_prefix

    def random_prefix(self) -> Prefix:
        """
        Return a prefix chosen uniformly from the chain.

        Raises:
            EmptyChainError: If the chain has no entries
        """
        if not self._table:
            raise EmptyChainError("no training data available")

        index = self._seeds.randbelow(len(self._table))
        return next(islice(iter(self._table), index, None))

    def is_valid_prefix(self, prefix: Sequence[str]) -> bool:
        """True if the prefix is a key of the chain."""
        return tuple(prefix) in self._table

    def successors(self, prefix: Sequence[str]) -> Tuple[str, ...]:
        """Words recorded after a prefix, duplicates included; empty if unknown."""
        return tuple(self._table.get(tuple(prefix), ()))

    def prefixes(self) -> Iterator[Prefix]:
        """
        Iterate over a snapshot of the prefixes, for inspection and tests.

        The chain cannot be modified through the returned iterator.
        """
        return iter(list(self._table))

    @property
    def prefix_length(self) -> Optional[int]:
        """
        Number of words in each prefix; None after reading an empty model.

        Warning:
            Assigning this property clears the chain and its current prefix.
        """
        return self._prefix_length

    @prefix_length.setter
    def prefix_length(self, length: int) -> None:
        length = _check_length(length)
        self._table.clear()
        self._current = []
        self._prefix_length = length

    # Random source

    def is_seeded(self) -> bool:
        """Whether the random source shared by this chain has been seeded."""
        return self._seeds.is_seeded()

    def seed(self, force: bool = False) -> None:
        """Seed the shared random source; a no-op when already seeded unless forced."""
        self._seeds.seed(force=force)
