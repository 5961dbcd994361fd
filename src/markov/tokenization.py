from __future__ import annotations

from typing import Iterator, TextIO


def iter_words(stream: TextIO) -> Iterator[str]:
    """Whitespace tokenization of a text stream, one line at a time.

    Punctuation stays attached to its word.
    """

    for line in stream:
        yield from line.split()
