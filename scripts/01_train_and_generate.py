from __future__ import annotations

import io
import sys

from markov import Chain
from markov.tokenization import iter_words


def main() -> None:
    raw = (
        "To be, or not to be, that is the question: "
        "Whether 'tis nobler in the mind to suffer "
        "The slings and arrows of outrageous fortune, "
        "Or to take arms against a sea of troubles"
    )
    words = list(iter_words(io.StringIO(raw)))

    chain = Chain(prefix_length=2)
    chain.add_from(io.StringIO(raw), reset_prefix=True)

    print("WORDS:", len(words))
    print("CHAIN ENTRIES:", len(chain))
    print("GENERATED:")
    chain.generate(sys.stdout, 30, ["To", "be,"])
    print("SAVED FORM:")
    chain.write(sys.stdout)


if __name__ == "__main__":
    main()
