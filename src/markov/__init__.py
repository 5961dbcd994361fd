"""
Word-level Markov chain text generator.

Train a chain on whitespace-delimited text, generate pseudo-random text from
it, and save or reload it in a line-oriented text format. The `markov`
command in `cli.py` wraps these operations.
"""

__version__ = "1.0.0"

from .config import MarkovConfig
from .seeding import DEFAULT_SEED_STATE, SeedState
from .chain import Chain, EmptyChainError
from .tokenization import iter_words

__all__ = [
    'MarkovConfig',
    'SeedState',
    'DEFAULT_SEED_STATE',
    'Chain',
    'EmptyChainError',
    'iter_words'
]
