"""
Configuration Module for the Markov Text Generator

Holds the settings shared by the command-line front end and the chain:
prefix length, output size, and where seed material comes from.
"""

from dataclasses import dataclass, fields
from typing import Dict


DEFAULT_PREFIX_LENGTH = 2
DEFAULT_RANDOM_DEVICE = "/dev/urandom"


@dataclass
class MarkovConfig:
    """
    Configuration class for a chain and its front end.

    Attributes:
        prefix_length: Number of words in every prefix of the chain
        words: Number of words to generate
        random_device: File read for seed material (falls back to the clock)
        encoding: Text encoding for input, model and output files
    """

    prefix_length: int = DEFAULT_PREFIX_LENGTH
    words: int = 100
    random_device: str = DEFAULT_RANDOM_DEVICE
    encoding: str = "utf-8"

    def __post_init__(self):
        """Reject settings the chain cannot work with."""
        if isinstance(self.prefix_length, bool) or not isinstance(self.prefix_length, int):
            raise ValueError(f"prefix_length must be an integer, got {self.prefix_length!r}")
        if self.prefix_length < 1:
            raise ValueError(f"prefix_length must be >= 1, got {self.prefix_length}")
        if isinstance(self.words, bool) or not isinstance(self.words, int):
            raise ValueError(f"words must be an integer, got {self.words!r}")
        if self.words < 0:
            raise ValueError(f"words must be >= 0, got {self.words}")

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'MarkovConfig':
        """Create MarkovConfig instance from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in config_dict.items() if k in known})

    def to_dict(self) -> Dict:
        """Convert MarkovConfig to dictionary."""
        return {
            'prefix_length': self.prefix_length,
            'words': self.words,
            'random_device': self.random_device,
            'encoding': self.encoding
        }
