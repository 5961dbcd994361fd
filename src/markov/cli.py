#!/usr/bin/env python3
"""
Markov Text Generator

Command-line entry point. It trains a chain on text files (or standard
input), or reloads a saved chain, and then either saves the chain or
writes generated text.

Usage:
    markov -n 50 hamlet.txt                   # Generate 50 words
    markov -l 3 -w hamlet.chain hamlet.txt    # Save a chain of prefix length 3
    markov -r hamlet.chain -p "to be" -n 30   # Generate from a saved chain
"""

import argparse
import json
import logging
import sys
from contextlib import ExitStack
from typing import List, Optional, TextIO

from .chain import Chain, EmptyChainError
from .config import MarkovConfig
from .seeding import SeedState

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the `markov` command."""
    parser = argparse.ArgumentParser(
        prog="markov",
        description="Generate text from a word-level Markov chain"
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Training text files (standard input when none and no --read)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration JSON file"
    )

    parser.add_argument(
        "--length", "-l",
        type=int,
        help="Prefix length of a newly trained chain"
    )

    parser.add_argument(
        "--words", "-n",
        type=int,
        help="Number of words to generate"
    )

    parser.add_argument(
        "--prefix", "-p",
        type=str,
        help="Starting prefix, words separated by spaces"
    )

    parser.add_argument(
        "--read", "-r",
        type=str,
        metavar="MODEL",
        help="Load a chain previously saved with --write"
    )

    parser.add_argument(
        "--write", "-w",
        type=str,
        metavar="MODEL",
        help="Save the chain instead of generating text ('-' for stdout)"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default="-",
        help="Where to write generated text (default: stdout)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug messages"
    )

    return parser


def load_config(args: argparse.Namespace) -> MarkovConfig:
    """
    Build the configuration from an optional JSON file and command-line flags.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration with flags taking precedence over the file
    """
    config_dict = {}
    if args.config:
        with open(args.config, 'r') as f:
            config_dict = json.load(f)

    if args.length is not None:
        config_dict['prefix_length'] = args.length
    if args.words is not None:
        config_dict['words'] = args.words

    return MarkovConfig.from_dict(config_dict)


def _open_output(stack: ExitStack, path: str, encoding: str) -> TextIO:
    if path == "-":
        return sys.stdout
    return stack.enter_context(open(path, 'w', encoding=encoding))


def train(chain: Chain, files: List[str], encoding: str) -> None:
    """
    Add each file to the chain as a separate document.

    Args:
        chain: Chain to train
        files: Paths of text files; '-' reads standard input
        encoding: Text encoding of the files
    """
    for name in files:
        if name == "-":
            chain.add_from(sys.stdin, reset_prefix=True)
            continue
        logger.info(f"Training on {name}")
        with open(name, 'r', encoding=encoding) as f:
            chain.add_from(f, reset_prefix=True)


def run(args: argparse.Namespace) -> int:
    """
    Execute one invocation of the command.

    Returns:
        Process exit status
    """
    config = load_config(args)
    chain = Chain(config.prefix_length, seed_state=SeedState(config.random_device))

    files = list(args.files)
    if args.read:
        logger.info(f"Reading chain from {args.read}")
        with open(args.read, 'r', encoding=config.encoding) as f:
            chain.read(f)
        if chain.prefix_length is None and files:
            chain.prefix_length = config.prefix_length
    elif not files:
        files = ["-"]

    train(chain, files, config.encoding)
    logger.info(f"Chain has {len(chain)} prefixes of length {chain.prefix_length}")

    with ExitStack() as stack:
        if args.write:
            chain.write(_open_output(stack, args.write, config.encoding))
            return 0

        start = args.prefix.split() if args.prefix else None
        out = _open_output(stack, args.output, config.encoding)
        chain.generate(out, config.words, start)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        return run(args)
    except EmptyChainError as e:
        logger.error(f"Cannot generate text: {e}")
        return 1
    except UnicodeDecodeError as e:
        logger.error(f"Cannot decode input: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid setting: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
