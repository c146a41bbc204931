"""Random identifiers for commits and stash entries."""

import random
from typing import Sequence, TypeVar

T = TypeVar("T")

HEX_ALPHABET = "0123456789abcdef"
HASH_LENGTH = 7


def generate_hash(length: int = HASH_LENGTH) -> str:
    """
    Generate an opaque commit identifier.

    The identifier is random, not derived from content. Collisions are not
    checked; within one session they are extremely unlikely.
    """
    return "".join(random.choice(HEX_ALPHABET) for _ in range(length))


def random_from(items: Sequence[T]) -> T:
    """Pick a random element, e.g. a sample commit message."""
    return random.choice(items)
