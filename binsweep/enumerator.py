"""
Candidate generation: every fixed-length string over an alphabet
"""

import string
from typing import Iterator

ALPHABET = string.ascii_lowercase + string.digits


def candidates(alphabet: str = ALPHABET, length: int = 3, prefix: str = "") -> Iterator[str]:
    """Yield every string of ``length`` characters drawn from ``alphabet``.

    Depth first: the outermost level varies the most significant character,
    so the output is lexicographic in the alphabet's own ordering. Each level
    walks the alphabet once, extending the prefix by one character.
    """
    if length < 1:
        raise ValueError(f"Candidate length must be at least 1, got {length}")
    if len(set(alphabet)) != len(alphabet):
        raise ValueError(f"Alphabet has repeated characters: {alphabet!r}")

    for char in alphabet:
        if length == 1:
            yield prefix + char
        else:
            yield from candidates(alphabet, length - 1, prefix + char)


def count_candidates(alphabet: str = ALPHABET, length: int = 3) -> int:
    return len(alphabet) ** length
