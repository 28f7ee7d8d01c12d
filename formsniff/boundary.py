"""Multipart boundary generation."""

from __future__ import annotations

import random
import string

from loguru import logger

BOUNDARY_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BOUNDARY_LENGTH = 12
BOUNDARY_DASHES = 30


def generate_boundary(length: int = BOUNDARY_LENGTH, dashes: int = BOUNDARY_DASHES) -> str:
    """
    Build a boundary token as it appears on the delimiter lines of a body.

    The token is a run of `dashes` dashes followed by the first `length`
    characters of a random permutation of BOUNDARY_ALPHABET.
    """
    if not 1 <= length <= len(BOUNDARY_ALPHABET):
        raise ValueError(f"boundary length must be between 1 and {len(BOUNDARY_ALPHABET)}")
    if dashes < 2:
        raise ValueError("boundary needs at least two leading dashes")
    boundary = "-" * dashes + "".join(random.sample(BOUNDARY_ALPHABET, length))
    logger.debug("Generated multipart boundary {}", boundary)
    return boundary


def header_boundary(boundary: str) -> str:
    # The Content-Type parameter omits the "--" that delimiter lines carry.
    return boundary[2:]
