"""
Fingerprint scoring and conversion helpers.

Similarity is the share of matching positions between two equal-length
fingerprints (normalized Hamming distance), as a percentage.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Sequence

import imagehash
import numpy as np

from .config import DEFAULT_PRECISION
from .exceptions import PreconditionViolation
from .models import Fingerprint


def round_half_away(value: float, precision: int = DEFAULT_PRECISION) -> float:
    """
    Round to precision decimal digits, halves away from zero.

    Python's round() uses banker's rounding on binary floats
    (round(81.25, 1) == 81.2); this gives 81.3.

    Raises:
        PreconditionViolation: If precision is negative
    """
    if precision < 0:
        raise PreconditionViolation(f"Precision must be >= 0, got {precision}")
    number = Decimal(str(value))
    quantum = Decimal(1).scaleb(-precision)
    with localcontext() as ctx:
        # Room for every integer digit plus precision fractional digits
        ctx.prec = max(number.adjusted() + 1, 1) + precision + 1
        return float(number.quantize(quantum, rounding=ROUND_HALF_UP))


def _check_lengths(a: Sequence, b: Sequence, what: str) -> None:
    if len(a) != len(b):
        raise PreconditionViolation(
            f"Cannot compare {what} of different lengths ({len(a)} vs {len(b)})"
        )
    if len(a) == 0:
        raise PreconditionViolation(f"Cannot compare empty {what}")


def hamming_distance(a: Sequence, b: Sequence) -> int:
    """Count positions at which two equal-length sequences differ."""
    _check_lengths(a, b, 'sequences')
    return sum(1 for x, y in zip(a, b) if x != y)


def _similarity(a: Sequence, b: Sequence, precision: int) -> float:
    matching = len(a) - hamming_distance(a, b)
    return round_half_away(matching / len(a) * 100, precision)


def compare_bits(a: Fingerprint, b: Fingerprint, precision: int = DEFAULT_PRECISION) -> float:
    """
    Similarity percentage of two fingerprints.

    Args:
        a: First fingerprint
        b: Second fingerprint, same length as a
        precision: Decimal digits in the result

    Returns:
        Percentage of matching bits in [0, 100]

    Raises:
        PreconditionViolation: If the lengths differ or both are empty
    """
    _check_lengths(a, b, 'fingerprints')
    return _similarity(a, b, precision)


def compare_hash_strings(s1: str, s2: str, precision: int = DEFAULT_PRECISION) -> float:
    """
    Similarity percentage of two hash strings, character by character.

    Any differing character counts as one mismatch, so this works for
    binary strings as well as hex digests of equal length.
    """
    _check_lengths(s1, s2, 'hash strings')
    return _similarity(s1, s2, precision)


def fingerprint_to_string(fp: Fingerprint) -> str:
    """Concatenate fingerprint bits into a '0'/'1' string."""
    return ''.join(str(int(bit)) for bit in fp)


def fingerprint_from_string(bits: str) -> Fingerprint:
    """Parse a '0'/'1' string produced by fingerprint_to_string."""
    if not bits or set(bits) - {'0', '1'}:
        raise PreconditionViolation(f"Not a binary fingerprint string: {bits!r}")
    return [int(ch) for ch in bits]


def to_image_hash(fp: Fingerprint) -> imagehash.ImageHash:
    """
    Wrap a fingerprint as an imagehash.ImageHash.

    Square fingerprints keep their grid shape, so the result can be compared
    (subtracted) with hashes produced by imagehash itself.
    """
    bits = np.asarray(fp, dtype=bool)
    side = int(np.sqrt(bits.size))
    if side * side == bits.size:
        bits = bits.reshape(side, side)
    return imagehash.ImageHash(bits)


def fingerprint_to_hex(fp: Fingerprint) -> str:
    """Compact hex form of a fingerprint (4 bits per digit)."""
    if len(fp) == 0:
        raise PreconditionViolation("Cannot encode an empty fingerprint")
    return str(to_image_hash(fp))


def fingerprint_from_hex(hexstr: str, length: int) -> Fingerprint:
    """
    Decode a hex string from fingerprint_to_hex.

    Args:
        hexstr: Hex digits
        length: Number of bits in the original fingerprint

    Raises:
        PreconditionViolation: If hexstr is not hex or holds more than length bits
    """
    try:
        value = int(hexstr, 16)
    except ValueError:
        raise PreconditionViolation(f"Not a hex fingerprint: {hexstr!r}") from None
    if length < 1 or value.bit_length() > length:
        raise PreconditionViolation(f"Hex fingerprint {hexstr!r} does not fit in {length} bits")
    return [int(ch) for ch in format(value, f'0{length}b')]


__all__ = [
    'round_half_away',
    'hamming_distance',
    'compare_bits',
    'compare_hash_strings',
    'fingerprint_to_string',
    'fingerprint_from_string',
    'to_image_hash',
    'fingerprint_to_hex',
    'fingerprint_from_hex',
]
