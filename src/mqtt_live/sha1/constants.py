"""
Constants for the SHA-1 digest algorithm.

Reference: https://www.rfc-editor.org/rfc/rfc3174
"""

from __future__ import annotations

from typing import Final

# ===========================================================================
# Word Arithmetic
# ===========================================================================
#
# SHA-1 operates on 32-bit unsigned words. Python integers are unbounded, so
# every addition and rotation is masked back into 32 bits.

WORD_BITS: Final = 32
"""Width of a SHA-1 word in bits."""

WORD_MASK: Final = 0xFFFFFFFF
"""Mask that reduces an integer modulo 2^32."""

# ===========================================================================
# Block Layout
# ===========================================================================
#
# The message is processed in 512-bit (64-byte) blocks. Each block is read as
# sixteen big-endian words and expanded to an eighty-word schedule.

BLOCK_SIZE: Final = 64
"""Size of one message block in bytes."""

WORDS_PER_BLOCK: Final = 16
"""Number of 32-bit words read directly from a block."""

SCHEDULE_LENGTH: Final = 80
"""Number of words in the expanded message schedule (one per round)."""

LENGTH_FIELD_SIZE: Final = 8
"""Size in bytes of the big-endian bit-length suffix appended during padding."""

PADDING_MARKER: Final = 0x80
"""First padding byte: a single 1 bit followed by seven 0 bits."""

# ===========================================================================
# Initial Hash Value
# ===========================================================================

INITIAL_STATE: Final[tuple[int, int, int, int, int]] = (
    0x67452301,
    0xEFCDAB89,
    0x98BADCFE,
    0x10325476,
    0xC3D2E1F0,
)
"""The five chaining words H0..H4 before any block is processed."""

# ===========================================================================
# Round Constants
# ===========================================================================
#
# The eighty rounds are split into four stages of twenty. Each stage uses its
# own additive constant K (the integer part of 2^30 times sqrt(2), sqrt(3),
# sqrt(5) and sqrt(10)).

ROUNDS_PER_STAGE: Final = 20
"""Rounds in each of the four stages."""

K_STAGE_0: Final = 0x5A827999
"""Constant for rounds 0-19 (choose)."""

K_STAGE_1: Final = 0x6ED9EBA1
"""Constant for rounds 20-39 (parity)."""

K_STAGE_2: Final = 0x8F1BBCDC
"""Constant for rounds 40-59 (majority)."""

K_STAGE_3: Final = 0xCA62C1D6
"""Constant for rounds 60-79 (parity)."""
