"""
Pure Python SHA-1 implementation.

This module computes SHA-1 without any platform support. It exists for
runtimes where no audited digest primitive is exposed, and must agree with
the native primitive bit for bit.


HOW SHA-1 WORKS
---------------
SHA-1 keeps a 160-bit chaining state split into five 32-bit words H0..H4.
The message is padded to a multiple of 64 bytes and fed through a
compression function one block at a time::

    state = INITIAL_STATE
    for block in pad(message):
        state = compress(state, block)
    digest = H0 || H1 || H2 || H3 || H4    (big-endian)


PADDING
-------
The padded message is::

    [message][0x80][0x00 ...][bit length: 8 bytes, big-endian]

Zero bytes are added until the length is 56 mod 64, which leaves exactly
eight bytes for the length field.

Example: "abc" (3 bytes, 24 bits) pads to a single 64-byte block::

    61 62 63 80 00 00 ... 00 00 00 00 00 00 00 18


MESSAGE SCHEDULE
----------------
Each block yields sixteen big-endian words W[0..15]. The remaining words are::

    W[i] = rotl1(W[i-3] ^ W[i-8] ^ W[i-14] ^ W[i-16])      for 16 <= i < 80

The one-bit rotation is what distinguishes SHA-1 from the withdrawn SHA-0.


ROUNDS
------
Five registers (a, b, c, d, e) start from the chaining state. Every round::

    temp = rotl5(a) + f(b, c, d) + e + K + W[i]
    e, d, c, b, a = d, c, rotl30(b), a, temp

The function f and constant K change every twenty rounds:

    0-19:   Ch(b, c, d)     = (b & c) | (~b & d)
    20-39:  Parity(b, c, d) = b ^ c ^ d
    40-59:  Maj(b, c, d)    = (b & c) | (b & d) | (c & d)
    60-79:  Parity(b, c, d) = b ^ c ^ d

After the last round the registers are added into the chaining state.
All additions are modulo 2^32.


Reference: https://www.rfc-editor.org/rfc/rfc3174
"""

from __future__ import annotations

from ..types import Digest
from .constants import (
    BLOCK_SIZE,
    INITIAL_STATE,
    K_STAGE_0,
    K_STAGE_1,
    K_STAGE_2,
    K_STAGE_3,
    LENGTH_FIELD_SIZE,
    PADDING_MARKER,
    ROUNDS_PER_STAGE,
    SCHEDULE_LENGTH,
    WORD_BITS,
    WORD_MASK,
    WORDS_PER_BLOCK,
)

State = tuple[int, int, int, int, int]
"""The five 32-bit chaining words H0..H4."""


def rotl(value: int, shift: int) -> int:
    """Rotate a 32-bit word left by `shift` bits."""
    return ((value << shift) | (value >> (WORD_BITS - shift))) & WORD_MASK


def pad_message(data: bytes) -> bytes:
    """
    Apply SHA-1 message padding.

    Args:
        data: The raw message.

    Returns:
        The padded message. Its length is always a multiple of 64.
    """
    bit_length = (len(data) * 8) & 0xFFFFFFFFFFFFFFFF

    # Zero bytes needed after the marker to reach 56 mod 64.
    #
    # The marker takes one byte, so the target is (len + 1 + zeros) % 64 == 56.
    zeros = (BLOCK_SIZE - LENGTH_FIELD_SIZE - 1 - len(data)) % BLOCK_SIZE

    padded = bytearray(data)
    padded.append(PADDING_MARKER)
    padded.extend(b"\x00" * zeros)
    padded.extend(bit_length.to_bytes(LENGTH_FIELD_SIZE, "big"))
    return bytes(padded)


def expand_schedule(block: bytes) -> list[int]:
    """
    Expand one 64-byte block into the 80-word message schedule.

    Raises:
        ValueError: If the block is not exactly 64 bytes.
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"SHA-1 block must be {BLOCK_SIZE} bytes, got {len(block)}")

    w = [int.from_bytes(block[i * 4 : i * 4 + 4], "big") for i in range(WORDS_PER_BLOCK)]
    for i in range(WORDS_PER_BLOCK, SCHEDULE_LENGTH):
        w.append(rotl(w[i - 3] ^ w[i - 8] ^ w[i - 14] ^ w[i - 16], 1))
    return w


def compress_block(state: State, block: bytes) -> State:
    """
    Fold one 64-byte block into the chaining state.

    Args:
        state: The current H0..H4.
        block: A 64-byte slice of the padded message.

    Returns:
        The updated chaining state.
    """
    w = expand_schedule(block)
    a, b, c, d, e = state

    for i in range(SCHEDULE_LENGTH):
        stage = i // ROUNDS_PER_STAGE
        if stage == 0:
            # Ch: pick c where b is set, d where b is clear.
            f = (b & c) | (~b & d)
            k = K_STAGE_0
        elif stage == 1:
            f = b ^ c ^ d
            k = K_STAGE_1
        elif stage == 2:
            f = (b & c) | (b & d) | (c & d)
            k = K_STAGE_2
        else:
            f = b ^ c ^ d
            k = K_STAGE_3

        temp = (rotl(a, 5) + f + e + k + w[i]) & WORD_MASK
        e = d
        d = c
        c = rotl(b, 30)
        b = a
        a = temp

    h0, h1, h2, h3, h4 = state
    return (
        (h0 + a) & WORD_MASK,
        (h1 + b) & WORD_MASK,
        (h2 + c) & WORD_MASK,
        (h3 + d) & WORD_MASK,
        (h4 + e) & WORD_MASK,
    )


def sha1(data: bytes) -> Digest:
    """
    Compute the SHA-1 digest of `data` in pure Python.

    Args:
        data: Any bytes-like message.

    Returns:
        The 20-byte digest.
    """
    padded = pad_message(bytes(data))

    state: State = INITIAL_STATE
    for offset in range(0, len(padded), BLOCK_SIZE):
        state = compress_block(state, padded[offset : offset + BLOCK_SIZE])

    return Digest(b"".join(word.to_bytes(4, "big") for word in state))
