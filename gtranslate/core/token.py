# -*- coding: utf-8 -*-
"""
Token Transform
===============

Computes the ``tk`` request parameter from the request text and the
server-issued key pair, reproducing the arithmetic of the web front-end:
32-bit wrapping additions, wrapping left shifts and *unsigned* right shifts.

Python integers never overflow, so every intermediate value is masked with
``MASK_32`` explicitly.

Example::

    >>> derive_token("", KeyPair(0, 0))
    '0.0'
"""

from typing import List

from gtranslate.core.constants import (
    MASK_32, MIX_PROGRAM_FINAL, MIX_PROGRAM_STEP, TOKEN_MODULUS,
)
from gtranslate.core.key_store import KeyPair


def code_units(text: str) -> List[int]:
    """Expand ``text`` into UTF-16 code units (surrogate pairs above 0xFFFF)."""
    units: List[int] = []
    for ch in text:
        val = ord(ch)
        if val < 0x10000:
            units.append(val)
        else:
            val -= 0x10000
            units.append((val >> 10) + 0xD800)
            units.append((val % 0x400) + 0xDC00)
    return units


def _magnitude(ch: str) -> int:
    if "a" <= ch <= "z":
        return ord(ch) - 87
    return int(ch)


def mix(acc: int, program: str) -> int:
    """Run a mix program over ``acc``.

    ``program`` is read three characters at a time as
    (combine op, shift direction, magnitude). ``+`` as shift direction means
    unsigned right shift, anything else a left shift; ``+`` as combine op
    means addition, anything else XOR.
    """
    acc &= MASK_32
    for i in range(0, len(program) - 2, 3):
        combine, direction, mag = program[i], program[i + 1], program[i + 2]
        shift = _magnitude(mag)
        if direction == "+":
            shifted = acc >> shift
        else:
            shifted = (acc << shift) & MASK_32
        if combine == "+":
            acc = (acc + shifted) & MASK_32
        else:
            acc = acc ^ shifted
    return acc


def to_signed32(value: int) -> int:
    value &= MASK_32
    return value - 0x100000000 if value & 0x80000000 else value


def derive_token(text: str, pair: KeyPair) -> str:
    """Derive the ``"<int>.<int>"`` token for ``text`` under ``pair``.

    Pure and total: any string and any integer pair produce a token.
    """
    acc = pair.a & MASK_32
    for unit in code_units(text):
        acc = (acc + unit) & MASK_32
        acc = mix(acc, MIX_PROGRAM_STEP)
    acc = mix(acc, MIX_PROGRAM_FINAL)

    acc = to_signed32(acc ^ (pair.b & MASK_32))
    if acc < 0:
        acc = (acc & 0x7FFFFFFF) + 0x80000000
    acc %= TOKEN_MODULUS

    return f"{acc}.{acc ^ (pair.a & MASK_32)}"
