"""Arithmetic in GF(2^8) and Reed-Solomon remainder computation (7.5.2)."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

# x^8 + x^4 + x^3 + x^2 + 1
PRIMITIVE_POLYNOMIAL = 0x11D


def _build_tables() -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    exp = [0] * 512
    log = [0] * 256
    x = 1
    for i in range(255):
        exp[i] = x
        log[x] = i
        x <<= 1
        if x & 0x100:
            x ^= PRIMITIVE_POLYNOMIAL
    # Doubled so that exp[log a + log b] needs no modulo.
    for i in range(255, 512):
        exp[i] = exp[i - 255]
    return tuple(exp), tuple(log)


EXP_TABLE, LOG_TABLE = _build_tables()


def multiply(x: int, y: int) -> int:
    if x == 0 or y == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[x] + LOG_TABLE[y]]


def divide(x: int, y: int) -> int:
    if y == 0:
        raise ZeroDivisionError("division by zero in GF(256)")
    if x == 0:
        return 0
    return EXP_TABLE[LOG_TABLE[x] + 255 - LOG_TABLE[y]]


def poly_multiply(p: Sequence[int], q: Sequence[int]) -> List[int]:
    """Multiply two polynomials stored highest power first."""
    result = [0] * (len(p) + len(q) - 1)
    for i, a in enumerate(p):
        for j, b in enumerate(q):
            result[i + j] ^= multiply(a, b)
    return result


@lru_cache(maxsize=None)
def generator_polynomial(degree: int) -> Tuple[int, ...]:
    """Return (x - a^0)(x - a^1)...(x - a^(degree-1)), highest power first.

    The leading coefficient is always 1 and is included.
    """
    if not 1 <= degree <= 255:
        raise ValueError("Degree out of range")
    coefficients: List[int] = [1]
    for i in range(degree):
        coefficients = poly_multiply(coefficients, [1, EXP_TABLE[i]])
    return tuple(coefficients)


class ReedSolomonGenerator:
    def __init__(self, degree: int):
        self.degree = degree
        self.coefficients = generator_polynomial(degree)

    def remainder(self, data: Sequence[int]) -> List[int]:
        """Return the coefficients of data(x) * x^degree mod g(x)."""
        result = [0] * self.degree
        divisor = self.coefficients[1:]
        for byte in data:
            factor = byte ^ result[0]
            result = result[1:] + [0]
            if factor == 0:
                continue
            for i, coefficient in enumerate(divisor):
                result[i] ^= multiply(coefficient, factor)
        return result
