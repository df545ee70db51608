"""Data mask patterns and penalty scoring (7.8)."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional, Sequence, Tuple

from .errors import InvalidOption
from .matrix import MatrixBuilder
from .tables import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

# Data mask conditions of Table 10; a module is inverted when the condition holds.
MASK_PATTERNS: Tuple[Callable[[int, int], bool], ...] = (
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: j % 3 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    lambda i, j: ((i + j) % 2 + (i * j) % 3) % 2 == 0,
)

PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10


@dataclass(frozen=True)
class MaskChoice:
    mask: int
    scores: Dict[int, int]


def _finder_count(run_history: Deque[int], size: int) -> int:
    """Count 1:1:3:1:1 patterns ending at the newest light run; returns 0, 1 or 2.

    ``run_history[0]`` is the newest run. The core is dark-light-dark(x3)-
    light-dark; a light run of four units on either side completes a match.
    """
    n = run_history[1]
    assert n <= size * 3
    core = n > 0 and run_history[2] == run_history[4] == run_history[5] == n \
        and run_history[3] == n * 3
    return (
        (1 if core and run_history[0] >= n * 4 and run_history[6] >= n else 0)
        + (1 if core and run_history[6] >= n * 4 and run_history[0] >= n else 0)
    )


def _line_penalty(line: Sequence[bool]) -> Tuple[int, int]:
    """Return the N1 and N3 penalties of one row or column."""
    size = len(line)
    n1 = 0
    finders = 0
    run_color = False
    run_length = 0
    run_history: Deque[int] = deque([0] * 7, 7)
    # The quiet zone counts as a light run before the first module.
    pad = size
    for color in line:
        if color == run_color:
            run_length += 1
            if run_length == 5:
                n1 += PENALTY_N1
            elif run_length > 5:
                n1 += 1
        else:
            run_history.appendleft(run_length + pad)
            pad = 0
            if not run_color:
                finders += _finder_count(run_history, size)
            run_color = color
            run_length = 1
    # Close the line against the quiet zone on the far side.
    if run_color:
        run_history.appendleft(run_length + pad)
        run_length = 0
    run_history.appendleft(run_length + size)
    finders += _finder_count(run_history, size)
    return n1, finders * PENALTY_N3


def penalty_breakdown(modules: Sequence[Sequence[bool]]) -> Tuple[int, int, int, int]:
    """Return the (N1, N2, N3, N4) penalties of a fully masked matrix."""
    size = len(modules)
    n1 = n3 = 0
    for row in modules:
        a, b = _line_penalty(row)
        n1 += a
        n3 += b
    for col in range(size):
        a, b = _line_penalty([modules[row][col] for row in range(size)])
        n1 += a
        n3 += b

    n2 = 0
    for row in range(size - 1):
        upper = modules[row]
        lower = modules[row + 1]
        for col in range(size - 1):
            if upper[col] == upper[col + 1] == lower[col] == lower[col + 1]:
                n2 += PENALTY_N2

    dark = sum(1 for row in modules for cell in row if cell)
    total = size * size
    # Smallest k >= 0 such that (45 - 5k)% <= dark/total <= (55 + 5k)%.
    k = max(0, (abs(dark * 20 - total * 10) + total - 1) // total - 1)
    n4 = k * PENALTY_N4
    return n1, n2, n3, n4


def penalty_score(modules: Sequence[Sequence[bool]]) -> int:
    return sum(penalty_breakdown(modules))


def select_mask(
    builder: MatrixBuilder,
    level: ErrorCorrectionLevel,
    forced_mask: Optional[int] = None,
) -> MaskChoice:
    """Score every mask on ``builder``'s data region and commit the best one.

    Each candidate is scored with its own format information drawn in. Ties
    go to the lowest mask index. A forced mask is committed without scoring.
    """
    if forced_mask is not None:
        if not 0 <= forced_mask <= 7:
            raise InvalidOption(f"mask must be between 0 and 7, got {forced_mask}")
        builder.commit(level, forced_mask, MASK_PATTERNS[forced_mask])
        return MaskChoice(forced_mask, {})

    scores = {}
    for mask, pattern in enumerate(MASK_PATTERNS):
        scores[mask] = penalty_score(builder.candidate(level, mask, pattern))
    best = min(scores, key=lambda mask: (scores[mask], mask))
    logger.debug("mask penalties %s, selected mask %d", scores, best)
    builder.commit(level, best, MASK_PATTERNS[best])
    return MaskChoice(best, scores)
