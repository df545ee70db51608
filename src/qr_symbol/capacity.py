"""Version selection for a payload at a given error correction level."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from . import tables
from .errors import DataTooLong, InvalidOption
from .segments import Segment, make_segments, total_bits
from .tables import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

_BOOST_ORDER = (
    ErrorCorrectionLevel.M,
    ErrorCorrectionLevel.Q,
    ErrorCorrectionLevel.H,
)


@dataclass(frozen=True)
class CapacityPlan:
    version: int
    level: ErrorCorrectionLevel
    segments: Tuple[Segment, ...]
    data_bits: int

    @property
    def capacity_bits(self) -> int:
        return tables.num_data_codewords(self.version, self.level) * 8


def data_capacity_bits(version: int, level: ErrorCorrectionLevel) -> int:
    return tables.num_data_codewords(version, level) * 8


def plan(
    data: bytes,
    level: ErrorCorrectionLevel,
    version: Optional[int] = None,
    boost_error: bool = True,
) -> CapacityPlan:
    """Pick the smallest version holding ``data`` at ``level``.

    With ``version`` set only that version is tried. Raises DataTooLong when
    nothing fits.
    """
    if version is not None and not tables.MIN_VERSION <= version <= tables.MAX_VERSION:
        raise InvalidOption(f"version must be between 1 and 40, got {version}")
    candidates = range(tables.MIN_VERSION, tables.MAX_VERSION + 1) if version is None else (version,)

    # Optimal segmentation only changes between version tiers.
    by_tier: Dict[int, List[Segment]] = {}
    required: Optional[int] = None
    available = 0
    for candidate in candidates:
        tier = tables.version_tier(candidate)
        if tier not in by_tier:
            by_tier[tier] = make_segments(data, candidate)
        segments = by_tier[tier]
        required = total_bits(segments, candidate)
        available = data_capacity_bits(candidate, level)
        if required is not None and required <= available:
            chosen = _boost(level, candidate, required) if boost_error else level
            logger.debug(
                "selected version %d level %s for %d data bits (%d segments)",
                candidate, chosen.value, required, len(segments),
            )
            return CapacityPlan(candidate, chosen, tuple(segments), required)

    last = candidates[-1]
    if required is None:
        message = f"character count exceeds the count field of version {last}"
    else:
        message = f"data length = {required} bits, max capacity = {available} bits"
    if version is not None:
        message += f" (version forced to {version})"
    raise DataTooLong(message, required_bits=required, available_bits=available, version=last)


def _boost(level: ErrorCorrectionLevel, version: int, required_bits: int) -> ErrorCorrectionLevel:
    """Raise the level as far as the same version still holds the data."""
    for candidate in _BOOST_ORDER:
        if candidate.ordinal <= level.ordinal:
            continue
        if required_bits <= data_capacity_bits(version, candidate):
            level = candidate
    return level
