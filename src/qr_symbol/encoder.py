"""Public entry point: payload and options in, finished symbol out."""

from __future__ import annotations

import codecs
import logging
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional, Tuple, Union

from . import capacity, ecc, masking, tables
from .errors import InvalidOption, UnsupportedCharacter
from .matrix import MatrixBuilder
from .segments import build_codewords
from .tables import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

Payload = Union[str, bytes]


@dataclass(frozen=True)
class EncodeOptions:
    min_error_correction_level: ErrorCorrectionLevel = ErrorCorrectionLevel.M
    forced_version: Optional[int] = None
    mask: Optional[int] = None
    boost_error: bool = True
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "min_error_correction_level",
            ErrorCorrectionLevel.parse(self.min_error_correction_level),
        )
        if self.forced_version is not None:
            if isinstance(self.forced_version, bool) or not isinstance(self.forced_version, int):
                raise InvalidOption("forced version must be an integer")
            if not tables.MIN_VERSION <= self.forced_version <= tables.MAX_VERSION:
                raise InvalidOption(
                    f"forced version must be between 1 and 40, got {self.forced_version}"
                )
        if self.mask is not None:
            if isinstance(self.mask, bool) or not isinstance(self.mask, int):
                raise InvalidOption("mask must be an integer")
            if not 0 <= self.mask <= 7:
                raise InvalidOption(f"mask must be between 0 and 7, got {self.mask}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as exc:
            raise InvalidOption(f"unknown character encoding: {self.encoding}") from exc

    @staticmethod
    def _parse_optional_int(payload: Mapping[str, Any], key: str, label: str) -> Optional[int]:
        raw_value = payload.get(key)
        if raw_value is None:
            return None
        # bool is an int subclass; JSON true must not read as 1.
        if isinstance(raw_value, int) and not isinstance(raw_value, bool):
            return raw_value
        if isinstance(raw_value, str):
            text = raw_value.strip()
            if text in ("", "auto"):
                return None
            if text.isdecimal():
                return int(text)
        raise InvalidOption(f"{label} must be an integer, got {raw_value!r}")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "EncodeOptions":
        """Build options from caller-supplied keys such as a JSON request body."""
        boost = payload.get("boostError", True)
        if isinstance(boost, str):
            boost = boost.strip().lower() not in ("false", "0", "no", "off")
        return cls(
            min_error_correction_level=ErrorCorrectionLevel.parse(
                payload.get("minErrorCorrectionLevel", "M")
            ),
            forced_version=cls._parse_optional_int(payload, "forcedVersion", "forced version"),
            mask=cls._parse_optional_int(payload, "mask", "mask"),
            boost_error=bool(boost),
            encoding=str(payload.get("encoding") or "utf-8"),
        )


@dataclass(frozen=True)
class Symbol:
    version: int
    error_correction_level: ErrorCorrectionLevel
    mask: int
    modules: Tuple[Tuple[bool, ...], ...]

    @property
    def module_count(self) -> int:
        return len(self.modules)

    def is_dark(self, row: int, col: int) -> bool:
        """Return the module color; coordinates outside the symbol read as light."""
        return (
            0 <= row < self.module_count
            and 0 <= col < self.module_count
            and self.modules[row][col]
        )

    def get_matrix(self) -> List[List[bool]]:
        return [list(row) for row in self.modules]


def _payload_bytes(payload: Payload, encoding: str) -> bytes:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if not isinstance(payload, str):
        raise InvalidOption(f"payload must be str or bytes, not {type(payload).__name__}")
    try:
        return payload.encode(encoding)
    except UnicodeEncodeError as exc:
        raise UnsupportedCharacter(
            f"character {payload[exc.start]!r} cannot be encoded as {encoding}"
        ) from exc


def encode(payload: Payload, options: Optional[EncodeOptions] = None, **overrides: Any) -> Symbol:
    """Encode ``payload`` into a QR Code symbol.

    ``overrides`` replace individual fields of ``options``, e.g.
    ``encode("123", min_error_correction_level="H")``.

    Raises DataTooLong, UnsupportedCharacter or InvalidOption; no partial
    symbol is ever returned.
    """
    if options is None:
        options = EncodeOptions()
    if overrides:
        try:
            options = replace(options, **overrides)
        except TypeError as exc:
            raise InvalidOption(str(exc)) from exc

    data = _payload_bytes(payload, options.encoding)
    plan = capacity.plan(
        data,
        options.min_error_correction_level,
        version=options.forced_version,
        boost_error=options.boost_error,
    )
    codewords = build_codewords(plan.segments, plan.version, plan.level)
    all_codewords = ecc.add_ecc_and_interleave(codewords, plan.version, plan.level)

    builder = MatrixBuilder(plan.version)
    builder.place_codewords(all_codewords)
    choice = masking.select_mask(builder, plan.level, options.mask)
    logger.debug(
        "encoded %d bytes as version %d level %s mask %d",
        len(data), plan.version, plan.level.value, choice.mask,
    )
    return Symbol(
        version=plan.version,
        error_correction_level=plan.level,
        mask=choice.mask,
        modules=tuple(tuple(row) for row in builder.modules),
    )
