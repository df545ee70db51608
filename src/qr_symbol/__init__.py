"""QR Code symbol encoder."""

from .encoder import EncodeOptions, Symbol, encode
from .errors import DataTooLong, EncodeError, InvalidOption, UnsupportedCharacter
from .render import render_png, render_svg, render_text
from .tables import ErrorCorrectionLevel

__all__ = [
    "encode",
    "EncodeOptions",
    "Symbol",
    "ErrorCorrectionLevel",
    "EncodeError",
    "DataTooLong",
    "InvalidOption",
    "UnsupportedCharacter",
    "render_png",
    "render_svg",
    "render_text",
]
