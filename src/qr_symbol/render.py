"""Turn a finished symbol into pixels, SVG markup or terminal text."""

from __future__ import annotations

from typing import List, Sequence

from PIL import Image, ImageDraw

from .encoder import Symbol

DARK = (0, 0, 0, 255)
LIGHT = (255, 255, 255, 255)


def add_border(matrix: Sequence[Sequence[bool]], border: int) -> List[List[bool]]:
    """Surround ``matrix`` with ``border`` light modules on every side."""
    if border < 0:
        raise ValueError("border must not be negative")
    if border == 0:
        return [list(row) for row in matrix]
    size = len(matrix)
    new_size = size + border * 2
    result = [[False] * new_size for _ in range(new_size)]
    for y, row in enumerate(matrix):
        for x, value in enumerate(row):
            result[y + border][x + border] = value
    return result


def render_png(symbol: Symbol, border: int = 4, box_size: int = 10) -> Image.Image:
    if box_size <= 0:
        raise ValueError("box_size must be positive")
    matrix = add_border(symbol.get_matrix(), border)
    size = len(matrix)
    image = Image.new("RGBA", (size * box_size, size * box_size), LIGHT)
    draw = ImageDraw.Draw(image)
    for y, row in enumerate(matrix):
        for x, cell in enumerate(row):
            if not cell:
                continue
            left = x * box_size
            top = y * box_size
            draw.rectangle(
                (left, top, left + box_size - 1, top + box_size - 1), fill=DARK
            )
    return image


def render_svg(symbol: Symbol, border: int = 4, module_size: int = 1) -> str:
    """Return a standalone SVG document with one path for all dark modules."""
    if module_size <= 0:
        raise ValueError("module_size must be positive")
    matrix = add_border(symbol.get_matrix(), border)
    size = len(matrix) * module_size
    commands = []
    for y, row in enumerate(matrix):
        x = 0
        while x < len(row):
            if not row[x]:
                x += 1
                continue
            start = x
            while x < len(row) and row[x]:
                x += 1
            commands.append(
                f"M{start * module_size},{y * module_size}"
                f"h{(x - start) * module_size}v{module_size}h-{(x - start) * module_size}z"
            )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {size} {size}" '
        f'width="{size}" height="{size}" shape-rendering="crispEdges">'
        f'<rect width="{size}" height="{size}" fill="#fff"/>'
        f'<path fill="#000" d="{"".join(commands)}"/></svg>\n'
    )


def render_text(symbol: Symbol, border: int = 2) -> str:
    """Return the symbol as full-block characters, two per module."""
    lines = []
    for row in add_border(symbol.get_matrix(), border):
        lines.append("".join("██" if cell else "  " for cell in row))
    return "\n".join(lines) + "\n"
