"""
Formatting: текстовые формы Point и Range

    Point  -> z[c0, c1, ..., cn]
    Range  -> zr[s0;e0, s1;e1, ...]

repr() и str() совпадают для обоих типов. Парсеры принимают ровно то, что
производит рендеринг, плюс произвольные пробелы и (для Range) разделитель
границ ':'.
"""

import re
from typing import Final, Sequence

from src.zspace.errors import ParseError

# =============================================================================
# ПАРАМЕТРЫ ТЕКСТОВОЙ ФОРМЫ
# =============================================================================

POINT_PREFIX: Final[str] = "z"
RANGE_PREFIX: Final[str] = "zr"
COORD_SEPARATOR: Final[str] = ", "
BOUND_SEPARATOR: Final[str] = ";"

# Альтернативный разделитель границ, только при разборе
_BOUND_SEPARATORS: Final[str] = ";:"

_INT_RE = re.compile(r"^[+-]?\d+$")


# =============================================================================
# РЕНДЕРИНГ
# =============================================================================


def format_point(coords: Sequence[int]) -> str:
    """
    Examples:
        >>> format_point((1, 2, 3))
        'z[1, 2, 3]'
    """
    return f"{POINT_PREFIX}[{COORD_SEPARATOR.join(str(c) for c in coords)}]"


def format_range(start: Sequence[int], end: Sequence[int]) -> str:
    """
    Examples:
        >>> format_range((1, 2, 3), (4, 5, 6))
        'zr[1;4, 2;5, 3;6]'
    """
    pairs = (f"{s}{BOUND_SEPARATOR}{e}" for s, e in zip(start, end))
    return f"{RANGE_PREFIX}[{COORD_SEPARATOR.join(pairs)}]"


# =============================================================================
# РАЗБОР
# =============================================================================


def _body(text: str, prefix: str, kind: str) -> str:
    stripped = text.strip()
    if not (stripped.startswith(prefix + "[") and stripped.endswith("]")):
        raise ParseError(f"Invalid {kind}: {text!r}")
    return stripped[len(prefix) + 1 : -1].strip()


def _parse_int(token: str, text: str, kind: str) -> int:
    token = token.strip()
    if not _INT_RE.match(token):
        raise ParseError(f"Invalid {kind}: {text!r} (bad coordinate {token!r})")
    return int(token)


def parse_point(text: str) -> tuple[int, ...]:
    """
    Разбор 'z[1, 2, 3]' в кортеж координат.

    Raises:
        ParseError: Если text не является корректной точкой

    Examples:
        >>> parse_point("z[1, -2]")
        (1, -2)
        >>> parse_point("z[]")
        ()
    """
    body = _body(text, POINT_PREFIX, "point")
    if not body:
        return ()
    return tuple(_parse_int(tok, text, "point") for tok in body.split(","))


def parse_range(text: str) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """
    Разбор 'zr[1;4, 2;5]' (или 'zr[1:4, 2:5]') в кортежи (start, end).

    Границы здесь не валидируются; это делает конструктор Range.

    Raises:
        ParseError: Если text не является корректным range
    """
    body = _body(text, RANGE_PREFIX, "range")
    if not body:
        return (), ()

    start: list[int] = []
    end: list[int] = []
    for part in body.split(","):
        bounds = re.split(f"[{_BOUND_SEPARATORS}]", part)
        if len(bounds) != 2:
            raise ParseError(f"Invalid range: {text!r} (bad dimension {part.strip()!r})")
        start.append(_parse_int(bounds[0], text, "range"))
        end.append(_parse_int(bounds[1], text, "range"))
    return tuple(start), tuple(end)
