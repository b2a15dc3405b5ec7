"""
ZSpace: точная алгебра над целочисленной решёткой

Точки с целыми координатами и полуоткрытые прямоугольные Range из двух Point.
Никакой плавающей точки; все значения immutable.
"""

# Исключения
from src.zspace.errors import (
    DimensionMismatchError,
    EmptyRangeError,
    InvalidBoundsError,
    ParseError,
    PreconditionViolation,
    ZSpaceError,
)

# Контракт размерности
from src.zspace.dimensions import HasDimension, check_same_ndim, ndim_of, resolve_dim

# Частичный порядок
from src.zspace.ordering import Ordering, partial_compare

# Текстовые формы
from src.zspace.formatting import (
    BOUND_SEPARATOR,
    COORD_SEPARATOR,
    POINT_PREFIX,
    RANGE_PREFIX,
    format_point,
    format_range,
    parse_point,
    parse_range,
)

# Значения
from src.zspace.point import Point, maximum, minimum
from src.zspace.ranges import Range

__all__ = [
    # Исключения
    "ZSpaceError",
    "DimensionMismatchError",
    "InvalidBoundsError",
    "EmptyRangeError",
    "PreconditionViolation",
    "ParseError",
    # Контракт размерности
    "HasDimension",
    "ndim_of",
    "check_same_ndim",
    "resolve_dim",
    # Частичный порядок
    "Ordering",
    "partial_compare",
    # Текстовые формы: константы
    "POINT_PREFIX",
    "RANGE_PREFIX",
    "COORD_SEPARATOR",
    "BOUND_SEPARATOR",
    # Текстовые формы: функции
    "format_point",
    "format_range",
    "parse_point",
    "parse_range",
    # Значения
    "Point",
    "Range",
    "minimum",
    "maximum",
]
