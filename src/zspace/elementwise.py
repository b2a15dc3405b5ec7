"""
Elementwise: целочисленные примитивы

Единый примитив combine, параметризованный бинарным целочисленным
оператором, лежит в основе всей арифметики Point. Скаляры broadcast-ятся;
векторы координат должны совпадать по длине.

Деление и остаток усекаются к нулю (остаток имеет знак делимого).
Python-операторы // и % округляют вниз, поэтому напрямую не используются.

ФОРМУЛЫ:
    trunc_div(a, b) = sign(a*b) * (|a| // |b|)
    trunc_rem(a, b) = a - b * trunc_div(a, b)
"""

import operator
from numbers import Integral
from typing import Any, Callable, Iterable, Sequence

IntOp = Callable[[int, int], int]


# =============================================================================
# ЦЕЛОЧИСЛЕННЫЕ ОПЕРАТОРЫ
# =============================================================================


def trunc_div(a: int, b: int) -> int:
    """
    Целочисленное деление с усечением к нулю.

    Raises:
        ZeroDivisionError: Если b == 0

    Examples:
        >>> trunc_div(7, 2)
        3
        >>> trunc_div(-7, 2)
        -3
    """
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def trunc_rem(a: int, b: int) -> int:
    """
    Остаток trunc_div; знак совпадает со знаком делимого.

    Examples:
        >>> trunc_rem(-7, 2)
        -1
    """
    return a - b * trunc_div(a, b)


# =============================================================================
# СКАЛЯРЫ И КООРДИНАТЫ
# =============================================================================


def is_scalar(value: Any) -> bool:
    """True для любого целочисленного скаляра (int, bool, numpy integer)."""
    return isinstance(value, Integral)


def as_coordinate(value: Any) -> int:
    """
    Нормализация одного целочисленного значения в обычный int.

    Raises:
        TypeError: Если value не целочисленное (float никогда не усекается)
    """
    if isinstance(value, (float, complex, str, bytes)):
        raise TypeError(f"coordinates must be integers, got {type(value).__name__}: {value!r}")
    try:
        return int(operator.index(value))
    except TypeError:
        raise TypeError(
            f"coordinates must be integers, got {type(value).__name__}: {value!r}"
        ) from None


def as_coordinates(values: Iterable[Any]) -> tuple[int, ...]:
    """Упорядоченный iterable целых значений -> кортеж координат."""
    if isinstance(values, (str, bytes)):
        raise TypeError(f"coordinates must be an integer sequence, got {type(values).__name__}")
    return tuple(as_coordinate(v) for v in values)


# =============================================================================
# COMBINE
# =============================================================================


def combine(op: IntOp, a: Sequence[int], b: Sequence[int]) -> tuple[int, ...]:
    """
    Поэлементный op над двумя векторами равной длины.

    Длины проверяет вызывающий код.
    """
    return tuple(op(x, y) for x, y in zip(a, b))


def broadcast_right(op: IntOp, a: Sequence[int], scalar: int) -> tuple[int, ...]:
    """op(coord, scalar) для каждой координаты."""
    return tuple(op(x, scalar) for x in a)


def broadcast_left(op: IntOp, scalar: int, b: Sequence[int]) -> tuple[int, ...]:
    """op(scalar, coord) для каждой координаты."""
    return tuple(op(scalar, y) for y in b)
