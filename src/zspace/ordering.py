"""
Ordering: частичный порядок на целочисленных векторах

Точки сравниваются покоординатно. Результаты по измерениям сворачиваются
слева направо:

    EQUAL   + X          -> X
    LESS    + GREATER    -> несравнимы (None)
    GREATER + LESS       -> несравнимы (None)
    LESS    + LESS/EQ    -> LESS
    GREATER + GREATER/EQ -> GREATER

Став несравнимым, результат остаётся несравнимым. 0-мерный вектор
EQUAL самому себе.
"""

from enum import Enum
from functools import reduce
from typing import Optional, Sequence


class Ordering(Enum):
    """Результат сравнения двух сравнимых векторов."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


def compare_int(a: int, b: int) -> Ordering:
    """Полный порядок на одной координате."""
    if a < b:
        return Ordering.LESS
    if a > b:
        return Ordering.GREATER
    return Ordering.EQUAL


def _fold(running: Optional[Ordering], current: Optional[Ordering]) -> Optional[Ordering]:
    if running is None or current is None:
        return None
    if running is Ordering.EQUAL:
        return current
    if current is Ordering.EQUAL or current is running:
        return running
    return None


def partial_compare(a: Sequence[int], b: Sequence[int]) -> Optional[Ordering]:
    """
    Сравнение по доминированию двух векторов равной длины.

    Длины здесь не проверяются; вызывающий код проверяет размерность заранее.

    Returns:
        Ordering, или None если векторы несравнимы

    Examples:
        >>> partial_compare((0, 1, 2), (1, 2, 3))
        <Ordering.LESS: -1>
        >>> partial_compare((0, 1, 2), (1, 0, 2)) is None
        True
    """
    return reduce(_fold, (compare_int(x, y) for x, y in zip(a, b)), Ordering.EQUAL)
