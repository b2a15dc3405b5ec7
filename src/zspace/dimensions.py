"""
Dimensions: контракт размерности

Каждое point-like и range-like значение предоставляет метод ndim(): число
координат. Бинарные операции проверяют его до любых вычислений.

Обычные целочисленные последовательности (list, tuple, range, array-like)
участвуют наравне: их размерность равна длине.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. ndim() вызывается только если это метод; атрибут ndim-число
   (например, у numpy.ndarray) игнорируется, используется len()
2. Несовпадение размерностей никогда не маскируется
"""

from typing import Any, Protocol, runtime_checkable

from src.zspace.errors import DimensionMismatchError


@runtime_checkable
class HasDimension(Protocol):
    """Любое значение с определённым числом координат."""

    def ndim(self) -> int: ...


def ndim_of(value: Any) -> int:
    """
    Число координат point-like, range-like значения или последовательности.

    Args:
        value: Объект с методом ndim() или sized последовательность

    Returns:
        Неотрицательная размерность

    Raises:
        TypeError: Если у value нет понятия размерности
    """
    ndim = getattr(value, "ndim", None)
    if callable(ndim):
        return ndim()
    try:
        return len(value)
    except TypeError:
        raise TypeError(f"{type(value).__name__} has no dimensionality") from None


def check_same_ndim(a: Any, b: Any, op: str, symbol: str = "..") -> int:
    """
    Fail fast, если размерности a и b различаются.

    Args:
        a: Левый операнд
        b: Правый операнд
        op: Имя операции для сообщения об ошибке
        symbol: Символ оператора для сообщения об ошибке

    Returns:
        Общая размерность

    Raises:
        DimensionMismatchError: Если ndim_of(a) != ndim_of(b)

    Examples:
        >>> check_same_ndim([1, 2], [3, 4], "add", "+")
        2
    """
    a_ndim = ndim_of(a)
    b_ndim = ndim_of(b)
    if a_ndim != b_ndim:
        raise DimensionMismatchError(f"{op}: dimension mismatch: {a_ndim} {symbol} {b_ndim}")
    return a_ndim


def resolve_dim(dim: int, ndim: int) -> int:
    """
    Разрешение (возможно отрицательного) индекса измерения.

    Raises:
        IndexError: Если dim вне [-ndim, ndim)
    """
    resolved = dim + ndim if dim < 0 else dim
    if not 0 <= resolved < ndim:
        raise IndexError(f"dimension index {dim} out of range for ndim={ndim}")
    return resolved
