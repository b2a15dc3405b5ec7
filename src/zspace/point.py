"""
Point: immutable вектор целочисленных координат

Immutable Pydantic модель (frozen=True). Каждая операция возвращает новый Point.

Арифметика (+ - * / // %) поэлементная и точная:
- Point (op) Point: размерности должны совпадать
- Point (op) scalar, scalar (op) Point: broadcast скаляра, без проверки размерности
- Point (op) последовательность: сначала приводится к координатам, затем
  проверяется как Point (op) Point
Деление и остаток усекаются к нулю.

Сравнение:
- == / != сравнивают координаты; разная размерность это ошибка
- < <= > >= следуют частичному порядку доминирования; для несравнимых точек
  все четыре возвращают False
- Последовательности приводятся по тому же правилу, что и в арифметике
"""

import operator
from collections.abc import Iterable
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from src.zspace.dimensions import check_same_ndim, ndim_of, resolve_dim
from src.zspace.elementwise import (
    IntOp,
    as_coordinate,
    as_coordinates,
    broadcast_left,
    broadcast_right,
    combine,
    is_scalar,
    trunc_div,
    trunc_rem,
)
from src.zspace.errors import PreconditionViolation
from src.zspace.formatting import format_point, parse_point
from src.zspace.ordering import Ordering, partial_compare


def _check_count(n: int, name: str = "ndim") -> int:
    if n < 0:
        raise PreconditionViolation(f"{name} must be non-negative, got {n}")
    return n


def _operand_coords(other: Any) -> Optional[tuple[int, ...]]:
    """
    Координаты второго операнда, или None если тип не поддерживается.

    Point даёт свои координаты; любой другой упорядоченный iterable
    (кроме str/bytes и других моделей) приводится через as_coordinates.
    """
    if isinstance(other, Point):
        return other.coords
    if isinstance(other, Iterable) and not isinstance(other, (str, bytes, BaseModel)):
        return as_coordinates(other)
    return None


# =============================================================================
# POINT MODEL
# =============================================================================


class Point(BaseModel):
    """
    Точка в Z-space: вектор целых координат фиксированной длины.

    0-мерная точка (Point.scalar()) допустима и является единственной точкой
    0-мерного пространства.

    Immutable модель (frozen=True).
    """

    coords: tuple[int, ...] = Field(default=(), description="Целочисленные координаты")

    model_config = {"frozen": True}

    def __init__(self, coords: Iterable[Any] = (), **data: Any) -> None:
        super().__init__(coords=coords, **data)

    @field_validator("coords", mode="before")
    @classmethod
    def validate_coords(cls, v: Any) -> tuple[int, ...]:
        """Только целые; принимается любой упорядоченный iterable."""
        if isinstance(v, Point):
            return v.coords
        return as_coordinates(v)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def scalar(cls) -> "Point":
        """0-мерная точка."""
        return cls(())

    @classmethod
    def of(cls, *coords: int) -> "Point":
        """
        Examples:
            >>> Point.of(1, 2, 3)
            z[1, 2, 3]
        """
        return cls(coords)

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> "Point":
        """Point из любой упорядоченной последовательности целых; ndim = её длина."""
        return cls(values)

    @classmethod
    def zeros(cls, ndim: int) -> "Point":
        return cls((0,) * _check_count(ndim))

    @classmethod
    def zeros_like(cls, other: Any) -> "Point":
        return cls.zeros(ndim_of(other))

    @classmethod
    def ones(cls, ndim: int) -> "Point":
        return cls((1,) * _check_count(ndim))

    @classmethod
    def ones_like(cls, other: Any) -> "Point":
        return cls.ones(ndim_of(other))

    @classmethod
    def full(cls, ndim: int, value: int) -> "Point":
        return cls((value,) * _check_count(ndim))

    @classmethod
    def full_like(cls, other: Any, value: int) -> "Point":
        return cls.full(ndim_of(other), value)

    @classmethod
    def parse(cls, text: str) -> "Point":
        """
        Обратная операция к str(point).

        Raises:
            ParseError: Если text не имеет вид z[c0, c1, ...]
        """
        return cls(parse_point(text))

    @classmethod
    def coerce(cls, value: Any) -> "Point":
        """value без изменений, если это Point; иначе новый Point из value."""
        if isinstance(value, Point):
            return value
        return cls(value)

    # -------------------------------------------------------------------------
    # Размерность и доступ
    # -------------------------------------------------------------------------

    def ndim(self) -> int:
        """Число координат."""
        return len(self.coords)

    def to_tuple(self) -> tuple[int, ...]:
        return self.coords

    def __getitem__(self, index: int) -> int:
        return self.coords[index]

    def __iter__(self):  # type: ignore[override]
        return iter(self.coords)

    def resolve_dim(self, dim: int) -> int:
        """Разрешение отрицательного индекса измерения относительно ndim()."""
        return resolve_dim(dim, self.ndim())

    def permute(self, permutation: Iterable[int]) -> "Point":
        """
        Перестановка координат: result[i] = self[permutation[i]].

        Raises:
            PreconditionViolation: Если permutation не перестановка range(ndim)
        """
        requested = list(permutation)
        perm = [self.resolve_dim(d) for d in requested]
        if sorted(perm) != list(range(self.ndim())):
            raise PreconditionViolation(
                f"invalid permutation {requested} for ndim={self.ndim()}"
            )
        return Point(self.coords[d] for d in perm)

    def add_dims(self, index: int, count: int) -> "Point":
        """
        Вставка count нулевых координат перед index.

        index может быть равен ndim() (добавление в конец) и может быть отрицательным.
        """
        _check_count(count, "count")
        ndim = self.ndim()
        at = index + ndim + 1 if index < 0 else index
        if not 0 <= at <= ndim:
            raise IndexError(f"insert index {index} out of range for ndim={ndim}")
        return Point(self.coords[:at] + (0,) * count + self.coords[at:])

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _apply(self, other: Any, op: IntOp, name: str, symbol: str, reflected: bool = False) -> Any:
        if is_scalar(other):
            scalar = as_coordinate(other)
            if reflected:
                return Point(broadcast_left(op, scalar, self.coords))
            return Point(broadcast_right(op, self.coords, scalar))

        other_coords = _operand_coords(other)
        if other_coords is None:
            return NotImplemented

        if reflected:
            check_same_ndim(other_coords, self.coords, name, symbol)
            return Point(combine(op, other_coords, self.coords))
        check_same_ndim(self.coords, other_coords, name, symbol)
        return Point(combine(op, self.coords, other_coords))

    def __add__(self, other: Any) -> "Point":
        return self._apply(other, operator.add, "add", "+")

    def __radd__(self, other: Any) -> "Point":
        return self._apply(other, operator.add, "add", "+", reflected=True)

    def __sub__(self, other: Any) -> "Point":
        return self._apply(other, operator.sub, "sub", "-")

    def __rsub__(self, other: Any) -> "Point":
        return self._apply(other, operator.sub, "sub", "-", reflected=True)

    def __mul__(self, other: Any) -> "Point":
        return self._apply(other, operator.mul, "mul", "*")

    def __rmul__(self, other: Any) -> "Point":
        return self._apply(other, operator.mul, "mul", "*", reflected=True)

    def __truediv__(self, other: Any) -> "Point":
        return self._apply(other, trunc_div, "div", "/")

    def __rtruediv__(self, other: Any) -> "Point":
        return self._apply(other, trunc_div, "div", "/", reflected=True)

    __floordiv__ = __truediv__
    __rfloordiv__ = __rtruediv__

    def __mod__(self, other: Any) -> "Point":
        return self._apply(other, trunc_rem, "rem", "%")

    def __rmod__(self, other: Any) -> "Point":
        return self._apply(other, trunc_rem, "rem", "%", reflected=True)

    def __neg__(self) -> "Point":
        return Point(-c for c in self.coords)

    def __pos__(self) -> "Point":
        return self

    def __abs__(self) -> "Point":
        return Point(abs(c) for c in self.coords)

    # -------------------------------------------------------------------------
    # Равенство и частичный порядок
    # -------------------------------------------------------------------------

    def _other_coords(self, other: Any, name: str, symbol: str) -> Optional[tuple[int, ...]]:
        other_coords = _operand_coords(other)
        if other_coords is None:
            return None
        check_same_ndim(self.coords, other_coords, name, symbol)
        return other_coords

    def __eq__(self, other: Any) -> bool:
        other_coords = self._other_coords(other, "eq", "==")
        if other_coords is None:
            return NotImplemented
        return self.coords == other_coords

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self.coords)

    def partial_compare(self, other: Any) -> Optional[Ordering]:
        """
        Сравнение по доминированию.

        Returns:
            Ordering.LESS / EQUAL / GREATER, или None если точки несравнимы

        Raises:
            DimensionMismatchError: Если размерности различаются
        """
        other_coords = self._other_coords(other, "partial_cmp", "<")
        if other_coords is None:
            raise TypeError(f"cannot compare Point with {type(other).__name__}")
        return partial_compare(self.coords, other_coords)

    def _order(self, other: Any, symbol: str) -> Any:
        other_coords = self._other_coords(other, "partial_cmp", symbol)
        if other_coords is None:
            return NotImplemented
        return partial_compare(self.coords, other_coords)

    def __lt__(self, other: Any) -> bool:
        order = self._order(other, "<")
        if order is NotImplemented:
            return order
        return order is Ordering.LESS

    def __le__(self, other: Any) -> bool:
        order = self._order(other, "<=")
        if order is NotImplemented:
            return order
        return order is Ordering.LESS or order is Ordering.EQUAL

    def __gt__(self, other: Any) -> bool:
        order = self._order(other, ">")
        if order is NotImplemented:
            return order
        return order is Ordering.GREATER

    def __ge__(self, other: Any) -> bool:
        order = self._order(other, ">=")
        if order is NotImplemented:
            return order
        return order is Ordering.GREATER or order is Ordering.EQUAL

    # -------------------------------------------------------------------------
    # Отображение
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        return format_point(self.coords)

    def __str__(self) -> str:
        return format_point(self.coords)


# =============================================================================
# ПОЭЛЕМЕНТНЫЕ РЕДУКЦИИ
# =============================================================================


def minimum(a: Any, b: Any) -> Point:
    """Покоординатный min двух точек."""
    a, b = Point.coerce(a), Point.coerce(b)
    check_same_ndim(a, b, "minimum", ",")
    return Point(combine(min, a.coords, b.coords))


def maximum(a: Any, b: Any) -> Point:
    """Покоординатный max двух точек."""
    a, b = Point.coerce(a), Point.coerce(b)
    check_same_ndim(a, b, "maximum", ",")
    return Point(combine(max, a.coords, b.coords))
