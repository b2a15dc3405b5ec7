"""
Range: полуоткрытый прямоугольный целочисленный бокс [start, end)

Immutable Pydantic модель (frozen=True) из двух Point равной размерности.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. start.ndim() == end.ndim() (иначе DimensionMismatchError)
2. start[i] <= end[i] для каждого i (иначе InvalidBoundsError)
3. Пуст iff некоторое start[i] == end[i]; size() == 0
4. 0-мерный Range имеет size 1 и содержит 0-мерный Point
5. super_range(split_trivial(pivot)) == self для любого pivot в [start, end]

АЛГЕБРА РЕГИОНОВ:
    split_trivial(pivot)  все 2^ndim детей, включая пустые и дубликаты
    split(pivot)          только непустые дети
    split_dim / chunk_dim последовательные боксы вдоль одного измерения
    super_range(ranges)   bounding box нормализованных range
    join(other)           точное слияние, None если не точно смежны
    intersection(other)   пересечение, None если пусто или не пересекаются
"""

import itertools
import logging
import math
from collections.abc import Iterable, Iterator
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.zspace.dimensions import check_same_ndim, resolve_dim
from src.zspace.errors import EmptyRangeError, InvalidBoundsError, PreconditionViolation
from src.zspace.formatting import format_range, parse_range
from src.zspace.point import Point, maximum, minimum

logger = logging.getLogger(__name__)


def _replace(coords: tuple[int, ...], dim: int, value: int) -> tuple[int, ...]:
    return coords[:dim] + (value,) + coords[dim + 1 :]


# =============================================================================
# RANGE MODEL
# =============================================================================


class Range(BaseModel):
    """
    Прямоугольная призма в Z-space: {p : start[i] <= p[i] < end[i] для всех i}.

    Immutable модель (frozen=True). Строится через Range.between(), from_shape(),
    zeros() или Range(start=..., end=...) с той же валидацией.
    """

    start: Point = Field(..., description="Нижний угол (включительно)")
    end: Point = Field(..., description="Верхний угол (исключительно)")

    model_config = {"frozen": True}

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_points(cls, v: Any) -> Point:
        """Целочисленные последовательности приводятся к Point."""
        return Point.coerce(v)

    @model_validator(mode="after")
    def validate_bounds(self) -> "Range":
        """start и end одной размерности, и start <= end по каждому измерению."""
        check_same_ndim(self.start, self.end, "between", "..")
        if any(s > e for s, e in zip(self.start.coords, self.end.coords)):
            raise InvalidBoundsError(
                f"start: {self.start} must be less than or equal to end: {self.end}"
            )
        return self

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def between(cls, start: Any, end: Any) -> "Range":
        """
        Range [start, end).

        Raises:
            DimensionMismatchError: Если размерности start и end различаются
            InvalidBoundsError: Если start[i] > end[i] для некоторого i
        """
        return cls(start=start, end=end)

    @classmethod
    def zeros(cls, ndim: int) -> "Range":
        """Пустой Range [0, 0) заданной размерности."""
        origin = Point.zeros(ndim)
        return cls.between(origin, origin)

    @classmethod
    def from_shape(cls, shape: Any) -> "Range":
        """[zeros_like(shape), shape): регион заданных размеров от начала координат."""
        shape = Point.coerce(shape)
        return cls.between(Point.zeros_like(shape), shape)

    @classmethod
    def from_start_with_shape(cls, start: Any, shape: Any) -> "Range":
        """
        [start, start + shape).

        Raises:
            DimensionMismatchError: Если размерности start и shape различаются
            InvalidBoundsError: Если shape имеет отрицательную координату

        Examples:
            >>> Range.from_start_with_shape([1, 2], [3, 4])
            zr[1;4, 2;6]
        """
        start = Point.coerce(start)
        return cls.between(start, start + shape)

    @classmethod
    def of_shape(cls, *extents: int) -> "Range":
        """
        Examples:
            >>> Range.of_shape(2, 3)
            zr[0;2, 0;3]
        """
        return cls.from_shape(extents)

    @classmethod
    def parse(cls, text: str) -> "Range":
        """
        Обратная операция к str(range); 'zr[0:2, 1:3]' тоже принимается.

        Raises:
            ParseError: Если text некорректен
            InvalidBoundsError: Если по какому-то измерению start > end
        """
        start, end = parse_range(text)
        return cls.between(start, end)

    @classmethod
    def super_range(cls, ranges: Iterable["Range"]) -> "Range":
        """
        Bounding box непустой коллекции Range одной размерности.

        Каждый range сначала нормализуется, поэтому пустой range вносит
        только свой start.

        Raises:
            PreconditionViolation: Если ranges пуст
            DimensionMismatchError: Если размерности различаются
        """
        normalized = [r.normalize() for r in ranges]
        if not normalized:
            raise PreconditionViolation("super_range: at least one range is required")

        start = normalized[0].start
        end = normalized[0].end
        for r in normalized[1:]:
            check_same_ndim(r, start, "super_range", "ranges")
            start = minimum(start, r.start)
            end = maximum(end, r.end)
        return cls.between(start, end)

    @classmethod
    def bounding_range(cls, *ranges: "Range") -> "Range":
        """Variadic форма super_range."""
        return cls.super_range(ranges)

    # -------------------------------------------------------------------------
    # Производные величины
    # -------------------------------------------------------------------------

    def ndim(self) -> int:
        """Размерность пространства, в котором лежит Range."""
        return self.start.ndim()

    def shape(self) -> Point:
        """end - start; никогда не отрицателен."""
        return self.end - self.start

    def size(self) -> int:
        """Число содержащихся точек; 0 при любом вырожденном измерении."""
        return math.prod(self.shape().coords)

    def is_empty(self) -> bool:
        return self.size() == 0

    def is_not_empty(self) -> bool:
        return self.size() != 0

    def inclusive_end(self) -> Point:
        """
        Наибольшая содержащаяся точка, end - 1.

        Raises:
            EmptyRangeError: Если Range пуст
        """
        self._require_non_empty("inclusive_end")
        return self.end - 1

    def normalize(self) -> "Range":
        """Пустой range схлопывается в [start, start); непустой без изменений."""
        if self.is_empty():
            return Range.between(self.start, self.start)
        return self

    def resolve_dim(self, dim: int) -> int:
        return resolve_dim(dim, self.ndim())

    def _require_non_empty(self, op: str) -> None:
        if self.is_empty():
            raise EmptyRangeError(f"{op}: {self} is empty")

    # -------------------------------------------------------------------------
    # Принадлежность
    # -------------------------------------------------------------------------

    def contains(self, point: Any) -> bool:
        """
        Полуоткрытая принадлежность: непуст и start[i] <= point[i] < end[i] для всех i.

        0-мерный Range содержит 0-мерный Point.

        Raises:
            DimensionMismatchError: Если размерность point другая
        """
        point = Point.coerce(point)
        check_same_ndim(self, point, "contains", "..")
        if self.is_empty():
            return False
        return all(
            s <= p < e for s, e, p in zip(self.start.coords, self.end.coords, point.coords)
        )

    def contains_range(self, other: "Range") -> bool:
        """True iff self содержит other.start и other.end - 1."""
        check_same_ndim(self, other, "contains_range", "..")
        return self.contains(other.start) and self.contains(other.end - 1)

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, Range):
            return self.contains_range(item)
        return self.contains(item)

    # -------------------------------------------------------------------------
    # Преобразования
    # -------------------------------------------------------------------------

    def translate(self, offset: Any) -> "Range":
        """[start + offset, end + offset)."""
        offset = Point.coerce(offset)
        check_same_ndim(self.start, offset, "translate", "..")
        return Range.between(self.start + offset, self.end + offset)

    def permute(self, permutation: Iterable[int]) -> "Range":
        """Перестановка измерений обоих углов."""
        permutation = list(permutation)
        return Range.between(self.start.permute(permutation), self.end.permute(permutation))

    def cartesian_product(self, other: Any) -> "Range":
        """
        Вложение self и other в пространство размерности self.ndim() + other.ndim().

        other может быть Range или shape (Point или последовательность),
        трактуемым как from_shape(other).
        """
        if not isinstance(other, Range):
            other = Range.from_shape(other)
        return Range.between(
            self.start.coords + other.start.coords,
            self.end.coords + other.end.coords,
        )

    def iter_points(self) -> Iterator[Point]:
        """
        Все содержащиеся точки; последнее измерение меняется быстрее всех.

        Пустой range ничего не выдаёт; 0-мерный Range выдаёт скалярную точку.
        """
        axes = [range(s, e) for s, e in zip(self.start.coords, self.end.coords)]
        for coords in itertools.product(*axes):
            yield Point(coords)

    # -------------------------------------------------------------------------
    # Алгебра регионов
    # -------------------------------------------------------------------------

    def split_trivial(self, pivot: Any) -> list["Range"]:
        """
        Разбиение по pivot на все 2^ndim детей, включая пустые и дубликаты.

        Дети строятся по измерениям: каждый кандидат заменяется левым
        ([start, pivot[d])) и правым ([pivot[d], end)) уточнением вдоль
        измерения d, в этом порядке.

        Raises:
            DimensionMismatchError: Если размерность pivot другая
            EmptyRangeError: Если Range пуст
            PreconditionViolation: Если не выполнено start <= pivot <= end (частичный порядок)
        """
        pivot = Point.coerce(pivot)
        check_same_ndim(self, pivot, "split", "..")
        self._require_non_empty("split")
        if not (self.start <= pivot and pivot <= self.end):
            raise PreconditionViolation(
                f"split: pivot {pivot} must satisfy {self.start} <= pivot <= {self.end}"
            )

        children = [(self.start.coords, self.end.coords)]
        for dim, p in enumerate(pivot.coords):
            refined = []
            for start, end in children:
                refined.append((start, _replace(end, dim, p)))
                refined.append((_replace(start, dim, p), end))
            children = refined

        return [Range.between(start, end) for start, end in children]

    def split(self, pivot: Any) -> list["Range"]:
        """split_trivial() без пустых детей, порядок сохраняется."""
        return [child for child in self.split_trivial(pivot) if child.is_not_empty()]

    def split_dim(self, dim: int, chunks: Iterable[int]) -> list["Range"]:
        """
        Разбиение вдоль одного измерения на последовательные боксы заданных размеров.

        Args:
            dim: Измерение (отрицательные индексы допустимы)
            chunks: Положительные размеры с суммой shape()[dim]

        Raises:
            EmptyRangeError: Если Range пуст
            PreconditionViolation: Если chunk не положителен или сумма неверна
        """
        self._require_non_empty("split_dim")
        dim = self.resolve_dim(dim)
        chunks = list(chunks)
        dim_size = self.end[dim] - self.start[dim]

        if any(k <= 0 for k in chunks):
            raise PreconditionViolation(f"chunk sizes must be > 0: {chunks}")
        if sum(chunks) != dim_size:
            raise PreconditionViolation(
                f"total chunk size ({sum(chunks)}) must be equal to dim size ({dim_size}): {chunks}"
            )

        result = []
        lo = self.start[dim]
        for k in chunks:
            result.append(
                Range.between(
                    _replace(self.start.coords, dim, lo),
                    _replace(self.end.coords, dim, lo + k),
                )
            )
            lo += k

        logger.debug("split %s along dim %d into %d chunks", self, dim, len(result))
        return result

    def chunk_dim(self, dim: int, chunk_size: int) -> list["Range"]:
        """
        Разбиение вдоль dim на боксы размера chunk_size плюс один хвостовой
        бокс для остатка (shape()[dim] % chunk_size), если он ненулевой.

        Raises:
            EmptyRangeError: Если Range пуст
            PreconditionViolation: Если chunk_size <= 0

        Examples:
            >>> Range.of_shape(5, 5).chunk_dim(0, 2)
            [zr[0;2, 0;5], zr[2;4, 0;5], zr[4;5, 0;5]]
        """
        self._require_non_empty("chunk_dim")
        if chunk_size <= 0:
            raise PreconditionViolation(f"chunk size must be > 0: {chunk_size}")

        dim = self.resolve_dim(dim)
        dim_size = self.end[dim] - self.start[dim]
        whole_chunks, remainder = divmod(dim_size, chunk_size)

        chunks = [chunk_size] * whole_chunks
        if remainder > 0:
            chunks.append(remainder)
        return self.split_dim(dim, chunks)

    def join(self, other: "Range") -> Optional["Range"]:
        """
        Точное слияние двух боксов.

        Bounding box возвращается только если его size равен
        self.size() + other.size(): боксы смежны вдоль одного измерения,
        совпадают по остальным, не перекрываются и не оставляют зазора.

        Returns:
            Объединённый Range, или None если боксы не образуют один бокс

        Raises:
            DimensionMismatchError: Если размерности различаются
        """
        check_same_ndim(self, other, "join", "..")
        candidate = Range.between(
            minimum(self.start, other.start),
            maximum(self.end, other.end),
        )
        if candidate.size() != self.size() + other.size():
            logger.debug("join rejected: %s and %s are not exactly adjacent", self, other)
            return None
        return candidate

    def intersection(self, other: "Range") -> Optional["Range"]:
        """
        Пересечение двух боксов.

        Returns:
            Непустое пересечение, или None если один из боксов пуст или они
            не пересекаются (касание по границе не является пересечением)

        Raises:
            DimensionMismatchError: Если размерности различаются
        """
        check_same_ndim(self, other, "intersection", "..")
        if self.is_empty() or other.is_empty():
            return None

        start = maximum(self.start, other.start)
        end = minimum(self.end, other.end)
        if any(s > e for s, e in zip(start.coords, end.coords)):
            return None

        candidate = Range.between(start, end)
        if candidate.is_not_empty() and self.contains_range(candidate) and other.contains_range(candidate):
            return candidate

        logger.debug("intersection of %s and %s is empty", self, other)
        return None

    # -------------------------------------------------------------------------
    # Равенство и отображение
    # -------------------------------------------------------------------------

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        check_same_ndim(self, other, "eq", "==")
        return self.start.coords == other.start.coords and self.end.coords == other.end.coords

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((self.start.coords, self.end.coords))

    def __repr__(self) -> str:
        return format_range(self.start.coords, self.end.coords)

    def __str__(self) -> str:
        return format_range(self.start.coords, self.end.coords)
