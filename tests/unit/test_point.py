"""
Тесты для Point

Проверяемые инварианты:
1. Конструкторы (zeros/ones/full, *_like, of, from_sequence, scalar)
2. Индексация и итерация
3. Поэлементная арифметика с точками, скалярами и последовательностями
4. Равенство и частичный порядок доминирования
5. Immutability (frozen=True)
6. Текстовая форма
"""

import pytest
from pydantic import ValidationError

from src.zspace import (
    DimensionMismatchError,
    Ordering,
    ParseError,
    Point,
    PreconditionViolation,
    Range,
    maximum,
    minimum,
)


# =============================================================================
# ТЕСТЫ: Конструкторы
# =============================================================================


class TestConstruction:
    """Тесты конструкторов и приведения."""

    def test_zeros(self) -> None:
        """zeros(n) содержит n нулевых координат."""
        point = Point.zeros(3)
        assert point.ndim() == 3
        assert point == Point.of(0, 0, 0)

    def test_ones(self) -> None:
        """ones(n) содержит n единичных координат."""
        point = Point.ones(3)
        assert point.ndim() == 3
        assert point == Point.of(1, 1, 1)

    def test_full(self) -> None:
        """full(n, v) повторяет v."""
        point = Point.full(3, 5)
        assert point.ndim() == 3
        assert point == Point.of(5, 5, 5)

    def test_like_variants_copy_dimensionality(self) -> None:
        """*_like копируют ndim у точек, range и последовательностей."""
        ref = Point.of(1, 2, 3)
        assert Point.zeros_like(ref) == Point.of(0, 0, 0)
        assert Point.ones_like(ref) == Point.of(1, 1, 1)
        assert Point.full_like(ref, 5) == Point.of(5, 5, 5)
        assert Point.zeros_like(Range.of_shape(4, 4)) == Point.of(0, 0)
        assert Point.ones_like([7, 8]) == Point.of(1, 1)

    def test_negative_ndim_rejected(self) -> None:
        """Отрицательная размерность нарушает предусловие."""
        with pytest.raises(PreconditionViolation, match="non-negative"):
            Point.zeros(-1)

    def test_scalar(self) -> None:
        """У скалярной точки нет координат."""
        scalar = Point.scalar()
        assert scalar.ndim() == 0
        assert scalar.coords == ()
        assert scalar == Point.zeros(0)

    def test_from_sequence(self) -> None:
        """list, tuple и range дают одну и ту же точку."""
        expected = Point.of(1, 2, 3)
        assert Point.from_sequence([1, 2, 3]) == expected
        assert Point.from_sequence((1, 2, 3)) == expected
        assert Point.from_sequence(range(1, 4)) == expected
        assert Point([1, 2, 3]) == expected
        assert Point(coords=[1, 2, 3]) == expected

    def test_roundtrip_through_sequence(self) -> None:
        """Point.from_sequence(tuple(p)) == p."""
        for point in (Point.scalar(), Point.of(-4), Point.of(3, -1, 0, 9)):
            assert Point.from_sequence(tuple(point)) == point
            assert Point.from_sequence(point.to_tuple()) == point

    def test_non_integer_coordinates_rejected(self) -> None:
        """float и строки никогда не приводятся к координатам."""
        with pytest.raises(TypeError, match="integers"):
            Point([1.5, 2])
        with pytest.raises(TypeError, match="integers"):
            Point(["1"])
        with pytest.raises(TypeError):
            Point("12")

    def test_immutable(self) -> None:
        """Присваивание coords запрещено (frozen модель)."""
        point = Point.of(1, 2)
        with pytest.raises(ValidationError):
            point.coords = (3, 4)

    def test_hashable(self) -> None:
        """Равные точки имеют равный hash и работают как ключи dict."""
        table = {Point.of(1, 2): "a"}
        assert table[Point([1, 2])] == "a"


# =============================================================================
# ТЕСТЫ: Доступ
# =============================================================================


class TestAccess:
    """Тесты индексации, итерации и работы с измерениями."""

    def test_indexing(self) -> None:
        """point[i] возвращает i-ю координату."""
        point = Point.of(1, 2, 3)
        assert point[0] == 1
        assert point[1] == 2
        assert point[2] == 3
        assert point[-1] == 3

    def test_index_out_of_range(self) -> None:
        """Индекс вне диапазона: fail fast."""
        with pytest.raises(IndexError):
            Point.of(1, 2, 3)[3]
        with pytest.raises(IndexError):
            Point.scalar()[0]

    def test_iteration(self) -> None:
        """Итерация выдаёт координаты по порядку."""
        assert list(Point.of(4, 5, 6)) == [4, 5, 6]

    def test_resolve_dim(self) -> None:
        """Отрицательные индексы измерений отсчитываются с конца."""
        point = Point.of(1, 2, 3)
        assert point.resolve_dim(0) == 0
        assert point.resolve_dim(-1) == 2
        with pytest.raises(IndexError):
            point.resolve_dim(3)
        with pytest.raises(IndexError):
            point.resolve_dim(-4)

    def test_permute(self) -> None:
        """permute переставляет координаты."""
        point = Point.of(1, 2, 3)
        assert point.permute([2, 0, 1]) == Point.of(3, 1, 2)
        assert point.permute([-1, 0, 1]) == Point.of(3, 1, 2)

    def test_permute_rejects_non_permutation(self) -> None:
        """Повторы и пропуски измерений отклоняются."""
        with pytest.raises(PreconditionViolation, match="invalid permutation"):
            Point.of(1, 2, 3).permute([0, 0, 1])
        with pytest.raises(PreconditionViolation):
            Point.of(1, 2, 3).permute([0, 1])

    def test_add_dims(self) -> None:
        """add_dims вставляет нулевые координаты."""
        point = Point.of(1, 2)
        assert point.add_dims(0, 1) == Point.of(0, 1, 2)
        assert point.add_dims(1, 2) == Point.of(1, 0, 0, 2)
        assert point.add_dims(2, 1) == Point.of(1, 2, 0)
        assert point.add_dims(-1, 1) == Point.of(1, 2, 0)
        with pytest.raises(IndexError):
            point.add_dims(3, 1)


# =============================================================================
# ТЕСТЫ: Арифметика
# =============================================================================


class TestArithmetic:
    """Тесты поэлементных операторов."""

    @pytest.fixture
    def p1(self) -> Point:
        return Point.of(1, 2, 3)

    @pytest.fixture
    def p2(self) -> Point:
        return Point.of(4, 5, 6)

    def test_add(self, p1: Point, p2: Point) -> None:
        """Point + Point, скаляр и последовательность."""
        assert p1 + p2 == Point.of(5, 7, 9)
        assert p1 + 1 == Point.of(2, 3, 4)
        assert 1 + p1 == Point.of(2, 3, 4)
        assert p1 + [1, 2, 3] == Point.of(2, 4, 6)
        assert [1, 2, 3] + p1 == Point.of(2, 4, 6)
        assert (1, 2, 3) + p1 == Point.of(2, 4, 6)

    def test_sub(self, p1: Point, p2: Point) -> None:
        """Вычитание сохраняет порядок операндов для скаляров и последовательностей."""
        assert p1 - p2 == Point.of(-3, -3, -3)
        assert p1 - 1 == Point.of(0, 1, 2)
        assert 1 - p1 == Point.of(0, -1, -2)
        assert p1 - [1, 2, 3] == Point.of(0, 0, 0)
        assert [3, 3, 3] - p1 == Point.of(2, 1, 0)

    def test_mul(self, p1: Point, p2: Point) -> None:
        """Умножение."""
        assert p1 * p2 == Point.of(4, 10, 18)
        assert p1 * 2 == Point.of(2, 4, 6)
        assert 2 * p1 == Point.of(2, 4, 6)
        assert p1 * [1, 2, 3] == Point.of(1, 4, 9)
        assert [1, 2, 3] * p1 == Point.of(1, 4, 9)

    def test_div(self, p1: Point, p2: Point) -> None:
        """Целочисленное деление."""
        assert p1 / p2 == Point.of(0, 0, 0)
        assert p1 / 2 == Point.of(0, 1, 1)
        assert 2 / p1 == Point.of(2, 1, 0)
        assert p1 / [1, 2, 3] == Point.of(1, 1, 1)
        assert p1 // 2 == Point.of(0, 1, 1)

    def test_div_truncates_toward_zero(self) -> None:
        """-7 / 2 == -3, а не -4."""
        assert Point.of(-7, 7, -7) / 2 == Point.of(-3, 3, -3)
        assert Point.of(7) / -2 == Point.of(-3)

    def test_rem(self, p1: Point, p2: Point) -> None:
        """Остаток."""
        assert p1 % p2 == Point.of(1, 2, 3)
        assert p1 % 2 == Point.of(1, 0, 1)
        assert 2 % p1 == Point.of(0, 0, 2)
        assert p1 % [1, 2, 3] == Point.of(0, 0, 0)

    def test_rem_takes_sign_of_dividend(self) -> None:
        """-7 % 2 == -1; 7 % -2 == 1."""
        assert Point.of(-7, 7) % 2 == Point.of(-1, 1)
        assert Point.of(7) % -2 == Point.of(1)

    def test_division_by_zero(self, p1: Point) -> None:
        """Деление на ноль: fail fast."""
        with pytest.raises(ZeroDivisionError):
            p1 / 0
        with pytest.raises(ZeroDivisionError):
            p1 % Point.of(1, 0, 1)

    def test_neg_and_abs(self, p1: Point) -> None:
        """Унарные операторы."""
        assert -p1 == Point.of(-1, -2, -3)
        assert abs(-p1) == p1
        assert +p1 == p1

    def test_dimension_mismatch(self, p1: Point) -> None:
        """Point с Point и Point с последовательностью требуют равного ndim."""
        with pytest.raises(DimensionMismatchError, match="add: dimension mismatch: 3 \\+ 2"):
            p1 + Point.of(1, 2)
        with pytest.raises(DimensionMismatchError):
            p1 * [1, 2]
        with pytest.raises(DimensionMismatchError):
            [1, 2] - p1

    def test_scalar_broadcast_skips_dimension_check(self) -> None:
        """Скаляр broadcast-ится на любую размерность, включая 0."""
        assert Point.scalar() + 5 == Point.scalar()
        assert Point.of(1) * 3 == Point.of(3)

    def test_unsupported_operand(self, p1: Point) -> None:
        """Строки, float и Range не являются операндами."""
        with pytest.raises(TypeError):
            p1 + "abc"
        with pytest.raises(TypeError):
            p1 * 1.5
        with pytest.raises(TypeError):
            p1 + Range.of_shape(1, 1, 1)

    @pytest.mark.parametrize("n", [0, 1, 2, 5])
    def test_identities(self, n: int) -> None:
        """zeros + ones == full(1); ones * full(k) == full(k)."""
        assert Point.zeros(n) + Point.ones(n) == Point.full(n, 1)
        assert Point.ones(n) * Point.full(n, 7) == Point.full(n, 7)

    def test_operands_unchanged(self, p1: Point, p2: Point) -> None:
        """Арифметика возвращает новые точки."""
        _ = p1 + p2
        assert p1 == Point.of(1, 2, 3)
        assert p2 == Point.of(4, 5, 6)


# =============================================================================
# ТЕСТЫ: Равенство и порядок
# =============================================================================


class TestOrdering:
    """Тесты равенства и частичного порядка доминирования."""

    def test_scalar_ordering(self) -> None:
        """Скалярная точка равна самой себе."""
        scalar = Point.scalar()
        assert not scalar < scalar
        assert scalar <= scalar
        assert not scalar > scalar
        assert scalar >= scalar
        assert scalar == scalar
        assert not scalar != scalar

    def test_dominance(self) -> None:
        """Точка, меньшая по всем измерениям, меньше."""
        z = Point.zeros(3)
        a = Point.of(1, 2, 3)
        assert z < a
        assert z <= a
        assert not z > a
        assert not z >= a
        assert z != a
        assert a > z

    def test_equal_is_not_strict(self) -> None:
        """Равные точки удовлетворяют <= и >=, но не < и >."""
        z = Point.zeros(3)
        assert not z < z
        assert z <= z
        assert not z > z
        assert z >= z

    def test_mixed_equal_and_less(self) -> None:
        """EQUAL измерения уступают остальным."""
        assert Point.of(0, 1, 5) < Point.of(0, 2, 5)
        assert Point.of(3, 3, 3) >= Point.of(3, 2, 3)

    def test_incomparable(self) -> None:
        """Меньше по одной оси и больше по другой: все отношения ложны."""
        a = Point.of(1, 2, 3)
        b = Point.of(0, 3, 4)
        assert not a < b
        assert not a <= b
        assert not a > b
        assert not a >= b
        assert a != b
        assert not a == b

    def test_incomparable_stays_incomparable(self) -> None:
        """LESS, затем GREATER, затем EQUAL сворачивается в None."""
        assert Point.of(0, 1, 2).partial_compare(Point.of(1, 0, 2)) is None

    def test_partial_compare(self) -> None:
        """partial_compare возвращает свёрнутый Ordering."""
        assert Point.of(1, 2).partial_compare(Point.of(1, 2)) is Ordering.EQUAL
        assert Point.of(1, 2).partial_compare(Point.of(1, 3)) is Ordering.LESS
        assert Point.of(2, 2).partial_compare([1, 2]) is Ordering.GREATER

    def test_cross_dimension_comparison_fails(self) -> None:
        """Сравнение разных ndim нарушает контракт, а не возвращает False."""
        with pytest.raises(DimensionMismatchError):
            Point.of(1) == Point.of(1, 2)
        with pytest.raises(DimensionMismatchError):
            Point.of(1) < Point.of(1, 2)
        with pytest.raises(DimensionMismatchError):
            Point.of(1).partial_compare(Point.of(1, 2))

    def test_equality_with_sequences(self) -> None:
        """Точки равны совпадающим list и tuple."""
        assert Point.of(1, 2) == [1, 2]
        assert Point.of(1, 2) == (1, 2)
        assert Point.of(1, 2) != "z[1, 2]"

    def test_comparison_coerces_like_arithmetic(self) -> None:
        """Любой iterable, принятый арифметикой, принимается и сравнением."""
        point = Point.of(0, 1, 2)
        assert point + range(3) == Point.of(0, 2, 4)
        assert point == range(3)
        assert point <= range(1, 4)
        assert point.partial_compare(range(3)) is Ordering.EQUAL
        with pytest.raises(DimensionMismatchError):
            point == range(2)

    def test_range_is_not_a_point_operand(self) -> None:
        """Point и Range никогда не равны."""
        assert Point.of(0, 0) != Range.of_shape(1, 1)

    def test_minimum_maximum(self) -> None:
        """Покоординатные min и max."""
        a = Point.of(1, 5, 3)
        b = Point.of(4, 2, 3)
        assert minimum(a, b) == Point.of(1, 2, 3)
        assert maximum(a, b) == Point.of(4, 5, 3)
        with pytest.raises(DimensionMismatchError):
            minimum(a, [1, 2])


# =============================================================================
# ТЕСТЫ: Текстовая форма
# =============================================================================


class TestTextForm:
    """Тесты repr/str и разбора."""

    def test_display(self) -> None:
        """z[c0, c1, ...]."""
        point = Point.of(1, 2, 3)
        assert str(point) == "z[1, 2, 3]"
        assert repr(point) == "z[1, 2, 3]"
        assert f"{Point.scalar()}" == "z[]"

    def test_parse(self) -> None:
        """parse обратен str."""
        for point in (Point.scalar(), Point.of(-1), Point.of(1, -2, 30)):
            assert Point.parse(str(point)) == point
        assert Point.parse("  z[ 4 ,5 ]") == Point.of(4, 5)

    def test_parse_rejects_garbage(self) -> None:
        """Некорректный текст вызывает ParseError (это ValueError)."""
        with pytest.raises(ParseError):
            Point.parse("[1, 2]")
        with pytest.raises(ParseError):
            Point.parse("z[1, x]")
        with pytest.raises(ValueError):
            Point.parse("zr[1;2]")
