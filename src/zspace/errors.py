"""
ZSpace Errors: таксономия исключений алгебры решётки

Все нарушения предусловий приводят к fail-fast с одним из классов ниже.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Несовпадение размерностей никогда не исправляется (нет обрезки, нет дополнения)
2. Результат "нет результата" (join, intersection) это None, а не исключение
3. Подклассы ZSpaceError не наследуют ValueError, поэтому проходят через
   валидаторы pydantic без оборачивания в ValidationError
"""


class ZSpaceError(Exception):
    """Корень всех исключений алгебры решётки."""

    pass


class DimensionMismatchError(ZSpaceError):
    """
    Операнды разной размерности переданы в операцию, требующую равной.

    Вызывающий код, комбинирующий значения из независимых источников
    (например, пользовательские shape), должен сам проверить ndim().
    """

    pass


class InvalidBoundsError(ZSpaceError):
    """Range построен с start[i] > end[i] хотя бы по одному измерению."""

    pass


class EmptyRangeError(ZSpaceError):
    """Операции нужна хотя бы одна точка, а Range пуст."""

    pass


class PreconditionViolation(ZSpaceError):
    """Прочие нарушенные предусловия (pivot вне границ, неверный chunk size, ...)."""

    pass


class ParseError(ZSpaceError, ValueError):
    """Некорректный текст z[...] / zr[...]."""

    pass
