"""Filter builder functions.

Each function returns an Expression whose ``str()`` is the filter text::

    and_(eq("Active", True), gt("Age", 18))
    # (Active eq true) and (Age gt 18)

Values are escaped once, when the leaf comparison is built. Operands of
``and_``/``or_``/``not_`` may be expressions or already compiled filter strings;
either way they are inserted unchanged.
"""

from typing import Any, Iterable

from .expressions import (
    Expression,
    FieldExpression,
    FunctionExpression,
    NaryOperatorExpression,
    UnaryOperatorExpression,
    as_expression,
)


def _field(field: str | FieldExpression) -> FieldExpression:
    if isinstance(field, FieldExpression):
        return field
    if not field:
        raise ValueError("Field name must not be empty")
    return FieldExpression(path=field)


def eq(field: str | FieldExpression, value: Any) -> Expression:
    """``Name eq 'test'``, ``Age eq 25``, ``Active eq true``."""
    return _field(field) == value


def ne(field: str | FieldExpression, value: Any) -> Expression:
    return _field(field) != value


def gt(field: str | FieldExpression, value: Any) -> Expression:
    return _field(field) > value


def ge(field: str | FieldExpression, value: Any) -> Expression:
    return _field(field) >= value


def lt(field: str | FieldExpression, value: Any) -> Expression:
    return _field(field) < value


def le(field: str | FieldExpression, value: Any) -> Expression:
    return _field(field) <= value


def _logical(symbol: str, operands: tuple[Any, ...]) -> Expression:
    if not operands:
        raise ValueError(f"{symbol}_ requires at least one operand")
    return NaryOperatorExpression(
        symbol=symbol,
        arguments=tuple(map(as_expression, operands)),
        parenthesize=True,
    )


def and_(*operands: Expression | str) -> Expression:
    """``(A) and (B) and ...``; each operand is parenthesized."""
    return _logical("and", operands)


def or_(*operands: Expression | str) -> Expression:
    """``(A) or (B) or ...``; each operand is parenthesized."""
    return _logical("or", operands)


def not_(operand: Expression | str) -> Expression:
    """``not (A)``."""
    return UnaryOperatorExpression(symbol="not", arguments=(as_expression(operand),))


def contains(field: str | FieldExpression, value: str) -> Expression:
    """``contains(Name, 'value')``."""
    return FunctionExpression(symbol="contains", arguments=(_field(field), value))


def startswith(field: str | FieldExpression, value: str) -> Expression:
    return FunctionExpression(symbol="startswith", arguments=(_field(field), value))


def endswith(field: str | FieldExpression, value: str) -> Expression:
    return FunctionExpression(symbol="endswith", arguments=(_field(field), value))


def is_null(field: str | FieldExpression) -> Expression:
    """``DeletedAt eq null``."""
    return _field(field).is_null()


def is_not_null(field: str | FieldExpression) -> Expression:
    """``CreatedAt ne null``."""
    return _field(field).is_not_null()


def in_(field: str | FieldExpression, values: Iterable[Any]) -> Expression:
    """``Status in ('active', 'pending')``; elements are quoted like ``eq`` values."""
    return _field(field).in_(values)


__all__ = [
    "and_",
    "contains",
    "endswith",
    "eq",
    "ge",
    "gt",
    "in_",
    "is_not_null",
    "is_null",
    "le",
    "lt",
    "ne",
    "not_",
    "or_",
    "startswith",
]
