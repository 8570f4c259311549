"""Base expression types for filter expression trees."""

from __future__ import annotations
from typing import Any, Iterable, Tuple

from pydantic import BaseModel, Field as PydanticField

from ..literals import format_literal


class Expression(BaseModel):
    """Base type for all filter expression nodes.

    Subclasses must implement the ``odata`` property. ``str(expression)`` is the
    same text, so an expression can be used wherever a filter string is expected.
    Literals are only ever formatted when a leaf is rendered; rendering a parent
    node inserts its children's text unchanged.
    """

    model_config = {"arbitrary_types_allowed": True}

    @property
    def odata(self) -> str:
        """Filter text for this expression."""
        raise NotImplementedError("Subclasses must implement `odata` property")

    def __str__(self) -> str:
        return self.odata

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.odata!r})"

    def in_(self, values: Iterable[Any]):
        """Build an ``in`` expression (e.g. ``F.Status.in_(["active", "pending"])``)."""
        from .nary_operator import NaryOperatorExpression
        values = tuple(values)
        if not values:
            raise ValueError("in_ requires at least one value")
        return NaryOperatorExpression(symbol="in", arguments=(self, values))

    def is_null(self):
        """Build ``<expr> eq null``."""
        return self == None  # noqa: E711

    def is_not_null(self):
        """Build ``<expr> ne null``."""
        return self != None  # noqa: E711

    def _isnull(self, isnull: bool):
        """is_null() or is_not_null() according to the boolean (for where(Field__isnull=True/False))."""
        return self.is_null() if isnull else self.is_not_null()

    def __invert__(self):
        """Build a ``not`` expression."""
        from .unary_operator import UnaryOperatorExpression
        return UnaryOperatorExpression(symbol="not", arguments=(self,))

    def __and__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="and", arguments=(self, as_expression(other)), parenthesize=True)

    def __rand__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="and", arguments=(as_expression(other), self), parenthesize=True)

    def __or__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="or", arguments=(self, as_expression(other)), parenthesize=True)

    def __ror__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="or", arguments=(as_expression(other), self), parenthesize=True)

    def __eq__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="eq", arguments=(self, other))

    def __ne__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="ne", arguments=(self, other))

    def __lt__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="lt", arguments=(self, other))

    def __le__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="le", arguments=(self, other))

    def __gt__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="gt", arguments=(self, other))

    def __ge__(self, other: Any):
        from .nary_operator import NaryOperatorExpression
        return NaryOperatorExpression(symbol="ge", arguments=(self, other))

    def contains(self, substring: str):
        """Build ``contains(<expr>, '<substring>')``."""
        from .function import FunctionExpression
        return FunctionExpression(symbol="contains", arguments=(self, substring))

    def startswith(self, prefix: str):
        """Build ``startswith(<expr>, '<prefix>')``."""
        from .function import FunctionExpression
        return FunctionExpression(symbol="startswith", arguments=(self, prefix))

    def endswith(self, suffix: str):
        """Build ``endswith(<expr>, '<suffix>')``."""
        from .function import FunctionExpression
        return FunctionExpression(symbol="endswith", arguments=(self, suffix))

    def tolower(self):
        from .function import FunctionExpression
        return FunctionExpression(symbol="tolower", arguments=(self,))

    def toupper(self):
        from .function import FunctionExpression
        return FunctionExpression(symbol="toupper", arguments=(self,))


class RawExpression(Expression):
    """A precompiled fragment, inserted verbatim wherever it is used."""

    text: str

    @property
    def odata(self) -> str:
        return self.text


def as_expression(operand: Any) -> Expression:
    """Return ``operand`` as an Expression; plain strings become RawExpression (never re-escaped)."""
    if isinstance(operand, Expression):
        return operand
    if isinstance(operand, str):
        return RawExpression(text=operand)
    raise TypeError(f"Expected Expression or precompiled filter string; got {type(operand)}")


class ArgumentedExpression(Expression):
    """Base for expressions that have a symbol and a tuple of arguments.

    Used by function calls (e.g. ``contains(Name, 'x')``) and operators (e.g. ``eq``,
    ``and``). Nested expressions render as their own text; anything else is a
    literal and goes through ``format_literal``.
    """

    symbol: str
    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    @staticmethod
    def _argument_to_odata(argument: Any) -> str:
        """Render one argument: an expression's ``odata``, a parenthesized list, or a literal."""
        if isinstance(argument, Expression):
            return argument.odata
        if isinstance(argument, (list, tuple)):
            return "(" + ", ".join(map(format_literal, argument)) + ")"
        return format_literal(argument)
