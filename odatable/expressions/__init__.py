"""Filter expression types.

This module provides a tree of expression types used to build $filter and
$orderby values. Field references come from ``F`` (``F.Name``, ``F("Club/Name")``);
combine them with operators (``==``, ``>``, ``.in_(...)``, ``.contains(...)``)
and logic (``&``, ``|``, ``~``). Each expression has an ``.odata`` property
(also its ``str()``) holding the escaped filter text.
"""

from ._bases import ArgumentedExpression, Expression, RawExpression, as_expression
from .field import F, FieldExpression
from .function import FunctionExpression
from .nary_operator import NaryOperatorExpression
from .order import OrderExpression
from .unary_operator import UnaryOperatorExpression

__all__ = [
    "ArgumentedExpression",
    "Expression",
    "F",
    "FieldExpression",
    "FunctionExpression",
    "NaryOperatorExpression",
    "OrderExpression",
    "RawExpression",
    "UnaryOperatorExpression",
    "as_expression",
]
