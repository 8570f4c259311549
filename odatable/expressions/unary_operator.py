"""Unary operator expression."""

from ._bases import ArgumentedExpression


class UnaryOperatorExpression(ArgumentedExpression):
    """Single-argument prefix operator; the operand is parenthesized (``not (Deleted eq true)``)."""

    @property
    def odata(self) -> str:
        if len(self.arguments) != 1:
            raise ValueError("UnaryOperatorExpression must have exactly one argument")
        return f"{self.symbol} ({self._argument_to_odata(self.arguments[0])})"
