"""N-ary operator expression."""

from ._bases import ArgumentedExpression


class NaryOperatorExpression(ArgumentedExpression):
    """N-argument infix operator (e.g. ``eq``, ``in``, ``and``).

    Comparisons render as ``Age gt 18``; logical operators set ``parenthesize``
    and render each operand in parentheses: ``(A eq 1) and (B eq 2)``.
    """

    parenthesize: bool = False

    @property
    def odata(self) -> str:
        if not self.symbol:
            raise ValueError("NaryOperatorExpression must have a symbol")
        if not self.arguments:
            raise ValueError("NaryOperatorExpression must have at least one argument")
        parts = tuple(map(self._argument_to_odata, self.arguments))
        if self.parenthesize:
            parts = tuple(f"({part})" for part in parts)
        return (" " + self.symbol + " ").join(parts)
