"""Function call expression."""

from ._bases import ArgumentedExpression


class FunctionExpression(ArgumentedExpression):
    """Function call: ``symbol(args...)`` (e.g. ``contains(Name, 'x')``, ``tolower(Email)``)."""

    @property
    def odata(self) -> str:
        if not self.symbol:
            raise ValueError("FunctionExpression must have a symbol")
        return self.symbol + "(" + ", ".join(map(self._argument_to_odata, self.arguments)) + ")"
