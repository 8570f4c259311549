"""$orderby expression."""

from ._bases import Expression
from .field import FieldExpression


class OrderExpression(Expression):
    """One $orderby item: a field and ascending or descending."""

    desc: bool = False
    field_expression: FieldExpression

    @property
    def direction(self) -> str:
        return "desc" if self.desc else "asc"

    @property
    def odata(self) -> str:
        """Field with ``asc`` or ``desc`` suffix (e.g. ``CreatedAt desc``)."""
        return f"{self.field_expression.odata} {self.direction}"
