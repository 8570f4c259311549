"""Field expression for referencing a property (or navigation path) of an entity."""

from typing import Any

from ._bases import Expression


class FieldExpression(Expression):
    """Reference to a single property, e.g. ``Name`` or ``Club/Name``.

    Field names are written as-is; only values compared against them are escaped.
    """

    path: str

    @property
    def odata(self) -> str:
        return self.path

    @property
    def asc(self):
        """Order by this field ascending (for ``order_by(...)``)."""
        from .order import OrderExpression
        return OrderExpression(field_expression=self, desc=False)

    @property
    def desc(self):
        """Order by this field descending (for ``order_by(...)``)."""
        from .order import OrderExpression
        return OrderExpression(field_expression=self, desc=True)

    def __truediv__(self, other: Any):
        """Navigate to a sub-property: ``F.Club / "Name"`` is ``Club/Name``."""
        other_path = other.path if isinstance(other, FieldExpression) else str(other)
        return FieldExpression(path=f"{self.path}/{other_path}")


class _FieldFactory:
    """``F.Name`` or ``F("Club/Name")`` returns a FieldExpression."""

    __slots__ = ()

    def __call__(self, path: str) -> FieldExpression:
        if not path:
            raise ValueError("Field path must not be empty")
        return FieldExpression(path=path)

    def __getattr__(self, name: str) -> FieldExpression:
        if name.startswith("_"):
            raise AttributeError(name)
        return FieldExpression(path=name)


F = _FieldFactory()
