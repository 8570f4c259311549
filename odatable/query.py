"""Query options and query-string compilation.

``compile_query`` turns a ``QueryOptions`` (or a plain mapping of the same
names) into a query string such as ``?$select=Id,Name&$filter=Active eq true&$top=10``.
Options are always emitted in the same order: select, expand, filter, orderby,
skip, top, count, search. ``Query`` is a fluent, immutable builder on top of it.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Optional, Union

import pydantic
from pydantic import BaseModel, Field

from .errors import QueryOptionsError
from .expressions import Expression, FieldExpression, OrderExpression
from .filters import and_

logger = logging.getLogger("odatable")

# Django-style lookup -> Expression method for Query.where(**kwargs).
_WHERE_LOOKUP_MAP: dict[str, str] = {
    "exact": "__eq__",
    "eq": "__eq__",
    "ne": "__ne__",
    "lt": "__lt__",
    "lte": "__le__",
    "le": "__le__",
    "gt": "__gt__",
    "gte": "__ge__",
    "ge": "__ge__",
    "in": "in_",
    "isnull": "_isnull",
    "contains": "contains",
    "startswith": "startswith",
    "endswith": "endswith",
}


class ExpandOption(BaseModel):
    """One $expand item, optionally with nested options: ``Members($filter=Role eq 'admin';$select=Id)``."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    options: Optional[QueryOptions] = None

    @property
    def odata(self) -> str:
        from .references import expand_with_options
        return expand_with_options(self.name, self.options)

    def __str__(self) -> str:
        return self.odata


ExpandItem = Union[str, ExpandOption]
OrderItem = Union[str, OrderExpression]


class QueryOptions(BaseModel):
    """Structured query options.

    ``None`` means "absent". ``skip`` and ``top`` are emitted whenever they are
    set, including ``0``; ``count`` only when true.
    """

    model_config = {"arbitrary_types_allowed": True, "extra": "forbid", "validate_assignment": True}

    select: Optional[list[str]] = None
    expand: Optional[Union[ExpandItem, list[ExpandItem]]] = None
    filter: Optional[Union[Expression, str]] = None
    orderby: Optional[Union[OrderItem, list[OrderItem]]] = None
    skip: Optional[int] = Field(default=None, ge=0)
    top: Optional[int] = Field(default=None, ge=0)
    count: Optional[bool] = None
    search: Optional[str] = None


# Resolve the forward reference between ExpandOption and QueryOptions
ExpandOption.model_rebuild()
QueryOptions.model_rebuild()


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _iter_query_parts(options: QueryOptions) -> Iterator[str]:
    if options.select:
        yield "$select=" + ",".join(options.select)
    expand = [str(item) for item in _as_list(options.expand) if str(item)]
    if expand:
        yield "$expand=" + ",".join(expand)
    # already escaped by the builders: inserted verbatim
    if options.filter is not None and str(options.filter):
        yield "$filter=" + str(options.filter)
    orderby = [str(item) for item in _as_list(options.orderby) if str(item)]
    if orderby:
        yield "$orderby=" + ",".join(orderby)
    if options.skip is not None:
        yield f"$skip={options.skip}"
    if options.top is not None:
        yield f"$top={options.top}"
    if options.count:
        yield "$count=true"
    if options.search:
        yield "$search=" + options.search


def to_query_options(options: QueryOptions | Mapping[str, Any] | None) -> QueryOptions:
    """Validate ``options`` into a QueryOptions.

    Raises:
        QueryOptionsError: if an option is unknown or has an invalid value (e.g. ``top=-1``).
    """
    if options is None:
        return QueryOptions()
    if isinstance(options, QueryOptions):
        return options
    if not isinstance(options, Mapping):
        raise QueryOptionsError(f"Query options must be a QueryOptions or a mapping; got {type(options)}")
    try:
        return QueryOptions.model_validate(dict(options))
    except pydantic.ValidationError as error:
        raise QueryOptionsError(str(error)) from error


def compile_query(options: QueryOptions | Mapping[str, Any] | None = None, separator: str = "&") -> str:
    """Compile options to a query string.

    Args:
        options: QueryOptions or a mapping with the same keys.
        separator: Joins the options; ``&`` at top level, ``;`` inside $expand.

    Returns:
        ``"?"`` followed by the options, or ``""`` if no option is present.
    """
    parts = list(_iter_query_parts(to_query_options(options)))
    if not parts:
        return ""
    return "?" + separator.join(parts)


class Query(BaseModel):
    """Fluent query builder for one entity set.

    Every method returns a new Query; the receiver is never modified::

        Query(entity_set="Members").where(Role="admin").order_by(F.Name.desc).limit(10).path
        # "Members?$filter=Role eq 'admin'&$orderby=Name desc&$top=10"
    """

    model_config = {"arbitrary_types_allowed": True}

    entity_set: str
    select_fields: list[str] = Field(default_factory=list)
    expand_items: list[ExpandItem] = Field(default_factory=list)
    where_expressions: list[Union[Expression, str]] = Field(default_factory=list)
    """Combined with ``and``."""
    order_by_expressions: list[OrderItem] = Field(default_factory=list)
    offset_value: Optional[int] = Field(default=None, ge=0)
    limit_value: Optional[int] = Field(default=None, ge=0)
    count_value: bool = False
    search_text: Optional[str] = None

    def clone_query_with(self, **changes) -> Query:
        """Return a new Query with the same state except for the given overrides.

        Raises:
            QueryOptionsError: if an override is invalid (e.g. a negative offset).
        """
        data = {
            "entity_set": self.entity_set,
            "select_fields": list(self.select_fields),
            "expand_items": list(self.expand_items),
            "where_expressions": list(self.where_expressions),
            "order_by_expressions": list(self.order_by_expressions),
            "offset_value": self.offset_value,
            "limit_value": self.limit_value,
            "count_value": self.count_value,
            "search_text": self.search_text,
        }
        for key, value in changes.items():
            if key not in data:
                raise AttributeError(f"Query has no attribute {key!r}")
            data[key] = value
        try:
            return type(self)(**data)
        except pydantic.ValidationError as error:
            raise QueryOptionsError(str(error)) from error

    def _where_kwargs_to_expressions(self, kwargs: dict[str, Any]) -> list[Expression]:
        """Convert ``where(Field__lookup=value)`` into expressions (and-ed by the caller).

        Double underscores before the lookup are navigation: ``Club__Name="x"`` is ``Club/Name eq 'x'``.
        """
        result: list[Expression] = []
        for key, value in kwargs.items():
            parts = key.split("__")
            if len(parts) > 1 and parts[-1] in _WHERE_LOOKUP_MAP:
                lookup = parts[-1]
                parts = parts[:-1]
            else:
                lookup = "exact"
            if not all(parts):
                raise ValueError(f"where kwargs key {key!r} must include a field path (e.g. Name__contains or Name)")
            field = FieldExpression(path="/".join(parts))
            result.append(getattr(field, _WHERE_LOOKUP_MAP[lookup])(value))
        return result

    def select(self, *fields: str) -> Query:
        """Add fields to $select, keeping order and dropping duplicates."""
        selected = list(self.select_fields)
        for field in fields:
            if field not in selected:
                selected.append(field)
        return self.clone_query_with(select_fields=selected)

    def expand(self, name: str, options: QueryOptions | Mapping[str, Any] | None = None) -> Query:
        """Add one $expand item, with optional nested query options."""
        item: ExpandItem = name
        if options is not None:
            item = ExpandOption(name=name, options=to_query_options(options))
        return self.clone_query_with(expand_items=self.expand_items + [item])

    def where(self, *statements: Expression | str, **kwargs: Any) -> Query:
        """Add filters: expressions, precompiled filter strings and/or ``Field__lookup=value`` kwargs.

        Examples:
            where(F.Age > 18)
            where(Name__contains="an", Active=True)
        """
        new_expressions = list(self.where_expressions) + list(statements)
        if kwargs:
            new_expressions.extend(self._where_kwargs_to_expressions(kwargs))
        return self.clone_query_with(where_expressions=new_expressions)

    def filter(self, *statements: Expression | str, **kwargs: Any) -> Query:
        """Alias for where()."""
        return self.where(*statements, **kwargs)

    def order_by(self, *orders: str | FieldExpression | OrderExpression) -> Query:
        """Append $orderby items: ``F.Name.desc``, ``F.Name`` (ascending) or ``"Name desc"``."""
        order_by_expressions = list(self.order_by_expressions)
        for order in orders:
            if isinstance(order, FieldExpression):
                order = order.asc
            if not isinstance(order, (str, OrderExpression)):
                raise TypeError(f"order_by requires str, FieldExpression or OrderExpression; got {type(order)}")
            order_by_expressions.append(order)
        return self.clone_query_with(order_by_expressions=order_by_expressions)

    def offset(self, offset: int) -> Query:
        """Set $skip."""
        return self.clone_query_with(offset_value=offset)

    def limit(self, limit: int) -> Query:
        """Set $top."""
        return self.clone_query_with(limit_value=limit)

    def with_count(self, count: bool = True) -> Query:
        """Request the total count ($count=true)."""
        return self.clone_query_with(count_value=count)

    def search(self, text: Optional[str]) -> Query:
        return self.clone_query_with(search_text=text)

    @property
    def filter_expression(self) -> Optional[Expression | str]:
        """All where() statements combined with ``and``; a single statement is returned as-is."""
        if not self.where_expressions:
            return None
        if len(self.where_expressions) == 1:
            return self.where_expressions[0]
        return and_(*self.where_expressions)

    def options(self) -> QueryOptions:
        return QueryOptions(
            select=self.select_fields or None,
            expand=self.expand_items or None,
            filter=self.filter_expression,
            orderby=self.order_by_expressions or None,
            skip=self.offset_value,
            top=self.limit_value,
            count=self.count_value,
            search=self.search_text,
        )

    @property
    def query_string(self) -> str:
        return compile_query(self.options())

    @property
    def path(self) -> str:
        """Entity set followed by the query string, as handed to the transport."""
        path = self.entity_set + self.query_string
        logger.debug("Compiled query path %s", path)
        return path

    def __str__(self) -> str:
        return self.path
