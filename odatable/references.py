"""Resource paths for entities, bound/unbound operations and nested $expand items."""

from __future__ import annotations

from typing import Any, Mapping, Optional, TYPE_CHECKING

from .literals import format_literal, quote_string

if TYPE_CHECKING:
    from .query import QueryOptions


def entity_key(entity_set: str, key: str) -> str:
    """``Clubs('abc-123')``."""
    return f"{entity_set}({quote_string(str(key))})"


def action(entity_set: str, key: str, name: str) -> str:
    """Bound action: ``Clubs('abc-123')/Leave``."""
    return f"{entity_key(entity_set, key)}/{name}"


def function(
    entity_set: Optional[str],
    key: Optional[str],
    name: str,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """Bound or unbound function call.

    With both ``entity_set`` and ``key`` the function is bound to that entity
    (``Events('e1')/ExpandRecurrence``); otherwise it is unbound (``GetDashboardNews``).
    Parameters are appended with the same literal rules as filter values:
    ``SearchGlobal(query='test')``.
    """
    url = f"{entity_key(entity_set, key)}/{name}" if entity_set and key else name
    if params:
        url += "(" + ",".join(f"{k}={format_literal(v)}" for k, v in params.items()) + ")"
    return url


def expand_with_options(name: str, options: QueryOptions | Mapping[str, Any] | None = None) -> str:
    """``Members`` or ``Members($filter=Role eq 'admin';$select=Id,Name)``.

    Nested options are separated by ``;``; options that compile to nothing give the bare name.
    """
    if options is None:
        return name
    from .query import compile_query
    nested = compile_query(options, separator=";")
    if not nested:
        return name
    return f"{name}({nested[1:]})"
