"""odatable: OData query building and paginated, sortable remote collections."""

from .controller import ControllerState, PagedSortedController
from .envelope import Envelope, parse_collection, parse_entity, parse_envelope
from .errors import QueryOptionsError, TransportError
from .expressions import F
from .query import ExpandOption, Query, QueryOptions, compile_query
from .references import action, entity_key, expand_with_options, function
from .renderer import Column, TableView, pagination_summary, render_headers, render_table
from .state import PageState, SortState
from .transport import HttpxTransport, connect, get_transport
