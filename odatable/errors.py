"""Exception types raised by odatable."""


class QueryOptionsError(ValueError):
    """Malformed query options (e.g. negative ``skip``/``top``, unknown option name).

    Raised synchronously by the compiler, before any request is made.
    """


class TransportError(Exception):
    """The transport collaborator failed to produce a response payload.

    Controllers catch it (and any other exception from the transport) and
    expose its message as their ``error`` state.
    """
