import json
import logging

logger = logging.getLogger(__name__)


### Base classes, modelled on PEP-249 ###
# https://peps.python.org/pep-0249/#exceptions
class Error(Exception):
    """Base class for all ws4sqlite client exceptions.
    `message`: An optional user-friendly error message. It should be short, actionable and stable
    `context`: Optional extra context about the error. MUST be JSON serializable
    """

    def __init__(self, message=None, context=None, *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.context = context or {}

    def __str__(self):
        return str(self.message)

    def message_with_context(self):
        return str(self.message) + ": " + json.dumps(self.context, default=str)


class InterfaceError(Error):
    pass


class DatabaseError(Error):
    pass


class OperationalError(DatabaseError):
    pass


### Custom error classes ###
class InvalidArgumentError(InterfaceError, ValueError):
    """Thrown when a builder receives an illegal argument, for example an empty
    SQL text, an out-of-range compression level or an option that is not legal
    for the kind of the current sub-request (a decoder on a statement, a batch
    on a query...)."""

    pass


class InvalidStateError(InterfaceError):
    """Thrown when a builder method is called in a state where it makes no sense,
    for example finalizing an empty request or reusing a consumed builder."""

    pass


class InvalidServerResponseError(OperationalError):
    """Thrown if the server answers 200 but the body can't be aligned with the
    request that was sent (missing "results", or a different number of items).
    Its context may have the following keys:
    "expected": The number of sub-requests that were sent
    "received": The number of result items that came back
    """

    pass


class ServerOperationError(DatabaseError):
    """Thrown if the server rejects the whole batch with a non-200 status.

    `req_idx` is the 0-based index of the failing sub-request, or -1 for a
    general failure that can't be attributed to a single sub-request.
    `code` is the HTTP code of the error (400, 401, 404 or 500).
    Its context will have the following keys:
    "req-idx": Same as `req_idx`
    "http-code": Same as `code`
    """

    def __init__(self, message, req_idx: int, code: int, **kwargs):
        context = {"req-idx": req_idx, "http-code": code}
        super().__init__(message, context, **kwargs)
        self.req_idx = req_idx
        self.code = code
