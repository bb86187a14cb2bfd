import logging
from typing import Any, List, Mapping, Optional, Union

from ws4sqlite_client.exc import InvalidArgumentError, InvalidStateError
from ws4sqlite_client.models.requests import (
    BatchRequest,
    Decoder,
    Encoder,
    QueryRequest,
    StatementRequest,
    SubRequest,
)
from ws4sqlite_client.parameters import MapBuilder, ParameterMap, to_parameter_map
from ws4sqlite_client.types import SubRequestKind

logger = logging.getLogger(__name__)


def _check(condition: bool, message: str):
    if not condition:
        raise InvalidArgumentError(message)


def _require(condition: bool, message: str):
    if not condition:
        raise InvalidStateError(message)


class _OpenSubRequest:
    """The sub-request currently being configured. Becomes frozen on close."""

    def __init__(self, kind: SubRequestKind, text: str):
        self.kind = kind
        self.text = text
        self.no_fail = False
        self.bindings: List[ParameterMap] = []
        self.encoder: Optional[Encoder] = None
        self.decoder: Optional[Decoder] = None

    def close(self) -> SubRequest:
        if self.kind == SubRequestKind.QUERY:
            return QueryRequest(
                query=self.text,
                values=self.bindings[0] if self.bindings else None,
                decoder=self.decoder,
            )
        return StatementRequest(
            statement=self.text,
            no_fail=self.no_fail,
            values=tuple(self.bindings),
            encoder=self.encoder,
        )


class RequestBuilder:
    """
    A builder for the `BatchRequest` to send with `Client.send`.

    Each `add_query`/`add_statement` call opens a new sub-request and closes
    the previous one for good; the `with_*` methods configure the one that
    is open. `build` closes the last one and consumes the builder.

    Example:
        request = (
            RequestBuilder()
            .add_query("SELECT * FROM TEMP WHERE ID = :id")
            .with_values({"id": 1})
            .add_statement("INSERT INTO TEMP (ID, VAL) VALUES (:id, :val)")
            .with_values(MapBuilder().add("id", 2).add("val", "b"))
            .with_values(MapBuilder().add("id", 3).add("val", "c"))
            .build()
        )

    Not thread-safe: build a request on one thread, then share the result.
    """

    def __init__(self):
        self._closed: List[SubRequest] = []
        self._current: Optional[_OpenSubRequest] = None
        self._consumed = False

    def _check_not_consumed(self):
        _require(not self._consumed, "Request builder already consumed")

    def _open(self, kind: SubRequestKind, text: str) -> "RequestBuilder":
        self._check_not_consumed()
        _check(
            isinstance(text, str) and text != "",
            f"Cannot specify a null or empty {kind.value}",
        )
        if self._current is not None:
            self._closed.append(self._current.close())
        self._current = _OpenSubRequest(kind, text)
        return self

    def add_query(self, query: str) -> "RequestBuilder":
        """Opens a new sub-request for a query, to be configured with the `with_*` methods."""
        return self._open(SubRequestKind.QUERY, query)

    def add_statement(self, statement: str) -> "RequestBuilder":
        """Opens a new sub-request for a statement, to be configured with the `with_*` methods."""
        return self._open(SubRequestKind.STATEMENT, statement)

    def with_no_fail(self) -> "RequestBuilder":
        """Specify that the open statement must not cause a general failure."""
        self._check_not_consumed()
        _require(self._current is not None, "There is no open sub-request")
        _check(
            self._current.kind == SubRequestKind.STATEMENT,
            "Cannot specify noFail for a query",
        )
        self._current.no_fail = True
        return self

    def with_values(
        self, values: Union[MapBuilder, Mapping[str, Any]]
    ) -> "RequestBuilder":
        """
        Binds a parameter map to the open sub-request. A second call on a
        statement turns the single binding into a batch; further calls
        append to it. Queries can't be batched.
        """
        self._check_not_consumed()
        _check(self._current is not None, "There is no open sub-request")
        parameters = to_parameter_map(values)
        _check(
            self._current.kind == SubRequestKind.STATEMENT
            or not self._current.bindings,
            "Cannot specify a batch for a query",
        )
        self._current.bindings.append(parameters)
        return self

    def with_encoder(
        self,
        password: str,
        *columns: str,
        compression_level: Optional[int] = None,
    ) -> "RequestBuilder":
        """
        Add an encoder to the open sub-request. Allowed only for statements.

        Args:
            password: The password for the encryption
            columns: The columns to encrypt
            compression_level: The ZStd compression level, in the range 1-19
        """
        self._check_not_consumed()
        _require(self._current is not None, "There is no open sub-request")
        encoder = Encoder(
            password=password,
            columns=columns,
            compression_level=compression_level,
        )
        _check(
            self._current.kind == SubRequestKind.STATEMENT,
            "Cannot specify an encoder for a query",
        )
        self._current.encoder = encoder
        return self

    def with_decoder(self, password: str, *columns: str) -> "RequestBuilder":
        """
        Add a decoder to the open sub-request. Allowed only for queries.

        Args:
            password: The password for the decryption
            columns: The columns to decrypt
        """
        self._check_not_consumed()
        _require(self._current is not None, "There is no open sub-request")
        decoder = Decoder(password=password, columns=columns)
        _check(
            self._current.kind == SubRequestKind.QUERY,
            "Cannot specify a decoder for a statement",
        )
        self._current.decoder = decoder
        return self

    def build(self) -> BatchRequest:
        """Closes the open sub-request and returns the finalized BatchRequest."""
        self._check_not_consumed()
        if self._current is not None:
            self._closed.append(self._current.close())
            self._current = None
        _require(len(self._closed) > 0, "There are no requests")
        self._consumed = True
        request = BatchRequest(sub_requests=tuple(self._closed))
        logger.debug("Built request with %d sub-request(s)", len(request))
        return request
