"""
Request models for the ws4sqlite batch endpoint.

These models define the finalized, immutable sub-requests produced by
`RequestBuilder` and their JSON wire shape. They validate themselves on
construction, so a request built by hand obeys the same rules as one built
with `RequestBuilder`.
"""

from typing import Dict, List, Any, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field

from ws4sqlite_client.exc import InvalidArgumentError, InvalidStateError
from ws4sqlite_client.parameters import freeze_parameter_map
from ws4sqlite_client.types import SubRequestKind

K_TRX = "transaction"
K_QUERY = "query"
K_STATEMENT = "statement"
K_NO_FAIL = "noFail"
K_VALUES = "values"
K_BATCH = "valuesBatch"
K_ENCODER = "encoder"
K_DECODER = "decoder"
K_PASSWORD = "pwd"
K_Z_LEVEL = "compressionLevel"
K_COLUMNS = "columns"
K_CREDENTIALS = "credentials"

MIN_COMPRESSION_LEVEL = 1
MAX_COMPRESSION_LEVEL = 19


def _check(condition: bool, message: str):
    if not condition:
        raise InvalidArgumentError(message)


def _check_text(text: str, kind: SubRequestKind):
    _check(
        isinstance(text, str) and text != "",
        f"Cannot specify a null or empty {kind.value}",
    )


def _check_password(password: str):
    _check(
        isinstance(password, str) and password != "",
        "Cannot specify a null or empty password",
    )


def _normalize_columns(columns: Sequence[str]) -> Tuple[str, ...]:
    _check(
        columns is not None and not isinstance(columns, str) and len(columns) > 0,
        "Cannot specify an empty column list",
    )
    for column in columns:
        _check(
            isinstance(column, str) and column != "",
            f"Invalid column name: {column!r}",
        )
    # keeps the caller's order, drops duplicates
    return tuple(dict.fromkeys(columns))


@dataclass(frozen=True)
class Encoder:
    """Encryption (and optional ZStd compression) of columns, for statements."""

    password: str
    columns: Tuple[str, ...]
    compression_level: Optional[int] = None

    def __post_init__(self):
        _check_password(self.password)
        if self.compression_level is not None:
            _check(
                isinstance(self.compression_level, int)
                and not isinstance(self.compression_level, bool)
                and MIN_COMPRESSION_LEVEL
                <= self.compression_level
                <= MAX_COMPRESSION_LEVEL,
                f"CompressionLevel must be between {MIN_COMPRESSION_LEVEL} and {MAX_COMPRESSION_LEVEL}",
            )
        object.__setattr__(self, "columns", _normalize_columns(self.columns))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {K_PASSWORD: self.password}
        if self.compression_level is not None:
            result[K_Z_LEVEL] = self.compression_level
        result[K_COLUMNS] = list(self.columns)
        return result


@dataclass(frozen=True)
class Decoder:
    """Decryption of columns, for queries."""

    password: str
    columns: Tuple[str, ...]

    def __post_init__(self):
        _check_password(self.password)
        object.__setattr__(self, "columns", _normalize_columns(self.columns))

    def to_dict(self) -> Dict[str, Any]:
        return {K_PASSWORD: self.password, K_COLUMNS: list(self.columns)}


@dataclass(frozen=True)
class QueryRequest:
    """A read query. It may carry at most one parameter map, held read-only."""

    query: str
    values: Optional[Mapping[str, Any]] = None
    decoder: Optional[Decoder] = None

    kind = SubRequestKind.QUERY

    def __post_init__(self):
        _check_text(self.query, self.kind)
        if self.values is not None:
            object.__setattr__(self, "values", freeze_parameter_map(self.values))
        _check(
            self.decoder is None or isinstance(self.decoder, Decoder),
            "decoder must be a Decoder",
        )

    @property
    def text(self) -> str:
        return self.query

    @property
    def is_batch(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert the sub-request to a dictionary for JSON serialization."""
        result: Dict[str, Any] = {K_QUERY: self.query}

        if self.values is not None:
            result[K_VALUES] = dict(self.values)

        if self.decoder is not None:
            result[K_DECODER] = self.decoder.to_dict()

        return result


@dataclass(frozen=True)
class StatementRequest:
    """
    A write statement, with zero, one or many (batch) parameter maps. The maps
    are copied and held read-only.
    """

    statement: str
    no_fail: bool = False
    values: Tuple[Mapping[str, Any], ...] = field(default_factory=tuple)
    encoder: Optional[Encoder] = None

    kind = SubRequestKind.STATEMENT

    def __post_init__(self):
        _check_text(self.statement, self.kind)
        _check(
            self.values is not None and not isinstance(self.values, Mapping),
            "values must be a sequence of parameter maps",
        )
        object.__setattr__(
            self, "values", tuple(freeze_parameter_map(v) for v in self.values)
        )
        object.__setattr__(self, "no_fail", bool(self.no_fail))
        _check(
            self.encoder is None or isinstance(self.encoder, Encoder),
            "encoder must be an Encoder",
        )

    @property
    def text(self) -> str:
        return self.statement

    @property
    def is_batch(self) -> bool:
        return len(self.values) > 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert the sub-request to a dictionary for JSON serialization."""
        result: Dict[str, Any] = {K_STATEMENT: self.statement}

        if self.no_fail:
            result[K_NO_FAIL] = True

        if len(self.values) == 1:
            result[K_VALUES] = dict(self.values[0])
        elif self.values:
            result[K_BATCH] = [dict(values) for values in self.values]

        if self.encoder is not None:
            result[K_ENCODER] = self.encoder.to_dict()

        return result


SubRequest = Union[QueryRequest, StatementRequest]


@dataclass(frozen=True)
class BatchRequest:
    """Representation of a finalized, non-empty batch of sub-requests."""

    sub_requests: Tuple[SubRequest, ...]

    def __post_init__(self):
        _check(self.sub_requests is not None, "Cannot specify null sub-requests")
        sub_requests = tuple(self.sub_requests)
        if not sub_requests:
            raise InvalidStateError("There are no requests")
        for sub_request in sub_requests:
            _check(
                isinstance(sub_request, (QueryRequest, StatementRequest)),
                f"Invalid sub-request: {type(sub_request).__name__}",
            )
        object.__setattr__(self, "sub_requests", sub_requests)

    def __len__(self) -> int:
        return len(self.sub_requests)

    def __iter__(self):
        return iter(self.sub_requests)

    def __getitem__(self, idx: int) -> SubRequest:
        return self.sub_requests[idx]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the request to a dictionary for JSON serialization."""
        transaction: List[Dict[str, Any]] = [
            sub_request.to_dict() for sub_request in self.sub_requests
        ]
        return {K_TRX: transaction}
