"""
Response models for the ws4sqlite batch endpoint.

These models define the structures decoded from the server's answers: the
per-item results of a successful batch and the body of a rejected one.
"""

import logging
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass

from ws4sqlite_client.exc import InterfaceError, InvalidServerResponseError
from ws4sqlite_client.types import ResultKind

try:
    import pyarrow
except ImportError:
    pyarrow = None

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


def _freeze_row(row: Any) -> Row:
    if not isinstance(row, Mapping):
        raise InvalidServerResponseError(
            "Result set rows must be objects", {"row": repr(row)}
        )
    return MappingProxyType(dict(row))


@dataclass(frozen=True)
class ResultItem:
    """
    Singular result coming from the endpoint, aligned by position with the
    sub-request that produced it.

    Only one of `result_set`, `rows_updated`, `rows_updated_batch` and `error`
    is expected to be populated; `kind` tells which. Result sets and batch
    counts are held as tuples of read-only rows and counts.
    """

    success: bool
    result_set: Optional[Tuple[Row, ...]] = None
    rows_updated: Optional[int] = None
    rows_updated_batch: Optional[Tuple[int, ...]] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.result_set is not None:
            object.__setattr__(
                self, "result_set", tuple(_freeze_row(row) for row in self.result_set)
            )
        if self.rows_updated_batch is not None:
            object.__setattr__(
                self, "rows_updated_batch", tuple(self.rows_updated_batch)
            )

    @property
    def kind(self) -> Optional[ResultKind]:
        if not self.success:
            return ResultKind.ERROR
        if self.result_set is not None:
            return ResultKind.RESULT_SET
        if self.rows_updated_batch is not None:
            return ResultKind.ROWS_UPDATED_BATCH
        if self.rows_updated is not None:
            return ResultKind.ROWS_UPDATED
        return None

    def to_arrow(self) -> "pyarrow.Table":
        """Convert the result set of a successful query to a pyarrow Table."""
        if pyarrow is None:
            raise InterfaceError(
                "pyarrow is not installed; run pip install ws4sqlite-client[pyarrow]"
            )
        if self.result_set is None:
            raise InterfaceError("This result item has no result set")
        return pyarrow.Table.from_pylist([dict(row) for row in self.result_set])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResultItem":
        """Create a ResultItem from one record of the "results" array."""
        return cls(
            success=bool(data.get("success", False)),
            result_set=data.get("resultSet"),
            rows_updated=data.get("rowsUpdated"),
            rows_updated_batch=data.get("rowsUpdatedBatch"),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class BatchResponse:
    """
    Response coming from the endpoint: a list of result items matching the
    list of sub-requests that were submitted, plus the HTTP status code.
    """

    results: Tuple[ResultItem, ...]
    status_code: int = 200

    def __post_init__(self):
        object.__setattr__(self, "results", tuple(self.results))

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def __getitem__(self, idx: int) -> ResultItem:
        return self.results[idx]


@dataclass(frozen=True)
class ServerErrorResponse:
    """Body of a non-200 answer: `{"error": ..., "reqIdx": ..., "code": ...}`."""

    error: str
    req_idx: int
    code: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status: int) -> "ServerErrorResponse":
        """Create a ServerErrorResponse, falling back on the HTTP status for missing fields."""
        if not isinstance(data, dict):
            data = {}
        error = data.get("error")
        req_idx = data.get("reqIdx")
        code = data.get("code")
        return cls(
            error=error if error is not None else f"HTTP {status}",
            req_idx=req_idx if req_idx is not None else -1,
            code=code if code is not None else status,
        )


def demultiplex(records: Sequence[Dict[str, Any]]) -> Tuple[ResultItem, ...]:
    """
    Map the decoded "results" array to typed result items.

    Order and count are preserved exactly as received. No cross-validation of
    the populated fields is performed; the server is the source of truth.
    """
    return tuple(ResultItem.from_dict(record) for record in records)


def parse_batch_response(data: Any, status_code: int = 200) -> BatchResponse:
    """Create a BatchResponse from the decoded body of a 200 answer."""
    if not isinstance(data, dict) or not isinstance(data.get("results"), list):
        raise InvalidServerResponseError(
            'Response body has no "results" array', {"http-code": status_code}
        )
    results = demultiplex(data["results"])
    logger.debug("Decoded %d result item(s)", len(results))
    return BatchResponse(results=results, status_code=status_code)
