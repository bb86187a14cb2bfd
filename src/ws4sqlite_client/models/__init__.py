"""
Models for the ws4sqlite batch endpoint.

This package contains data models for requests and responses.
"""

from ws4sqlite_client.models.requests import (
    Encoder,
    Decoder,
    QueryRequest,
    StatementRequest,
    SubRequest,
    BatchRequest,
)

from ws4sqlite_client.models.responses import (
    ResultItem,
    BatchResponse,
    ServerErrorResponse,
    demultiplex,
    parse_batch_response,
)

__all__ = [
    # Request models
    "Encoder",
    "Decoder",
    "QueryRequest",
    "StatementRequest",
    "SubRequest",
    "BatchRequest",
    # Response models
    "ResultItem",
    "BatchResponse",
    "ServerErrorResponse",
    "demultiplex",
    "parse_batch_response",
]
