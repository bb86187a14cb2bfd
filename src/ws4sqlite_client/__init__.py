from typing import Optional

from ws4sqlite_client.exc import *

__version__ = "0.1.0"

USER_AGENT_NAME = "Ws4sqlitePythonClient"

from ws4sqlite_client.types import AuthMode, Protocol, ResultKind, SSLOptions, SubRequestKind
from ws4sqlite_client.parameters import MapBuilder
from ws4sqlite_client.request_builder import RequestBuilder
from ws4sqlite_client.models import (
    BatchRequest,
    BatchResponse,
    Decoder,
    Encoder,
    QueryRequest,
    ResultItem,
    StatementRequest,
)
from ws4sqlite_client.config import ClientBuilder, ClientConfig
from ws4sqlite_client.client import AsyncClient, Client


def connect(
    url: str,
    user: Optional[str] = None,
    password: Optional[str] = None,
    auth_mode: AuthMode = AuthMode.NONE,
    **kwargs,
) -> Client:
    """
    Shortcut for `ClientBuilder` when the URL is already known.

    Other Parameters:
        timeout, ssl_options, http_headers, max_connections, user_agent:
            same as the matching `ClientConfig` fields.
    """
    config = ClientConfig(
        url=url,
        auth_mode=auth_mode,
        user=user,
        password=password,
        **kwargs,
    )
    return Client(config)
