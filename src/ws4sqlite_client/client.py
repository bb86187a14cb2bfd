import json
import logging
from typing import Dict, Optional, Tuple

import httpx

from ws4sqlite_client.auth.auth import get_auth_provider
from ws4sqlite_client.common.async_http_client import Ws4sqliteAsyncHttpClient
from ws4sqlite_client.common.http_client import Ws4sqliteHttpClient
from ws4sqlite_client.config import ClientConfig
from ws4sqlite_client.exc import (
    InvalidArgumentError,
    InvalidServerResponseError,
    ServerOperationError,
)
from ws4sqlite_client.models.requests import BatchRequest
from ws4sqlite_client.models.responses import (
    BatchResponse,
    ServerErrorResponse,
    parse_batch_response,
)
from ws4sqlite_client.types import AuthMode

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_UNAUTHORIZED = 401


class _BaseClient:
    """Request serialization and response classification shared by both clients."""

    def __init__(self, config: ClientConfig):
        self.config = config
        self.auth_provider = get_auth_provider(config)

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def auth_mode(self) -> AuthMode:
        return self.config.auth_mode

    def _prepare_request(self, request: BatchRequest) -> Tuple[bytes, Dict[str, str]]:
        if not isinstance(request, BatchRequest):
            raise InvalidArgumentError(
                f"Expected a BatchRequest, got {type(request).__name__}"
            )

        body = self.auth_provider.add_body(request.to_dict())
        headers: Dict[str, str] = {}
        self.auth_provider.add_headers(headers)

        logger.debug("Sending %d sub-request(s) to %s", len(request), self.url)
        return json.dumps(body).encode("utf-8"), headers

    def _handle_response(
        self, request: BatchRequest, status: int, data: bytes
    ) -> BatchResponse:
        if status != HTTP_OK:
            if self.auth_mode == AuthMode.HTTP and status == HTTP_UNAUTHORIZED:
                # Basic-Auth challenges may not carry a JSON body
                logger.debug("Basic authentication rejected by %s", self.url)
                raise ServerOperationError("Unauthorized", -1, HTTP_UNAUTHORIZED)

            err = ServerErrorResponse.from_dict(json.loads(data), status)
            logger.debug(
                "Server rejected the batch: %s (reqIdx=%s, code=%s)",
                err.error,
                err.req_idx,
                err.code,
            )
            raise ServerOperationError(err.error, err.req_idx, err.code)

        response = parse_batch_response(json.loads(data), status)

        if len(response) != len(request):
            raise InvalidServerResponseError(
                "Result count does not match the number of sub-requests",
                {"expected": len(request), "received": len(response)},
            )

        return response


class Client(_BaseClient):
    """
    A client for ws4sqlite. It can be constructed with `ClientBuilder`, that
    configures it with the URL to contact and the authorization (if any).
    Once instantiated, it can be used to send requests to the server.

    The client is thread-safe: its configuration is immutable and the
    underlying urllib3 pool can be shared by concurrent `send` calls.

    Example:
        client = (
            ClientBuilder()
            .with_url_components(Protocol.HTTP, "localhost", "mydb", port=12321)
            .with_http_auth("myUser1", "myHotPassword")
            .build()
        )

        response = client.send(request)
    """

    def __init__(
        self, config: ClientConfig, http_client: Optional[Ws4sqliteHttpClient] = None
    ):
        super().__init__(config)
        self._http_client = http_client or Ws4sqliteHttpClient(config)

    def send(self, request: BatchRequest) -> BatchResponse:
        """
        Sends a batch of sub-requests to the remote and returns the matching
        batch of results.

        Raises:
            ServerOperationError: If ws4sqlite answers with an error; its fields
                are the error's details.
            InvalidServerResponseError: If the results can't be aligned with the request.
            urllib3 exceptions on network failure, unmodified.
        """
        body, headers = self._prepare_request(request)
        status, data = self._http_client.post(body, headers)
        return self._handle_response(request, status, data)

    def close(self):
        self._http_client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class AsyncClient(_BaseClient):
    """
    asyncio flavour of `Client`. `send` is a coroutine wrapping exactly one
    request/response exchange.

    Example:
        async with ClientBuilder().with_url(url).build_async() as client:
            response = await client.send(request)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config)
        self._http_client = Ws4sqliteAsyncHttpClient(config, transport=transport)

    async def send(self, request: BatchRequest) -> BatchResponse:
        """Same as `Client.send`; network failures surface as httpx exceptions."""
        body, headers = self._prepare_request(request)
        status, data = await self._http_client.post(body, headers)
        return self._handle_response(request, status, data)

    async def aclose(self):
        await self._http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
