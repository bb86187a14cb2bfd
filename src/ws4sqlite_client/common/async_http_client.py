import logging
import urllib.parse
from typing import Dict, Optional, Tuple

import httpx

from ws4sqlite_client.common.http import HttpHeader, JSON_CONTENT_TYPE
from ws4sqlite_client.common.http_utils import create_ssl_context
from ws4sqlite_client.exc import InterfaceError

logger = logging.getLogger(__name__)


class Ws4sqliteAsyncHttpClient:
    """
    asyncio HTTP transport for the ws4sqlite endpoint, built on httpx.

    Like the synchronous transport it never retries. Each `post` is a single
    suspension point; cancellation and timeouts propagate from httpx.
    """

    def __init__(self, config, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Args:
            config: ClientConfig carrying URL, SSL options, timeout, headers and pool size
            transport: Optional httpx transport replacing the default pooled one
        """
        self.config = config
        self.url = config.url
        self.host = urllib.parse.urlparse(self.url).hostname

        self.headers: Dict[str, str] = dict(config.http_headers)
        if config.user_agent:
            self.headers[HttpHeader.USER_AGENT.value] = config.user_agent
        self.headers[HttpHeader.CONTENT_TYPE.value] = JSON_CONTENT_TYPE

        limits = httpx.Limits(max_connections=config.max_connections)
        if transport is None:
            # TODO: honour system proxies here as Ws4sqliteHttpClient does
            transport = httpx.AsyncHTTPTransport(
                verify=create_ssl_context(config.ssl_options) or True,
                limits=limits,
                retries=0,
            )

        self._client: Optional[httpx.AsyncClient] = httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(config.timeout),
            follow_redirects=False,
        )

    async def post(
        self, body: bytes, headers: Optional[Dict[str, str]] = None
    ) -> Tuple[int, bytes]:
        """
        POST a JSON body to the endpoint.

        Returns:
            Tuple of (HTTP status, raw response body)

        Raises:
            Any httpx exception, unmodified
        """
        if self._client is None:
            raise InterfaceError("HTTP client is closed")

        request_headers = {**self.headers, **(headers or {})}

        try:
            response = await self._client.post(
                self.url, content=body, headers=request_headers
            )
        except Exception as e:
            logger.error("HTTP request to %s failed: %s", self.host, e)
            raise

        logger.debug("Received HTTP %d from %s", response.status_code, self.host)
        return response.status_code, response.content

    async def aclose(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
