import logging
import urllib.parse
from typing import Dict, Optional, Tuple, Union

import urllib3
from urllib3 import PoolManager, ProxyManager

from ws4sqlite_client.common.http import HttpHeader, HttpMethod, JSON_CONTENT_TYPE
from ws4sqlite_client.common.http_utils import (
    create_ssl_context,
    detect_and_parse_proxy,
)
from ws4sqlite_client.exc import InterfaceError

logger = logging.getLogger(__name__)


class Ws4sqliteHttpClient:
    """
    Synchronous HTTP transport for the ws4sqlite endpoint.

    This client uses urllib3 for connection pooling, SSL and system proxy
    support. It never retries: executing a batch is not idempotent, so any
    transport failure is raised to the caller as is.
    """

    _pool_manager: Optional[Union[PoolManager, ProxyManager]]
    proxy_uri: Optional[str]
    proxy_auth: Optional[Dict[str, str]]

    def __init__(self, config):
        """
        Initialize the HTTP client.

        Args:
            config: ClientConfig carrying URL, SSL options, timeout, headers and pool size
        """
        self.config = config
        self.url = config.url

        parsed_url = urllib.parse.urlparse(self.url)
        self.scheme = parsed_url.scheme
        self.host = parsed_url.hostname

        self.headers: Dict[str, str] = dict(config.http_headers)
        if config.user_agent:
            self.headers[HttpHeader.USER_AGENT.value] = config.user_agent
        self.headers[HttpHeader.CONTENT_TYPE.value] = JSON_CONTENT_TYPE

        self.proxy_uri, self.proxy_auth = detect_and_parse_proxy(self.scheme, self.host)

        self._pool_manager = None
        self._open()

    def _open(self):
        """Initialize the pool manager."""
        pool_kwargs = {"num_pools": 1, "maxsize": self.config.max_connections}

        if self.config.timeout:
            pool_kwargs["timeout"] = urllib3.Timeout(
                connect=self.config.timeout, read=self.config.timeout
            )

        if self.scheme == "https":
            pool_kwargs["ssl_context"] = create_ssl_context(self.config.ssl_options)

        if self.using_proxy():
            logger.debug("Using proxy %s for %s", self.proxy_uri, self.host)
            self._pool_manager = ProxyManager(
                self.proxy_uri, proxy_headers=self.proxy_auth, **pool_kwargs
            )
        else:
            self._pool_manager = PoolManager(**pool_kwargs)

    def using_proxy(self) -> bool:
        return self.proxy_uri is not None

    def post(self, body: bytes, headers: Optional[Dict[str, str]] = None) -> Tuple[int, bytes]:
        """
        POST a JSON body to the endpoint.

        Returns:
            Tuple of (HTTP status, raw response body)

        Raises:
            Any urllib3 exception, unmodified
        """
        if self._pool_manager is None:
            raise InterfaceError("HTTP client is closed")

        request_headers = {**self.headers, **(headers or {})}
        request_headers[HttpHeader.CONTENT_LENGTH.value] = str(len(body))

        try:
            response = self._pool_manager.request(
                method=HttpMethod.POST.value,
                url=self.url,
                body=body,
                headers=request_headers,
                retries=False,
            )
        except Exception as e:
            logger.error("HTTP request to %s failed: %s", self.host, e)
            raise

        logger.debug("Received HTTP %d from %s", response.status, self.host)
        return response.status, response.data

    def close(self):
        """Close the connection pools."""
        if self._pool_manager:
            self._pool_manager.clear()
            self._pool_manager = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
