import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, TYPE_CHECKING

from ws4sqlite_client import USER_AGENT_NAME, __version__
from ws4sqlite_client.exc import InvalidArgumentError, InvalidStateError
from ws4sqlite_client.types import AuthMode, Protocol, SSLOptions

if TYPE_CHECKING:
    from ws4sqlite_client.client import AsyncClient, Client

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONNECTIONS = 10
DEFAULT_USER_AGENT = "{}/{}".format(USER_AGENT_NAME, __version__)


def _check(condition: bool, message: str):
    if not condition:
        raise InvalidArgumentError(message)


@dataclass(frozen=True)
class ClientConfig:
    """
    Connection configuration of a client. Immutable once built, so it can be
    shared by concurrent `send` calls without locking.
    """

    url: str
    auth_mode: AuthMode = AuthMode.NONE
    user: Optional[str] = field(default=None, repr=False)
    password: Optional[str] = field(default=None, repr=False)
    timeout: Optional[float] = None
    ssl_options: SSLOptions = field(default_factory=SSLOptions)
    http_headers: Tuple[Tuple[str, str], ...] = ()
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    user_agent: Optional[str] = DEFAULT_USER_AGENT

    def __post_init__(self):
        _check(bool(self.url), "Cannot specify a null or empty URL")
        parsed = urllib.parse.urlparse(self.url)
        _check(
            parsed.scheme in ("http", "https") and bool(parsed.hostname),
            f"Invalid URL: {self.url}",
        )
        if self.auth_mode != AuthMode.NONE:
            _check(self.user is not None, "Cannot specify a null user")
            _check(self.password is not None, "Cannot specify a null password")
        _check(
            self.timeout is None or self.timeout > 0, "Timeout must be positive"
        )
        _check(self.max_connections > 0, "max_connections must be positive")
        object.__setattr__(self, "http_headers", tuple(self.http_headers))


class ClientBuilder:
    """
    Builder for `Client` instances. Once configured with the URL to contact and
    the authorization (if any), it can be used to instantiate a client.

    Example:
        client = (
            ClientBuilder()
            .with_url_components(Protocol.HTTP, "localhost", "mydb", port=12321)
            .with_http_auth("myUser1", "myHotPassword")
            .build()
        )

        response = client.send(request)
    """

    def __init__(self):
        self._url: Optional[str] = None
        self._auth_mode = AuthMode.NONE
        self._user: Optional[str] = None
        self._password: Optional[str] = None
        self._timeout: Optional[float] = None
        self._ssl_options = SSLOptions()
        self._http_headers: List[Tuple[str, str]] = []
        self._max_connections = DEFAULT_MAX_CONNECTIONS
        self._user_agent: Optional[str] = DEFAULT_USER_AGENT

    def with_url(self, url: str) -> "ClientBuilder":
        """Sets a "raw" URL for contacting the ws4sqlite remote."""
        _check(bool(url), "Cannot specify a null or empty URL")
        self._url = url
        return self

    def with_url_components(
        self,
        protocol: Protocol,
        host: str,
        database_id: str,
        port: Optional[int] = None,
    ) -> "ClientBuilder":
        """
        Sets the URL for contacting the ws4sqlite remote, given its components.

        Args:
            protocol: The protocol (HTTP/S)
            host: The remote host
            database_id: ID of the database
            port: Remote port, optional
        """
        _check(isinstance(protocol, Protocol), "Cannot specify a null protocol")
        _check(bool(host), "Cannot specify a null host")
        _check(bool(database_id), "Cannot specify a null database ID")
        if port is None:
            self._url = f"{protocol.value}://{host}/{database_id}"
        else:
            _check(
                isinstance(port, int) and 0 < port <= 65535,
                "Cannot specify an invalid port",
            )
            self._url = f"{protocol.value}://{host}:{port}/{database_id}"
        return self

    def with_inline_auth(self, user: str, password: str) -> "ClientBuilder":
        """Configures INLINE authentication; the remote must be configured accordingly."""
        return self._with_auth(user, password, AuthMode.INLINE)

    def with_http_auth(self, user: str, password: str) -> "ClientBuilder":
        """Configures HTTP Basic Authentication; the remote must be configured accordingly."""
        return self._with_auth(user, password, AuthMode.HTTP)

    def _with_auth(self, user: str, password: str, auth_mode: AuthMode):
        _check(user is not None, "Cannot specify a null user")
        _check(password is not None, "Cannot specify a null password")
        self._user = user
        self._password = password
        self._auth_mode = auth_mode
        return self

    def with_timeout(self, timeout: float) -> "ClientBuilder":
        """Socket timeout in seconds, for both connect and read."""
        _check(timeout is not None and timeout > 0, "Timeout must be positive")
        self._timeout = timeout
        return self

    def with_ssl_options(self, ssl_options: SSLOptions) -> "ClientBuilder":
        _check(ssl_options is not None, "Cannot specify null SSL options")
        self._ssl_options = ssl_options
        return self

    def with_http_headers(self, http_headers: List[Tuple[str, str]]) -> "ClientBuilder":
        """Extra (k, v) pairs that will be set as HTTP headers on every request."""
        self._http_headers = list(http_headers or [])
        return self

    def with_max_connections(self, max_connections: int) -> "ClientBuilder":
        _check(max_connections > 0, "max_connections must be positive")
        self._max_connections = max_connections
        return self

    def with_user_agent(self, user_agent: str) -> "ClientBuilder":
        self._user_agent = user_agent
        return self

    def build_config(self) -> ClientConfig:
        if not self._url:
            raise InvalidStateError("No URL was specified")
        return ClientConfig(
            url=self._url,
            auth_mode=self._auth_mode,
            user=self._user,
            password=self._password,
            timeout=self._timeout,
            ssl_options=self._ssl_options,
            http_headers=tuple(self._http_headers),
            max_connections=self._max_connections,
            user_agent=self._user_agent,
        )

    def build(self) -> "Client":
        """Returns the synchronous client that was built."""
        from ws4sqlite_client.client import Client

        return Client(self.build_config())

    def build_async(self) -> "AsyncClient":
        """Returns the asyncio client that was built."""
        from ws4sqlite_client.client import AsyncClient

        return AsyncClient(self.build_config())
