import logging
from typing import Any, Dict

from urllib3.util import make_headers

from ws4sqlite_client.common.http import HttpHeader
from ws4sqlite_client.models.requests import K_CREDENTIALS
from ws4sqlite_client.types import AuthMode

logger = logging.getLogger(__name__)


class AuthProvider:
    """Attaches credentials to an outgoing request. The base class sends none."""

    auth_mode = AuthMode.NONE

    def add_headers(self, request_headers: Dict[str, str]):
        pass

    def add_body(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return body


class NoAuthProvider(AuthProvider):
    pass


class InlineAuthProvider(AuthProvider):
    """Embeds the credentials in the request body, under "credentials"."""

    auth_mode = AuthMode.INLINE

    def __init__(self, user: str, password: str):
        self.__user = user
        self.__password = password

    def add_body(self, body: Dict[str, Any]) -> Dict[str, Any]:
        return {
            **body,
            K_CREDENTIALS: {"user": self.__user, "password": self.__password},
        }


class BasicAuthProvider(AuthProvider):
    """Sends the credentials in a standard HTTP Basic Authorization header."""

    auth_mode = AuthMode.HTTP

    def __init__(self, user: str, password: str):
        self.__authorization_header_value = make_headers(
            basic_auth=f"{user}:{password}"
        )["authorization"]

    def add_headers(self, request_headers: Dict[str, str]):
        request_headers[HttpHeader.AUTHORIZATION.value] = (
            self.__authorization_header_value
        )
