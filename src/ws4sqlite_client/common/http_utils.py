import ssl
import urllib.parse
import urllib.request
import logging
from typing import Dict, Optional, Tuple

from urllib3.util import make_headers

from ws4sqlite_client.types import SSLOptions

logger = logging.getLogger(__name__)


def detect_and_parse_proxy(
    scheme: str,
    host: Optional[str],
) -> Tuple[Optional[str], Optional[Dict[str, str]]]:
    """
    Detect system proxy and return proxy URI and headers.

    Args:
        scheme: URL scheme (http/https)
        host: Target hostname, used for bypass checking

    Returns:
        Tuple of (proxy_uri, proxy_headers) or (None, None) if no proxy
    """
    try:
        # returns a dictionary of scheme -> proxy server URL mappings.
        # https://docs.python.org/3/library/urllib.request.html#urllib.request.getproxies
        proxy = urllib.request.getproxies().get(scheme)
    except (KeyError, AttributeError):
        proxy = None
    else:
        if host and urllib.request.proxy_bypass(host):
            proxy = None

    if not proxy:
        return None, None

    parsed_proxy = urllib.parse.urlparse(proxy)
    return proxy, create_basic_proxy_auth_headers(parsed_proxy)


def create_basic_proxy_auth_headers(parsed_proxy) -> Optional[Dict[str, str]]:
    """
    Create basic auth headers for proxy if credentials are provided.

    Args:
        parsed_proxy: Parsed proxy URL from urllib.parse.urlparse()

    Returns:
        Dictionary of proxy auth headers or None if no credentials
    """
    if parsed_proxy is None or not parsed_proxy.username:
        return None
    ap = f"{urllib.parse.unquote(parsed_proxy.username)}:{urllib.parse.unquote(parsed_proxy.password or '')}"
    return make_headers(proxy_basic_auth=ap)


def create_ssl_context(ssl_options: Optional[SSLOptions]) -> Optional[ssl.SSLContext]:
    if ssl_options is None:
        return None

    ssl_context = ssl.create_default_context()

    if not ssl_options.tls_verify:
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
    elif not ssl_options.tls_verify_hostname:
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_REQUIRED

    if ssl_options.tls_trusted_ca_file:
        ssl_context.load_verify_locations(ssl_options.tls_trusted_ca_file)

    if ssl_options.tls_client_cert_file:
        ssl_context.load_cert_chain(
            ssl_options.tls_client_cert_file,
            ssl_options.tls_client_cert_key_file,
            ssl_options.tls_client_cert_key_password,
        )

    return ssl_context
