from enum import Enum
from typing import Optional


class AuthMode(Enum):
    """
    Authentication mode for the remote database.

    Attributes:
        NONE: No credentials are sent
        INLINE: Credentials travel in the request body, under "credentials"
        HTTP: Credentials travel in a standard HTTP Basic Authorization header
    """

    NONE = "NONE"
    INLINE = "INLINE"
    HTTP = "HTTP"


class Protocol(Enum):
    """Used in URL composition."""

    HTTP = "http"
    HTTPS = "https"


class SubRequestKind(Enum):
    QUERY = "query"
    STATEMENT = "statement"


class ResultKind(Enum):
    """
    Discriminator for the populated field of a result item.

    Attributes:
        RESULT_SET: A query succeeded, the rows are in `result_set`
        ROWS_UPDATED: A non-batched statement succeeded
        ROWS_UPDATED_BATCH: A batched statement succeeded, one count per parameter set
        ERROR: The sub-request failed, the cause is in `error`
    """

    RESULT_SET = "resultSet"
    ROWS_UPDATED = "rowsUpdated"
    ROWS_UPDATED_BATCH = "rowsUpdatedBatch"
    ERROR = "error"


class SSLOptions:
    # Thin wrapper to carry SSL configuration to the transports

    tls_verify: bool
    tls_verify_hostname: bool
    tls_trusted_ca_file: Optional[str]
    tls_client_cert_file: Optional[str]
    tls_client_cert_key_file: Optional[str]
    tls_client_cert_key_password: Optional[str]

    def __init__(
        self,
        tls_verify: bool = True,
        tls_verify_hostname: bool = True,
        tls_trusted_ca_file: Optional[str] = None,
        tls_client_cert_file: Optional[str] = None,
        tls_client_cert_key_file: Optional[str] = None,
        tls_client_cert_key_password: Optional[str] = None,
    ):
        self.tls_verify = tls_verify
        self.tls_verify_hostname = tls_verify_hostname
        self.tls_trusted_ca_file = tls_trusted_ca_file
        self.tls_client_cert_file = tls_client_cert_file
        self.tls_client_cert_key_file = tls_client_cert_key_file
        self.tls_client_cert_key_password = tls_client_cert_key_password

    def __repr__(self):
        return (
            f"SSLOptions(tls_verify={self.tls_verify}, "
            f"tls_verify_hostname={self.tls_verify_hostname}, "
            f"tls_trusted_ca_file={self.tls_trusted_ca_file!r})"
        )
