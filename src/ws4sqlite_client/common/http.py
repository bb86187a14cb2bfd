from enum import Enum


# Enums for HTTP Methods
class HttpMethod(str, Enum):
    POST = "POST"


# HTTP request headers
class HttpHeader(str, Enum):
    CONTENT_TYPE = "Content-Type"
    CONTENT_LENGTH = "Content-Length"
    AUTHORIZATION = "Authorization"
    USER_AGENT = "User-Agent"


JSON_CONTENT_TYPE = "application/json"
