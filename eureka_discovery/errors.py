"""
Exceptions raised by the token, registration and discovery clients.

Every error derives from EurekaClientError so callers can catch the whole
family at once, and each subclass carries the context needed to log or
react to it (status code, response body, parse detail).
"""

from typing import Optional


class EurekaClientError(Exception):
    """Base class for all client errors"""


class TransportError(EurekaClientError):
    """The request could not be sent or the response body could not be read"""


class UnexpectedStatus(EurekaClientError):
    """The server answered with a status code other than the expected one"""

    message = "unexpected response code: {status_code}: {body}"

    def __init__(self, status_code: int, body: str, url: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(self.message.format(status_code=status_code, body=body))


class AuthServerError(UnexpectedStatus):
    """The token endpoint answered with a non-200 status"""

    message = "bad token server response, code {status_code}, msg {body}"


class DecodeError(EurekaClientError):
    """A response body is not valid JSON or does not have the expected shape"""


class EncodeError(EurekaClientError):
    """A request body could not be serialized"""


class InvalidBaseURL(EurekaClientError):
    """A configured base URL cannot be parsed"""

    def __init__(self, base_url: str, reason: str):
        self.base_url = base_url
        self.reason = reason
        super().__init__(f"unable to parse base url {base_url!r}: {reason}")


class EmptyInstanceList(EurekaClientError):
    """The registry knows the application but reports no instances of it"""

    def __init__(self, app_name: str):
        self.app_name = app_name
        super().__init__(f"no registered instances of application {app_name!r}")
