import re
from urllib.parse import urlsplit, urlunsplit

import httpx

from eureka_discovery.errors import InvalidBaseURL, TransportError

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def join_url(base_url: str, route: str) -> str:
    """
    Append a route to the path of a base URL.

    The scheme, host, port and any existing path prefix of the base URL are
    preserved; the route is added as extra path segments and runs of "/"
    are collapsed, so "https://host/prefix/" + "/eureka/apps/foo" gives
    "https://host/prefix/eureka/apps/foo".

    The route is not cleaned: "." and ".." segments are kept as given, and
    callers must percent-encode any segment that may contain "?" or "#".

    Raises:
        InvalidBaseURL: the base URL cannot be parsed or lacks scheme/host
    """
    try:
        parts = urlsplit(base_url)
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise InvalidBaseURL(base_url, str(e)) from e

    if not parts.scheme or not parts.netloc:
        raise InvalidBaseURL(base_url, "missing scheme or host")

    path = _DUPLICATE_SLASHES.sub("/", f"/{parts.path}/{route}")
    if len(path) > 1 and not route.endswith("/"):
        path = path.rstrip("/")

    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, parts.fragment))


def send_request(
    http_client: httpx.Client, method: str, url: str, **kwargs
) -> httpx.Response:
    """
    Send a request and read the whole response body.

    httpx failures are translated into the client's own error types so that
    callers never see transport library exceptions.
    """
    try:
        return http_client.request(method, url, **kwargs)
    except httpx.InvalidURL as e:
        raise InvalidBaseURL(url, str(e)) from e
    except httpx.RequestError as e:
        raise TransportError(f"{method} {url}: {e}") from e
