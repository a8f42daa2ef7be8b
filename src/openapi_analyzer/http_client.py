"""HTTP client wrapper around httpx.

Executes requests against remote APIs and renders the responses as the
``Status Code: <n> / Response Body:`` text the tools return.
"""

import logging

import httpx
from pydantic import BaseModel

from openapi_analyzer.codec import JsonCodec
from openapi_analyzer.errors import (
    AnalysisError,
    FetchError,
    InvalidMethodError,
    InvalidPathError,
    InvalidUrlError,
    ParseError,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "ApiTools/1.0"
DEFAULT_TIMEOUT = 30.0

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH")
BODY_METHODS = {"POST", "PUT", "PATCH"}

# Inputs that mean "no parameters" for query/header maps.
EMPTY_MAP_VALUES = {"", "{}", "null"}


def normalize_url(url: str) -> str:
    """Ensure the URL carries a scheme, defaulting to https."""
    url = (url or "").strip()
    if not url:
        raise InvalidUrlError("Domain URL must not be empty.")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
        logger.info(f"Normalized URL to: {url}")
    return url


def build_url(domain: str, path: str) -> str:
    if not path.startswith("/"):
        path = "/" + path
    return domain + path[1:] if domain.endswith("/") else domain + path


def normalize_path(path: str) -> str:
    """Leading slash added, trailing slash removed (except for the root path)."""
    path = (path or "").strip()
    if not path:
        raise InvalidPathError("Path must not be empty.")
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1 and path.endswith("/"):
        path = path.rstrip("/") or "/"
    return path


def parse_json_map(text: str | None, codec: JsonCodec) -> dict[str, str]:
    """Parse a JSON object of query parameters or headers into a string map."""
    if text is None or text.strip() in EMPTY_MAP_VALUES:
        return {}
    try:
        data = codec.loads(text)
    except ParseError as e:
        logger.warning(f"Ignoring invalid JSON map {text!r}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring JSON map that is not an object: {text!r}")
        return {}

    result = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = value
        elif isinstance(value, bool):
            result[key] = "true" if value else "false"
        elif value is None:
            result[key] = ""
        else:
            result[key] = codec.dumps(value, pretty=False)
    return result


class HttpResponse(BaseModel):
    """Status and raw body of a completed request."""

    status_code: int
    body: str = ""

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def format(self, codec: JsonCodec) -> str:
        text = f"Status Code: {self.status_code}\n\n"
        if not self.body:
            return text + "Response Body: <empty>"
        try:
            rendered = codec.dumps(codec.loads(self.body))
        except ParseError:
            rendered = self.body
        return text + "Response Body:\n" + rendered


class HttpClient:
    """Synchronous HTTP executor used for spec discovery and endpoint calls."""

    def __init__(
        self,
        codec: JsonCodec | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.codec = codec or JsonCodec()
        self.timeout = timeout
        self.user_agent = user_agent
        self.transport = transport

    def send(
        self,
        url: str,
        method: str = "GET",
        query: dict[str, str] | None = None,
        body: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Execute one request. Error statuses are returned, transport failures raised."""
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise InvalidMethodError(
                f"Invalid HTTP method: {method}. Supported methods are {', '.join(SUPPORTED_METHODS)}."
            )

        request_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        request_headers.update(headers or {})
        content = body if body and method in BODY_METHODS else None

        logger.info(f"Making {method} request to: {url}")
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = client.request(
                    method,
                    url,
                    params=query or None,
                    content=content,
                    headers=request_headers,
                )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, TypeError) as e:
            # ValueError covers UnicodeEncodeError from non-ASCII header values.
            raise FetchError(f"Failed to make request: {e}") from e

        return HttpResponse(status_code=response.status_code, body=response.text)

    def get(self, url: str, query: dict[str, str] | None = None, headers: dict[str, str] | None = None) -> HttpResponse:
        return self.send(url, "GET", query=query, headers=headers)

    def make_request(
        self,
        url: str,
        method: str,
        query_params: str | None = None,
        body: str | None = None,
        headers: str | None = None,
    ) -> str:
        """Run a request from JSON string inputs and return the formatted response.

        Never raises: failures come back as ``Error: ...`` text.
        """
        try:
            response = self.send(
                url,
                method,
                query=parse_json_map(query_params, self.codec),
                body=body,
                headers=parse_json_map(headers, self.codec),
            )
        except AnalysisError as e:
            logger.error(f"Request failed ({e.kind}): {e}")
            return f"Error: {e}"
        return response.format(self.codec)
