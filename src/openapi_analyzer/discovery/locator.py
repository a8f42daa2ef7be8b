"""Spec locator: finds an OpenAPI document by probing conventional paths."""

import logging
from pathlib import Path

from openapi_analyzer.codec import JsonCodec
from openapi_analyzer.errors import FetchError, ParseError, SpecNotFoundError
from openapi_analyzer.http_client import HttpClient, build_url, normalize_url
from openapi_analyzer.parser.base import SpecificationDocument
from openapi_analyzer.parser.swagger import load_spec_file

logger = logging.getLogger(__name__)

# Probed in order; the first one returning a JSON document wins.
COMMON_OPENAPI_PATHS = (
    "/openapi.json",
    "/swagger.json",
    "/api-docs",
    "/v3/api-docs",
    "/swagger/v1/swagger.json",
    "/api/v3/api-docs",
    "/api/swagger.json",
)


class SpecLocator:
    """Fetches and parses the specification document for a domain.

    Probes are sequential and stop at the first success. Nothing is cached:
    every call fetches again.
    """

    def __init__(
        self,
        http: HttpClient,
        codec: JsonCodec | None = None,
        paths: tuple[str, ...] = COMMON_OPENAPI_PATHS,
    ):
        self.http = http
        self.codec = codec or JsonCodec()
        self.paths = paths

    def locate(self, domain_url: str) -> SpecificationDocument:
        """Return the first parseable document found under ``domain_url``.

        Raises FetchError when every probe failed at the HTTP level, and
        SpecNotFoundError when some probe answered but nothing parsed. Both
        carry every per-path failure message.
        """
        base = normalize_url(domain_url)
        logger.info(f"Fetching OpenAPI specification from: {base}")

        errors: list[str] = []
        answered = False

        for path in self.paths:
            url = build_url(base, path)
            logger.info(f"Trying URL: {url}")

            try:
                response = self.http.get(url)
            except FetchError as e:
                errors.append(f"Failed to fetch from {url}: {e}")
                logger.debug(errors[-1])
                continue

            if response.is_error:
                errors.append(f"Failed to fetch from {url}: Status Code: {response.status_code}")
                logger.debug(errors[-1])
                continue

            answered = True
            body = response.body.strip()
            if not body:
                errors.append(f"Empty or invalid response received from {url}")
                logger.debug(errors[-1])
                continue

            try:
                data = self.codec.loads(body)
            except ParseError as e:
                errors.append(f"Failed to parse JSON from {url}: {e}")
                logger.debug(errors[-1])
                continue

            if not isinstance(data, dict):
                errors.append(f"Response from {url} is not a JSON object")
                logger.debug(errors[-1])
                continue

            logger.info(f"Successfully fetched OpenAPI specification from: {url}")
            return SpecificationDocument(source=url, raw=data)

        message = (
            f"Could not find OpenAPI specification at {base}. "
            f"Tried the following paths: {', '.join(self.paths)}. "
            f"Errors: {'; '.join(errors)}"
        )
        logger.error(message)
        if answered:
            raise SpecNotFoundError(message, attempts=errors)
        raise FetchError(message, attempts=errors)

    def load_file(self, file_path: Path) -> SpecificationDocument:
        """Read a document from disk instead of discovering it."""
        logger.info(f"Loading OpenAPI specification from file: {file_path}")
        return load_spec_file(file_path)
