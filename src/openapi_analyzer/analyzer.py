"""Analysis orchestrator: the operations exposed as tools.

Every public method is total: component failures are logged and come back
as ``Error: <message>`` text instead of exceptions.
"""

import logging

from openapi_analyzer.codec import JsonCodec
from openapi_analyzer.describe.describer import EndpointDescriber, describe_specification
from openapi_analyzer.describe.examples import ExampleSynthesizer
from openapi_analyzer.discovery.locator import SpecLocator
from openapi_analyzer.errors import AnalysisError, InvalidPathError, InvalidUrlError
from openapi_analyzer.http_client import HttpClient, build_url, normalize_path, normalize_url
from openapi_analyzer.parser.base import SpecificationDocument
from openapi_analyzer.parser.paths import match_path
from openapi_analyzer.parser.swagger import extract_operation

logger = logging.getLogger(__name__)


class EndpointAnalyzer:
    """Discovers specifications, describes endpoints and calls them."""

    def __init__(
        self,
        http: HttpClient,
        locator: SpecLocator | None = None,
        codec: JsonCodec | None = None,
    ):
        self.codec = codec or http.codec
        self.http = http
        self.locator = locator or SpecLocator(http, self.codec)

    def get_api_specification(self, domain_url: str, document: SpecificationDocument | None = None) -> str:
        """Formatted summary of every endpoint in the domain's specification."""
        logger.info(f"Fetching API specification from: {domain_url}")
        try:
            base_url = normalize_url(domain_url)
            if document is None:
                document = self.locator.locate(domain_url)
            return describe_specification(document, base_url)
        except AnalysisError as e:
            logger.warning(f"API specification error ({e.kind}): {e}")
            return f"Error: {e}"
        except Exception as e:
            logger.error(f"Failed to fetch API specification: {e}", exc_info=True)
            return f"Error: Failed to fetch API specification: {e}"

    def analyze_endpoint(
        self,
        domain_url: str,
        path: str,
        method: str,
        document: SpecificationDocument | None = None,
    ) -> str:
        """Parameters, request body and example payload for one endpoint."""
        logger.info(f"Analyzing endpoint: {method} {domain_url} {path}")
        try:
            return self._analyze(domain_url, path, method, document)
        except AnalysisError as e:
            logger.warning(f"API analysis error ({e.kind}): {e}")
            return f"Error: {e}"
        except Exception as e:
            logger.error(f"Failed to analyze endpoint: {e}", exc_info=True)
            return f"Error: Failed to analyze endpoint: {e}"

    def analyze_and_call(
        self,
        domain_url: str,
        path: str,
        method: str,
        query_params: str | None = None,
        body: str | None = None,
        headers: str | None = None,
    ) -> str:
        """Analysis of the endpoint followed by the live response.

        A failure in one half does not drop the other; only an unusable
        domain or path aborts the whole call.
        """
        logger.info(f"Analyzing and calling endpoint: {method} {domain_url} {path}")
        try:
            normalized_path = normalize_path(path)
            full_url = build_url(normalize_url(domain_url), normalized_path)
        except (InvalidPathError, InvalidUrlError) as e:
            logger.warning(f"API analysis and call error ({e.kind}): {e}")
            return f"Error: {e}"

        analysis = self.analyze_endpoint(domain_url, normalized_path, method)

        try:
            response = self.http.make_request(full_url, method, query_params, body, headers)
        except Exception as e:
            logger.error(f"Failed to make request: {e}", exc_info=True)
            response = f"Error: Failed to make request: {e}"

        return f"# Endpoint Analysis\n\n{analysis}\n\n# API Response\n\n{response}"

    def make_request(
        self,
        url: str,
        method: str,
        query_params: str | None = None,
        body: str | None = None,
        headers: str | None = None,
    ) -> str:
        try:
            url = normalize_url(url)
        except (InvalidPathError, InvalidUrlError) as e:
            return f"Error: {e}"
        return self.http.make_request(url, method, query_params, body, headers)

    def _analyze(
        self,
        domain_url: str,
        path: str,
        method: str,
        document: SpecificationDocument | None,
    ) -> str:
        normalized_path = normalize_path(path)
        method = (method or "GET").strip().upper()

        if document is None:
            document = self.locator.locate(domain_url)
        if not document.has_paths:
            raise AnalysisError("OpenAPI specification does not contain paths information.")

        template = match_path(document.paths, normalized_path)

        synthesizer = ExampleSynthesizer(document.raw, self.codec)
        operation = extract_operation(document, template, method, synthesizer)

        describer = EndpointDescriber(document, synthesizer, self.codec)
        return describer.describe(operation) + describer.describe_call(domain_url, normalized_path, operation)
