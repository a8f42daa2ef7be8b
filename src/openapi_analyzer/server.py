"""MCP server exposing the analyzer operations as tools.

Analyzer calls block on HTTP; each tool runs them on a worker thread so
concurrent clients on the sse/http transports proceed in parallel.
"""

import asyncio
import logging

from fastmcp import FastMCP

from openapi_analyzer.analyzer import EndpointAnalyzer
from openapi_analyzer.codec import JsonCodec
from openapi_analyzer.config import Settings
from openapi_analyzer.http_client import HttpClient

logger = logging.getLogger(__name__)

GET_API_SPECIFICATION = """\
Discover and fetch the REST API specification from a domain using OpenAPI.
Inputs:
- domainUrl: A domain like 'example.com' (with or without protocol)

Returns the OpenAPI specification with information about available endpoints, methods, and schemas.

Examples:
- getApiSpecification("api.example.com")
- getApiSpecification("petstore.swagger.io")
"""

ANALYZE_ENDPOINT = """\
Analyze a URI to determine its parameters and body requirements.
Inputs:
- domainUrl: The domain where the API is hosted (e.g., 'api.example.com')
- path: The path to the API endpoint (e.g., '/pets/{petId}')
- method: The HTTP method (GET, POST, PUT, DELETE, etc.)

Returns a detailed analysis of the endpoint including:
- Required parameters (path, query, header)
- Request body schema (if needed)
- Example values

Examples:
- analyzeEndpoint("petstore.swagger.io", "/v2/pet/{petId}", "GET")
- analyzeEndpoint("api.github.com", "/repos/{owner}/{repo}", "GET")
"""

ANALYZE_AND_CALL = """\
Analyze an endpoint and make a request to it in one operation.
Inputs:
- domainUrl: The domain where the API is hosted (e.g., 'api.example.com')
- path: The path to the API endpoint (e.g., '/pets/1')
- method: The HTTP method (GET, POST, PUT, DELETE, etc.)
- queryParams: (Optional) Query parameters as a JSON string
- body: (Optional) Request body as a JSON string
- headers: (Optional) Headers as a JSON string

Returns both the endpoint analysis and the API response.

Example: analyzeAndCall("petstore.swagger.io", "/v2/pet/1", "GET", null, null, {"api_key": "special-key"})
"""

MAKE_REQUEST = """\
Make an HTTP request to a URI.
Inputs:
- url: The full URL to make the request to (e.g., 'https://api.example.com/resource')
- method: The HTTP method to use (GET, POST, PUT, DELETE, PATCH)
- queryParams: (Optional) Query parameters as a JSON string (e.g., {"param1": "value1"})
- body: (Optional) Request body as a JSON string (for POST, PUT, PATCH)
- headers: (Optional) Headers as a JSON string (e.g., {"Authorization": "Bearer token"})
Returns the response with status code and body.
"""

MAKE_GET_REQUEST = """\
Make a GET request to a URI.
Inputs:
- url: The full URL to make the request to
- queryParams: (Optional) Query parameters as a JSON string
- headers: (Optional) Headers as a JSON string
Returns the response with status code and body.
"""

MAKE_POST_REQUEST = """\
Make a POST request to a URI.
Inputs:
- url: The full URL to make the request to
- queryParams: (Optional) Query parameters as a JSON string
- body: (Optional) Request body as a JSON string
- headers: (Optional) Headers as a JSON string
Returns the response with status code and body.
"""


def build_analyzer(settings: Settings) -> EndpointAnalyzer:
    codec = JsonCodec()
    http = HttpClient(codec=codec, timeout=settings.timeout, user_agent=settings.user_agent)
    return EndpointAnalyzer(http, codec=codec)


def build_server(analyzer: EndpointAnalyzer, settings: Settings) -> FastMCP:
    """Create the FastMCP server and register every tool against ``analyzer``."""
    mcp = FastMCP(name=settings.server_name)

    @mcp.tool(name="getApiSpecification", description=GET_API_SPECIFICATION)
    async def get_api_specification(domainUrl: str) -> str:
        return await asyncio.to_thread(analyzer.get_api_specification, domainUrl)

    @mcp.tool(name="analyzeEndpoint", description=ANALYZE_ENDPOINT)
    async def analyze_endpoint(domainUrl: str, path: str, method: str = "GET") -> str:
        return await asyncio.to_thread(analyzer.analyze_endpoint, domainUrl, path, method)

    @mcp.tool(name="analyzeAndCall", description=ANALYZE_AND_CALL)
    async def analyze_and_call(
        domainUrl: str,
        path: str,
        method: str = "GET",
        queryParams: str | None = None,
        body: str | None = None,
        headers: str | None = None,
    ) -> str:
        return await asyncio.to_thread(analyzer.analyze_and_call, domainUrl, path, method, queryParams, body, headers)

    @mcp.tool(name="makeRequest", description=MAKE_REQUEST)
    async def make_request(
        url: str,
        method: str,
        queryParams: str | None = None,
        body: str | None = None,
        headers: str | None = None,
    ) -> str:
        return await asyncio.to_thread(analyzer.make_request, url, method, queryParams, body, headers)

    @mcp.tool(name="makeGetRequest", description=MAKE_GET_REQUEST)
    async def make_get_request(url: str, queryParams: str | None = None, headers: str | None = None) -> str:
        return await asyncio.to_thread(analyzer.make_request, url, "GET", queryParams, None, headers)

    @mcp.tool(name="makePostRequest", description=MAKE_POST_REQUEST)
    async def make_post_request(
        url: str,
        queryParams: str | None = None,
        body: str | None = None,
        headers: str | None = None,
    ) -> str:
        return await asyncio.to_thread(analyzer.make_request, url, "POST", queryParams, body, headers)

    return mcp


def run_server(settings: Settings) -> None:
    """Build the components and serve on the configured transport (blocks)."""
    mcp = build_server(build_analyzer(settings), settings)

    if settings.transport == "stdio":
        logger.info("Starting MCP server with stdio transport")
        mcp.run(transport="stdio")
    else:
        logger.info(f"Starting MCP server with {settings.transport} transport on {settings.host}:{settings.port}")
        mcp.run(transport=settings.transport, host=settings.host, port=settings.port)
