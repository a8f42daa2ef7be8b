"""Error kinds raised by the analysis components.

Components raise these; the analyzer turns them into ``Error: <message>``
strings at the tool boundary.
"""


class AnalysisError(Exception):
    """Base class for every failure the analyzer knows how to report."""

    kind = "analysis"


class FetchError(AnalysisError):
    """An HTTP call failed: transport error, non-2xx status or empty body."""

    kind = "fetch"

    def __init__(self, message: str, attempts: list[str] | None = None):
        super().__init__(message)
        self.attempts = attempts or []


class SpecNotFoundError(FetchError):
    """Some probe answered, but no candidate path yielded a JSON document."""

    kind = "not_found"


class ParseError(AnalysisError):
    kind = "parse"


class InvalidPathError(AnalysisError, ValueError):
    kind = "invalid_path"


class InvalidUrlError(AnalysisError, ValueError):
    kind = "invalid_url"


class PathNotFoundError(AnalysisError):
    kind = "path_not_found"

    def __init__(self, path: str):
        super().__init__(f"Path '{path}' not found in the OpenAPI specification.")
        self.path = path


class MethodNotSupportedError(AnalysisError):
    kind = "method_not_supported"

    def __init__(self, method: str, path: str):
        super().__init__(f"HTTP method '{method}' not supported for path '{path}'.")
        self.method = method
        self.path = path


class ReferenceResolutionError(AnalysisError):
    """A ``$ref`` pointer could not be walked to its target."""

    kind = "reference"

    def __init__(self, message: str, ref: str, walked: list[str] | None = None):
        super().__init__(message)
        self.ref = ref
        self.walked = walked or []


class CyclicReferenceError(ReferenceResolutionError):
    """A ``$ref`` was re-entered while it was still being expanded."""

    kind = "cyclic_reference"

    def __init__(self, ref: str, chain: list[str]):
        cycle = " -> ".join([*chain, ref])
        super().__init__(f"Cyclic reference detected: {cycle}", ref, walked=list(chain))
        self.chain = list(chain)


class InvalidMethodError(AnalysisError, ValueError):
    kind = "invalid_method"
