"""Match a concrete request path against the document's path templates."""

from typing import Any, Iterable

from openapi_analyzer.errors import PathNotFoundError


def _segments(path: str) -> list[str]:
    parts = path.split("/")
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def _is_param(segment: str) -> bool:
    return len(segment) > 2 and segment.startswith("{") and segment.endswith("}")


def paths_match(template: str, path: str) -> bool:
    """True if ``path`` fits ``template``; ``{name}`` segments match any non-empty literal."""
    template_parts = _segments(template)
    path_parts = _segments(path)

    if len(template_parts) != len(path_parts):
        return False

    for expected, actual in zip(template_parts, path_parts):
        if _is_param(expected):
            if not actual:
                return False
        elif expected != actual:
            return False
    return True


def match_path(templates: Iterable[str] | dict[str, Any], path: str) -> str:
    """Return the first template matching ``path``, in declared order.

    Exact string match wins before any template is considered.
    """
    templates = list(templates)
    if path in templates:
        return path

    for template in templates:
        if paths_match(template, path):
            return template

    raise PathNotFoundError(path)
