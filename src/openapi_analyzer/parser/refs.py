"""Local ``$ref`` resolution with cycle tracking."""

from contextlib import contextmanager
from typing import Any, Iterator
from urllib.parse import unquote

from openapi_analyzer.errors import CyclicReferenceError, ReferenceResolutionError


def _unescape(segment: str) -> str:
    # RFC 6901: ~1 before ~0
    return unquote(segment).replace("~1", "/").replace("~0", "~")


def resolve_ref(ref: str, document: dict[str, Any]) -> Any:
    """Walk a ``#/a/b/c`` pointer from the document root to its target node.

    Raises ReferenceResolutionError for non-local pointers and for any
    segment that is absent; the segments walked so far are kept on the error.
    """
    if not ref.startswith("#"):
        raise ReferenceResolutionError(
            f"Unsupported reference '{ref}': only local '#/...' pointers can be resolved.", ref
        )

    pointer = ref[1:]
    if not pointer:
        return document
    if not pointer.startswith("/"):
        raise ReferenceResolutionError(f"Malformed reference '{ref}'.", ref)

    current: Any = document
    walked: list[str] = []
    for raw_segment in pointer[1:].split("/"):
        segment = _unescape(raw_segment)
        if isinstance(current, dict) and segment in current:
            current = current[segment]
        elif isinstance(current, list) and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            partial = "#/" + "/".join(walked)
            raise ReferenceResolutionError(
                f"Cannot resolve reference '{ref}': '{segment}' not found under '{partial}'.",
                ref,
                walked,
            )
        walked.append(raw_segment)
    return current


class RefGuard:
    """References currently being expanded within one top-level describe call.

    Re-entering a reference that is still on the stack is a cycle. Using the
    same schema in two sibling branches is not.
    """

    def __init__(self):
        self._stack: list[str] = []

    @property
    def chain(self) -> list[str]:
        return list(self._stack)

    @contextmanager
    def enter(self, ref: str) -> Iterator[None]:
        if ref in self._stack:
            raise CyclicReferenceError(ref, self._stack)
        self._stack.append(ref)
        try:
            yield
        finally:
            self._stack.pop()


def deref(raw: Any, document: dict[str, Any]) -> Any:
    """Follow a chain of ``$ref`` objects (e.g. a referenced parameter) to a concrete node."""
    seen: list[str] = []
    while isinstance(raw, dict) and isinstance(raw.get("$ref"), str):
        ref = raw["$ref"]
        if ref in seen:
            raise CyclicReferenceError(ref, seen)
        seen.append(ref)
        raw = resolve_ref(ref, document)
    return raw
