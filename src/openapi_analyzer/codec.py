"""JSON codec handed to every component that reads or writes JSON text."""

import json
from typing import Any

from openapi_analyzer.errors import ParseError


class JsonCodec:
    """Parses and pretty-prints JSON with a single, explicit configuration."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def loads(self, text: str) -> Any:
        try:
            return json.loads(text)
        except (json.JSONDecodeError, TypeError) as e:
            raise ParseError(f"Failed to parse JSON: {e}") from e

    def dumps(self, value: Any, pretty: bool = True) -> str:
        if pretty:
            return json.dumps(value, indent=self.indent, ensure_ascii=False)
        return json.dumps(value, ensure_ascii=False)
