"""Runtime settings for the server and CLI, read from OPENAPI_ANALYZER_* variables."""

import os
from typing import Any, Literal, Mapping

from pydantic import BaseModel

from openapi_analyzer.http_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

ENV_PREFIX = "OPENAPI_ANALYZER_"


class Settings(BaseModel):
    server_name: str = "openapi-analyzer"
    transport: Literal["stdio", "sse", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    log_file: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from the environment; unset variables keep their defaults."""
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            value = environ.get(ENV_PREFIX + name.upper())
            if value not in (None, ""):
                values[name] = value
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy with every non-None override applied (and validated)."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return Settings(**values)
