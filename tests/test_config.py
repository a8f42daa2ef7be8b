import logging

import pytest
from pydantic import ValidationError

from openapi_analyzer.config import Settings
from openapi_analyzer.logs import setup_logging


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.transport == "stdio"
        assert settings.timeout == 30.0
        assert settings.user_agent == "ApiTools/1.0"

    def test_from_env(self):
        settings = Settings.from_env({
            "OPENAPI_ANALYZER_TRANSPORT": "sse",
            "OPENAPI_ANALYZER_PORT": "9001",
            "OPENAPI_ANALYZER_TIMEOUT": "2.5",
            "OPENAPI_ANALYZER_LOG_FILE": "",
            "UNRELATED": "x",
        })
        assert settings.transport == "sse"
        assert settings.port == 9001
        assert settings.timeout == 2.5
        assert settings.log_file is None

    def test_invalid_transport(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"OPENAPI_ANALYZER_TRANSPORT": "carrier-pigeon"})

    def test_overrides_ignore_none(self):
        settings = Settings(port=1234).with_overrides(port=None, host="0.0.0.0")
        assert settings.port == 1234
        assert settings.host == "0.0.0.0"


class TestSetupLogging:
    def test_file_handler_and_httpx_level(self, tmp_path):
        root = logging.getLogger()
        saved = root.handlers[:], root.level
        try:
            log_file = tmp_path / "analyzer.log"
            setup_logging("debug", str(log_file))
            logging.getLogger("openapi_analyzer.test").debug("hello")

            assert root.level == logging.DEBUG
            assert logging.getLogger("httpx").level == logging.WARNING
            for handler in root.handlers:
                handler.flush()
            assert "[DEBUG] [openapi_analyzer.test] hello" in log_file.read_text()
        finally:
            for handler in root.handlers:
                handler.close()
            root.handlers = saved[0]
            root.setLevel(saved[1])
