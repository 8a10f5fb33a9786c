"""
Unit tests for environment and .env resolution.
"""

import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch
import pytest

from manual_search.api import _env_get, _parse_dotenv
from manual_search.infrastructure import config
from manual_search.infrastructure.logging import log_level
from manual_search.infrastructure.timeouts import http_timeout_seconds


class TestDotenvParsing:
    """Test .env file parsing functionality."""

    def test_parse_simple_dotenv(self):
        content = """
# Comment line
ImportInitialDataDir=/data/seed
QDRANT_URL="http://vector-db:6333"
EMBED_MODEL='all-minilm'
invalid line without equals
=MISSING_KEY
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.env', delete=False) as f:
            f.write(content)
            temp_path = Path(f.name)

        try:
            assert _parse_dotenv(temp_path) == {
                'ImportInitialDataDir': '/data/seed',
                'QDRANT_URL': 'http://vector-db:6333',
                'EMBED_MODEL': 'all-minilm',
            }
        finally:
            temp_path.unlink()

    def test_parse_nonexistent_file(self):
        assert _parse_dotenv(Path("/nonexistent/path/.env")) == {}

    def test_export_prefix_and_inline_comment(self, tmp_path):
        dotenv = tmp_path / ".env"
        dotenv.write_text(
            "export ImportInitialDataDir=/data/seed  # mounted volume\n"
            "EMBED_MODEL=\"all-minilm # not a comment\"\n"
            "# DISABLED=1\n"
        )
        assert _parse_dotenv(dotenv) == {
            "ImportInitialDataDir": "/data/seed",
            "EMBED_MODEL": "all-minilm # not a comment",
        }


class TestEnvironmentGet:
    """Test environment variable retrieval with .env fallback."""

    @patch.dict(os.environ, {'TEST_VAR': 'from_env'})
    def test_process_env_wins(self):
        with patch('manual_search.api._parse_dotenv', return_value={'TEST_VAR': 'from_dotenv'}):
            assert _env_get('TEST_VAR') == 'from_env'

    @patch.dict(os.environ, {'TEST_VAR': '   '})
    def test_blank_process_env_falls_back(self):
        with patch('manual_search.api._parse_dotenv', return_value={'TEST_VAR': 'from_dotenv'}):
            assert _env_get('TEST_VAR') == 'from_dotenv'

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_key(self):
        with patch('manual_search.api._parse_dotenv', return_value={}):
            assert _env_get('TEST_VAR') is None


@pytest.mark.usefixtures("clean_environment")
class TestConfig:
    """Test configuration accessors and their defaults."""

    def test_defaults(self):
        assert config.qdrant_url() == "http://localhost:6333"
        assert config.ollama_url() == "http://localhost:11434"
        assert config.embed_model() == "all-minilm"
        assert config.embed_dim() is None
        assert config.search_limit() == 3
        assert config.import_batch_size() == 1000
        assert http_timeout_seconds() == 15.0

    def test_trailing_slash_stripped(self):
        os.environ["QDRANT_URL"] = "http://vector-db/"
        assert config.qdrant_url() == "http://vector-db"

    def test_invalid_integers_fall_back(self):
        os.environ["MANUAL_SEARCH_LIMIT"] = "many"
        os.environ["MANUAL_IMPORT_BATCH_SIZE"] = "0"
        os.environ["MANUAL_EMBED_DIM"] = "-1"
        os.environ["MANUAL_SEARCH_HTTP_TIMEOUT"] = "soon"
        assert config.search_limit() == 3
        assert config.import_batch_size() == 1
        assert config.embed_dim() is None
        assert http_timeout_seconds() == 15.0

    def test_embed_dim(self):
        os.environ["MANUAL_EMBED_DIM"] = "384"
        assert config.embed_dim() == 384


class TestLogLevel:
    """Test MANUAL_SEARCH_LOG_LEVEL resolution."""

    @patch.dict(os.environ, {}, clear=True)
    def test_default(self):
        assert log_level() == logging.INFO

    @patch.dict(os.environ, {"MANUAL_SEARCH_LOG_LEVEL": "debug"})
    def test_name(self):
        assert log_level() == logging.DEBUG

    @patch.dict(os.environ, {"MANUAL_SEARCH_LOG_LEVEL": "30"})
    def test_number(self):
        assert log_level() == logging.WARNING

    @patch.dict(os.environ, {"MANUAL_SEARCH_LOG_LEVEL": "chatty"})
    def test_unknown_name_falls_back(self):
        assert log_level() == logging.INFO
