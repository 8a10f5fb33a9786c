"""
Pytest configuration and fixtures for manual search tests.

Provides service doubles, temporary seed directories, and environment cleanup.
"""

import json
import os
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest

from manual_search.domain.models import QueryResult, Vector


@pytest.fixture
def mock_embedding_service():
    """Mock embedding service for testing."""
    mock = Mock()
    mock.get_dimension.return_value = 3
    mock.embed_texts.return_value = [Vector(values=[0.1, 0.2, 0.3], dim=3)]
    return mock


@pytest.fixture
def mock_vector_store():
    """Mock vector store with no collections and no hits."""
    mock = Mock()
    mock.has_collections.return_value = False
    mock.list_collections.return_value = []
    mock.upsert_points.return_value = {"status": "ok", "result": {"status": "completed"}}
    mock.search.return_value = []
    return mock


@pytest.fixture
def sample_hits():
    return [
        QueryResult(id="a1", score=0.91, payload={"id": "101", "text": "Charge the battery for 4 hours."}),
        QueryResult(id="b2", score=0.74, payload={"id": "102", "text": "Hold the power button to reset."}),
    ]


@pytest.fixture
def seed_dir_factory():
    """Factory writing manual-chunks.json into a fresh temporary directory."""
    created = []

    def _make(entries):
        temp_dir = tempfile.TemporaryDirectory()
        created.append(temp_dir)
        root = Path(temp_dir.name)
        (root / "manual-chunks.json").write_text(json.dumps(entries), encoding="utf-8")
        return root

    yield _make

    for temp_dir in created:
        temp_dir.cleanup()


@pytest.fixture
def clean_environment():
    """Clean environment variables for testing."""
    env_vars_to_clean = [
        'ImportInitialDataDir',
        'QDRANT_URL',
        'OLLAMA_URL',
        'EMBED_MODEL',
        'MANUAL_EMBED_DIM',
        'MANUAL_SEARCH_LIMIT',
        'MANUAL_IMPORT_BATCH_SIZE',
        'MANUAL_SEARCH_HTTP_TIMEOUT',
    ]

    original_env = {}
    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
            del os.environ[var]

    yield

    for var in env_vars_to_clean:
        os.environ.pop(var, None)
    for var, value in original_env.items():
        os.environ[var] = value


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
    config.addinivalue_line(
        "markers", "env: mark test as environment resolution test"
    )
