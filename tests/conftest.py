import os

# Settings are read at import time; give the test run a complete environment.
os.environ.setdefault("APP_ENV", "prod")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:3000")
os.environ.setdefault("RATE_LIMIT_TIMES", "100")
os.environ.setdefault("RATE_LIMIT_SECONDS", "60")

import pytest
from fastapi.testclient import TestClient

from core.entities import OcrBatch, OcrLine


def pytest_configure(config):
    config.addinivalue_line("markers", "api: HTTP layer tests (no Redis needed)")


@pytest.fixture
def make_batch():
    def _make(*lines, document_id="doc-1"):
        return OcrBatch(
            document_id=document_id,
            lines=tuple(
                line if isinstance(line, OcrLine) else OcrLine(text=line[0], confidence=line[1])
                for line in lines
            ),
        )

    return _make


@pytest.fixture
def app():
    from main import app as fastapi_app
    from controller.controller_dependencies import rate_limiter

    fastapi_app.dependency_overrides[rate_limiter] = lambda: None
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # No context manager: lifespan (Redis + limiter init) is skipped.
    return TestClient(app)
