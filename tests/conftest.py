"""
Straico SDK - Pytest Configuration

Configures:
- Isolation from STRAICO_* environment variables
- Client fixtures and canned HTTP responses
"""

import json
import os
from typing import Any
from unittest.mock import patch

import httpx
import pytest

from straico import AsyncStraico, Straico


TEST_API_KEY = "test_key"
TEST_BASE_URL = "https://api.straico.test/v1"


# ============================================================
# Environment
# ============================================================

@pytest.fixture(autouse=True)
def clean_env():
    """Hide any STRAICO_* variables of the developer's shell."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("STRAICO_")}
    with patch.dict(os.environ, env, clear=True):
        yield


# ============================================================
# Responses
# ============================================================

def json_response(body: Any, status_code: int = 200) -> httpx.Response:
    """An httpx response with a JSON body."""
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"))


def text_response(body: str, status_code: int = 200) -> httpx.Response:
    """An httpx response with a raw text body."""
    return httpx.Response(status_code, content=body.encode("utf-8"))


# ============================================================
# Clients
# ============================================================

@pytest.fixture
def client():
    """A Straico client pointed at a test host."""
    c = Straico(api_key=TEST_API_KEY, base_url=TEST_BASE_URL)
    yield c
    c.close()


@pytest.fixture
def async_client():
    """An AsyncStraico client pointed at a test host."""
    return AsyncStraico(api_key=TEST_API_KEY, base_url=TEST_BASE_URL)


@pytest.fixture
def upload_path(tmp_path):
    """A small local file to upload."""
    path = tmp_path / "notes.txt"
    path.write_text("some context")
    return path
