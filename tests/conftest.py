"""Pytest configuration and shared fixtures for cabinet pricing tests."""

from __future__ import annotations

import pytest

from cabinet_pricing.infrastructure.api import ApiClient
from payloads import BASE_URL


# =============================================================================
# pytest-httpx fixture integration
# =============================================================================

# pytest-httpx provides the httpx_mock fixture automatically once installed


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests composing several layers against a mocked backend"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def api() -> ApiClient:
    """ApiClient pointed at the mocked test server."""
    return ApiClient(BASE_URL, timeout=2.0)
