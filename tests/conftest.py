"""
Shared pytest fixtures and configuration for marathon-spine tests.

This module provides:
- Settings cache and environment isolation
- Logging context cleanup
- Sample container definitions and JSON files

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
import structlog

from marathon_spine.container import Container, new_docker_container
from marathon_spine.core.logging import clear_context
from marathon_spine.core.settings import reset_settings


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Drop MARATHON_SPINE_* env vars and any cached settings around each test."""
    for key in list(os.environ):
        if key.startswith("MARATHON_SPINE_"):
            monkeypatch.delenv(key)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def clean_logging() -> Generator[None, None, None]:
    """Reset structlog configuration and bound context after each test."""
    yield
    clear_context()
    structlog.reset_defaults()


# =============================================================================
# Sample definitions
# =============================================================================


@pytest.fixture
def web_container() -> Container:
    """nginx on the bridge network with two TCP ports, a volume, and a label."""
    container = new_docker_container().add_volume("/var/log/web", "/logs", "RW")
    (
        container.docker.set_image("nginx:1.25")
        .use_bridged_network()
        .expose_tcp_ports(80, 443)
        .add_parameter("label", "tier=web")
    )
    return container


@pytest.fixture
def container_file(tmp_path: Path, web_container: Container) -> Path:
    """web_container written to a JSON file."""
    path = tmp_path / "container.json"
    path.write_text(web_container.to_json(indent=2), encoding="utf-8")
    return path
