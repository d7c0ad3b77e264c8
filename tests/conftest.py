"""Test configuration and fixtures for the entire test suite."""

import sys
from pathlib import Path

import pytest
from dotenv import load_dotenv


@pytest.fixture(scope="session", autouse=True)
def setup_environment() -> None:
    """Put the project root on the path and load .env settings."""
    project_root = Path(__file__).parent.parent
    sys.path.insert(0, str(project_root))

    # Credentials in .env are picked up by DataApiConfig, never required
    load_dotenv()
