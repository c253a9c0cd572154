"""
Pytest configuration for the toolcmd test suite.

This configuration enables the --full flag to run integration tests, which
invoke a real toolchain when one is installed.
"""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite including integration tests (needs clang++)",
    )


def pytest_configure(config):
    """Configure pytest based on command-line options."""
    if config.getoption("--full"):
        # Remove the default marker expression that excludes integration tests
        markexpr = config.getoption("-m", "")
        if markexpr == "not integration":
            # Clear the marker expression to run all tests
            config.option.markexpr = ""


@pytest.fixture
def clean_cwd(tmp_path, monkeypatch):
    """Run a test from an empty temporary directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
