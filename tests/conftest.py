"""
Pytest configuration and shared fixtures for tofu-runner tests.
"""

import io
import zipfile

import pytest


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


def build_zip(members: dict) -> bytes:
    """Build an in-memory zip archive from a {name: bytes} mapping."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def zip_factory():
    """Factory building zip archive bytes from a {name: bytes} mapping."""
    return build_zip


@pytest.fixture
def tofu_zip():
    """Release-like archive containing a tofu executable and license."""
    return build_zip(
        {
            "tofu": b"#!/bin/sh\necho tofu\n",
            "LICENSE": b"MPL-2.0\n",
            "README.md": b"OpenTofu\n",
        }
    )


@pytest.fixture
def windows_tofu_zip():
    """Release-like archive for windows."""
    return build_zip({"tofu.exe": b"MZ fake", "LICENSE": b"MPL-2.0\n"})


@pytest.fixture
def clean_env(monkeypatch):
    """Remove tofu-runner environment overrides."""
    monkeypatch.delenv("TOFU_RUNNER_VERSION", raising=False)
    monkeypatch.delenv("TOFU_RUNNER_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches between tests."""
    from tofurunner.core import platform

    platform.clear_platform_cache()
    yield
    platform.clear_platform_cache()


@pytest.fixture
def corrupt_deflate_zip():
    """
    Archive whose central directory is intact but whose deflated tofu member
    has an invalid block header, so decompression fails mid-extraction.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("tofu", b"A" * 200000)
    data = bytearray(buffer.getvalue())
    # 30-byte local header + 4-byte name; first byte of the deflate stream
    data[34] = 0xFF
    return bytes(data)
