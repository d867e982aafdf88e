r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import pytest

import airtablex


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(airtablex.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in airtablex.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in airtablex.__all__:
        assert hasattr(airtablex, name), f"{name} is in __all__ but not defined in module"


@pytest.mark.parametrize(
    "name",
    ["Airtable", "AsyncAirtable", "AsyncTable", "SyncTable", "Configuration", "RequestDescriptor"],
)
def test_public_classes(name: str) -> None:
    """Test that the public classes are exported."""
    assert isinstance(getattr(airtablex, name), type)


def test_exception_hierarchy() -> None:
    """Test that every exported error is an AirtableError."""
    assert issubclass(airtablex.AirtableError, Exception)
    assert issubclass(airtablex.PayloadDecodeError, airtablex.AirtableError)
