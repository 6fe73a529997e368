"""Pytest configuration helpers for test collection.

Ensure the project root is on sys.path so tests can import the package
without requiring PYTHONPATH to be set externally, and provide small
fixtures for building stores.
"""
import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Insert repo root (one level up from tests/) to sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def scheduler():
    from quickdata_lib.quickdata import ManualScheduler
    return ManualScheduler()


@pytest.fixture
def memory_store(scheduler):
    from quickdata_lib.storage import MemoryStorage
    from quickdata_lib.quickdata import TypedStore
    return TypedStore(MemoryStorage(), scheduler)


@pytest.fixture
def file_store_factory(tmp_path):
    """Build file-backed stores over the same data dir, one per call."""
    from quickdata_lib.storage import FileStorageBackend
    from quickdata_lib.quickdata import TypedStore, ManualScheduler

    data_dir = tmp_path / "data"

    def _make(name="DataInfo", scheduler=None):
        return TypedStore(FileStorageBackend(data_dir), scheduler or ManualScheduler(), name=name)

    _make.data_dir = data_dir
    return _make
