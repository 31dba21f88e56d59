"""Shared test fixtures for daybook."""

import os
import tempfile
from datetime import UTC

import pytest

from daybook.core.storage import MemoryStorage, StorageBackend, StorageError
from daybook.journal import EntryRepository, EntryStore


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
            "storage_dir": os.path.join(tmp_dir, "data", "storage"),
        },
        "journal": {
            "timezone": "Europe/Paris",
            "compress": True,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


class FlakyStorage(MemoryStorage):
    """MemoryStorage whose reads/writes can be switched to fail."""

    def __init__(self, **config):
        super().__init__(**config)
        self.fail_writes = False
        self.fail_reads = False
        self.save_count = 0

    async def save(self, key, data, compress=False):
        self.save_count += 1
        if self.fail_writes:
            raise StorageError("disk full")
        return await super().save(key, data, compress=compress)

    async def load(self, key):
        if self.fail_reads:
            raise StorageError("medium unreadable")
        return await super().load(key)


@pytest.fixture
def backend() -> FlakyStorage:
    return FlakyStorage()


@pytest.fixture
def store(backend: StorageBackend) -> EntryStore:
    return EntryStore(backend)


@pytest.fixture
async def repo(store: EntryStore) -> EntryRepository:
    """A ready repository over in-memory storage, with UTC calendar days."""
    repository = EntryRepository(store, tz=UTC)
    await repository.initialize()
    return repository
