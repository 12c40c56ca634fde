"""Root conftest — shared test configuration."""

import os

import pytest

from tests.factories import DEX, dataset_blob

# Ensure tests never pick up a developer dataset or JSON log output
os.environ.setdefault("DATA_PATH", "tests-missing/pokemon_data.json")
os.environ.setdefault("LOG_FORMAT", "text")


@pytest.fixture
def dataset_file(tmp_path):
    """Bulk dataset file holding the DEX fixture records."""
    path = tmp_path / "pokemon_data.json"
    path.write_text(dataset_blob(DEX), encoding="utf-8")
    return path
