"""Dataset Store tests — exactly-once loading, failure memoization, views.

Tests cover:
    - File source: load, sorted view, by_id hit/miss
    - Missing file → DatasetSourceNotFoundError, malformed → DatasetFormatError
    - Other OSErrors propagate unchanged
    - K concurrent threads → one bulk read, identical mapping
    - K concurrent asyncio tasks → one bulk read
    - Failure memoized: every caller sees the same exception, no retry
    - Lenient source (comments, trailing commas, mixed-case keys) accepted
    - Mapping is read-only after load
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from pokedex.core.errors import DatasetFormatError, DatasetSourceNotFoundError
from pokedex.infrastructure.dataset_store import (
    DatasetStore, FileDatasetSource, parse_dataset,
)
from tests.factories import DEX, dataset_blob


class _CountingSource:
    """In-memory source recording how often it was read."""

    def __init__(self, text: str = "", error: Exception | None = None, delay=None):
        self.location = "memory://dex"
        self.reads = 0
        self._text = text
        self._error = error
        self._delay = delay
        self._reads_lock = threading.Lock()

    def read_text(self) -> str:
        with self._reads_lock:
            self.reads += 1
        if self._delay is not None:
            self._delay.wait(timeout=5)
        if self._error is not None:
            raise self._error
        return self._text


def test_load_from_file(dataset_file):
    store = DatasetStore(FileDatasetSource(dataset_file))
    records = store.load()
    assert len(records) == len(DEX)
    assert store.is_loaded


def test_all_sorted_by_id_is_ascending(dataset_file):
    store = DatasetStore(FileDatasetSource(dataset_file))
    ids = [p.id for p in store.all_sorted_by_id()]
    assert ids == sorted(r["id"] for r in DEX)


def test_by_id_hit_appears_once_at_sorted_position(dataset_file):
    store = DatasetStore(FileDatasetSource(dataset_file))
    listing = store.all_sorted_by_id()
    for raw in DEX:
        found = store.by_id(raw["id"])
        assert found is not None
        assert listing.count(found) == 1
        index = listing.index(found)
        assert all(p.id < found.id for p in listing[:index])
        assert all(p.id > found.id for p in listing[index + 1:])


def test_by_id_miss_returns_none(dataset_file):
    store = DatasetStore(FileDatasetSource(dataset_file))
    assert store.by_id(9999) is None


def test_missing_file_raises_source_not_found(tmp_path):
    store = DatasetStore(FileDatasetSource(tmp_path / "nope.json"))
    with pytest.raises(DatasetSourceNotFoundError) as exc_info:
        store.load()
    assert "nope.json" in exc_info.value.message
    assert store.load_failed


def test_malformed_file_raises_format_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"1": {"id": 1, "name": ', encoding="utf-8")
    store = DatasetStore(FileDatasetSource(path))
    with pytest.raises(DatasetFormatError):
        store.load()


def test_wrong_record_shape_raises_format_error():
    with pytest.raises(DatasetFormatError, match="invalid field"):
        parse_dataset('{"1": {"id": "one", "name": "x"}}', "memory://dex")


def test_top_level_array_raises_format_error():
    with pytest.raises(DatasetFormatError, match="keyed by Pokemon id"):
        parse_dataset("[1, 2]", "memory://dex")


def test_null_blob_loads_empty_dataset():
    assert parse_dataset("null", "memory://dex") == {}


def test_invalid_utf8_raises_format_error(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"1": {"name": "caf\xe9"}}')
    store = DatasetStore(FileDatasetSource(path))
    with pytest.raises(DatasetFormatError):
        store.load()


def test_other_os_errors_propagate_unchanged():
    source = _CountingSource(error=PermissionError("denied"))
    store = DatasetStore(source)
    with pytest.raises(PermissionError):
        store.load()


def test_lenient_source_is_accepted():
    text = (
        "// exported dataset\n"
        '{"25": {"ID": 25, "Name": "pikachu", /* types */ '
        '"Types": [{"Slot": 1, "Type": {"Name": "electric", "url": ""},},],},}'
    )
    records = parse_dataset(text, "memory://dex")
    assert records[25].name == "pikachu"
    assert records[25].types[0].type.name == "electric"


def test_mapping_is_read_only(dataset_file):
    store = DatasetStore(FileDatasetSource(dataset_file))
    records = store.load()
    with pytest.raises(TypeError):
        records[1] = None


def test_concurrent_threads_trigger_exactly_one_read():
    gate = threading.Event()
    source = _CountingSource(dataset_blob(DEX), delay=gate)
    store = DatasetStore(source)

    with ThreadPoolExecutor(max_workers=16) as pool:
        futures = [pool.submit(store.load) for _ in range(16)]
        gate.set()
        results = [f.result(timeout=10) for f in futures]

    assert source.reads == 1
    assert all(r is results[0] for r in results)


def test_concurrent_failure_is_shared_and_not_retried():
    gate = threading.Event()
    source = _CountingSource(error=DatasetSourceNotFoundError("memory://dex"), delay=gate)
    store = DatasetStore(source)

    def _attempt():
        try:
            store.load()
        except DatasetSourceNotFoundError as e:
            return e
        return None

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [pool.submit(_attempt) for _ in range(8)]
        gate.set()
        errors = [f.result(timeout=10) for f in futures]

    assert source.reads == 1
    assert all(e is errors[0] for e in errors)
    assert errors[0] is not None

    with pytest.raises(DatasetSourceNotFoundError):
        store.load()
    assert source.reads == 1


async def test_concurrent_async_callers_trigger_exactly_one_read():
    source = _CountingSource(dataset_blob(DEX))
    store = DatasetStore(source)

    results = await asyncio.gather(*(store.load_async() for _ in range(20)))

    assert source.reads == 1
    assert all(r is results[0] for r in results)


async def test_load_async_after_load_reuses_mapping(dataset_file):
    store = DatasetStore(FileDatasetSource(dataset_file))
    first = store.load()
    assert await store.load_async() is first
