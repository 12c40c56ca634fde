"""Dataset Store — exactly-once lazy load of the Pokemon dataset into memory.

Invariants:
    - The bulk read-and-parse runs at most once per store, whatever the number of
      concurrent first callers (threads, thread pool or asyncio tasks)
    - Callers queued behind the first load observe its result or its exception
    - A failed load is memoized: no retry, no partial dataset
    - Missing source → DatasetSourceNotFoundError; unparsable → DatasetFormatError;
      any other OSError propagates unchanged
    - After load the id mapping and sorted view are read-only

Design Decisions:
    - threading.Lock + published result instead of asyncio primitives: the store is
      shared by sync and async callers alike
    - load_async() runs the blocking read in a worker thread via asyncio.to_thread
    - Records keyed by their own id; the stringified keys of the blob are not checked
    - Singleton pokemon_store initialized on startup (FastAPI lifespan manages lifecycle)
"""

import asyncio
import logging
import threading
import time
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Protocol

from pydantic import ValidationError

from pokedex.core.errors import DatasetFormatError, DatasetSourceNotFoundError
from pokedex.core.json_source import loads_lenient
from pokedex.schemas.pokemon import Pokemon

logger = logging.getLogger(__name__)


class DatasetSource(Protocol):
    """Bulk source supplying the whole dataset as one text blob."""
    location: str

    def read_text(self) -> str: ...


class FileDatasetSource:
    """Dataset blob stored in a local JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self.location = str(self.path)

    def read_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DatasetSourceNotFoundError(self.location) from e


def parse_dataset(text: str, location: str) -> dict[int, Pokemon]:
    """Parse the blob (records keyed by stringified id) into an id mapping."""
    try:
        raw = loads_lenient(text)
    except ValueError as e:
        raise DatasetFormatError(location, str(e)) from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise DatasetFormatError(
            location, "expected an object keyed by Pokemon id",
        )

    try:
        records = [Pokemon.model_validate(value) for value in raw.values()]
    except ValidationError as e:
        raise DatasetFormatError(
            location, f"{e.error_count()} invalid field(s)",
        ) from e
    return {record.id: record for record in records}


class DatasetStore:
    """Owns the in-memory Pokemon mapping and its one-time population."""

    def __init__(self, source: DatasetSource):
        self._source = source
        self._lock = threading.Lock()
        self._records: Mapping[int, Pokemon] | None = None
        self._sorted: tuple[Pokemon, ...] = ()
        self._failure: Exception | None = None

    @property
    def source(self) -> DatasetSource:
        return self._source

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    @property
    def load_failed(self) -> bool:
        return self._failure is not None

    def load(self) -> Mapping[int, Pokemon]:
        """Populate the store on first call; later calls return the same mapping."""
        records = self._records
        if records is not None:
            return records

        with self._lock:
            if self._records is not None:
                return self._records
            if self._failure is not None:
                raise self._failure

            try:
                loaded = self._read_and_parse()
            except Exception as e:
                self._failure = e
                raise

            self._sorted = tuple(sorted(loaded.values(), key=lambda p: p.id))
            self._records = MappingProxyType(loaded)
            return self._records

    async def load_async(self) -> Mapping[int, Pokemon]:
        """Same as load(), without blocking the event loop on the first read."""
        if self._records is not None:
            return self._records
        return await asyncio.to_thread(self.load)

    def all_sorted_by_id(self) -> list[Pokemon]:
        self.load()
        return list(self._sorted)

    def by_id(self, pokemon_id: int) -> Pokemon | None:
        return self.load().get(pokemon_id)

    def _read_and_parse(self) -> dict[int, Pokemon]:
        location = self._source.location
        started = time.perf_counter()
        logger.info("Starting Pokemon data loading", extra={"path": location})

        try:
            text = self._source.read_text()
        except DatasetSourceNotFoundError:
            logger.error(
                f"Pokemon data file not found at {location}",
                extra={"path": location, "error_code": "DATASET_NOT_FOUND"},
            )
            raise
        except UnicodeDecodeError as e:
            raise DatasetFormatError(location, str(e)) from e
        logger.debug(f"Dataset read, size: {len(text)} characters")

        try:
            records = parse_dataset(text, location)
        except DatasetFormatError as e:
            logger.error(
                f"Error deserializing Pokemon data: {e.message}",
                extra={"path": location, "error_code": e.code},
            )
            raise

        elapsed_ms = round((time.perf_counter() - started) * 1000)
        logger.info(
            "Pokemon data loaded",
            extra={"record_count": len(records), "elapsed_ms": elapsed_ms},
        )
        return records


# Singleton (initialized on startup)
pokemon_store: DatasetStore | None = None


def init_store(data_path: str | Path) -> DatasetStore:
    global pokemon_store
    pokemon_store = DatasetStore(FileDatasetSource(data_path))
    return pokemon_store


def get_dataset_store() -> DatasetStore:
    """FastAPI dependency for the dataset store."""
    if not pokemon_store:
        raise RuntimeError("Dataset store not initialized")
    return pokemon_store
