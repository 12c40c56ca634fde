"""Pokemon Search — case-insensitive substring filters over the loaded records.

Invariants:
    - Pure functions: no IO, no async, never mutate the input records
    - Case-insensitive substring match (Unicode case folding)
    - AND logic: type filter first, then name filter within that result
    - Output preserves the input order of the records
    - Blank-term rejection is the caller's job; a blank term here is simply not applied

Design Decisions:
    - Simple substring matching (not fuzzy) — predictable, fast, testable
    - Structural Protocols instead of importing schemas: core stays free of pydantic
"""

from typing import Iterable, Protocol, Sequence, TypeVar


class _NamedRef(Protocol):
    name: str


class _TypeSlot(Protocol):
    type: _NamedRef


class Searchable(Protocol):
    name: str
    types: Sequence[_TypeSlot]


P = TypeVar("P", bound=Searchable)


def _contains(haystack: str, needle: str) -> bool:
    return needle.casefold() in haystack.casefold()


def _has_type(record: Searchable, term: str) -> bool:
    return any(_contains(slot.type.name, term) for slot in record.types)


def by_name(term: str, records: Iterable[P]) -> list[P]:
    """Records whose name contains term."""
    return [r for r in records if _contains(r.name, term)]


def by_type(term: str, records: Iterable[P]) -> list[P]:
    """Records with at least one type whose name contains term."""
    return [r for r in records if _has_type(r, term)]


def search(
    records: Iterable[P],
    name: str | None = None,
    type_: str | None = None,
) -> list[P]:
    """Combine the name and type filters with AND semantics.

    A term that is None or blank is skipped. Callers must reject the case
    where both are blank before calling.
    """
    result = list(records)
    if type_ and type_.strip():
        result = by_type(type_, result)
    if name and name.strip():
        result = by_name(name, result)
    return result
