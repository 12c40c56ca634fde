"""Generation Index — static table of contiguous Pokemon id ranges.

Invariants:
    - Pure functions: no IO, no state
    - Ranges are non-overlapping and ordered by offset
    - Membership is offset < id <= offset + count
    - Absence is None / empty list, never an exception
"""

from dataclasses import dataclass
from typing import Iterable, Protocol, TypeVar


class _HasId(Protocol):
    id: int


R = TypeVar("R", bound=_HasId)


@dataclass(frozen=True)
class GenerationRange:
    """One generation: `count` ids starting right after `offset`."""
    number: int
    count: int
    offset: int

    @property
    def first_id(self) -> int:
        return self.offset + 1

    @property
    def last_id(self) -> int:
        return self.offset + self.count

    def contains(self, pokemon_id: int) -> bool:
        return self.offset < pokemon_id <= self.offset + self.count


_GENERATIONS: dict[int, GenerationRange] = {
    1: GenerationRange(1, 151, 0),
    2: GenerationRange(2, 100, 151),
    3: GenerationRange(3, 135, 251),
    4: GenerationRange(4, 107, 386),
    5: GenerationRange(5, 156, 493),
    6: GenerationRange(6, 72, 649),
    7: GenerationRange(7, 81, 721),
    8: GenerationRange(8, 89, 802),
    9: GenerationRange(9, 120, 905),
}


def all_generations() -> list[GenerationRange]:
    """All known generations, ordered by offset."""
    return sorted(_GENERATIONS.values(), key=lambda g: g.offset)


def by_number(number: int) -> GenerationRange | None:
    return _GENERATIONS.get(number)


def by_pokemon_id(pokemon_id: int) -> GenerationRange | None:
    """The generation containing pokemon_id (ranges are disjoint)."""
    for generation in _GENERATIONS.values():
        if generation.contains(pokemon_id):
            return generation
    return None


def members_of(number: int, records: Iterable[R]) -> list[R]:
    """Records whose id falls in generation `number`, input order preserved."""
    generation = by_number(number)
    if generation is None:
        return []
    return [r for r in records if generation.contains(r.id)]
