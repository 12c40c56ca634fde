"""Pokemon Service — the read operations exposed by the API.

Invariants:
    - Every operation awaits the one-time dataset load before reading
    - Absence is None / empty list, never an exception
    - search() rejects two blank terms before touching the dataset
    - Dataset load failures propagate unchanged to the caller
"""

import logging

from pokedex.core import generations, search_pokemon
from pokedex.core.errors import InvalidSearchError
from pokedex.core.generations import GenerationRange
from pokedex.infrastructure.dataset_store import DatasetStore
from pokedex.schemas.pokemon import Pokemon, PokemonSummary

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class PokemonService:
    """Read-only queries over the dataset store."""

    def __init__(self, store: DatasetStore):
        self._store = store

    async def list_all(self) -> list[Pokemon]:
        """All Pokemon ascending by id."""
        await self._store.load_async()
        result = self._store.all_sorted_by_id()
        logger.debug("Retrieved all Pokemon", extra={"record_count": len(result)})
        return result

    async def list_summaries(self) -> list[PokemonSummary]:
        return [PokemonSummary.from_pokemon(p) for p in await self.list_all()]

    async def get_by_id(self, pokemon_id: int) -> Pokemon | None:
        await self._store.load_async()
        pokemon = self._store.by_id(pokemon_id)
        logger.debug(
            f"Pokemon lookup: {'found' if pokemon else 'not found'}",
            extra={"pokemon_id": pokemon_id},
        )
        return pokemon

    async def generation_of(self, pokemon_id: int) -> GenerationRange | None:
        """Generation of a Pokemon present in the dataset."""
        if await self.get_by_id(pokemon_id) is None:
            return None
        return generations.by_pokemon_id(pokemon_id)

    async def list_by_generation(self, number: int) -> list[Pokemon]:
        result = generations.members_of(number, await self.list_all())
        logger.debug(
            "Retrieved Pokemon for generation",
            extra={"generation": number, "record_count": len(result)},
        )
        return result

    async def search(
        self, name: str | None = None, type_: str | None = None,
    ) -> list[Pokemon]:
        """Name and/or type substring search (AND when both are given)."""
        if _is_blank(name) and _is_blank(type_):
            raise InvalidSearchError()
        result = search_pokemon.search(await self.list_all(), name, type_)
        logger.debug(
            f"Search name={name!r} type={type_!r}",
            extra={"record_count": len(result)},
        )
        return result
