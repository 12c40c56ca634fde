"""Pokemon Routes — list, lookup, generation and search endpoints.

Invariants:
    - Static paths (/summaries, /search, /generation/...) registered before /{pokemon_id}
    - Not-found outcomes raise ResourceNotFoundError (404), never return empty 200s,
      except the full listing which is always 200
    - Search with both terms blank → 400 before any dataset access
"""

import logging

from fastapi import APIRouter, Depends, Query

from pokedex.core.errors import ResourceNotFoundError
from pokedex.infrastructure.dataset_store import DatasetStore, get_dataset_store
from pokedex.schemas.pokemon import GenerationInfo, Pokemon, PokemonSummary
from pokedex.services.pokemon_service import PokemonService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/pokemon", tags=["pokemon"])


def get_pokemon_service(
    store: DatasetStore = Depends(get_dataset_store),
) -> PokemonService:
    return PokemonService(store)


@router.get("", response_model=list[Pokemon])
async def get_all_pokemon(service: PokemonService = Depends(get_pokemon_service)):
    """All Pokemon, ascending by id."""
    return await service.list_all()


@router.get("/summaries", response_model=list[PokemonSummary])
async def get_pokemon_summaries(
    service: PokemonService = Depends(get_pokemon_service),
):
    """Compact id/name/types/sprite listing."""
    return await service.list_summaries()


@router.get("/search", response_model=list[Pokemon])
async def search_pokemon(
    name: str | None = Query(None),
    type_: str | None = Query(None, alias="type"),
    service: PokemonService = Depends(get_pokemon_service),
):
    """Search by name and/or type substring (AND when both are given)."""
    result = await service.search(name, type_)
    if not result:
        raise ResourceNotFoundError("Pokemon", f"name={name or ''}&type={type_ or ''}")
    return result


@router.get("/generation/{gen_num}", response_model=list[Pokemon])
async def get_pokemon_by_generation(
    gen_num: int, service: PokemonService = Depends(get_pokemon_service),
):
    result = await service.list_by_generation(gen_num)
    if not result:
        raise ResourceNotFoundError("Generation", str(gen_num))
    return result


@router.get("/{pokemon_id}", response_model=Pokemon)
async def get_pokemon_by_id(
    pokemon_id: int, service: PokemonService = Depends(get_pokemon_service),
):
    pokemon = await service.get_by_id(pokemon_id)
    if pokemon is None:
        raise ResourceNotFoundError("Pokemon", str(pokemon_id))
    return pokemon


@router.get("/{pokemon_id}/generation", response_model=GenerationInfo)
async def get_pokemon_generation(
    pokemon_id: int, service: PokemonService = Depends(get_pokemon_service),
):
    """Generation range the Pokemon belongs to."""
    generation = await service.generation_of(pokemon_id)
    if generation is None:
        raise ResourceNotFoundError("Generation of Pokemon", str(pokemon_id))
    return GenerationInfo.from_range(generation)
