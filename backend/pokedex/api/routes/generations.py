"""Generation Routes — the static generation table."""

from fastapi import APIRouter

from pokedex.core.generations import all_generations
from pokedex.schemas.pokemon import GenerationInfo

router = APIRouter(prefix="/api/generations", tags=["generations"])


@router.get("", response_model=list[GenerationInfo])
async def list_generations():
    return [GenerationInfo.from_range(g) for g in all_generations()]
