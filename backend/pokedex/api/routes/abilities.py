"""Ability Routes — English ability descriptions resolved through the cache.

Invariants:
    - Blank url → 400 before the cache is consulted
    - Any unresolvable ability → 404 (upstream failure kinds are not exposed)
"""

import logging

from fastapi import APIRouter, Depends, Query

from pokedex.core.errors import InvalidInputError, ResourceNotFoundError
from pokedex.infrastructure.ability_client import (
    AbilityDescriptionCache, get_ability_cache,
)
from pokedex.schemas.ability import AbilityDescription

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/abilities", tags=["abilities"])


@router.get("/description", response_model=AbilityDescription)
async def describe_ability(
    url: str | None = Query(None),
    cache: AbilityDescriptionCache = Depends(get_ability_cache),
):
    """English description of the ability at `url` (an upstream ability URL)."""
    if url is None or not url.strip():
        raise InvalidInputError("Please provide an ability url", field="url")
    description = await cache.describe(url)
    if description is None:
        raise ResourceNotFoundError("Ability", url)
    return description
