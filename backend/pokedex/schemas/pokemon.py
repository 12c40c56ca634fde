"""Pokemon Schemas — frozen Pydantic models for dataset records and responses.

Invariants:
    - Field names follow the snake_case shape of the bulk dataset
    - Models are frozen: records are never mutated after load
    - Unknown fields in the source are ignored, missing sprite URLs are None
    - Sprites prefer the `other.showdown` set and fall back to top-level URLs

Design Decisions:
    - Source is trusted: no checks beyond what deserialization enforces
      (stat count, type count are not re-validated)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from pokedex.core.generations import GenerationRange

_SPRITE_FIELDS = (
    "back_default", "back_female", "back_shiny_female",
    "front_default", "front_female", "front_shiny", "front_shiny_female",
)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class ApiReference(_Frozen):
    """Named link to another resource (ability, stat, type)."""
    name: str
    url: str = ""


class PokemonAbility(_Frozen):
    ability: ApiReference
    is_hidden: bool = False
    slot: int


class PokemonStat(_Frozen):
    base_stat: int
    effort: int = 0
    stat: ApiReference


class PokemonType(_Frozen):
    slot: int
    type: ApiReference


def _sprite_url(source: Any, field: str) -> str | None:
    if not isinstance(source, dict):
        return None
    url = source.get(field)
    if not isinstance(url, str) or not url.strip():
        return None
    return url


class PokemonSprites(_Frozen):
    """Image URLs; showdown animations win over static sprites when present."""
    back_default: str | None = None
    back_female: str | None = None
    back_shiny_female: str | None = None
    front_default: str | None = None
    front_female: str | None = None
    front_shiny: str | None = None
    front_shiny_female: str | None = None

    @model_validator(mode="before")
    @classmethod
    def prefer_showdown(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        other = data.get("other")
        showdown = other.get("showdown") if isinstance(other, dict) else None
        return {
            field: _sprite_url(showdown, field) or _sprite_url(data, field)
            for field in _SPRITE_FIELDS
        }


class Pokemon(_Frozen):
    """One creature record from the bulk dataset."""
    id: int
    name: str
    order: int = 0
    height: int = 0
    weight: int = 0
    sprites: PokemonSprites = PokemonSprites()
    abilities: list[PokemonAbility] = []
    stats: list[PokemonStat] = []
    types: list[PokemonType]


class PokemonSummary(_Frozen):
    """Compact listing entry."""
    id: int
    name: str
    types: list[PokemonType]
    sprite: str

    @classmethod
    def from_pokemon(cls, pokemon: Pokemon) -> "PokemonSummary":
        return cls(
            id=pokemon.id,
            name=pokemon.name,
            types=pokemon.types,
            sprite=pokemon.sprites.front_default or "",
        )


class GenerationInfo(_Frozen):
    """Generation range as exposed over the API."""
    number: int
    count: int
    offset: int
    first_id: int
    last_id: int

    @classmethod
    def from_range(cls, generation: GenerationRange) -> "GenerationInfo":
        return cls(
            number=generation.number,
            count=generation.count,
            offset=generation.offset,
            first_id=generation.first_id,
            last_id=generation.last_id,
        )
