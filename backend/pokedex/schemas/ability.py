"""Ability Schemas — upstream ability payload and the resolved description.

Invariants:
    - AbilityDetail mirrors the upstream snake_case body; extra fields ignored
    - AbilityDescription always carries the English effect text
"""

from pydantic import BaseModel, ConfigDict

from pokedex.core.domain_types import ENGLISH_LANGUAGE


class LanguageReference(BaseModel):
    name: str
    url: str = ""


class EffectEntry(BaseModel):
    effect: str
    short_effect: str | None = None
    language: LanguageReference


class AbilityDetail(BaseModel):
    """Upstream ability body."""
    id: int
    name: str
    effect_entries: list[EffectEntry] = []
    is_main_series: bool = True

    def english_entry(self) -> EffectEntry | None:
        """First entry tagged English (case-insensitive), or None."""
        for entry in self.effect_entries:
            if entry.language.name.lower() == ENGLISH_LANGUAGE:
                return entry
        return None


class AbilityDescription(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    effect: str
