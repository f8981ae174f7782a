"""
PokéAPI record models and lookup errors.

The models mirror the subset of the PokéAPI v2 JSON the assistant reads.
Unknown fields in the payload are ignored, so ``Pokemon.model_validate(data)``
accepts the raw response body as-is.
"""

from pydantic import BaseModel, ConfigDict, Field


class PokeApiError(Exception):
    """PokéAPI could not be reached or returned an unexpected response."""


class PokemonNotFoundError(PokeApiError):
    """The identifier resolved neither as a name nor as a numeric id."""

    def __init__(self, identifier: str, resource: str = "pokemon"):
        self.identifier = identifier
        self.resource = resource
        label = "Pokemon species" if resource == "pokemon-species" else "Pokemon"
        super().__init__(f"Failed to find {label}: {identifier}")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class NamedResource(_Record):
    """A ``{"name": ..., "url": ...}`` reference to another resource."""

    name: str
    url: str | None = None


class PokemonType(_Record):
    slot: int = 1
    type: NamedResource


class PokemonStat(_Record):
    base_stat: int
    effort: int = 0
    stat: NamedResource


class PokemonAbility(_Record):
    ability: NamedResource
    is_hidden: bool = False
    slot: int = 1


class PokemonMove(_Record):
    move: NamedResource


class Pokemon(_Record):
    """
    A single Pokémon record from ``/pokemon/{id or name}``.

    Height is in decimetres and weight in hectograms, as PokéAPI reports them.
    """

    id: int
    name: str
    types: list[PokemonType] = Field(default_factory=list)
    stats: list[PokemonStat] = Field(default_factory=list)
    abilities: list[PokemonAbility] = Field(default_factory=list)
    height: int
    weight: int
    base_experience: int | None = None
    moves: list[PokemonMove] = Field(default_factory=list)

    @property
    def type_names(self) -> list[str]:
        return [t.type.name for t in sorted(self.types, key=lambda t: t.slot)]

    @property
    def move_names(self) -> list[str]:
        return [m.move.name for m in self.moves]


class FlavorText(_Record):
    flavor_text: str
    language: NamedResource
    version: NamedResource | None = None


class PokemonSpecies(_Record):
    """A species record from ``/pokemon-species/{id or name}``."""

    id: int | None = None
    name: str | None = None
    capture_rate: int
    base_happiness: int | None = None
    is_legendary: bool = False
    is_mythical: bool = False
    flavor_text_entries: list[FlavorText] = Field(default_factory=list)

    def flavor_text(self, language: str = "en") -> str | None:
        """Return the first flavor text in ``language``, or None."""
        for entry in self.flavor_text_entries:
            if entry.language.name == language:
                return entry.flavor_text
        return None
