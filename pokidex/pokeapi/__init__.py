"""
PokéAPI Lookup Layer.

Fetches Pokémon and species records, turns display names into API slugs,
and renders records as plain text for prompts and terminal output.
"""

from pokidex.pokeapi.client import PokeApiClient
from pokidex.pokeapi.formatting import (
    format_moves,
    format_pokemon_data,
    format_pokemon_with_species,
    format_species,
    format_stats,
)
from pokidex.pokeapi.models import (
    PokeApiError,
    Pokemon,
    PokemonNotFoundError,
    PokemonSpecies,
)
from pokidex.pokeapi.names import extract_pokemon_name, normalize_pokemon_name

__all__ = [
    "PokeApiClient",
    "PokeApiError",
    "Pokemon",
    "PokemonNotFoundError",
    "PokemonSpecies",
    "extract_pokemon_name",
    "format_moves",
    "format_pokemon_data",
    "format_pokemon_with_species",
    "format_species",
    "format_stats",
    "normalize_pokemon_name",
]
