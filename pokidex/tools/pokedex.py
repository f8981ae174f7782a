"""
PokéAPI lookup tools.

The fixed set of lookups the model may request in a tool-routing decision.
Each tool takes a Pokémon name (or numeric id) and returns formatted text.
Lookup failures come back as "Error: ..." text so the model can still
answer; they never abort the query.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pokidex.config.logging import get_logger
from pokidex.pokeapi.client import PokeApiClient
from pokidex.pokeapi.formatting import (
    DEFAULT_MAX_MOVES,
    format_moves,
    format_pokemon_data,
    format_pokemon_with_species,
    format_species,
    format_stats,
)
from pokidex.pokeapi.models import PokeApiError
from pokidex.pokeapi.names import normalize_pokemon_name
from pokidex.tools.base import ToolAdapter

logger = get_logger(__name__)


class ToolName(str, Enum):
    GET_POKEMON = "get_pokemon"
    GET_SPECIES = "get_species"
    GET_STATS = "get_stats"
    GET_MOVES = "get_moves"


_NAME_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {
            "type": "string",
            "description": "Pokémon name or National Dex number, e.g. 'pikachu' or '25'",
        },
    },
    "required": ["name"],
}

_DESCRIPTIONS = {
    ToolName.GET_POKEMON: "Full Pokémon record: types, base stats, abilities, height, "
                          "weight, base experience, plus species details when available.",
    ToolName.GET_SPECIES: "Species details: capture rate, base happiness, legendary and "
                          "mythical status, Pokédex description.",
    ToolName.GET_STATS: "Base stats only (hp, attack, defense, special-attack, "
                        "special-defense, speed).",
    ToolName.GET_MOVES: "Moves the Pokémon can learn.",
}


class PokedexTools(ToolAdapter):
    """
    Tool adapter backed by a ``PokeApiClient``.

    Args:
        pokeapi: Open PokéAPI client
        max_moves: Upper bound on moves listed by ``get_moves``
    """

    def __init__(self, pokeapi: PokeApiClient, max_moves: int = DEFAULT_MAX_MOVES):
        self._pokeapi = pokeapi
        self._max_moves = max_moves

    def list_tools(self) -> list[dict[str, Any]]:
        return [
            {
                "name": tool.value,
                "description": _DESCRIPTIONS[tool],
                "input_schema": _NAME_SCHEMA,
            }
            for tool in ToolName
        ]

    async def call(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        try:
            tool = ToolName(tool_name)
        except ValueError:
            logger.warning(f"Model requested unknown tool '{tool_name}'")
            return {"text": f"Error: Unknown tool '{tool_name}'"}

        raw_name = str(arguments.get("name") or "").strip()
        identifier = normalize_pokemon_name(raw_name)
        if not identifier:
            return {"text": f"Error: Tool '{tool.value}' needs a Pokémon name, got '{raw_name}'"}

        try:
            text = await self._run(tool, identifier)
        except PokeApiError as e:
            logger.warning(f"Tool '{tool.value}' failed for '{identifier}': {e}")
            text = f"Error: Tool '{tool.value}' failed: {e}"
        return {"text": text}

    async def _run(self, tool: ToolName, identifier: str) -> str:
        if tool is ToolName.GET_SPECIES:
            species = await self._pokeapi.get_pokemon_species(identifier)
            return format_species(species)

        pokemon = await self._pokeapi.get_pokemon(identifier)

        if tool is ToolName.GET_STATS:
            return format_stats(pokemon)
        if tool is ToolName.GET_MOVES:
            return format_moves(pokemon, self._max_moves)

        # Full record: species is extra detail, not a requirement
        try:
            species = await self._pokeapi.get_pokemon_species(identifier)
        except PokeApiError as e:
            logger.info(f"No species data for '{identifier}': {e}")
            return format_pokemon_data(pokemon)
        return format_pokemon_with_species(pokemon, species)
