"""
Query orchestrator.

Decides per question whether PokéAPI data is needed, which lookup to run,
and how to fold the result into the final answer.

Data flow::

    query ──► tool-routing prompt ──► GeminiClient ──► parse_decision
                                                          │
              ┌───────────────────────┬───────────────────┴─────────┐
              ▼                       ▼                             ▼
          Final(answer)         Action(tool, name)            Unparseable
          returned as-is     PokedexTools.call(...)         fallback mode:
                             follow-up prompt ──► answer    find_pokemon
                                                            ──► PokeApiClient
                                                            ──► formatter
                                                            ──► generate_with_context

Nothing is kept between calls; every query starts from scratch.

Failure policy:
- Tool lookups that fail turn into "Error: ..." text handed to the model.
- A missing species record only drops the species block.
- A Pokémon lookup failing in fallback mode, and any ``LLMError``, propagate.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pokidex.agent.decisions import (
    Action,
    Final,
    Identified,
    NotPokemon,
    parse_decision,
    parse_image_verdict,
)
from pokidex.llm.client import GeminiClient
from pokidex.llm.prompts import (
    GENERAL_CONTEXT,
    TOOL_FOLLOW_UP_TEMPLATE,
    TOOL_ROUTING_TEMPLATE,
)
from pokidex.pokeapi.client import PokeApiClient
from pokidex.pokeapi.formatting import format_pokemon_data, format_pokemon_with_species
from pokidex.pokeapi.models import PokeApiError, Pokemon, PokemonNotFoundError
from pokidex.pokeapi.names import find_pokemon, normalize_pokemon_name
from pokidex.tools.base import ToolAdapter

logger = logging.getLogger(__name__)


class RAGEngine:
    """
    Answers Pokémon questions with optional PokéAPI lookups.

    Example:
        >>> async with PokeApiClient() as pokeapi:
        ...     engine = RAGEngine(GeminiClient(settings.llm), pokeapi, PokedexTools(pokeapi))
        ...     answer = await engine.process_query("What type is Charizard?")

    Args:
        gemini: Text generation client
        pokeapi: Open PokéAPI client used by fallback mode and image lookups
        tools: Tool adapter dispatched in tool-routing mode
    """

    def __init__(self, gemini: GeminiClient, pokeapi: PokeApiClient, tools: ToolAdapter):
        self.gemini = gemini
        self.pokeapi = pokeapi
        self.tools = tools

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def process_query(self, query: str) -> str:
        """
        Answer a free-text question.

        Raises:
            ValueError: If query is empty or whitespace-only
            LLMError: If the generation service fails
            PokeApiError: If the Pokémon named in the query cannot be fetched
                          in fallback mode
        """
        query = query.strip()
        if not query:
            raise ValueError("Query cannot be empty")

        routing_prompt = TOOL_ROUTING_TEMPLATE.format(
            tool_list=self.tools.describe_tools(),
            query=query,
        )
        raw_decision = await self.gemini.generate_content(routing_prompt)
        decision = parse_decision(raw_decision)
        logger.debug(f"Parsed decision: {decision!r}")

        if isinstance(decision, Final):
            logger.info("Model answered directly")
            return decision.answer

        if isinstance(decision, Action):
            return await self._answer_with_tool(query, decision)

        logger.info(f"Falling back to name extraction ({decision.reason})")
        return await self._answer_with_fallback(query)

    async def process_image_query(self, image_path: str | Path) -> str:
        """
        Identify the Pokémon in an image and return its data.

        Returns:
            ``Identified: <name>`` followed by the formatted record when the
            model recognizes a Pokémon, ``Not a Pokémon: <reason>`` when it
            says there is none, or the raw reply if it can't be parsed.

        Raises:
            OSError: If the image cannot be read
            LLMError: If the generation service fails
            PokeApiError: If the identified Pokémon cannot be fetched
        """
        raw_verdict = await self.gemini.identify_pokemon_from_image(image_path)
        verdict = parse_image_verdict(raw_verdict)
        logger.debug(f"Image verdict: {verdict!r}")

        if isinstance(verdict, NotPokemon):
            return f"Not a Pokémon: {verdict.reason or 'no reason given'}"

        if isinstance(verdict, Identified):
            identifier = normalize_pokemon_name(verdict.name)
            if not identifier:
                raise PokemonNotFoundError(verdict.name)
            context = await self._fetch_context(identifier)
            return f"Identified: {verdict.name}\n\n{context}"

        logger.warning("Image verdict was not valid JSON, returning raw reply")
        return raw_verdict

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _answer_with_tool(self, query: str, action: Action) -> str:
        logger.info(f"Dispatching tool '{action.tool}' for '{action.name}'")
        result = await self.tools.call(action.tool, {"name": action.name})
        tool_output = result.get("text", str(result))
        logger.debug(f"Tool output:\n{tool_output}")

        follow_up = TOOL_FOLLOW_UP_TEMPLATE.format(
            tool=action.tool,
            tool_output=tool_output,
            query=query,
        )
        answer = await self.gemini.generate_content(follow_up)
        logger.debug(f"Final response: {answer}")
        return answer

    async def _answer_with_fallback(self, query: str) -> str:
        match = await find_pokemon(query, self.pokeapi)
        if match is None:
            logger.info("No Pokémon name found, answering from general knowledge")
            return await self.gemini.generate_with_context(GENERAL_CONTEXT, query)

        name, pokemon = match
        context = await self._fetch_context(name, pokemon)
        answer = await self.gemini.generate_with_context(context, query)
        logger.debug(f"Final response: {answer}")
        return answer

    async def _fetch_context(self, identifier: str, pokemon: Pokemon | None = None) -> str:
        """Pokémon record (required) plus species block (best-effort)."""
        if pokemon is None:
            pokemon = await self.pokeapi.get_pokemon(identifier)
        try:
            species = await self.pokeapi.get_pokemon_species(identifier)
        except PokeApiError as e:
            logger.info(f"Species lookup failed for '{identifier}', omitting it: {e}")
            return format_pokemon_data(pokemon)
        return format_pokemon_with_species(pokemon, species)
