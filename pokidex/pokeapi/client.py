"""
PokéAPI v2 client.

Thin async wrapper over ``httpx.AsyncClient`` that resolves an identifier
(name or numeric id) into a typed record. Every lookup tries the identifier
as a name first and falls back to numeric-id resolution when the identifier
parses as an integer.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from pokidex.config.logging import get_logger
from pokidex.pokeapi.models import (
    PokeApiError,
    Pokemon,
    PokemonNotFoundError,
    PokemonSpecies,
)

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


class PokeApiClient:
    """
    Async PokéAPI client.

    Use as an async context manager so the underlying connection pool is
    closed when the caller is done::

        async with PokeApiClient() as pokeapi:
            pikachu = await pokeapi.get_pokemon("pikachu")

    Args:
        base_url: PokéAPI root URL
        timeout: Per-request timeout in seconds
        http_client: Pre-built ``httpx.AsyncClient`` (tests pass one backed by
                     ``httpx.MockTransport``). When given, the caller owns it.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client

    async def __aenter__(self) -> PokeApiClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
        return False

    async def aclose(self) -> None:
        if self._owns_client and self._http is not None:
            await self._http.aclose()
            self._http = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_pokemon(self, name_or_id: str) -> Pokemon:
        """
        Fetch a Pokémon record by name or numeric id.

        Raises:
            PokemonNotFoundError: If the identifier resolves neither way
            PokeApiError: On transport failures or unexpected responses
        """
        data = await self._resolve("pokemon", name_or_id)
        return _parse(Pokemon, data)

    async def get_pokemon_species(self, name_or_id: str) -> PokemonSpecies:
        """
        Fetch a species record by name or numeric id.

        Raises:
            PokemonNotFoundError: If the identifier resolves neither way
            PokeApiError: On transport failures or unexpected responses
        """
        data = await self._resolve("pokemon-species", name_or_id)
        return _parse(PokemonSpecies, data)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _resolve(self, resource: str, name_or_id: str) -> dict[str, Any]:
        identifier = str(name_or_id).strip()

        data = await self._get(resource, identifier) if identifier else None
        if data is not None:
            return data

        try:
            numeric_id = int(identifier)
        except ValueError:
            raise PokemonNotFoundError(identifier, resource) from None

        logger.debug(f"{resource} '{identifier}' not found by name, trying id {numeric_id}")
        data = await self._get(resource, str(numeric_id))
        if data is None:
            raise PokemonNotFoundError(identifier, resource)
        return data

    async def _get(self, resource: str, identifier: str) -> dict[str, Any] | None:
        """GET one resource; None on 404, PokeApiError on anything else."""
        if self._http is None:
            raise RuntimeError("PokeApiClient used outside 'async with'")

        url = f"{self._base_url}/{resource}/{identifier}"
        try:
            response = await self._http.get(url)
        except httpx.HTTPError as e:
            raise PokeApiError(f"Failed to reach PokéAPI at {url}: {e}") from e

        if response.status_code == 404:
            return None
        # Redirects left unfollowed land here too
        if not response.is_success:
            raise PokeApiError(
                f"PokéAPI returned {response.status_code} for {resource}/{identifier}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise PokeApiError(f"PokéAPI returned invalid JSON for {url}") from e


def _parse(model, data: dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise PokeApiError(f"Unexpected {model.__name__} payload from PokéAPI: {e}") from e
