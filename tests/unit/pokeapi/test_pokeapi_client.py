"""
Unit tests for PokeApiClient.

HTTP is served by ``httpx.MockTransport``, so no network access is needed.
"""

import httpx
import pytest

from pokidex.pokeapi.client import PokeApiClient
from pokidex.pokeapi.models import PokeApiError, Pokemon, PokemonNotFoundError, PokemonSpecies

BASE_URL = "https://pokeapi.test/api/v2"

PIKACHU = {
    "id": 25,
    "name": "pikachu",
    "types": [{"slot": 1, "type": {"name": "electric", "url": "x"}}],
    "stats": [{"base_stat": 35, "effort": 0, "stat": {"name": "hp", "url": "x"}}],
    "abilities": [{"ability": {"name": "static", "url": "x"}, "is_hidden": False, "slot": 1}],
    "height": 4,
    "weight": 60,
    "base_experience": 112,
    "moves": [{"move": {"name": "thunder-shock", "url": "x"}, "version_group_details": []}],
    "sprites": {"front_default": "https://example.test/25.png"},
    "order": 35,
}

PIKACHU_SPECIES = {
    "id": 25,
    "name": "pikachu",
    "capture_rate": 190,
    "base_happiness": 50,
    "is_legendary": False,
    "is_mythical": False,
    "flavor_text_entries": [
        {"flavor_text": "It keeps its tail raised.", "language": {"name": "en"}, "version": {"name": "red"}},
    ],
}


def _make_client(
    routes: dict[str, httpx.Response],
    seen: list[str] | None = None,
    follow_redirects: bool = False,
) -> PokeApiClient:
    """Client whose transport answers from ``routes`` keyed by URL path, 404 otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request.url.path)
        return routes.get(request.url.path, httpx.Response(404, text="Not Found"))

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=follow_redirects)
    return PokeApiClient(base_url=BASE_URL, http_client=http)


class TestGetPokemon:
    """Tests for get_pokemon."""

    @pytest.mark.asyncio
    async def test_fetches_by_name(self):
        client = _make_client({"/api/v2/pokemon/pikachu": httpx.Response(200, json=PIKACHU)})

        async with client:
            pokemon = await client.get_pokemon("pikachu")

        assert isinstance(pokemon, Pokemon)
        assert pokemon.name == "pikachu"
        assert pokemon.type_names == ["electric"]
        assert pokemon.move_names == ["thunder-shock"]

    @pytest.mark.asyncio
    async def test_falls_back_to_numeric_id(self):
        seen: list[str] = []
        client = _make_client(
            {"/api/v2/pokemon/25": httpx.Response(200, json=PIKACHU)},
            seen=seen,
        )

        async with client:
            pokemon = await client.get_pokemon("025")

        assert pokemon.id == 25
        assert seen == ["/api/v2/pokemon/025", "/api/v2/pokemon/25"]

    @pytest.mark.asyncio
    async def test_unknown_name_raises_not_found_without_id_retry(self):
        seen: list[str] = []
        client = _make_client({}, seen=seen)

        async with client:
            with pytest.raises(PokemonNotFoundError, match="missingno"):
                await client.get_pokemon("missingno")

        assert seen == ["/api/v2/pokemon/missingno"]

    @pytest.mark.asyncio
    async def test_unknown_id_raises_not_found(self):
        client = _make_client({})

        async with client:
            with pytest.raises(PokemonNotFoundError) as exc_info:
                await client.get_pokemon("99999")

        assert exc_info.value.identifier == "99999"

    @pytest.mark.asyncio
    async def test_server_error_raises_pokeapi_error(self):
        client = _make_client({"/api/v2/pokemon/pikachu": httpx.Response(500)})

        async with client:
            with pytest.raises(PokeApiError, match="500") as exc_info:
                await client.get_pokemon("pikachu")

        assert not isinstance(exc_info.value, PokemonNotFoundError)

    @pytest.mark.asyncio
    async def test_transport_error_raises_pokeapi_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = PokeApiClient(base_url=BASE_URL, http_client=http)

        async with client:
            with pytest.raises(PokeApiError, match="Failed to reach"):
                await client.get_pokemon("pikachu")

    @pytest.mark.asyncio
    async def test_redirect_to_trailing_slash_is_followed(self):
        client = _make_client(
            {
                "/api/v2/pokemon/pikachu": httpx.Response(
                    301, headers={"Location": f"{BASE_URL}/pokemon/pikachu/"}
                ),
                "/api/v2/pokemon/pikachu/": httpx.Response(200, json=PIKACHU),
            },
            follow_redirects=True,
        )

        async with client:
            pokemon = await client.get_pokemon("pikachu")

        assert pokemon.name == "pikachu"

    @pytest.mark.asyncio
    async def test_unfollowed_redirect_reports_status_not_json(self):
        client = _make_client(
            {
                "/api/v2/pokemon/pikachu": httpx.Response(
                    301, headers={"Location": f"{BASE_URL}/pokemon/pikachu/"}
                ),
            }
        )

        async with client:
            with pytest.raises(PokeApiError, match="returned 301"):
                await client.get_pokemon("pikachu")

    @pytest.mark.asyncio
    async def test_malformed_payload_raises_pokeapi_error(self):
        client = _make_client({"/api/v2/pokemon/pikachu": httpx.Response(200, json={"name": "pikachu"})})

        async with client:
            with pytest.raises(PokeApiError, match="Unexpected Pokemon payload"):
                await client.get_pokemon("pikachu")

    @pytest.mark.asyncio
    async def test_use_outside_context_manager_raises(self):
        client = PokeApiClient(base_url=BASE_URL)
        with pytest.raises(RuntimeError, match="async with"):
            await client.get_pokemon("pikachu")


class TestGetPokemonSpecies:
    """Tests for get_pokemon_species."""

    @pytest.mark.asyncio
    async def test_fetches_species(self):
        client = _make_client(
            {"/api/v2/pokemon-species/pikachu": httpx.Response(200, json=PIKACHU_SPECIES)}
        )

        async with client:
            species = await client.get_pokemon_species("pikachu")

        assert isinstance(species, PokemonSpecies)
        assert species.capture_rate == 190
        assert species.flavor_text("en") == "It keeps its tail raised."
        assert species.flavor_text("ja") is None

    @pytest.mark.asyncio
    async def test_missing_species_raises_not_found(self):
        client = _make_client({})

        async with client:
            with pytest.raises(PokemonNotFoundError, match="species"):
                await client.get_pokemon_species("pikachu")


class TestClientLifecycle:
    """Tests for connection ownership."""

    @pytest.mark.asyncio
    async def test_caller_owned_http_client_is_not_closed(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        async with PokeApiClient(base_url=BASE_URL, http_client=http):
            pass

        assert not http.is_closed
        await http.aclose()

    @pytest.mark.asyncio
    async def test_owned_http_client_is_closed_on_exit(self):
        client = PokeApiClient(base_url=BASE_URL)
        async with client:
            assert client._http is not None
            assert client._http.follow_redirects is True
        assert client._http is None
