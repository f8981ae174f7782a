"""
Pokémon name extraction and normalization.

PokéAPI addresses Pokémon by lowercase hyphenated slugs ("mr-mime",
"nidoran-f", "type-null"). Display names typed by users carry capitals,
punctuation, accents and gender symbols, so every candidate is normalized
before it is checked against the API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pokidex.config.logging import get_logger
from pokidex.pokeapi.models import Pokemon, PokemonNotFoundError

if TYPE_CHECKING:
    from pokidex.pokeapi.client import PokeApiClient

logger = get_logger(__name__)

_ACCENTS = {
    **dict.fromkeys("àáâäãå", "a"),
    **dict.fromkeys("èéêë", "e"),
    **dict.fromkeys("ìíîï", "i"),
    **dict.fromkeys("òóôöõ", "o"),
    **dict.fromkeys("ùúûü", "u"),
}
_GENDER_SYMBOLS = {"♀": "f", "♂": "m"}
_SEPARATORS = frozenset(" -_/:")

# Exclusive bounds on candidate token length, in characters
MIN_TOKEN_LENGTH = 2
MAX_TOKEN_LENGTH = 20


def normalize_pokemon_name(name: str) -> str:
    """
    Convert a display name into a PokéAPI slug.

    Examples:
        >>> normalize_pokemon_name(" Mr. Mime ")
        'mr-mime'
        >>> normalize_pokemon_name("Nidoran♀")
        'nidoran-f'
        >>> normalize_pokemon_name("Farfetch'd")
        'farfetchd'
    """
    out: list[str] = []
    last_was_dash = False

    for ch in name.strip().lower():
        ch = _ACCENTS.get(ch, ch)

        if ch in _GENDER_SYMBOLS:
            if out and not last_was_dash:
                out.append("-")
            out.append(_GENDER_SYMBOLS[ch])
            last_was_dash = False
        elif ch.isascii() and ch.isalnum():
            out.append(ch)
            last_was_dash = False
        elif ch in _SEPARATORS and out and not last_was_dash:
            out.append("-")
            last_was_dash = True

    return "".join(out).strip("-")


def candidate_tokens(query: str) -> list[str]:
    """
    Return the words of ``query`` that look like a capitalized name.

    Order is left-to-right as they appear in the query.
    """
    return [
        word
        for word in query.split()
        if word[0].isupper() and MIN_TOKEN_LENGTH < len(word) < MAX_TOKEN_LENGTH
    ]


async def find_pokemon(query: str, client: PokeApiClient) -> tuple[str, Pokemon] | None:
    """
    Find the first capitalized word in ``query`` that names a real Pokémon.

    Each candidate is normalized and verified with a PokéAPI lookup; the
    first one that resolves wins. A candidate that PokéAPI does not know is
    skipped; transport failures propagate.

    Returns:
        ``(slug, record)`` for the first match, or None if nothing resolved.
        The record is the one fetched during verification.
    """
    for word in candidate_tokens(query):
        normalized = normalize_pokemon_name(word)
        if not normalized:
            continue
        try:
            pokemon = await client.get_pokemon(normalized)
        except PokemonNotFoundError as e:
            logger.debug(f"Candidate '{word}' ({normalized}) did not resolve: {e}")
            continue
        logger.debug(f"Extracted Pokémon name '{normalized}' from query")
        return normalized, pokemon
    return None


async def extract_pokemon_name(query: str, client: PokeApiClient) -> str | None:
    """Like ``find_pokemon`` but returns only the normalized slug."""
    match = await find_pokemon(query, client)
    return match[0] if match else None
