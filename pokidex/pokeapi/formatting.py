"""
Plain-text rendering of PokéAPI records.

The output is read by both people and the language model, so it is kept
flat and line-oriented: one ``Label: value`` per line, nested items
indented with "  - ".
"""

from __future__ import annotations

from pokidex.pokeapi.models import Pokemon, PokemonSpecies

DEFAULT_MAX_MOVES = 20


def _header(pokemon: Pokemon) -> list[str]:
    return [f"Name: {pokemon.name}", f"ID: {pokemon.id}"]


def _stat_lines(pokemon: Pokemon) -> list[str]:
    lines = ["Stats:"]
    lines.extend(f"  - {s.stat.name}: {s.base_stat}" for s in pokemon.stats)
    return lines


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _join(lines: list[str]) -> str:
    return "".join(f"{line}\n" for line in lines)


def _description(species: PokemonSpecies) -> str | None:
    flavor_text = species.flavor_text("en")
    if flavor_text is None:
        return None
    # Flavor text carries hard line breaks and form feeds from the games
    return flavor_text.replace("\n", " ").replace("\f", " ")


def format_pokemon_data(pokemon: Pokemon) -> str:
    """
    Render the full Pokémon record.

    Example output::

        Name: pikachu
        ID: 25
        Types: electric
        Stats:
          - hp: 35
          - attack: 55
        Abilities: static, lightning-rod (hidden)
        Height: 4 dm
        Weight: 60 hg
        Base Experience: 112
    """
    abilities = [
        f"{a.ability.name} (hidden)" if a.is_hidden else a.ability.name
        for a in pokemon.abilities
    ]

    lines = _header(pokemon)
    lines.append(f"Types: {', '.join(pokemon.type_names)}")
    lines.extend(_stat_lines(pokemon))
    lines.append(f"Abilities: {', '.join(abilities)}")
    lines.append(f"Height: {pokemon.height} dm")
    lines.append(f"Weight: {pokemon.weight} hg")
    if pokemon.base_experience is not None:
        lines.append(f"Base Experience: {pokemon.base_experience}")
    return _join(lines)


def format_pokemon_with_species(pokemon: Pokemon, species: PokemonSpecies) -> str:
    """Render the full record followed by a ``Species Information`` block."""
    lines = ["", "Species Information:", f"  Capture Rate: {species.capture_rate}"]
    if species.base_happiness is not None:
        lines.append(f"  Base Happiness: {species.base_happiness}")
    lines.append(f"  Is Legendary: {_bool(species.is_legendary)}")
    lines.append(f"  Is Mythical: {_bool(species.is_mythical)}")

    description = _description(species)
    if description is not None:
        lines.append(f"  Description: {description}")

    return format_pokemon_data(pokemon) + _join(lines)


def format_species(species: PokemonSpecies) -> str:
    """Render only the species block, used when the Pokémon record is not needed."""
    lines = []
    if species.name is not None:
        lines.append(f"Species: {species.name}")
    lines.append(f"Capture Rate: {species.capture_rate}")
    if species.base_happiness is not None:
        lines.append(f"Base Happiness: {species.base_happiness}")
    lines.append(f"Is Legendary: {_bool(species.is_legendary)}")
    lines.append(f"Is Mythical: {_bool(species.is_mythical)}")
    description = _description(species)
    if description is not None:
        lines.append(f"Description: {description}")
    return _join(lines)


def format_stats(pokemon: Pokemon) -> str:
    """Render name, id and base stats only."""
    return _join(_header(pokemon) + _stat_lines(pokemon))


def format_moves(pokemon: Pokemon, max_moves: int = DEFAULT_MAX_MOVES) -> str:
    """
    Render name, id and at most ``max_moves`` learnable moves.

    Moves keep PokéAPI's order; the heading states how many were cut.
    """
    moves = pokemon.move_names
    shown = moves[:max(max_moves, 0)]

    lines = _header(pokemon)
    lines.append(f"Moves ({len(shown)} of {len(moves)}):")
    lines.extend(f"  - {move}" for move in shown)
    return _join(lines)
