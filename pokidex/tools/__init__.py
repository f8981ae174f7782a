"""
Tool Integration Layer.

Lookups the model can request during tool routing. Today that is the
PokéAPI tool set; other adapters implement the same ``ToolAdapter`` base.
"""

from pokidex.tools.base import ToolAdapter
from pokidex.tools.pokedex import PokedexTools, ToolName

__all__ = ["PokedexTools", "ToolAdapter", "ToolName"]
