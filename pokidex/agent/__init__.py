"""
Orchestration Layer.

Routes each question either to a direct answer, to one PokéAPI tool, or
to the name-extraction fallback, and produces the final text.
"""

from pokidex.agent.decisions import (
    Action,
    Decision,
    Final,
    Identified,
    ImageVerdict,
    NotPokemon,
    Unparseable,
    UnknownVerdict,
    parse_decision,
    parse_image_verdict,
)
from pokidex.agent.engine import RAGEngine

__all__ = [
    "Action",
    "Decision",
    "Final",
    "Identified",
    "ImageVerdict",
    "NotPokemon",
    "RAGEngine",
    "Unparseable",
    "UnknownVerdict",
    "parse_decision",
    "parse_image_verdict",
]
