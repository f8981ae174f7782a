"""
Pokidex - a Pokémon question-answering assistant.

Combines a language-generation service (via LiteLLM) with structured data
from PokéAPI. The orchestrator decides per question whether to fetch data,
which lookup to run, and folds the result into the final answer.
"""

__version__ = "0.1.0"
