"""
Text Generation Layer.

Talks to the language model through LiteLLM (Gemini by default) and holds
the prompt templates the orchestrator fills in.

    RAGEngine  →  GeminiClient.generate_content(prompt)  →  str
                  GeminiClient.generate_with_context(context, query)
                  GeminiClient.identify_pokemon_from_image(path)

The client is stateless per call; there is no conversation memory.
"""

from pokidex.llm.client import GeminiClient
from pokidex.llm.models import LLMError, LLMResponse, TokenUsage

__all__ = [
    "GeminiClient",
    "LLMError",
    "LLMResponse",
    "TokenUsage",
]
