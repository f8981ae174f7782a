"""
Text generation client.

Wraps LiteLLM's ``acompletion`` behind the three calls the assistant needs:
plain prompt completion, answering a question against a context block, and
classifying an image. The provider is chosen by the model string in
``LLMSettings`` (Gemini by default), so swapping to another provider is a
config change.

Every provider failure is re-raised as ``LLMError``; callers never see
LiteLLM's own exception hierarchy.
"""

from __future__ import annotations

import base64
import logging
from pathlib import Path
from typing import Any

from litellm import acompletion

from pokidex.config.settings import ConfigurationError, LLMSettings
from pokidex.llm.models import LLMError, LLMResponse, TokenUsage
from pokidex.llm.prompts import CONTEXT_ANSWER_TEMPLATE, IMAGE_VALIDATION_PROMPT

logger = logging.getLogger(__name__)

_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


class GeminiClient:
    """
    Single-turn text generation over LiteLLM.

    Each call is stateless: the message list is built from scratch, sent,
    and the text of the first choice returned.

    Args:
        settings: LLM configuration (model, temperature, max_tokens, api_key)

    Raises:
        ConfigurationError: If no API key is configured
    """

    def __init__(self, settings: LLMSettings):
        if not settings.api_key:
            raise ConfigurationError("GEMINI_API_KEY environment variable not set")
        self._settings = settings

    async def complete(self, messages: list[dict[str, Any]]) -> LLMResponse:
        """
        Send a message list and return the first choice as an LLMResponse.

        Raises:
            LLMError: If the API call fails or returns no choices
        """
        try:
            response = await acompletion(
                model=self._settings.model,
                messages=messages,
                temperature=self._settings.temperature,
                max_tokens=self._settings.max_tokens,
                api_key=self._settings.api_key,
            )
        except Exception as e:
            raise LLMError(f"Failed to send request to {self._settings.model}: {e}", cause=e)

        if not response.choices:
            raise LLMError(f"{self._settings.model} returned no choices")

        usage = getattr(response, "usage", None)
        return LLMResponse(
            text=response.choices[0].message.content or "",
            model=response.model or self._settings.model,
            usage=TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
            ),
        )

    async def generate_content(self, prompt: str) -> str:
        """Send ``prompt`` as a single user message and return the reply text."""
        response = await self.complete([{"role": "user", "content": prompt}])
        logger.debug(
            f"{response.model}: {response.usage.total_tokens} tokens "
            f"(prompt {response.usage.prompt_tokens} + completion {response.usage.completion_tokens})"
        )
        return response.text

    async def generate_with_context(self, context: str, user_query: str) -> str:
        """Answer ``user_query`` grounded on a formatted context block."""
        prompt = CONTEXT_ANSWER_TEMPLATE.format(context=context, query=user_query)
        return await self.generate_content(prompt)

    async def identify_pokemon_from_image(self, image_path: str | Path) -> str:
        """
        Ask the model whether the image shows a Pokémon.

        The image is sent inline as a base64 data URL alongside the fixed
        validation prompt. The raw reply is returned; it is expected to be
        ``{"type":"pokemon","name":...}`` or ``{"type":"not_pokemon","reason":...}``.

        Raises:
            OSError: If the image file cannot be read
            LLMError: If the API call fails
        """
        path = Path(image_path)
        try:
            image_bytes = path.read_bytes()
        except OSError as e:
            raise OSError(f"Failed to read image file: {path}: {e.strerror or e}") from e

        mime_type = self.mime_type_for_path(path)
        image_b64 = base64.b64encode(image_bytes).decode("ascii")
        logger.debug(f"Sending {len(image_bytes)} bytes of {mime_type} for identification")

        response = await self.complete([
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": IMAGE_VALIDATION_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
                    },
                ],
            }
        ])
        return response.text

    @staticmethod
    def mime_type_for_path(path: str | Path) -> str:
        """Media type from the end of the file name (case-insensitive)."""
        # Path.suffix is empty for a bare ".png", so match on the name instead
        name = Path(path).name.lower()
        for extension, mime_type in _MIME_TYPES.items():
            if name.endswith(extension):
                return mime_type
        return DEFAULT_MIME_TYPE
