"""
Base class for tool adapters.

A tool adapter exposes a fixed set of named operations that the
orchestrator can run on the model's behalf. Results are always text, since
they are pasted straight into the follow-up prompt.
"""

from abc import ABC, abstractmethod
from typing import Any


class ToolAdapter(ABC):
    """
    Abstract base class for tool adapters.

    Subclasses that hold connections override ``initialize`` / ``shutdown``;
    the defaults do nothing.
    """

    async def initialize(self) -> None:
        """Acquire any resources the tools need."""

    async def shutdown(self) -> None:
        """Release resources acquired in ``initialize``."""

    @abstractmethod
    async def call(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Run a tool.

        Args:
            tool_name: Name of the tool to invoke
            arguments: Tool-specific arguments

        Returns:
            ``{"text": <tool output>}``. Failures are reported inside the text
            (prefixed with "Error:") rather than raised.
        """

    @abstractmethod
    def list_tools(self) -> list[dict[str, Any]]:
        """
        Describe the available tools.

        Returns:
            One ``{"name", "description", "input_schema"}`` dict per tool.
        """

    def describe_tools(self) -> str:
        """Render ``list_tools()`` as a bullet list for prompts."""
        return "\n".join(
            f"- {tool['name']}: {tool['description']}" for tool in self.list_tools()
        )

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()
        return False
