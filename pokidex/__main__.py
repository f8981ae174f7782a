"""
Pokidex CLI entry point.

    pokidex [chat]                 interactive question loop (default)
    pokidex ask "QUESTION"         answer one question
    pokidex identify-image PATH    identify the Pokémon in an image
    pokidex select-image           pick the image with the OS file dialog
    pokidex config                 show the effective configuration
"""

import argparse
import asyncio
import signal
import sys
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path

from pokidex import __version__
from pokidex.agent.engine import RAGEngine
from pokidex.config.logging import get_logger, setup_logging
from pokidex.config.settings import ChatSettings, ConfigurationError, Settings, load_settings
from pokidex.file_picker import FilePickerError, pick_image_file
from pokidex.llm.client import GeminiClient
from pokidex.pokeapi.client import PokeApiClient
from pokidex.tools.pokedex import PokedexTools

QUIT_COMMANDS = frozenset({"quit", "exit"})

WELCOME_TEXT = (
    "Welcome to Pokidex RAG Agent!\n"
    "Ask me anything about Pokemon. Type 'quit' or 'exit' to leave.\n"
)

HELP_TEXT = (
    "Ask me questions about Pokemon! Examples:\n"
    "  - What are Pikachu's stats?\n"
    "  - What type is Charizard?\n"
    "  - What moves can Pikachu learn?\n"
    "  - You can also run: pokidex identify-image ./pokemon.png\n"
    "  - Or open file picker: pokidex select-image\n"
    "\nType 'quit' or 'exit' to leave.\n"
)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="pokidex",
        description="A Pokemon RAG agent powered by Gemini AI and PokéAPI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Pokidex {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("chat", help="Start interactive chat mode")

    ask_parser = subparsers.add_parser("ask", help="Ask a single question")
    ask_parser.add_argument(
        "question",
        help='Your question about Pokemon, e.g. "What type is Charizard?"',
    )

    identify_parser = subparsers.add_parser(
        "identify-image",
        help="Identify a Pokemon from an image and return its specs",
    )
    identify_parser.add_argument("image_path", type=Path, help="Path to the image file")

    subparsers.add_parser(
        "select-image",
        help="Open the system file picker and identify a Pokemon image",
    )

    subparsers.add_parser("config", help="Show current configuration")

    return parser


def install_interrupt_handler() -> None:
    """Exit cleanly with status 0 on Ctrl-C, wherever the process is."""

    def _on_interrupt(signum, frame):
        print("\nReceived Ctrl-C, exiting...")
        sys.exit(0)

    signal.signal(signal.SIGINT, _on_interrupt)


@asynccontextmanager
async def open_engine(settings: Settings) -> AsyncIterator[RAGEngine]:
    """
    Build a RAGEngine whose PokéAPI connection lives for the ``async with`` block.

    Raises:
        ConfigurationError: If the generation credential is missing
    """
    gemini = GeminiClient(settings.llm)
    async with PokeApiClient(
        base_url=settings.pokeapi.base_url,
        timeout=settings.pokeapi.timeout,
    ) as pokeapi:
        async with PokedexTools(pokeapi, max_moves=settings.pokeapi.max_moves) as tools:
            yield RAGEngine(gemini, pokeapi, tools)


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    print("=== Pokidex Configuration ===\n")
    print(f"Log Level: {settings.log_level}")
    print(f"Log File: {settings.log_file or 'None (console only)'}")
    print(f"\nLLM Model: {settings.llm.model}")
    print(f"LLM Temperature: {settings.llm.temperature}")
    print(f"LLM Max Tokens: {settings.llm.max_tokens}")
    print(f"LLM API Key: {'Set' if settings.llm.api_key else 'Not set'}")
    print(f"\nPokéAPI URL: {settings.pokeapi.base_url}")
    print(f"PokéAPI Timeout: {settings.pokeapi.timeout}s")
    print(f"Max Moves Listed: {settings.pokeapi.max_moves}")
    return 0


async def cmd_ask(question: str, settings: Settings) -> int:
    """Answer a single question and print it."""
    logger = get_logger(__name__)

    print("Processing your question...\n")
    try:
        async with open_engine(settings) as engine:
            response = await engine.process_query(question)
    except Exception as e:
        logger.debug("Query failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{settings.chat.assistant_prefix}{response}")
    return 0


async def cmd_identify_image(image_path: Path, settings: Settings) -> int:
    """Identify the Pokémon in an image file and print its data."""
    logger = get_logger(__name__)

    print("Analyzing image...\n")
    try:
        async with open_engine(settings) as engine:
            response = await engine.process_image_query(image_path)
    except Exception as e:
        logger.debug("Image query failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{settings.chat.assistant_prefix}{response}")
    return 0


async def cmd_select_image(settings: Settings) -> int:
    """Open the OS file picker, then identify the chosen image."""
    print("Opening file picker...\n")
    try:
        selected = pick_image_file()
    except FilePickerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Selected: {selected}")
    return await cmd_identify_image(selected, settings)


async def run_chat_mode(
    engine: RAGEngine,
    chat: ChatSettings,
    read_line: Callable[[str], str] = input,
) -> int:
    """
    Read-eval-print loop over ``engine.process_query``.

    ``quit``/``exit`` and end of input leave the loop; ``help`` prints
    examples. Neither reaches the engine. A failed query is reported and
    the loop carries on.
    """
    logger = get_logger(__name__)

    print(WELCOME_TEXT)
    while True:
        try:
            line = read_line(chat.user_prompt)
        except EOFError:
            print("\nGoodbye!")
            return 0

        query = line.strip()
        if not query:
            continue

        if query in QUIT_COMMANDS:
            print("Goodbye!")
            return 0

        if query == "help":
            print(HELP_TEXT)
            continue

        try:
            response = await engine.process_query(query)
        except Exception as e:
            logger.debug("Query failed", exc_info=True)
            print(f"Error: {e}", file=sys.stderr)
            print("Please try again or type 'help' for examples.")
        else:
            print(f"{chat.assistant_prefix}{response}")
        print()


async def cmd_chat(settings: Settings) -> int:
    """Start the interactive chat loop."""
    try:
        async with open_engine(settings) as engine:
            return await run_chat_mode(engine, settings.chat)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)
    install_interrupt_handler()

    if args.command == "config":
        return cmd_config(settings)

    # Every other command talks to the generation service
    try:
        settings.require_api_key()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "ask":
        return asyncio.run(cmd_ask(args.question, settings))
    elif args.command == "identify-image":
        return asyncio.run(cmd_identify_image(args.image_path, settings))
    elif args.command == "select-image":
        return asyncio.run(cmd_select_image(settings))
    else:
        return asyncio.run(cmd_chat(settings))


if __name__ == "__main__":
    sys.exit(main())
