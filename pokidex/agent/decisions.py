"""
Structured replies from the model.

The model is asked for strict JSON, but replies arrive wrapped in code
fences, preceded by prose, or not as JSON at all. Parsing is permissive:
the first JSON object in the reply is used, and anything that doesn't fit
an expected shape becomes an explicit "unparseable" value instead of an
exception. The orchestrator pattern-matches on the result type.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Union

_DECODER = json.JSONDecoder()


# ---------------------------------------------------------------------------
# Tool routing decision
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Action:
    """Run ``tool`` for the Pokémon ``name``. ``tool`` is the raw requested name."""

    tool: str
    name: str


@dataclass(frozen=True)
class Final:
    """Answer directly, no lookup needed."""

    answer: str


@dataclass(frozen=True)
class Unparseable:
    """The reply fit neither shape; triggers fallback mode."""

    raw: str
    reason: str


Decision = Union[Action, Final, Unparseable]


def parse_decision(text: str) -> Decision:
    """
    Parse a tool-routing reply.

    Accepted shapes::

        {"type": "action", "tool": "<tool>", "name": "<pokemon>"}
        {"type": "final", "answer": "<text>"}
    """
    payload = extract_json_object(text)
    if payload is None:
        return Unparseable(raw=text, reason="no JSON object found")

    kind = payload.get("type")
    if kind == "action":
        tool = payload.get("tool")
        name = payload.get("name")
        if isinstance(name, int) and not isinstance(name, bool):
            name = str(name)
        if not isinstance(tool, str) or not tool.strip():
            return Unparseable(raw=text, reason="action without a tool")
        if not isinstance(name, str) or not name.strip():
            return Unparseable(raw=text, reason="action without a name")
        return Action(tool=tool.strip(), name=name.strip())

    if kind == "final":
        answer = payload.get("answer")
        if not isinstance(answer, str):
            return Unparseable(raw=text, reason="final without an answer")
        return Final(answer=answer)

    return Unparseable(raw=text, reason=f"unknown decision type {kind!r}")


# ---------------------------------------------------------------------------
# Image identification verdict
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Identified:
    name: str


@dataclass(frozen=True)
class NotPokemon:
    reason: str


@dataclass(frozen=True)
class UnknownVerdict:
    raw: str


ImageVerdict = Union[Identified, NotPokemon, UnknownVerdict]


def parse_image_verdict(text: str) -> ImageVerdict:
    """
    Parse an image identification reply.

    Accepted shapes::

        {"type": "pokemon", "name": "<pokemon>"}
        {"type": "not_pokemon", "reason": "<text>"}
    """
    payload = extract_json_object(text)
    if payload is None:
        return UnknownVerdict(raw=text)

    kind = payload.get("type")
    if kind == "pokemon":
        name = payload.get("name")
        if isinstance(name, str) and name.strip():
            return Identified(name=name.strip())
    elif kind == "not_pokemon":
        reason = payload.get("reason")
        return NotPokemon(reason=reason.strip() if isinstance(reason, str) else "")

    return UnknownVerdict(raw=text)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def extract_json_object(text: str) -> dict[str, Any] | None:
    """
    Return the first JSON object embedded in ``text``, or None.

    Code fences and surrounding prose are skipped by scanning for each "{"
    and attempting a decode from there.
    """
    if not text:
        return None

    start = text.find("{")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None
