"""Blank node id generation and DOCTYPE entity declarations."""

from __future__ import annotations

from rdfxmlio.errors import RdfXmlError

_WHITESPACE = " \t\n\r"
_ID_DIGITS = 8


class BlankNodeIdGenerator:
    """Produces blank node ids of the form ``riogNNNNNNNN``."""

    def __init__(self) -> None:
        self.counter = 0

    def generate(self) -> str:
        """Return the next id; the counter keeps its last eight digits."""
        self.counter += 1
        return f"riog{self.counter % 10**_ID_DIGITS:0{_ID_DIGITS}d}"


def _trim_start(text: str) -> str:
    return text.lstrip(_WHITESPACE)


def _split_at_whitespace(text: str) -> tuple[str, str] | None:
    for position, c in enumerate(text):
        if c in _WHITESPACE:
            return text[:position], text[position + 1 :]
    return None


def parse_entity_declarations(doctype: str) -> dict[str, str]:
    """Extract ``<!ENTITY name "value">`` declarations from a DOCTYPE body."""
    entities: dict[str, str] = {}
    for segment in doctype.split("<")[1:]:
        if not segment.startswith("!ENTITY"):
            continue
        rest = _trim_start(segment[len("!ENTITY") :])
        if rest.startswith("%"):
            rest = _trim_start(rest[1:])
        parts = _split_at_whitespace(rest)
        if parts is None:
            raise RdfXmlError(
                "<!ENTITY declarations should contain both an entity name and an entity value"
            )
        name, rest = parts
        rest = _trim_start(rest)
        if not rest.startswith('"'):
            raise RdfXmlError("<!ENTITY values should be enclosed in double quotes")
        value, quote, rest = rest[1:].partition('"')
        if not quote:
            raise RdfXmlError(
                "<!ENTITY declarations values should be enclosed in double quotes"
            )
        if not _trim_start(rest).startswith(">"):
            raise RdfXmlError("<!ENTITY declarations values should end with >")
        entities[name] = value
    return entities